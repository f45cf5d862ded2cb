"""
Business logic services for the Real Estate API.
"""

from estate_api.services.auth import AuthService
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.services.favorite import FavoriteService
from estate_api.services.property import PropertyService
from estate_api.services.review import ReviewService
from estate_api.services.user import UserService

__all__ = [
    "AuthService",
    "ErrorHandlerService",
    "FavoriteService",
    "PropertyService",
    "ReviewService",
    "UserService",
]
