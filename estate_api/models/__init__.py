"""
Database models for the Real Estate API.
Includes User, Property, Favorite and Review models.
"""

from estate_api.models.user import User, UserRole
from estate_api.models.property import Property
from estate_api.models.favorite import Favorite
from estate_api.models.review import Review

# Export all models for easy importing
__all__ = [
    "User",
    "UserRole",
    "Property",
    "Favorite",
    "Review",
]
