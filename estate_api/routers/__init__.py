"""
API route handlers for the Real Estate API.
"""

from .auth import router as auth_router
from .favorites import router as favorites_router
from .properties import router as properties_router
from .reviews import router as reviews_router
from .users import router as users_router, admin_router

__all__ = [
    "auth_router",
    "favorites_router",
    "properties_router",
    "reviews_router",
    "users_router",
    "admin_router",
]
