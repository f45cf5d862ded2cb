"""
Repository layer for data access operations.
Provides database operations with storage failures translated to StorageError variants.
"""

from estate_api.repositories.base import BaseRepository
from estate_api.repositories.errors import (
    StorageError,
    UniqueViolation,
    CheckViolation,
    OtherStorageError,
    classify_storage_error,
)
from estate_api.repositories.favorite import FavoriteRepository
from estate_api.repositories.property import PropertyRepository
from estate_api.repositories.review import ReviewRepository
from estate_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "StorageError",
    "UniqueViolation",
    "CheckViolation",
    "OtherStorageError",
    "classify_storage_error",
    "FavoriteRepository",
    "PropertyRepository",
    "ReviewRepository",
    "UserRepository",
]
