"""
Pydantic schemas for favorites.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class FavoriteResponse(BaseModel):
    """A saved (user, property) pair."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    property_id: int
    created_at: Optional[datetime] = None


class FavoriteRemovedResponse(BaseModel):
    message: str = Field(..., examples=["Favorite removed successfully"])
    favorite: FavoriteResponse
