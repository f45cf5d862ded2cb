"""
Pydantic schemas for property reviews.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ReviewRequest(BaseModel):
    """Review body. Both fields are checked by the validation layer."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    review: Optional[str] = Field(None, examples=["Lovely neighbourhood, quiet street."])
    rating: Optional[int] = Field(None, description="Star rating from 1 to 5", examples=[4])


class ReviewResponse(BaseModel):
    """Review as stored."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    property_id: int
    user_id: int
    review: str
    rating: int
    created_at: Optional[datetime] = None


class ReviewWithAuthor(ReviewResponse):
    user_name: str = Field(..., description="Name of the reviewer")
