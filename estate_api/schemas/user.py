"""
Pydantic schemas for user responses.
Password hashes never appear in any of these models.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from estate_api.models.user import UserRole


class UserPublic(BaseModel):
    """Identity fields of an account."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User's unique identifier", examples=[1])
    name: str = Field(..., description="User's display name", examples=["Jane Doe"])
    email: str = Field(..., description="User's email address", examples=["jane@example.com"])
    role: UserRole = Field(..., description="User's role", examples=["user"])


class UserResponse(UserPublic):
    """Account as listed to admins."""

    created_at: Optional[datetime] = Field(
        None,
        description="Account creation timestamp"
    )


class UserDeletedResponse(BaseModel):
    message: str = Field(..., examples=["User deleted successfully"])
    user: UserResponse
