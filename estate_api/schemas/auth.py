"""
Pydantic schemas for authentication requests and responses.
Request fields are optional so missing values reach the service's own checks
and produce the API's messages instead of generic type errors.
"""

from pydantic import BaseModel, Field
from typing import Optional
from estate_api.schemas.user import UserPublic


class SigninRequest(BaseModel):
    """Signin request schema."""

    email: Optional[str] = Field(
        None,
        description="User's email address",
        examples=["jane@example.com"]
    )
    password: Optional[str] = Field(
        None,
        description="User's password",
        examples=["securepassword123"]
    )


class SignupRequest(BaseModel):
    """Signup request schema. New accounts always get the user role."""

    name: Optional[str] = Field(
        None,
        description="Display name",
        examples=["Jane Doe"]
    )
    email: Optional[str] = Field(
        None,
        description="Email address, stored lowercase",
        examples=["jane@example.com"]
    )
    password: Optional[str] = Field(
        None,
        description="Plain text password",
        examples=["securepassword123"]
    )


class AuthResponse(BaseModel):
    """Token and identity returned by signin and signup."""

    token: str = Field(
        ...,
        description="JWT access token, valid for one day",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."]
    )
    user: UserPublic = Field(
        ...,
        description="Authenticated user information"
    )
