"""
FastAPI dependency injection utilities for authentication and services.
Provides the bearer-token gate and per-request service instances.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.config import Settings, get_settings
from estate_api.database import get_db
from estate_api.services.auth import AuthService
from estate_api.services.favorite import FavoriteService
from estate_api.services.property import PropertyService
from estate_api.services.review import ReviewService
from estate_api.services.user import UserService
from estate_api.utils.auth import TokenPayload, decode_access_token
from estate_api.utils.exceptions import UnauthenticatedError, InvalidTokenError
from jose import JWTError
import logging

logger = logging.getLogger(__name__)


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session
        settings: Application settings

    Returns:
        AuthService instance
    """
    return AuthService(db, settings)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


async def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings)
) -> TokenPayload:
    """
    Get the caller's identity from the bearer token.
    The token alone is trusted; no user lookup is made.

    Args:
        credentials: HTTP Bearer credentials
        settings: Application settings holding the signing secret

    Returns:
        Decoded identity

    Raises:
        UnauthenticatedError: If no token was provided
        InvalidTokenError: If the token is expired, tampered with or malformed
    """
    if not credentials or not credentials.credentials:
        raise UnauthenticatedError()

    try:
        return decode_access_token(credentials.credentials, settings)
    except JWTError as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise InvalidTokenError()
