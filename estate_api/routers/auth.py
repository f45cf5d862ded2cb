"""
Authentication API endpoints for signin and signup.
"""

from fastapi import APIRouter, Depends, status
from typing import Optional
import logging

from estate_api.services.auth import AuthService
from estate_api.schemas.auth import SigninRequest, SignupRequest, AuthResponse
from estate_api.utils.dependencies import get_auth_service
from estate_api.utils.exceptions import APIException, InternalServerError
from estate_api.schemas.error import get_error_responses

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/signin",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    description="Authenticate with email and password and receive a one-day access token",
    responses=get_error_responses(400, 401, 500)
)
async def signin(
    credentials: Optional[SigninRequest] = None,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Authenticate a user.

    Args:
        credentials: Email and password
        auth_service: Authentication service

    Returns:
        Access token and user identity

    Raises:
        InvalidCredentialsError: If the email or password is wrong or missing
    """
    credentials = credentials or SigninRequest()
    try:
        user, token = await auth_service.signin(credentials.email, credentials.password)
        return AuthResponse(token=token, user=user.to_public_dict())
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Signin failed: {e}")
        raise InternalServerError(str(e))


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register a new account with the user role and receive an access token",
    responses=get_error_responses(400, 500)
)
async def signup(
    registration: Optional[SignupRequest] = None,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Register a new user.

    Raises:
        ValidationFailedError: If a field is missing or the email is malformed
        DuplicateEmailError: If the email is already registered
    """
    registration = registration or SignupRequest()
    try:
        user, token = await auth_service.signup(
            registration.name,
            registration.email,
            registration.password
        )
        return AuthResponse(token=token, user=user.to_public_dict())
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Signup failed: {e}")
        raise InternalServerError(str(e))
