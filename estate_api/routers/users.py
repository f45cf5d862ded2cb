"""
User profile and admin API endpoints.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
import logging

from estate_api.services.property import PropertyService
from estate_api.services.user import UserService
from estate_api.schemas.property import PropertyDetailResponse
from estate_api.schemas.user import UserPublic, UserResponse, UserDeletedResponse
from estate_api.utils.auth import TokenPayload
from estate_api.utils.dependencies import get_current_user, get_property_service, get_user_service
from estate_api.utils.exceptions import APIException, InternalServerError
from estate_api.schemas.error import get_error_responses

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/users/{user_id}",
    response_model=UserPublic,
    status_code=status.HTTP_200_OK,
    summary="Get user profile",
    description="Get a profile. Users may read their own; admins may read any.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def get_user(
    user_id: int = Path(..., description="User ID"),
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> UserPublic:
    try:
        user = await user_service.get_user(user_id, current_user)
        return user.to_public_dict()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to get user {user_id}: {e}")
        raise InternalServerError(str(e))


@admin_router.get(
    "/users",
    response_model=List[UserResponse],
    status_code=status.HTTP_200_OK,
    summary="List users",
    description="Get every account, newest first. Requires the admin role.",
    responses=get_error_responses(401, 403, 500)
)
async def list_users(
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> List[UserResponse]:
    try:
        users = await user_service.list_users(current_user)
        return [user.to_dict() for user in users]
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to list users: {e}")
        raise InternalServerError(str(e))


@admin_router.get(
    "/properties",
    response_model=List[PropertyDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List properties for admins",
    description="Get every listing with agent contact details. Requires the admin role.",
    responses=get_error_responses(401, 403, 500)
)
async def list_admin_properties(
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyDetailResponse]:
    try:
        return await property_service.list_properties_for_admin(current_user)
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to list properties for admin: {e}")
        raise InternalServerError(str(e))


@admin_router.delete(
    "/users/{user_id}",
    response_model=UserDeletedResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete user",
    description="Delete another account. Requires the admin role.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def delete_user(
    user_id: int = Path(..., description="User ID"),
    current_user: TokenPayload = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
) -> UserDeletedResponse:
    """
    Delete a user account.

    Raises:
        ForbiddenError: If the caller is not an admin
        InvalidOperationError: If the caller targets their own account
        NotFoundError: If the user does not exist
    """
    try:
        user = await user_service.delete_user(user_id, current_user)
        return {
            "message": "User deleted successfully",
            "user": user.to_dict()
        }
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete user {user_id}: {e}")
        raise InternalServerError(str(e))
