"""
Favorites API endpoints. Every route acts on the caller's own favorites.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import List
import logging

from estate_api.services.favorite import FavoriteService
from estate_api.schemas.favorite import FavoriteResponse, FavoriteRemovedResponse
from estate_api.schemas.property import PropertyResponse
from estate_api.utils.auth import TokenPayload
from estate_api.utils.dependencies import get_current_user, get_favorite_service
from estate_api.utils.exceptions import APIException, InternalServerError
from estate_api.schemas.error import get_error_responses, get_auth_error_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="List favorites",
    description="Get the properties the caller has saved",
    responses=get_auth_error_responses()
)
async def list_favorites(
    current_user: TokenPayload = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> List[PropertyResponse]:
    try:
        properties = await favorite_service.list_favorites(current_user)
        return [prop.to_dict() for prop in properties]
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to list favorites for user {current_user.id}: {e}")
        raise InternalServerError(str(e))


@router.post(
    "/{property_id}",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add favorite",
    description="Save a property to the caller's favorites",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def add_favorite(
    property_id: int = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteResponse:
    """
    Save a property.

    Raises:
        NotFoundError: If the property does not exist
        DuplicateFavoriteError: If the property is already saved
    """
    try:
        favorite = await favorite_service.add_favorite(property_id, current_user)
        return favorite.to_dict()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to add favorite {property_id} for user {current_user.id}: {e}")
        raise InternalServerError(str(e))


@router.delete(
    "/{property_id}",
    response_model=FavoriteRemovedResponse,
    status_code=status.HTTP_200_OK,
    summary="Remove favorite",
    description="Remove a property from the caller's favorites",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def remove_favorite(
    property_id: int = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteRemovedResponse:
    try:
        favorite = await favorite_service.remove_favorite(property_id, current_user)
        return {
            "message": "Favorite removed successfully",
            "favorite": favorite.to_dict()
        }
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to remove favorite {property_id} for user {current_user.id}: {e}")
        raise InternalServerError(str(e))
