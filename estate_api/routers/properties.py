"""
Property listing API endpoints.
Reads are public; writes require a bearer token.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import Optional, List
import logging

from estate_api.services.property import PropertyService
from estate_api.schemas.property import (
    PropertyPayload,
    PropertyResponse,
    PropertyListItem,
    PropertyDetailResponse,
    PropertyDeletedResponse
)
from estate_api.utils.auth import TokenPayload
from estate_api.utils.dependencies import get_current_user, get_property_service
from estate_api.utils.exceptions import APIException, InternalServerError
from estate_api.schemas.error import get_error_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyListItem],
    status_code=status.HTTP_200_OK,
    summary="List properties",
    description="Get every listing with its agent's name, newest first"
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyListItem]:
    try:
        return await property_service.list_properties()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to list properties: {e}")
        raise InternalServerError(str(e))


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property",
    description="Get a listing with its agent's name and email",
    responses=get_error_responses(400, 404, 500)
)
async def get_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDetailResponse:
    """
    Get a single listing.

    Raises:
        NotFoundError: If the property does not exist
    """
    try:
        return await property_service.get_property(property_id)
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to get property {property_id}: {e}")
        raise InternalServerError(str(e))


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a new listing. Requires the admin role.",
    responses=get_error_responses(400, 401, 403, 500)
)
async def create_property(
    property_data: Optional[PropertyPayload] = None,
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Args:
        property_data: Listing fields and images
        current_user: Authenticated identity
        property_service: Property service instance

    Returns:
        Created property

    Raises:
        ForbiddenError: If the caller is not an admin
        ValidationFailedError: If fields or images are invalid
    """
    try:
        property_obj = await property_service.create_property(
            property_data or PropertyPayload(),
            current_user
        )
        return property_obj.to_dict()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to create property: {e}")
        raise InternalServerError(str(e))


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Replace a listing's fields. Allowed for the owner or an admin.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def update_property(
    property_id: int = Path(..., description="Property ID"),
    property_data: Optional[PropertyPayload] = None,
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update an existing listing.

    Raises:
        NotFoundError: If the property does not exist
        ForbiddenError: If the caller is neither the owner nor an admin
        ValidationFailedError: If fields or images are invalid
    """
    try:
        property_obj = await property_service.update_property(
            property_id,
            property_data or PropertyPayload(),
            current_user
        )
        return property_obj.to_dict()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to update property {property_id}: {e}")
        raise InternalServerError(str(e))


@router.delete(
    "/{property_id}",
    response_model=PropertyDeletedResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    description="Delete a listing. Requires the admin role.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def delete_property(
    property_id: int = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDeletedResponse:
    try:
        property_obj = await property_service.delete_property(property_id, current_user)
        return {
            "message": "Property deleted successfully",
            "property": property_obj.to_dict()
        }
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete property {property_id}: {e}")
        raise InternalServerError(str(e))
