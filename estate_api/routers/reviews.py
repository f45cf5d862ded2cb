"""
Review API endpoints nested under properties.
"""

from fastapi import APIRouter, Depends, status, Path
from typing import Optional, List
import logging

from estate_api.services.review import ReviewService
from estate_api.schemas.review import ReviewRequest, ReviewResponse, ReviewWithAuthor
from estate_api.utils.auth import TokenPayload
from estate_api.utils.dependencies import get_current_user, get_review_service
from estate_api.utils.exceptions import APIException, InternalServerError
from estate_api.schemas.error import get_error_responses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Reviews"])


@router.get(
    "/{property_id}/reviews",
    response_model=List[ReviewWithAuthor],
    status_code=status.HTTP_200_OK,
    summary="List reviews",
    description="Get a property's reviews with reviewer names, newest first",
    responses=get_error_responses(400, 500)
)
async def list_reviews(
    property_id: int = Path(..., description="Property ID"),
    review_service: ReviewService = Depends(get_review_service)
) -> List[ReviewWithAuthor]:
    try:
        return await review_service.list_reviews(property_id)
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to list reviews for property {property_id}: {e}")
        raise InternalServerError(str(e))


@router.post(
    "/{property_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add review",
    description="Review a property with text and a 1-5 rating",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def add_review(
    property_id: int = Path(..., description="Property ID"),
    review_data: Optional[ReviewRequest] = None,
    current_user: TokenPayload = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    """
    Add a review as the authenticated user.

    Raises:
        ValidationFailedError: If the text or rating is missing or out of range
        NotFoundError: If the property does not exist
    """
    review_data = review_data or ReviewRequest()
    try:
        review = await review_service.add_review(
            property_id,
            review_data.review,
            review_data.rating,
            current_user
        )
        return review.to_dict()
    except APIException:
        raise
    except Exception as e:
        logger.error(f"Failed to add review for property {property_id}: {e}")
        raise InternalServerError(str(e))
