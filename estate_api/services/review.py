"""
Review service for property feedback.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.errors import StorageError
from estate_api.repositories.property import PropertyRepository
from estate_api.repositories.review import ReviewRepository
from estate_api.models.review import Review
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.auth import TokenPayload
from estate_api.utils.exceptions import NotFoundError
from estate_api.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


class ReviewService:
    """Any authenticated user may review any property, any number of times."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.review_repo = ReviewRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_reviews(self, property_id: int) -> List[Dict[str, Any]]:
        """Reviews of a property with reviewer names, newest first."""
        rows = await self.review_repo.list_for_property_with_reviewer_name(property_id)
        return [{**review.to_dict(), "user_name": user_name} for review, user_name in rows]

    async def add_review(
        self,
        property_id: int,
        review: Optional[str],
        rating: Optional[int],
        caller: TokenPayload
    ) -> Review:
        """
        Store a review by the caller.

        Raises:
            ValidationFailedError: If the text or rating is missing, or the rating is out of range
            NotFoundError: If the property does not exist
        """
        ValidationUtils.validate_review(review, rating)

        if not await self.property_repo.exists(property_id):
            raise NotFoundError("Property")

        try:
            return await self.review_repo.create_review(property_id, caller.id, review, rating)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)
