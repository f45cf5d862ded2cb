"""
Review repository for property feedback.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from estate_api.repositories.base import BaseRepository
from estate_api.models.review import Review
from estate_api.models.user import User
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Repository for property reviews. Reviews are append-only."""

    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)

    async def create_review(self, property_id: int, user_id: int, review: str, rating: int) -> Review:
        """
        Store a review.

        Raises:
            CheckViolation: If the rating is outside 1-5
        """
        created_review = await self.create({
            "property_id": property_id,
            "user_id": user_id,
            "review": review,
            "rating": rating,
        })
        logger.info(f"User {user_id} reviewed property {property_id} (rating {rating})")
        return created_review

    async def list_for_property_with_reviewer_name(self, property_id: int) -> List[Tuple[Review, str]]:
        """
        List a property's reviews with each reviewer's name, newest first.

        Args:
            property_id: ID of the reviewed property

        Returns:
            List of (review, user_name) pairs
        """
        query = (
            select(Review, User.name)
            .join(User, Review.user_id == User.id)
            .where(Review.property_id == property_id)
            .order_by(desc(Review.created_at), desc(Review.id))
        )
        result = await self.db.execute(query)
        return [(row[0], row[1]) for row in result.all()]
