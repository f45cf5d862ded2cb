"""
Favorite repository for the saved-properties list.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from estate_api.repositories.base import BaseRepository
from estate_api.models.favorite import Favorite
from estate_api.models.property import Property
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for (user, property) favorite pairs."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def add_favorite(self, user_id: int, property_id: int) -> Favorite:
        """
        Save a property for a user.

        Raises:
            UniqueViolation: If the pair already exists
        """
        favorite = await self.create({"user_id": user_id, "property_id": property_id})
        logger.debug(f"User {user_id} favorited property {property_id}")
        return favorite

    async def get_favorite(self, user_id: int, property_id: int) -> Optional[Favorite]:
        query = select(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.property_id == property_id
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def remove_favorite(self, user_id: int, property_id: int) -> Optional[Favorite]:
        """
        Remove a saved property.

        Returns:
            The deleted favorite, or None if the pair did not exist
        """
        favorite = await self.get_favorite(user_id, property_id)
        if favorite is None:
            return None
        return await self.delete_instance(favorite)

    async def list_properties_for_user(self, user_id: int) -> List[Property]:
        """
        List the properties a user has saved, most recently saved first.

        Args:
            user_id: ID of the user

        Returns:
            List of property instances
        """
        query = (
            select(Property)
            .join(Favorite, Favorite.property_id == Property.id)
            .where(Favorite.user_id == user_id)
            .order_by(desc(Favorite.created_at), desc(Favorite.id))
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
