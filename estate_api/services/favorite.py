"""
Favorite service for a user's saved properties.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.errors import StorageError
from estate_api.repositories.favorite import FavoriteRepository
from estate_api.repositories.property import PropertyRepository
from estate_api.models.favorite import Favorite
from estate_api.models.property import Property
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.auth import TokenPayload
from estate_api.utils.exceptions import DuplicateFavoriteError, NotFoundError
import logging

logger = logging.getLogger(__name__)


class FavoriteService:
    """Callers always act on their own favorites."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_favorites(self, caller: TokenPayload) -> List[Property]:
        return await self.favorite_repo.list_properties_for_user(caller.id)

    async def add_favorite(self, property_id: int, caller: TokenPayload) -> Favorite:
        """
        Save a property for the caller.

        Raises:
            NotFoundError: If the property does not exist
            DuplicateFavoriteError: If the property is already saved
        """
        if not await self.property_repo.exists(property_id):
            raise NotFoundError("Property")

        try:
            favorite = await self.favorite_repo.add_favorite(caller.id, property_id)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e, unique_error=DuplicateFavoriteError())

        logger.info(f"User {caller.id} added property {property_id} to favorites")
        return favorite

    async def remove_favorite(self, property_id: int, caller: TokenPayload) -> Favorite:
        """
        Remove a saved property.

        Raises:
            NotFoundError: If the caller has not saved this property
        """
        try:
            favorite = await self.favorite_repo.remove_favorite(caller.id, property_id)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)

        if favorite is None:
            raise NotFoundError("Favorite")

        logger.info(f"User {caller.id} removed property {property_id} from favorites")
        return favorite
