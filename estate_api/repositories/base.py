"""
Base repository class with common CRUD operations using async SQLAlchemy.
Failed writes are rolled back and re-raised as StorageError variants.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from estate_api.database import Base
from estate_api.repositories.errors import StorageError, classify_storage_error
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Each write commits on success; on failure the session is rolled back.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def _fail(self, action: str, exc: SQLAlchemyError) -> StorageError:
        """Roll back the session and classify the failure."""
        await self.db.rollback()
        error = classify_storage_error(exc)
        logger.error(f"Failed to {action} {self.model.__name__}: {error.message}")
        return error

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            StorageError: If the insert is rejected
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            raise await self._fail("create", e) from e

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: Primary key of the record

        Returns:
            Model instance if found, None otherwise
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        obj = result.scalar_one_or_none()

        if obj is None:
            logger.debug(f"{self.model.__name__} with id {id} not found")

        return obj

    async def delete_instance(self, obj: ModelType) -> ModelType:
        """
        Delete a loaded record and return it.

        Raises:
            StorageError: If the delete is rejected
        """
        try:
            await self.db.delete(obj)
            await self.db.commit()
            logger.debug(f"Deleted {self.model.__name__} with id: {obj.id}")
            return obj
        except SQLAlchemyError as e:
            raise await self._fail("delete", e) from e

    async def delete(self, id: int) -> Optional[ModelType]:
        """
        Delete a record by its ID.

        Args:
            id: Primary key of the record to delete

        Returns:
            The deleted record, or None if it did not exist
        """
        obj = await self.get_by_id(id)
        if obj is None:
            return None
        return await self.delete_instance(obj)

    async def exists(self, id: int) -> bool:
        """
        Check if a record exists by its ID.

        Args:
            id: Primary key of the record to check

        Returns:
            True if record exists, False otherwise
        """
        query = select(func.count(self.model.id)).where(self.model.id == id)
        result = await self.db.execute(query)
        return result.scalar() > 0
