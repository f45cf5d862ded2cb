"""
Property repository for listing management.
Read queries join the owning agent so handlers can return contact details in one round-trip.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from estate_api.repositories.base import BaseRepository
from estate_api.models.property import Property
from estate_api.models.user import User
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, owner_id: int, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property owned by the given user.

        Args:
            owner_id: ID of the creating admin
            property_data: Validated listing fields including images

        Returns:
            Created property instance

        Raises:
            CheckViolation: If a field is outside its allowed range
        """
        created_property = await self.create({**property_data, "owner_id": owner_id})
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def list_with_agent_name(self) -> List[Tuple[Property, str]]:
        """
        List every property with its agent's name, newest listing first.

        Returns:
            List of (property, agent_name) pairs
        """
        query = (
            select(Property, User.name)
            .join(User, Property.owner_id == User.id)
            .order_by(desc(Property.id))
        )
        result = await self.db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def get_with_agent_contact(self, property_id: int) -> Optional[Tuple[Property, str, str]]:
        """
        Get a property with its agent's name and email.

        Args:
            property_id: ID of the property

        Returns:
            (property, agent_name, agent_email) or None if not found
        """
        query = (
            select(Property, User.name, User.email)
            .join(User, Property.owner_id == User.id)
            .where(Property.id == property_id)
        )
        result = await self.db.execute(query)
        row = result.first()
        if row is None:
            logger.debug(f"Property with id {property_id} not found")
            return None
        return row[0], row[1], row[2]

    async def list_with_agent_contact(self) -> List[Tuple[Property, str, str]]:
        """List every property with agent name and email, newest created first."""
        query = (
            select(Property, User.name, User.email)
            .join(User, Property.owner_id == User.id)
            .order_by(desc(Property.created_at), desc(Property.id))
        )
        result = await self.db.execute(query)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def get_for_update(self, property_id: int) -> Optional[Property]:
        """
        Load a property and lock its row until the transaction ends.
        Dialects without row locks (SQLite) ignore the lock.

        Args:
            property_id: ID of the property

        Returns:
            Locked property instance, or None if not found
        """
        query = select(Property).where(Property.id == property_id).with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def apply_update(self, property_obj: Property, values: Dict[str, Any]) -> Property:
        """
        Write new field values to a loaded property and commit.

        Args:
            property_obj: Property loaded with get_for_update
            values: Field values to store

        Returns:
            Refreshed property instance

        Raises:
            CheckViolation: If a field is outside its allowed range
        """
        try:
            for field, value in values.items():
                setattr(property_obj, field, value)

            await self.db.commit()
            await self.db.refresh(property_obj)
            logger.info(f"Updated property: {property_obj.title} (ID: {property_obj.id})")
            return property_obj
        except SQLAlchemyError as e:
            raise await self._fail("update", e) from e

    async def delete_property(self, property_id: int) -> Optional[Property]:
        """
        Delete a property.

        Returns:
            The deleted property, or None if it did not exist
        """
        property_obj = await self.delete(property_id)
        if property_obj:
            logger.info(f"Deleted property: {property_obj.title} (ID: {property_obj.id})")
        return property_obj
