"""
Property service for listing management.
Applies the role and ownership rules, validates payloads and translates storage failures.
"""

from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.errors import StorageError
from estate_api.repositories.property import PropertyRepository
from estate_api.models.property import Property
from estate_api.schemas.property import PropertyPayload
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.auth import TokenPayload
from estate_api.utils.exceptions import APIException, NotFoundError
from estate_api.utils.permissions import require_admin, require_property_manager
from estate_api.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service handling listing business logic.
    Admins create and delete listings; owners and admins edit them.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    @staticmethod
    def _validated_values(payload: PropertyPayload) -> Dict[str, Any]:
        values = payload.field_values()
        ValidationUtils.validate_property(values, payload.provided_fields())
        return values

    async def create_property(self, payload: PropertyPayload, caller: TokenPayload) -> Property:
        """
        Create a listing owned by the calling admin.

        Args:
            payload: Listing fields from the request body
            caller: Authenticated identity

        Returns:
            Created property

        Raises:
            ForbiddenError: If the caller is not an admin
            ValidationFailedError: If fields or images are invalid
            InvalidFieldValueError: If a value is outside its allowed range
        """
        require_admin(caller, "Only admins can add properties")
        values = self._validated_values(payload)

        try:
            property_obj = await self.property_repo.create_property(caller.id, values)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)

        logger.info(f"Property created by {caller.email}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def list_properties(self) -> List[Dict[str, Any]]:
        """Public listing, newest first, with each agent's name."""
        rows = await self.property_repo.list_with_agent_name()
        return [{**prop.to_dict(), "agent_name": agent_name} for prop, agent_name in rows]

    async def get_property(self, property_id: int) -> Dict[str, Any]:
        """
        Get a listing with its agent's contact details.

        Raises:
            NotFoundError: If the property does not exist
        """
        row = await self.property_repo.get_with_agent_contact(property_id)
        if row is None:
            raise NotFoundError("Property")

        prop, agent_name, agent_email = row
        return {**prop.to_dict(), "agent_name": agent_name, "agent_email": agent_email}

    async def list_properties_for_admin(self, caller: TokenPayload) -> List[Dict[str, Any]]:
        """Every listing with agent name and email, newest created first."""
        require_admin(caller)
        rows = await self.property_repo.list_with_agent_contact()
        return [
            {**prop.to_dict(), "agent_name": agent_name, "agent_email": agent_email}
            for prop, agent_name, agent_email in rows
        ]

    async def update_property(
        self,
        property_id: int,
        payload: PropertyPayload,
        caller: TokenPayload
    ) -> Property:
        """
        Replace a listing's fields.

        The lookup, ownership check, validation and write share one transaction,
        and the row stays locked until the commit on databases that support it.

        Args:
            property_id: ID of the listing
            payload: Listing fields from the request body
            caller: Authenticated identity

        Returns:
            Updated property

        Raises:
            NotFoundError: If the property does not exist
            ForbiddenError: If the caller is neither the owner nor an admin
            ValidationFailedError: If fields or images are invalid
            InvalidFieldValueError: If a value is outside its allowed range
        """
        try:
            property_obj = await self.property_repo.get_for_update(property_id)
            if property_obj is None:
                raise NotFoundError("Property")

            require_property_manager(caller, property_obj.owner_id)
            values = self._validated_values(payload)
        except APIException:
            await self.db.rollback()
            raise

        try:
            updated = await self.property_repo.apply_update(property_obj, values)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)

        logger.info(f"Property updated by {caller.email}: {updated.title} (ID: {updated.id})")
        return updated

    async def delete_property(self, property_id: int, caller: TokenPayload) -> Property:
        """
        Delete a listing together with its favorites and reviews.

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the property does not exist
        """
        require_admin(caller, "Only admins can delete properties")

        try:
            property_obj = await self.property_repo.delete_property(property_id)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)

        if property_obj is None:
            raise NotFoundError("Property")

        logger.info(f"Property deleted by {caller.email}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj
