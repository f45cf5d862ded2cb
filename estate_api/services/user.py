"""
User service for profile reads and admin account management.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.repositories.errors import StorageError
from estate_api.repositories.user import UserRepository
from estate_api.models.user import User
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.auth import TokenPayload
from estate_api.utils.exceptions import NotFoundError
from estate_api.utils.permissions import forbid_self_delete, require_admin, require_user_access
import logging

logger = logging.getLogger(__name__)


class UserService:
    """
    User service handling account reads and deletion.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def get_user(self, user_id: int, caller: TokenPayload) -> User:
        """
        Get a profile. Users may read their own; admins may read any.

        Raises:
            ForbiddenError: If the caller may not read this profile
            NotFoundError: If the user does not exist
        """
        require_user_access(caller, user_id)

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def list_users(self, caller: TokenPayload) -> List[User]:
        require_admin(caller)
        return await self.user_repo.list_users()

    async def delete_user(self, user_id: int, caller: TokenPayload) -> User:
        """
        Delete an account as an admin.

        Args:
            user_id: ID of the account to delete
            caller: Authenticated identity

        Returns:
            The deleted user

        Raises:
            ForbiddenError: If the caller is not an admin
            InvalidOperationError: If the caller targets their own account
            NotFoundError: If the user does not exist
        """
        require_admin(caller)
        forbid_self_delete(caller, user_id)

        try:
            user = await self.user_repo.delete_user(user_id)
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e)

        if user is None:
            raise NotFoundError("User")

        logger.info(f"User {user.email} (ID: {user.id}) deleted by admin {caller.email}")
        return user
