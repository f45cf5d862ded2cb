"""
User repository for authentication and account management.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from estate_api.repositories.base import BaseRepository
from estate_api.models.user import User, UserRole
from estate_api.utils.auth import hash_password
from typing import Optional, List
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Passwords are hashed here so plain text never reaches the model.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER
    ) -> User:
        """
        Create a new user with a hashed password.

        Args:
            name: Display name
            email: Normalized email address
            password: Plain text password
            role: Account role

        Returns:
            Created user instance

        Raises:
            UniqueViolation: If the email is already registered
        """
        created_user = await self.create({
            "name": name,
            "email": email,
            "hashed_password": hash_password(password),
            "role": role,
        })
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        normalized_email = email.lower().strip()
        result = await self.db.execute(select(User).where(User.email == normalized_email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_users(self) -> List[User]:
        """Return every account, newest first."""
        query = select(User).order_by(desc(User.created_at), desc(User.id))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete_user(self, user_id: int) -> Optional[User]:
        """
        Delete a user account.

        Returns:
            The deleted user, or None if no such user exists
        """
        user = await self.delete(user_id)
        if user:
            logger.info(f"Deleted user: {user.email} (ID: {user.id})")
        return user
