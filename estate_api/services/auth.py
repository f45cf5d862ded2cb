"""
Authentication service for signup, signin and the bootstrap admin account.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.config import Settings
from estate_api.repositories.errors import StorageError, UniqueViolation
from estate_api.repositories.user import UserRepository
from estate_api.models.user import User, UserRole
from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.auth import create_access_token, verify_password
from estate_api.utils.exceptions import DuplicateEmailError, InvalidCredentialsError
from estate_api.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for account creation and credential checks.
    Issues signed tokens carrying id, email and role.
    """

    def __init__(self, db_session: AsyncSession, settings: Settings):
        self.db = db_session
        self.settings = settings
        self.user_repo = UserRepository(db_session)

    def issue_token(self, user: User) -> str:
        """Create an access token for a user."""
        return create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
            settings=self.settings
        )

    async def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str]
    ) -> Tuple[User, str]:
        """
        Register a new account with the user role.

        Args:
            name: Display name
            email: Email address
            password: Plain text password

        Returns:
            Tuple of (created user, access token)

        Raises:
            ValidationFailedError: If a field is missing or the email is malformed
            DuplicateEmailError: If the email is already registered
        """
        normalized_email = ValidationUtils.validate_signup(name, email, password)

        try:
            user = await self.user_repo.create_user(
                name=name.strip(),
                email=normalized_email,
                password=password,
                role=UserRole.USER
            )
        except StorageError as e:
            raise ErrorHandlerService.translate_storage_error(e, unique_error=DuplicateEmailError())

        logger.info(f"User signed up: {user.email} (ID: {user.id})")
        return user, self.issue_token(user)

    async def signin(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """
        Check credentials and issue a token.
        Unknown emails and wrong passwords fail the same way.

        Raises:
            InvalidCredentialsError: If the credentials do not match an account
        """
        if not ValidationUtils.is_filled(email) or not password:
            raise InvalidCredentialsError()

        user = await self.user_repo.get_by_email(ValidationUtils.normalize_email(email))

        if user is None or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed signin attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User signed in: {user.email}")
        return user, self.issue_token(user)

    async def ensure_admin_user(self) -> Optional[User]:
        """
        Create the bootstrap admin account if it does not exist yet.
        Safe to run on every startup.

        Returns:
            The created admin, or None if it already existed
        """
        admin_email = ValidationUtils.normalize_email(self.settings.admin_email)

        if await self.user_repo.email_exists(admin_email):
            logger.info(f"Admin user already exists: {admin_email}")
            return None

        try:
            admin = await self.user_repo.create_user(
                name=self.settings.admin_name,
                email=admin_email,
                password=self.settings.admin_password,
                role=UserRole.ADMIN
            )
        except UniqueViolation:
            # Another process created it between the check and the insert
            logger.info(f"Admin user already exists: {admin_email}")
            return None

        logger.info(f"Admin user created: {admin.email} (ID: {admin.id})")
        return admin
