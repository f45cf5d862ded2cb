"""
Authentication utilities for JWT token management and password hashing.
Tokens carry the caller's id, email and role so requests can be authorized without a user lookup.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from estate_api.config import Settings
from estate_api.models.user import UserRole


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


class TokenPayload:
    """Identity decoded from a bearer token."""

    def __init__(self, id: int, email: str, role: UserRole, exp: Optional[datetime] = None):
        self.id = id
        self.email = email
        self.role = role
        self.exp = exp

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """
        Create TokenPayload from decoded claims.

        Raises:
            JWTError: If a required claim is missing or malformed
        """
        try:
            user_id = data["id"]
            email = data["email"]
            role = UserRole(data["role"])
        except (KeyError, ValueError) as e:
            raise JWTError(f"Invalid token payload: {e}")

        if not isinstance(user_id, int) or isinstance(user_id, bool) or not email:
            raise JWTError("Invalid token payload")

        exp = data.get("exp")
        return cls(
            id=user_id,
            email=email,
            role=role,
            exp=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
        )

    def __repr__(self) -> str:
        return f"<TokenPayload(id={self.id}, email={self.email}, role={self.role.value})>"


def create_access_token(
    user_id: int,
    email: str,
    role: UserRole,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with identity claims.

    Args:
        user_id: User's ID
        email: User's email address
        role: User's role
        settings: Application settings holding the signing secret
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "id": user_id,
        "email": email,
        "role": UserRole(role).value,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify and decode JWT token.

    Args:
        token: JWT token string
        settings: Application settings holding the signing secret

    Returns:
        TokenPayload for the token's subject

    Raises:
        JWTError: If token is invalid, expired or missing claims
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm]
    )
    return TokenPayload.from_dict(payload)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify password against hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash stored for the account
        return False
