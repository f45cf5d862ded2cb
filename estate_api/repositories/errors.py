"""
Storage errors raised by the repository layer.
Driver-specific integrity failures are classified once here so services never
inspect SQLSTATE codes or dialect messages themselves.
"""

from typing import Optional
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
import re


UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"

# PostgreSQL: ... violates unique constraint "users_email_key"
# SQLite:     CHECK constraint failed: properties_price_check
_QUOTED_CONSTRAINT = re.compile(r'constraint "([^"]+)"', re.IGNORECASE)
_FAILED_CONSTRAINT = re.compile(r"constraint failed: ([^\s,]+)", re.IGNORECASE)


class StorageError(Exception):
    """Base class for persistence failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UniqueViolation(StorageError):
    """A write collided with a uniqueness rule."""

    def __init__(self, constraint: Optional[str], message: str):
        super().__init__(message)
        self.constraint = constraint


class CheckViolation(StorageError):
    """A write broke a value-range rule."""

    def __init__(self, constraint: Optional[str], message: str):
        super().__init__(message)
        self.constraint = constraint


class OtherStorageError(StorageError):
    """Any other database failure."""


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = exc.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        if source is None:
            continue
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return str(code)
    return None


def _constraint_name(exc: DBAPIError, message: str) -> Optional[str]:
    # asyncpg exposes the constraint on the driver exception wrapped by SQLAlchemy
    for source in (getattr(exc.orig, "__cause__", None), exc.orig):
        name = getattr(source, "constraint_name", None)
        if name:
            return name

    match = _QUOTED_CONSTRAINT.search(message) or _FAILED_CONSTRAINT.search(message)
    return match.group(1) if match else None


def classify_storage_error(exc: SQLAlchemyError) -> StorageError:
    """
    Convert a SQLAlchemy exception into a StorageError variant.

    Args:
        exc: Exception raised while executing a statement

    Returns:
        UniqueViolation, CheckViolation or OtherStorageError
    """
    if not isinstance(exc, DBAPIError) or exc.orig is None:
        return OtherStorageError(str(exc))

    message = str(exc.orig)
    lowered = message.lower()
    code = _sqlstate(exc)

    if code == UNIQUE_VIOLATION or (code is None and "unique constraint" in lowered):
        return UniqueViolation(_constraint_name(exc, message), message)

    if code == CHECK_VIOLATION or (code is None and "check constraint" in lowered):
        return CheckViolation(_constraint_name(exc, message), message)

    return OtherStorageError(message)
