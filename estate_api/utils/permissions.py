"""
Authorization rules for the API.
Each rule is a pure check on the caller's identity and, where relevant, the
target's recorded owner. Rules raise instead of returning so handlers stay flat.
"""

from estate_api.utils.auth import TokenPayload
from estate_api.utils.exceptions import ForbiddenError, InvalidOperationError


def require_admin(caller: TokenPayload, detail: str = "Admin access required") -> None:
    """
    Allow only admin callers.

    Raises:
        ForbiddenError: If the caller is not an admin
    """
    if not caller.is_admin:
        raise ForbiddenError(detail)


def can_manage_property(caller: TokenPayload, owner_id: int) -> bool:
    """
    Check owner-or-admin access to a listing.

    Args:
        caller: Identity of the requesting user
        owner_id: Stored owner of the listing

    Returns:
        True if the caller may modify the listing
    """
    # Admins can manage every listing
    if caller.is_admin:
        return True

    return caller.id == owner_id


def require_property_manager(caller: TokenPayload, owner_id: int) -> None:
    """Raise ForbiddenError unless the caller owns the listing or is an admin."""
    if not can_manage_property(caller, owner_id):
        raise ForbiddenError("Only the owner or admin can edit this property")


def can_view_user(caller: TokenPayload, user_id: int) -> bool:
    """Users may read their own profile; admins may read any."""
    return caller.id == user_id or caller.is_admin


def require_user_access(caller: TokenPayload, user_id: int) -> None:
    if not can_view_user(caller, user_id):
        raise ForbiddenError("Access denied")


def forbid_self_delete(caller: TokenPayload, user_id: int) -> None:
    """
    Block an account from deleting itself, whatever its role.

    Raises:
        InvalidOperationError: If the target is the caller
    """
    if caller.id == user_id:
        raise InvalidOperationError("Cannot delete yourself")
