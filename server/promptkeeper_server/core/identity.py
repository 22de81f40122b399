"""Resolution of the current user identity."""

from typing import Optional

from .exceptions import Unauthenticated


def resolve_current_user(user_id: Optional[str]) -> str:
    """Return the caller's user id or raise if there is none.

    The identity provider hands over an opaque identifier. Any non-empty
    string is accepted as-is.

    Args:
        user_id: Identifier from the session, or None when signed out

    Returns:
        The user id

    Raises:
        Unauthenticated: If no identifier is present
    """
    if not user_id:
        raise Unauthenticated("Unauthorized: No user ID found")
    return user_id
