"""Request authentication.

The caller is identified by the ``X-User-Id`` header, issued by the login
service in front of this API. A missing header and an unknown id get the
same 401 so callers cannot test which accounts exist.
"""

from fastapi import Depends, Header

from storefront.account.registration import find_user
from storefront.account.user import User
from storefront.errors import AuthenticationError, ForbiddenError
from storefront.utils.logging import add_context


async def current_user(x_user_id: str | None = Header(default=None)) -> User:
    user = find_user(x_user_id)
    if user is None:
        raise AuthenticationError()
    add_context(user_id=str(user.id))
    return user


async def admin_user(user: User = Depends(current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError(f"User role {user.role} is not authorized to access this route")
    return user


async def optional_user(x_user_id: str | None = Header(default=None)) -> User | None:
    """The caller when one is identified, else ``None`` for anonymous readers."""
    user = find_user(x_user_id)
    if user is not None:
        add_context(user_id=str(user.id))
    return user
