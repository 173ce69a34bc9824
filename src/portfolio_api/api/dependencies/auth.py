"""Token gate for admin-only routes."""

from typing import Annotated

from fastapi import Depends, Header

from src.portfolio_api.core.exceptions import InvalidTokenError, MissingTokenError
from src.portfolio_api.core.logging import bind_admin_context
from src.portfolio_api.core.security import ADMIN_ROLE, decode_token
from src.portfolio_api.schemas.auth import AdminIdentity


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        return None
    return token.strip() or None


async def get_current_admin(
    authorization: Annotated[str | None, Header()] = None,
) -> AdminIdentity:
    """Validate the bearer token and return the admin it was issued to.

    Stateless: any unexpired token signed with our key is accepted on every
    protected route, and no database lookup is made.

    Raises:
        MissingTokenError: No header, not a Bearer header, or no token (401).
        InvalidTokenError: Bad signature, malformed, expired, or missing claims (403).
    """
    token = _extract_bearer_token(authorization)
    if token is None:
        raise MissingTokenError()

    payload = decode_token(token)
    if payload is None:
        raise InvalidTokenError()

    admin_id = payload.get("id")
    username = payload.get("username")
    if not isinstance(admin_id, int) or not isinstance(username, str) or not username:
        raise InvalidTokenError()

    bind_admin_context(admin_id, username)
    return AdminIdentity(id=admin_id, username=username, role=payload.get("role", ADMIN_ROLE))


CurrentAdmin = Annotated[AdminIdentity, Depends(get_current_admin)]
