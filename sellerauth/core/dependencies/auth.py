from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from structlog import get_logger

from sellerauth.core.exceptions import AuthenticationError, InvalidTokenError
from sellerauth.domain.entities.user import User
from sellerauth.domain.value_objects.jwt_token import TokenClass
from sellerauth.infrastructure.dependency_injection.auth_dependencies import (
    RevocationRegistryDep,
    TokenServiceDep,
    UserRepositoryDep,
)

__all__ = [
    "get_bearer_token",
    "get_current_user",
    "CurrentUser",
]

logger = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


# ---------------------------------------------------------------------------
# Public dependencies
# ---------------------------------------------------------------------------


def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
) -> str:
    """Extract the access token from ``Authorization: Bearer <token>``."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token", code="missing_token")
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    token_service: TokenServiceDep,
    revocation_registry: RevocationRegistryDep,
    users: UserRepositoryDep,
) -> User:
    """Return the authenticated :class:`~sellerauth.domain.entities.user.User`.

    Signature and expiry are checked first, then the revocation list, then
    the user record. Account state (active, verified) is not checked here.
    """
    claims = token_service.verify(token, TokenClass.ACCESS)
    if await revocation_registry.is_revoked(token):
        logger.warning("Revoked access token presented", user_id=claims.get("id"))
        raise InvalidTokenError("Token has been revoked", code="token_revoked")

    user = await users.get_by_id(str(claims["id"]))
    if user is None:
        raise AuthenticationError("User not found", code="user_not_found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
