"""
FastAPI dependencies for authentication and authorization.

Access control is a chain of small checks run before the endpoint body:

    is_authenticated  - a valid, unexpired token was presented
    is_admin          - the token carries the admin flag
    is_self_or_admin  - admin, or the token's username matches the
                        {username} path parameter

``require(*checks)`` turns a chain into a dependency. Authentication is
always first in the chain, so anonymous callers get 401 and never 403.
Nothing is cached between requests.

Usage:
    @router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
    def delete_company(handle: str, db: Session = Depends(get_db)):
        ...
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.errors import ForbiddenError, UnauthenticatedError
from jobly.core.security import decode_token
from jobly.schemas.auth import TokenIdentity

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); public routes
# accept anonymous callers, so a missing header is not an error here
security = HTTPBearer(auto_error=False)

Check = Callable[[Optional[TokenIdentity], Request], None]


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenIdentity]:
    """
    Identity from the Bearer token, or None when absent or invalid.

    The token is trusted as-is; the user row is not re-read.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return TokenIdentity(username=username, is_admin=bool(payload.get("is_admin", False)))


def is_authenticated(identity: Optional[TokenIdentity], request: Request) -> None:
    if identity is None:
        raise UnauthenticatedError("Unauthorized")


def is_admin(identity: Optional[TokenIdentity], request: Request) -> None:
    if not identity.is_admin:
        raise ForbiddenError("Admin privileges required")


def is_self_or_admin(identity: Optional[TokenIdentity], request: Request) -> None:
    if identity.is_admin:
        return
    if identity.username != request.path_params.get("username"):
        raise ForbiddenError("Only that user or an admin may do this")


def require(*checks: Check):
    """Build a dependency that runs ``checks`` in order and returns the caller's identity."""

    async def guard(
        request: Request,
        identity: Optional[TokenIdentity] = Depends(get_current_identity),
    ) -> Optional[TokenIdentity]:
        for check in checks:
            check(identity, request)
        return identity

    return guard


ensure_logged_in = require(is_authenticated)
ensure_admin = require(is_authenticated, is_admin)
ensure_correct_user_or_admin = require(is_authenticated, is_self_or_admin)
