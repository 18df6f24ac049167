"""FastAPI auth dependencies.

Authentication and authorization are two separate steps:

1. authenticate_request (the gate) runs for every request as an app-wide
   dependency. It binds a Principal to request.state when a valid bearer
   token for an existing user is presented. It never rejects: a missing,
   malformed, invalid or expired token, an unknown subject, or even an
   internal error all just leave the request anonymous.
2. get_current_principal is attached to protected routers. It is the one
   that rejects anonymous requests, via UnauthorizedError → 401 body.

The identity lives on request.state, which is created per request, so it
cannot leak into another request.
"""

from typing import Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.jwt import subject_of, validate_token
from yogastudio.auth.principal import Principal
from yogastudio.db.engine import get_db
from yogastudio.errors import UnauthorizedError
from yogastudio.services.user_service import UserService

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "

AUTHENTICATION_REQUIRED = "Full authentication is required to access this resource"


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header.

    The prefix is case-sensitive. Anything else yields None.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def authenticate_request(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[Principal]:
    """Bind the caller's Principal to the request, or leave it anonymous."""
    request.state.principal = None
    try:
        token = parse_bearer(request.headers.get("Authorization"))
        if token is None:
            return None
        if not validate_token(token):
            return None

        username = subject_of(token)
        user = await UserService(db).find_by_email(username)
        if user is None:
            logger.info("auth.unknown_subject", username=username)
            return None
        principal = Principal.from_user(user)
    except Exception as e:
        logger.warning("auth.gate_failed", error=str(e), exc_info=True)
        return None

    request.state.principal = principal
    structlog.contextvars.bind_contextvars(user_id=principal.id)
    return principal


async def get_current_principal(
    request: Request,
    _: Optional[Principal] = Depends(authenticate_request),
) -> Principal:
    """Return the bound Principal; 401 if the request is anonymous."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise UnauthorizedError(AUTHENTICATION_REQUIRED)
    return principal


def ensure_owner(principal: Principal, owner_user_id: int) -> None:
    """Allow self-service mutations only on the caller's own account.

    A mismatch is answered with 401, not 403.
    """
    if principal.id != owner_user_id:
        logger.info(
            "auth.ownership_denied",
            principal_id=principal.id,
            owner_user_id=owner_user_id,
        )
        raise UnauthorizedError("Not allowed to modify another user's account")
