"""401 entry point — the canonical body for unauthenticated access.

Every 401 this service emits has the same JSON shape:

    {"status": 401, "error": "Unauthorized", "message": ..., "path": ...}

`message` is null when there is no message; `path` is the request path
and stays "" (not null) when empty.
"""

from typing import Optional

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from yogastudio.errors import UnauthorizedError

logger = structlog.get_logger()


def unauthorized_body(path: Optional[str], message: Optional[str]) -> dict:
    return {
        "status": 401,
        "error": "Unauthorized",
        "message": message,
        "path": path or "",
    }


def unauthorized_response(path: Optional[str], message: Optional[str]) -> JSONResponse:
    """Build the 401 response for the given path and message."""
    return JSONResponse(status_code=401, content=unauthorized_body(path, message))


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    """Exception handler for UnauthorizedError."""
    path = request.url.path
    logger.info("auth.unauthorized", path=path, message=exc.message)
    return unauthorized_response(path, exc.message)
