"""FastAPI application factory.

create_app() returns a configured FastAPI instance. Lifespan manages
startup/shutdown, and middleware, exception handlers and routers are all
registered here.

The authentication gate is an app-wide dependency, so it runs before
every route handler, open or protected.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from yogastudio import __version__
from yogastudio.api import api_router
from yogastudio.auth.dependencies import authenticate_request
from yogastudio.auth.entry_point import unauthorized_handler
from yogastudio.config import settings
from yogastudio.errors import BadRequestError, NotFoundError, UnauthorizedError
from yogastudio.log import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "yogastudio.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("yogastudio.shutdown")

    # Close database engine
    from yogastudio.db.engine import engine
    await engine.dispose()


# ─── Exception handlers ──────────────────────────────────


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    logger.info("http.bad_request", path=request.url.path, message=str(exc))
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and non-numeric path ids are a 400, not FastAPI's 422."""
    return JSONResponse(
        status_code=400,
        content={
            "message": "Validation failed",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(
        title="Yoga Studio",
        description="Class-booking backend — sessions, teachers, participation",
        version=__version__,
        lifespan=lifespan,
        dependencies=[Depends(authenticate_request)],
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestContext → CORS → handler

    from yogastudio.middleware.request_context import RequestContextMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(RequestValidationError, validation_handler)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: yogastudio.main:app)
app = create_app()
