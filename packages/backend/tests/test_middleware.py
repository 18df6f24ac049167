"""Tests for the request context middleware — request IDs and log context."""

import pytest
import structlog
from starlette.requests import Request
from starlette.responses import Response

from yogastudio.middleware.request_context import RequestContextMiddleware


def _request() -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/session",
            "headers": [],
            "query_string": b"",
        }
    )


@pytest.mark.asyncio
async def test_request_id_generated(client):
    """Each request gets a unique X-Request-ID header."""
    r1 = await client.get("/api/health")
    r2 = await client.get("/api/health")
    assert "X-Request-ID" in r1.headers
    assert "X-Request-ID" in r2.headers
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    """Incoming X-Request-ID is propagated through the response."""
    custom_id = "test-trace-12345"
    r = await client.get("/api/health", headers={"X-Request-ID": custom_id})
    assert r.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
async def test_request_id_on_unauthorized(unauthenticated_client):
    r = await unauthenticated_client.get("/api/session")
    assert r.status_code == 401
    assert "X-Request-ID" in r.headers


@pytest.mark.asyncio
async def test_log_context_cleared_after_request():
    middleware = RequestContextMiddleware(app=None)

    async def call_next(request):
        structlog.contextvars.bind_contextvars(user_id=1)
        return Response(status_code=200)

    await middleware.dispatch(_request(), call_next)
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.asyncio
async def test_log_context_cleared_when_handler_raises():
    middleware = RequestContextMiddleware(app=None)

    async def call_next(request):
        structlog.contextvars.bind_contextvars(user_id=1)
        raise RuntimeError("handler blew up")

    with pytest.raises(RuntimeError):
        await middleware.dispatch(_request(), call_next)
    assert structlog.contextvars.get_contextvars() == {}
