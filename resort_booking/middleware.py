"""
FastAPI middleware for request tracing and correlation.

Every request gets an ID that is returned in the X-Request-ID header and
bound into structlog's context, so all log events emitted while handling the
request carry it.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add a request ID to each HTTP request.

    An incoming X-Request-ID (e.g. from a proxy or the frontend) is reused
    when present and reasonably short; otherwise a UUID4 is generated. The
    ID is:
    1. Stored in request.state.request_id for route handlers
    2. Bound to structlog contextvars for the duration of the request
    3. Echoed back in the X-Request-ID response header

    Example:
        >>> app.add_middleware(RequestIDMiddleware)
        >>>
        >>> @router.get("/services")
        >>> def list_services(request: Request):
        ...     logger.info("listing_services")  # carries request_id automatically
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH:
            request_id = incoming
        else:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=request.method, path=request.url.path
        )
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
