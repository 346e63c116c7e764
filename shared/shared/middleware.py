"""ASGI middleware applied around every route.

``VersionHeaderMiddleware`` stamps the running version on each response and
``RequestLoggingMiddleware`` logs the inbound URL before dispatch.
``build_middleware`` returns them as the ordered list handed to
``FastAPI(middleware=...)``; the first entry is the outermost layer.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = structlog.get_logger()

DEFAULT_VERSION_HEADER = "X-Proxy-Version"
_REQUEST_HEADER = "X-Request-ID"


class VersionHeaderMiddleware(BaseHTTPMiddleware):
    """Adds the service version header to every response."""

    def __init__(
        self,
        app: ASGIApp,
        version: str,
        header_name: str = DEFAULT_VERSION_HEADER,
    ) -> None:
        super().__init__(app)
        self.version = version
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.append(self.header_name, self.version)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs the full request URL, then hands off to the router."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(_REQUEST_HEADER) or str(uuid.uuid4())

        # Every log line emitted while serving this request carries the id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_received",
            method=request.method,
            url=str(request.url),
        )
        return await call_next(request)


def build_middleware(
    *,
    version: str,
    header_name: str = DEFAULT_VERSION_HEADER,
) -> list[Middleware]:
    """Return the fixed middleware pipeline, outermost first."""
    return [
        Middleware(VersionHeaderMiddleware, version=version, header_name=header_name),
        Middleware(RequestLoggingMiddleware),
    ]
