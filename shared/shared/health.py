"""Reusable health-check router.

Serves ``/health/`` and everything below it. The outcome of a single async
check decides the status: 204 with no body when it reports healthy, 500 with
no body otherwise. ``/health`` redirects to ``/health/``. Both routes answer
every HTTP method.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import RedirectResponse

HealthCheck = Callable[[], Awaitable[bool]]


def create_health_router(check: HealthCheck, prefix: str = "/health") -> APIRouter:
    """Build a health router around one check.

    Args:
        check: Async callable returning True if healthy. It is awaited once
            per request; nothing is cached between calls.
        prefix: Path the router owns.

    Returns:
        A FastAPI ``APIRouter`` to include ahead of any catch-all routes.
    """
    router = APIRouter(tags=["health"])

    async def health_redirect(request: Request) -> RedirectResponse:
        return RedirectResponse(
            f"{prefix}/", status_code=status.HTTP_301_MOVED_PERMANENTLY
        )

    async def health(request: Request) -> Response:
        if await check():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Plain starlette routes: no method list means no 405s.
    router.add_route(prefix, health_redirect, include_in_schema=False)
    router.add_route(prefix + "/{subpath:path}", health, include_in_schema=False)
    return router
