"""Docs Proxy — catch-all route forwarding to the documentation resource."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from app.services.docs_proxy import DocsProxy


def build_router(proxy: DocsProxy) -> APIRouter:
    """Return a router sending every path it sees to ``proxy``.

    Include it last; it matches everything. The route is a plain starlette
    route with no method list, so any method (TRACE, PROPFIND, ...) is
    forwarded rather than answered with 405.
    """
    router = APIRouter(tags=["docs"])

    async def proxy_docs(request: Request) -> Response:
        return await proxy.forward(request)

    router.add_route("/{path:path}", proxy_docs, include_in_schema=False)
    return router
