"""Docs Proxy — FastAPI application factory.

Forwards every request to a fixed documentation page and answers
``/health/`` from an upstream RSS status feed.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.core.config import DocsProxySettings
from app.core.events import lifespan
from app.routers import docs, health
from app.services.docs_proxy import DocsProxy
from app.services.health_evaluator import HealthEvaluator

from shared.logging import setup_logging
from shared.middleware import build_middleware


def create_app(
    settings: DocsProxySettings | None = None,
    *,
    proxy: DocsProxy | None = None,
    evaluator: HealthEvaluator | None = None,
) -> FastAPI:
    """Construct the application.

    ``proxy`` and ``evaluator`` default to instances built from ``settings``;
    passing them in substitutes the upstream endpoints.
    """
    settings = settings or DocsProxySettings()

    setup_logging(settings)

    proxy = proxy or DocsProxy(
        settings.docs_url,
        timeout=settings.upstream_timeout,
        passthrough_headers=settings.passthrough_headers,
    )
    evaluator = evaluator or HealthEvaluator(
        settings.status_feed_url,
        marker=settings.resolution_marker,
        timeout=settings.upstream_timeout,
    )

    application = FastAPI(
        title="Influx Docs Proxy",
        version=settings.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
        middleware=build_middleware(
            version=settings.version,
            header_name=settings.version_header,
        ),
    )
    application.state.settings = settings
    application.state.proxy = proxy
    application.state.evaluator = evaluator

    # Health first: the docs router swallows every path
    application.include_router(health.build_router(evaluator))
    application.include_router(docs.build_router(proxy))

    return application


app = create_app()
