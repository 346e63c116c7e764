"""Docs Proxy — application lifespan (startup / shutdown hooks)."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the upstream targets on start-up and the shutdown."""
    settings = app.state.settings
    log.info(
        "docs_proxy starting up",
        port=settings.service_port,
        version=settings.version,
        docs_url=settings.docs_url,
        status_feed_url=settings.status_feed_url,
    )

    yield

    log.info("docs_proxy shutting down")
