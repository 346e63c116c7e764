"""Docs Proxy — health derived from the upstream status feed.

The latest feed entry is taken as the current incident. The service reports
healthy only when that entry's title carries the resolution marker.
"""

from __future__ import annotations

import enum

import httpx
import structlog

from app.core.errors import (
    FeedEmptyError,
    FeedMalformedError,
    UpstreamBodyReadError,
    UpstreamNetworkError,
)
from app.services.feed_parser import latest_item

logger = structlog.get_logger()

RESOLUTION_MARKER = "RESOLVED"


class HealthSignal(enum.Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


def is_resolved(title: str, marker: str = RESOLUTION_MARKER) -> bool:
    """Case-sensitive containment check of the resolution marker."""
    return marker in title


class HealthEvaluator:
    """Fetches the status feed and maps its latest entry to a ``HealthSignal``.

    Every call goes to the network; results are never reused.
    """

    def __init__(
        self,
        feed_url: str,
        *,
        marker: str = RESOLUTION_MARKER,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.feed_url = feed_url
        self.marker = marker
        self._timeout = timeout
        self._transport = transport

    async def fetch_feed(self) -> bytes:
        """Download the whole feed document.

        Raises:
            UpstreamNetworkError: the request could not be completed.
            UpstreamBodyReadError: the body could not be read.
        """
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                async with client.stream("GET", self.feed_url) as response:
                    try:
                        return await response.aread()
                    except httpx.HTTPError as exc:
                        raise UpstreamBodyReadError(str(exc)) from exc
            except httpx.RequestError as exc:
                raise UpstreamNetworkError(str(exc)) from exc

    async def evaluate(self) -> HealthSignal:
        log = logger.bind(feed_url=self.feed_url)

        try:
            document = await self.fetch_feed()
        except UpstreamNetworkError as exc:
            log.error("health_feed_fetch_failed", error=str(exc))
            return HealthSignal.UNHEALTHY
        except UpstreamBodyReadError as exc:
            log.error("health_feed_read_failed", error=str(exc))
            return HealthSignal.UNHEALTHY

        try:
            title = latest_item(document)
        except (FeedMalformedError, FeedEmptyError) as exc:
            log.error(
                "health_feed_unparseable",
                error=str(exc),
                reason=type(exc).__name__,
            )
            return HealthSignal.UNHEALTHY

        if is_resolved(title, self.marker):
            log.debug("health_feed_resolved", title=title)
            return HealthSignal.HEALTHY

        log.warning("health_feed_open_incident", title=title)
        return HealthSignal.UNHEALTHY

    async def is_healthy(self) -> bool:
        """Check adapter for ``shared.health.create_health_router``."""
        return await self.evaluate() is HealthSignal.HEALTHY
