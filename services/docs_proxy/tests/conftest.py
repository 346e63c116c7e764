import httpx
import pytest

from app.core.config import DocsProxySettings
from upstream_stubs import DOCS_URL, FEED_URL


@pytest.fixture
def settings():
    return DocsProxySettings(docs_url=DOCS_URL, status_feed_url=FEED_URL)


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def upstream(recorded_requests):
    """Build a MockTransport that records requests and answers via ``respond``."""

    def _factory(respond):
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return respond(request)

        return httpx.MockTransport(handler)

    return _factory
