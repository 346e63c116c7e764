"""Docs Proxy — environment-based configuration."""

from __future__ import annotations

from shared.config import BaseServiceSettings


class DocsProxySettings(BaseServiceSettings):
    """Settings specific to the docs proxy.

    One instance is built at startup and handed to each component; the
    upstream targets never change while the process runs.
    """

    service_name: str = "docs_proxy"

    # Carries ``version`` on every response
    version_header: str = "X-Proxy-Version"

    # Upstream targets
    docs_url: str = "https://docs.influxdata.com/influxdb/v1.2/concepts/glossary"
    status_feed_url: str = "http://status.aws.amazon.com/rss/s3-us-standard.rss"
    resolution_marker: str = "RESOLVED"

    # Seconds; None waits on the upstream indefinitely
    upstream_timeout: float | None = None
    # Relay upstream end-to-end headers along with the status code
    passthrough_headers: bool = False
