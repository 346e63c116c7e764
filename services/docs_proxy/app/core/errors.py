"""Docs Proxy — failure taxonomy.

None of these reach the client as a payload: the routes log them and answer
with a bare 500, or, once a body is streaming, stop the stream.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for proxy failures."""


class UpstreamNetworkError(GatewayError):
    """The upstream request could not be sent or got no response."""


class UpstreamBodyReadError(GatewayError):
    """The upstream response body could not be read in full."""


class FeedMalformedError(GatewayError):
    """The status feed is not a well-formed XML document."""


class FeedEmptyError(GatewayError):
    """The status feed parsed but holds no titled items."""

    def __init__(self, message: str = "No items") -> None:
        super().__init__(message)


class ShortWriteError(GatewayError):
    """The destination accepted fewer bytes than it was given."""

    def __init__(self, requested: int, written: int) -> None:
        super().__init__(f"short write: {written} of {requested} bytes")
        self.requested = requested
        self.written = written


class StreamReadError(GatewayError):
    """Reading the upstream body failed before end of stream.

    ``partial`` holds any bytes the reader had in hand when it failed.
    """

    def __init__(self, message: str, partial: bytes = b"") -> None:
        super().__init__(message)
        self.partial = partial
