"""Docs Proxy — forwarding to the fixed documentation resource.

Only the fragment of the inbound URL survives the trip: method, path, query,
headers and body are dropped and the upstream always sees a plain GET of the
configured base URL.
"""

from __future__ import annotations

from contextlib import AsyncExitStack
from urllib.parse import unquote

import httpx
import structlog
from fastapi import Request, Response, status
from starlette.types import Receive, Scope, Send

from app.core.errors import StreamReadError, UpstreamNetworkError
from app.services.stream_copier import (
    ASGIBodyWriter,
    HttpxBodyReader,
    copy_response,
)

logger = structlog.get_logger()

# Hop-by-hop headers are never relayed (RFC 7230 §6.1)
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
}

# The body is relayed byte for byte, so ask for it without content coding.
UPSTREAM_HEADERS = {"Accept-Encoding": "identity"}


def inbound_fragment(request: Request) -> str:
    """Return the fragment carried on the raw inbound request target.

    Only a literal ``#`` counts; an encoded ``%23`` is part of the path. The
    server splits the target at the first ``?``, so the ``#`` may sit in
    either ``raw_path`` or ``query_string``.
    """
    target = request.scope.get("raw_path")
    if target is None:
        return ""
    query = request.scope.get("query_string", b"")
    if query:
        target += b"?" + query
    return unquote(target.partition(b"#")[2].decode("latin-1"))


def upstream_url(base: str | httpx.URL, fragment: str) -> httpx.URL:
    """Return ``base`` with its fragment replaced by ``fragment``."""
    return httpx.URL(base).copy_with(fragment=fragment or None)


def copy_headers(headers: httpx.Headers) -> list[tuple[bytes, bytes]]:
    """Return the end-to-end upstream headers as raw ASGI header pairs."""
    return [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in headers.multi_items()
        if name.lower() not in HOP_BY_HOP_HEADERS
    ]


class UpstreamResponse(Response):
    """Relays a streamed upstream response to the client.

    The status line goes out before any body bytes. The body is then pumped
    through ``copy_response``; whatever happens, the resources held in
    ``resources`` (the upstream response and its client) are released before
    ``__call__`` returns.
    """

    def __init__(
        self,
        upstream: httpx.Response,
        resources: AsyncExitStack,
        *,
        passthrough_headers: bool = False,
    ) -> None:
        self.status_code = upstream.status_code
        self.background = None
        self.init_headers()
        if passthrough_headers:
            self.raw_headers.extend(copy_headers(upstream.headers))
        elif "content-encoding" in upstream.headers:
            # Body bytes are relayed undecoded, so their coding must go too.
            self.raw_headers.append(
                (b"content-encoding", upstream.headers["content-encoding"].encode("latin-1"))
            )
        self.upstream = upstream
        self._resources = resources

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async with self._resources:
            await send(
                {
                    "type": "http.response.start",
                    "status": self.status_code,
                    "headers": self.raw_headers,
                }
            )
            writer = ASGIBodyWriter(send)
            result = await copy_response(writer, HttpxBodyReader(self.upstream))

            if result.eof:
                await writer.close()
                return

            logger.error(
                "docs_proxy_copy_failed",
                url=str(self.upstream.url),
                written=result.written,
                error=str(result.error),
                reason=type(result.error).__name__,
            )
            # The client is still listening after a read failure; end the
            # (truncated) body cleanly. After a write failure it is not.
            if isinstance(result.error, StreamReadError):
                await writer.close()


class DocsProxy:
    """Issues one upstream GET per inbound request and relays the answer."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        passthrough_headers: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = httpx.URL(base_url)
        self.passthrough_headers = passthrough_headers
        self._timeout = timeout
        self._transport = transport

    async def open(self, url: httpx.URL) -> tuple[httpx.Response, AsyncExitStack]:
        """Send the upstream GET, leaving the body unread.

        Returns the response together with the exit stack that owns it and
        its client; the caller must close the stack.

        Raises:
            UpstreamNetworkError: no response could be obtained.
        """
        async with AsyncExitStack() as stack:
            client = await stack.enter_async_context(
                httpx.AsyncClient(
                    timeout=self._timeout,
                    transport=self._transport,
                    follow_redirects=True,
                )
            )
            request = client.build_request("GET", url, headers=UPSTREAM_HEADERS)
            try:
                response = await client.send(request, stream=True)
            except httpx.RequestError as exc:
                raise UpstreamNetworkError(str(exc)) from exc
            stack.push_async_callback(response.aclose)
            return response, stack.pop_all()

    async def forward(self, request: Request) -> Response:
        url = upstream_url(self.base_url, inbound_fragment(request))

        try:
            upstream, resources = await self.open(url)
        except UpstreamNetworkError as exc:
            logger.error("docs_proxy_upstream_failed", url=str(url), error=str(exc))
            return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.debug(
            "docs_proxy_upstream_response",
            url=str(url),
            status_code=upstream.status_code,
        )
        return UpstreamResponse(
            upstream, resources, passthrough_headers=self.passthrough_headers
        )
