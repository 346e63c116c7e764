"""Docs Proxy — bounded-memory body copy.

``copy_response`` moves bytes from an async reader to an async writer through
a fixed 32 KiB buffer, so memory stays flat whether the upstream body is
small, large or unbounded. The adapters at the bottom connect it to an httpx
response on one side and an ASGI ``send`` callable on the other.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

import httpx
import structlog
from starlette.types import Send

from app.core.errors import ShortWriteError, StreamReadError

logger = structlog.get_logger()

BUFFER_SIZE = 32 * 1024


class AsyncReader(Protocol):
    async def read(self, size: int) -> bytes:
        """Return up to ``size`` bytes; empty bytes mean end of stream."""
        ...


class AsyncWriter(Protocol):
    async def write(self, data: bytes) -> int:
        """Write ``data`` and return how many bytes were accepted."""
        ...


@dataclass(frozen=True)
class CopyResult:
    written: int
    error: Exception | None = None

    @property
    def eof(self) -> bool:
        """True when the copy stopped because the source was exhausted."""
        return self.error is None


async def copy_response(
    dst: AsyncWriter, src: AsyncReader, buffer_size: int = BUFFER_SIZE
) -> CopyResult:
    """Copy ``src`` into ``dst`` until end of stream or the first failure.

    A failed read is logged and becomes the terminal outcome once the bytes
    already in hand are written. A write error or short write stops the copy
    immediately. ``written`` counts only bytes the destination accepted.
    """
    written = 0
    while True:
        read_error: StreamReadError | None = None
        try:
            chunk = await src.read(buffer_size)
        except StreamReadError as exc:
            read_error = exc
        except Exception as exc:
            read_error = StreamReadError(str(exc))
            read_error.__cause__ = exc

        if read_error is not None:
            logger.warning(
                "body_copy_read_failed", error=str(read_error), written=written
            )
            chunk = read_error.partial

        if chunk:
            try:
                accepted = await dst.write(chunk)
            except Exception as exc:
                return CopyResult(written, exc)
            if accepted > 0:
                written += accepted
            if accepted != len(chunk):
                return CopyResult(written, ShortWriteError(len(chunk), accepted))

        if read_error is not None:
            return CopyResult(written, read_error)
        if not chunk:
            return CopyResult(written)


class HttpxBodyReader:
    """Presents the raw bytes of a streamed httpx response as ``read(n)``.

    Bytes are relayed as received; no content decoding is applied.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._chunks: AsyncIterator[bytes] | None = None
        self._pending = b""

    async def read(self, size: int) -> bytes:
        if self._chunks is None:
            self._chunks = self._response.aiter_raw()

        while not self._pending:
            try:
                self._pending = await self._chunks.__anext__()
            except StopAsyncIteration:
                return b""
            except httpx.HTTPError as exc:
                raise StreamReadError(str(exc)) from exc

        data, self._pending = self._pending[:size], self._pending[size:]
        return data


class ASGIBodyWriter:
    """Writes body chunks as ASGI ``http.response.body`` messages."""

    def __init__(self, send: Send) -> None:
        self._send = send

    async def write(self, data: bytes) -> int:
        await self._send(
            {"type": "http.response.body", "body": data, "more_body": True}
        )
        return len(data)

    async def close(self) -> None:
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})
