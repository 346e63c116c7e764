import httpx
import pytest

from app.core.errors import ShortWriteError, StreamReadError
from app.services.stream_copier import (
    BUFFER_SIZE,
    ASGIBodyWriter,
    HttpxBodyReader,
    copy_response,
)


class ChunkedReader:
    """Hands out pre-cut chunks, never more than asked for."""

    def __init__(self, chunks, error=None):
        self._chunks = list(chunks)
        self._error = error
        self.reads = []

    async def read(self, size):
        self.reads.append(size)
        if not self._chunks:
            if self._error is not None:
                raise self._error
            return b""
        chunk = self._chunks.pop(0)
        if len(chunk) > size:
            self._chunks.insert(0, chunk[size:])
            chunk = chunk[:size]
        return chunk


class RecordingWriter:
    def __init__(self, accept=None, fail_after=None):
        self.data = bytearray()
        self.calls = 0
        self._accept = accept
        self._fail_after = fail_after

    async def write(self, data):
        self.calls += 1
        if self._fail_after is not None and self.calls > self._fail_after:
            raise ConnectionResetError("client went away")
        accepted = len(data) if self._accept is None else min(self._accept, len(data))
        self.data.extend(data[:accepted])
        return accepted


def _payload(size):
    return bytes(i % 251 for i in range(size))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "sizes",
    [
        [],
        [1],
        [5, 7],
        [BUFFER_SIZE],
        [BUFFER_SIZE + 1],
        [3 * BUFFER_SIZE + 17, 2, 40_000],
        [1] * 64,
    ],
)
async def test_copy_preserves_order_and_length(sizes):
    payload = _payload(sum(sizes))
    chunks, offset = [], 0
    for size in sizes:
        chunks.append(payload[offset:offset + size])
        offset += size

    writer = RecordingWriter()
    result = await copy_response(writer, ChunkedReader(chunks))

    assert result.eof
    assert result.error is None
    assert result.written == len(payload)
    assert bytes(writer.data) == payload


@pytest.mark.asyncio
async def test_reads_are_bounded_by_buffer():
    reader = ChunkedReader([_payload(5 * BUFFER_SIZE)])
    writer = RecordingWriter()

    await copy_response(writer, reader)

    assert set(reader.reads) == {BUFFER_SIZE}
    assert writer.calls == 5


@pytest.mark.asyncio
async def test_short_write_stops_copy():
    writer = RecordingWriter(accept=10)
    reader = ChunkedReader([b"a" * 100, b"b" * 100])

    result = await copy_response(writer, reader)

    assert isinstance(result.error, ShortWriteError)
    assert result.error.requested == 100
    assert result.error.written == 10
    assert result.written == 10
    assert bytes(writer.data) == b"a" * 10
    assert writer.calls == 1
    assert not result.eof


@pytest.mark.asyncio
async def test_write_error_is_terminal():
    writer = RecordingWriter(fail_after=1)
    reader = ChunkedReader([b"first", b"second", b"third"])

    result = await copy_response(writer, reader)

    assert isinstance(result.error, ConnectionResetError)
    assert result.written == len(b"first")
    assert bytes(writer.data) == b"first"


@pytest.mark.asyncio
async def test_read_error_after_data():
    reader = ChunkedReader([b"abc", b"def"], error=StreamReadError("reset", partial=b"gh"))
    writer = RecordingWriter()

    result = await copy_response(writer, reader)

    assert isinstance(result.error, StreamReadError)
    assert bytes(writer.data) == b"abcdefgh"
    assert result.written == 8


@pytest.mark.asyncio
async def test_foreign_read_error_is_wrapped():
    reader = ChunkedReader([b"abc"], error=OSError("boom"))
    writer = RecordingWriter()

    result = await copy_response(writer, reader)

    assert isinstance(result.error, StreamReadError)
    assert isinstance(result.error.__cause__, OSError)
    assert result.written == 3


@pytest.mark.asyncio
async def test_httpx_reader_rechunks_raw_body():
    async def body():
        yield b"x" * 10
        yield b"y" * (BUFFER_SIZE + 5)

    response = httpx.Response(200, content=body())
    reader = HttpxBodyReader(response)
    writer = RecordingWriter()

    result = await copy_response(writer, reader)

    assert result.eof
    assert bytes(writer.data) == b"x" * 10 + b"y" * (BUFFER_SIZE + 5)


@pytest.mark.asyncio
async def test_httpx_reader_reports_transport_errors():
    async def body():
        yield b"partial"
        raise httpx.ReadError("connection reset")

    reader = HttpxBodyReader(httpx.Response(200, content=body()))
    writer = RecordingWriter()

    result = await copy_response(writer, reader)

    assert isinstance(result.error, StreamReadError)
    assert bytes(writer.data) == b"partial"


@pytest.mark.asyncio
async def test_asgi_writer_emits_body_messages():
    messages = []

    async def send(message):
        messages.append(message)

    writer = ASGIBodyWriter(send)
    assert await writer.write(b"chunk") == 5
    await writer.close()

    assert messages == [
        {"type": "http.response.body", "body": b"chunk", "more_body": True},
        {"type": "http.response.body", "body": b"", "more_body": False},
    ]
