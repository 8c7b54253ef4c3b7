"""Line-delimited JSON sessions over ``asyncio`` streams."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Protocol

from rpclink.ipc.constants import MAX_LINE_BYTES, STREAM_LIMIT_BYTES
from rpclink.ipc.contracts import END_OF_STREAM, EndOfStream

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import IO, Any

    from rpclink.ipc.contracts import Frame, MessageUnit

logger = logging.getLogger(__name__)


class FramingError(ConnectionError):
    """A line on the stream is not a valid message frame."""


class Session(Protocol):
    """Duplex channel of message units closed by an end-of-stream sentinel."""

    async def read(self) -> Frame: ...

    async def write(self, frames: Sequence[Frame]) -> None: ...


class StreamSession:
    """Session exchanging one JSON object per line over a stream pair.

    A clean EOF on the reader is reported as ``END_OF_STREAM``. Writing
    ``END_OF_STREAM`` half-closes the writer so the peer observes EOF.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        read_transport: asyncio.BaseTransport | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._read_transport = read_transport
        self._write_closed = False

    @property
    def is_closing(self) -> bool:
        return self._writer.is_closing()

    async def read(self) -> Frame:
        """Read the next message unit, or ``END_OF_STREAM`` once the peer closes.

        Raises:
            FramingError: If a line exceeds the size limit or is not a JSON object.
        """
        try:
            raw = await self._reader.readline()
        except ValueError as exc:
            msg = "Message exceeded stream framing limit"
            raise FramingError(msg) from exc

        if not raw:
            return END_OF_STREAM
        if not raw.endswith(b"\n"):
            msg = "Stream ended in the middle of a message"
            raise FramingError(msg)
        if len(raw) > MAX_LINE_BYTES + 1:
            msg = "Message exceeded max line size"
            raise FramingError(msg)

        try:
            decoded: Any = json.loads(raw)
        except ValueError as exc:
            msg = "Invalid JSON message on stream"
            raise FramingError(msg) from exc
        if not isinstance(decoded, dict):
            msg = f"Expected a JSON object, got {type(decoded).__name__}"
            raise FramingError(msg)
        return decoded

    async def write(self, frames: Sequence[Frame]) -> None:
        """Write *frames* in order; ``END_OF_STREAM`` closes the sending side."""
        for frame in frames:
            if self._write_closed:
                msg = "Session is closed for writing"
                raise ConnectionError(msg)
            if isinstance(frame, EndOfStream):
                self._close_write_side()
                continue
            self._writer.write(_encode(frame))
            await self._writer.drain()

    def _close_write_side(self) -> None:
        self._write_closed = True
        if self._writer.is_closing():
            return
        if self._writer.can_write_eof():
            self._writer.write_eof()
        else:
            self._writer.close()

    def close(self) -> None:
        """Close both directions. Safe to call more than once."""
        self._write_closed = True
        if not self._writer.is_closing():
            self._writer.close()
        if self._read_transport is not None and not self._read_transport.is_closing():
            self._read_transport.close()


def _encode(unit: MessageUnit) -> bytes:
    line = json.dumps(unit, separators=(",", ":")) + "\n"
    return line.encode("utf-8")


async def open_stdio_session(
    stdin: IO[Any] | None = None,
    stdout: IO[Any] | None = None,
) -> StreamSession:
    """Wrap this process's stdin/stdout pipes in a ``StreamSession``."""
    loop = asyncio.get_running_loop()
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    reader = asyncio.StreamReader(limit=STREAM_LIMIT_BYTES)
    read_transport, _ = await loop.connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), stdin
    )
    write_transport, write_protocol = await loop.connect_write_pipe(
        asyncio.streams.FlowControlMixin, stdout
    )
    writer = asyncio.StreamWriter(write_transport, write_protocol, None, loop)
    logger.debug("Opened stdio session")
    return StreamSession(reader, writer, read_transport=read_transport)


__all__ = [
    "FramingError",
    "Session",
    "StreamSession",
    "open_stdio_session",
]
