"""Open raw stream pairs to an advertised RPC server.

Servers listen on a Unix domain socket or on a localhost TCP port. The TCP
variant expects the client to send the token from the runtime directory as
its first line and answers ``OK`` before any JSON is exchanged.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import platform

from rpclink.ipc.constants import (
    DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
    HANDSHAKE_ACK,
    STREAM_LIMIT_BYTES,
)

logger = logging.getLogger(__name__)

type StreamPair = tuple[asyncio.StreamReader, asyncio.StreamWriter]


async def _discard(writer: asyncio.StreamWriter) -> None:
    writer.close()
    with contextlib.suppress(ConnectionError, OSError):
        await writer.wait_closed()


async def open_unix_stream(path: str) -> StreamPair:
    """Connect to the Unix socket at *path*.

    Raises:
        NotImplementedError: On Windows.
        OSError: If nothing listens at *path*.
    """
    if platform.system() == "Windows":
        msg = "Unix sockets are not supported on Windows"
        raise NotImplementedError(msg)
    reader, writer = await asyncio.open_unix_connection(path, limit=STREAM_LIMIT_BYTES)
    logger.debug("Connected to Unix socket at %s", path)
    return reader, writer


async def open_tcp_stream(
    host: str,
    port: int | None,
    *,
    token: str | None,
    handshake_timeout: float = DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
) -> StreamPair:
    """Connect to ``host:port`` and present *token*.

    Raises:
        ConnectionError: If no port or token is advertised, or the server
            does not acknowledge the token.
        TimeoutError: If the acknowledgement takes longer than *handshake_timeout*.
    """
    if port is None:
        msg = "TCP endpoint advertises no port"
        raise ConnectionError(msg)
    if not token:
        msg = "TCP endpoint advertises no handshake token"
        raise ConnectionError(msg)

    reader, writer = await asyncio.open_connection(host, port, limit=STREAM_LIMIT_BYTES)
    try:
        writer.write(f"{token}\n".encode())
        await writer.drain()
        raw = await asyncio.wait_for(reader.readline(), timeout=handshake_timeout)
    except BaseException:
        await _discard(writer)
        raise

    if raw.decode("utf-8", errors="replace").strip() != HANDSHAKE_ACK:
        await _discard(writer)
        msg = "TCP handshake rejected by server"
        raise ConnectionError(msg)

    logger.debug("Connected to TCP server at %s:%d", host, port)
    return reader, writer


__all__ = ["StreamPair", "open_tcp_stream", "open_unix_stream"]
