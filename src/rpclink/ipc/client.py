"""Client-side transport: turns a discovered endpoint into an open session."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from rpclink.ipc import transports
from rpclink.ipc.constants import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
)
from rpclink.ipc.session import StreamSession

if TYPE_CHECKING:
    from rpclink.config import ConnectionConfig
    from rpclink.ipc.discovery import ServerEndpoint
    from rpclink.ipc.session import Session

logger = logging.getLogger(__name__)


class Locator(Protocol):
    """Source of the current server location, if any."""

    def get(self) -> ServerEndpoint | None: ...


@dataclass(eq=False)
class ConnectHandle:
    """Owns the connection backing one session; released via ``stop``."""

    endpoint: ServerEndpoint
    session: StreamSession | None = None
    stopped: bool = False


class Transport[H](Protocol):
    """Connection factory consumed by the broker and the forwarder."""

    async def connect(self, endpoint: ServerEndpoint) -> H: ...

    async def open_session(self, handle: H) -> Session: ...

    def stop(self, handle: H) -> None: ...


class StreamTransport:
    """``Transport`` over Unix sockets or TCP loopback, chosen per endpoint.

    Usage::

        transport = StreamTransport()
        handle = await transport.connect(endpoint)
        try:
            session = await transport.open_session(handle)
            ...
        finally:
            transport.stop(handle)
    """

    def __init__(self, config: ConnectionConfig | None = None) -> None:
        if config is None:
            self._connect_timeout = DEFAULT_CONNECT_TIMEOUT_SECONDS
            self._handshake_timeout = DEFAULT_HANDSHAKE_TIMEOUT_SECONDS
            self._preference = "auto"
        else:
            self._connect_timeout = config.connect_timeout_seconds
            self._handshake_timeout = config.handshake_timeout_seconds
            self._preference = config.transport_preference

    async def connect(self, endpoint: ServerEndpoint) -> ConnectHandle:
        """Create a handle for *endpoint*. No I/O happens until ``open_session``."""
        return ConnectHandle(endpoint=endpoint)

    async def open_session(self, handle: ConnectHandle) -> StreamSession:
        """Open the stream connection for *handle* and wrap it in a session.

        Raises:
            ConnectionError: If the handle was stopped, the endpoint uses a
                transport other than the preferred one, or the handshake is rejected.
            OSError: If the endpoint refuses the connection.
            TimeoutError: If connecting takes longer than the configured timeout.
        """
        if handle.stopped:
            msg = "Connect handle has already been stopped"
            raise ConnectionError(msg)
        if handle.session is not None:
            return handle.session

        ep = handle.endpoint
        if self._preference != "auto" and ep.transport != self._preference:
            msg = f"Server advertises {ep.transport} transport but {self._preference} is required"
            raise ConnectionError(msg)
        if ep.transport == "tcp":
            opening = transports.open_tcp_stream(
                ep.address,
                ep.port,
                token=ep.token,
                handshake_timeout=self._handshake_timeout,
            )
        else:
            opening = transports.open_unix_stream(ep.address)

        reader, writer = await asyncio.wait_for(opening, timeout=self._connect_timeout)
        handle.session = StreamSession(reader, writer)
        logger.debug("Session opened: transport=%s address=%s", ep.transport, ep.address)
        return handle.session

    def stop(self, handle: ConnectHandle) -> None:
        """Release *handle*. Calling it again is a no-op."""
        if handle.stopped:
            return
        handle.stopped = True
        if handle.session is not None:
            handle.session.close()
        logger.debug("Connection to %s released", handle.endpoint)


__all__ = [
    "ConnectHandle",
    "Locator",
    "StreamTransport",
    "Transport",
]
