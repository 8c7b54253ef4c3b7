"""Bridge this process's stdin/stdout to the RPC server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rpclink.config import RpcLinkConfig
from rpclink.connect import connect
from rpclink.errors import describe_server_error
from rpclink.forwarder import forward
from rpclink.ipc.client import StreamTransport
from rpclink.ipc.contracts import ServerError
from rpclink.ipc.session import StreamSession, open_stdio_session

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rpclink.ipc.client import Locator, Transport
    from rpclink.ipc.contracts import Frame
    from rpclink.ipc.session import Session

logger = logging.getLogger(__name__)


class ErrorReportingSession:
    """Passes frames through unchanged, logging server error responses."""

    def __init__(self, inner: Session) -> None:
        self._inner = inner
        self.errors_seen = 0

    async def read(self) -> Frame:
        frame = await self._inner.read()
        if isinstance(frame, dict):
            error = ServerError.from_message(frame)
            if error is not None:
                self.errors_seen += 1
                if logger.isEnabledFor(logging.WARNING):
                    logger.warning("%s", describe_server_error(error))
        return frame

    async def write(self, frames: Sequence[Frame]) -> None:
        await self._inner.write(frames)


async def bridge_stdio(
    *,
    wait: bool,
    config: RpcLinkConfig | None = None,
    locator: Locator | None = None,
    transport: Transport[Any] | None = None,
    stdio: Session | None = None,
) -> None:
    """Connect to the server and relay between it and stdio until both close.

    The server connection is released when forwarding ends, however it ends.
    """
    config = config or RpcLinkConfig()
    transport = transport if transport is not None else StreamTransport(config.connection)
    handle, session = await connect(
        wait=wait,
        config=config,
        locator=locator,
        transport=transport,
    )

    owns_stdio = stdio is None
    if stdio is None:
        try:
            stdio = await open_stdio_session()
        except BaseException:
            transport.stop(handle)
            raise

    try:
        await forward(
            ErrorReportingSession(session),
            stdio,
            finalizer=lambda: transport.stop(handle),
        )
    finally:
        if owns_stdio and isinstance(stdio, StreamSession):
            stdio.close()


__all__ = ["ErrorReportingSession", "bridge_stdio"]
