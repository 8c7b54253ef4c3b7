"""Establish a session with the RPC server, failing fast or waiting for it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rpclink.broker import ConnectionBroker, Connected, TransportFailure
from rpclink.config import RETRY_INTERVAL_SECONDS, RpcLinkConfig
from rpclink.errors import ConnectionRaceError, ServerNotRunningError
from rpclink.ipc.client import StreamTransport
from rpclink.ipc.discovery import EndpointLocator
from rpclink.retry import retry

if TYPE_CHECKING:
    from rpclink.ipc.client import Locator, Transport
    from rpclink.ipc.session import Session

logger = logging.getLogger(__name__)


async def establish_connection(
    broker: ConnectionBroker,
    *,
    wait: bool,
    interval: float = RETRY_INTERVAL_SECONDS,
) -> tuple[Any, Session]:
    """Return ``(handle, session)`` from *broker*.

    With *wait* the broker is polled until the server accepts. Without it a
    single attempt is made; on failure the locator is consulted again to
    tell an absent server from one that is advertised but did not accept.

    Raises:
        ServerNotRunningError: No server is advertised (fail-fast only).
        ConnectionRaceError: A server is advertised but the attempt failed.
    """
    if wait:
        return await retry(broker.attempt, interval=interval)

    result = await broker.attempt()
    if isinstance(result, Connected):
        return result.handle, result.session

    endpoint = broker.locator.get()
    if endpoint is None:
        raise ServerNotRunningError()

    logger.warning("Server advertised at %s but the connection attempt failed", endpoint)
    if isinstance(result, TransportFailure):
        raise ConnectionRaceError() from result.error
    raise ConnectionRaceError()


async def connect(
    *,
    wait: bool,
    config: RpcLinkConfig | None = None,
    locator: Locator | None = None,
    transport: Transport[Any] | None = None,
) -> tuple[Any, Session]:
    """Connect to the server advertised in the runtime directory."""
    config = config or RpcLinkConfig()
    broker = ConnectionBroker(
        locator if locator is not None else EndpointLocator(),
        transport if transport is not None else StreamTransport(config.connection),
    )
    return await establish_connection(
        broker,
        wait=wait,
        interval=config.connection.retry_interval_seconds,
    )


__all__ = ["connect", "establish_connection"]
