"""Single connection attempts against the currently advertised server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rpclink.ipc.client import Locator, Transport
    from rpclink.ipc.discovery import ServerEndpoint
    from rpclink.ipc.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Connected:
    """The attempt produced an open session."""

    handle: Any
    session: Session

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class NotYetAvailable:
    """No server location is advertised."""

    @property
    def found(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """A location is advertised but connecting to it failed."""

    endpoint: ServerEndpoint
    error: BaseException

    @property
    def found(self) -> bool:
        return False


type ConnectionAttemptResult = Connected | NotYetAvailable | TransportFailure


class ConnectionBroker:
    """Makes one connection attempt per ``attempt()`` call.

    Connectivity failures never raise: an absent location is reported as
    ``NotYetAvailable`` and a refused, timed out or rejected connection as
    ``TransportFailure``, so callers can retry both the same way while
    still telling them apart.
    """

    def __init__(self, locator: Locator, transport: Transport[Any]) -> None:
        self._locator = locator
        self._transport = transport

    @property
    def locator(self) -> Locator:
        return self._locator

    async def attempt(self) -> ConnectionAttemptResult:
        endpoint = self._locator.get()
        if endpoint is None:
            logger.debug("No server endpoint advertised")
            return NotYetAvailable()

        handle = None
        try:
            handle = await self._transport.connect(endpoint)
            session = await self._transport.open_session(handle)
        except OSError as exc:
            if handle is not None:
                self._transport.stop(handle)
            logger.debug("Connection to %s failed: %s", endpoint, exc)
            return TransportFailure(endpoint=endpoint, error=exc)

        logger.info("Connected to RPC server at %s", endpoint)
        return Connected(handle=handle, session=session)


__all__ = [
    "ConnectionAttemptResult",
    "ConnectionBroker",
    "Connected",
    "NotYetAvailable",
    "TransportFailure",
]
