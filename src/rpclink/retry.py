"""Poll a connection probe until it finds a server."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from rpclink.broker import Connected, TransportFailure
from rpclink.config import RETRY_INTERVAL_SECONDS

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from rpclink.broker import ConnectionAttemptResult
    from rpclink.ipc.session import Session

    Probe = Callable[[], Awaitable[ConnectionAttemptResult]]

logger = logging.getLogger(__name__)


class Sleeper:
    """Runs timed delays as background tasks, one at a time.

    A retry loop creates at most one ``Sleeper`` and reuses it for every
    delay. ``stop()`` cancels a pending delay and retires the sleeper.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def schedule(self, delay: float) -> asyncio.Task[None]:
        """Start a delay of *delay* seconds and return the task running it."""
        if self._stopped:
            msg = "Sleeper has been stopped"
            raise RuntimeError(msg)
        if self._task is not None and not self._task.done():
            msg = "Sleeper already has a pending delay"
            raise RuntimeError(msg)
        self._task = asyncio.create_task(asyncio.sleep(delay), name="rpclink-retry-sleep")
        return self._task

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None


async def retry(
    probe: Probe,
    *,
    interval: float = RETRY_INTERVAL_SECONDS,
    sleeper_factory: Callable[[], Sleeper] = Sleeper,
) -> tuple[Any, Session]:
    """Call *probe* until it connects and return the connected ``(handle, session)``.

    Between failed attempts the loop waits *interval* seconds on a single
    lazily created ``Sleeper``. There is no attempt limit; cancel the
    calling task to give up.
    """
    sleeper: Sleeper | None = None
    try:
        while True:
            result = await probe()
            if isinstance(result, Connected):
                if sleeper is not None:
                    sleeper.stop()
                return result.handle, result.session

            if isinstance(result, TransportFailure):
                logger.debug("Server at %s not accepting yet: %s", result.endpoint, result.error)
            if sleeper is None:
                logger.info("Waiting for RPC server to start listening")
                sleeper = sleeper_factory()
            await sleeper.schedule(interval)
    except asyncio.CancelledError:
        if sleeper is not None:
            sleeper.stop()
        raise


__all__ = ["RETRY_INTERVAL_SECONDS", "Sleeper", "retry"]
