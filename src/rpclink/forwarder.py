"""Bidirectional relay between two sessions."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from rpclink.errors import FinalizerError
from rpclink.ipc.contracts import END_OF_STREAM, EndOfStream

if TYPE_CHECKING:
    from collections.abc import Callable

    from rpclink.ipc.contracts import Frame
    from rpclink.ipc.session import Session

logger = logging.getLogger(__name__)

# Failures that end one direction of the relay instead of the whole forward.
_TRANSPORT_ERRORS = (ConnectionError, OSError, asyncio.IncompleteReadError)


async def relay(source: Session, destination: Session, *, label: str = "relay") -> int:
    """Copy frames from *source* to *destination* until end-of-stream.

    The end-of-stream sentinel is written too, so the destination learns
    that the source closed. A transport failure on *source* counts as
    end-of-stream. Returns the number of messages relayed.
    """
    relayed = 0
    while True:
        frame: Frame
        try:
            frame = await source.read()
        except _TRANSPORT_ERRORS as exc:
            logger.warning("%s: read failed, treating as end of stream: %s", label, exc)
            frame = END_OF_STREAM

        try:
            await destination.write([frame])
        except _TRANSPORT_ERRORS as exc:
            logger.warning("%s: write failed, stopping this direction: %s", label, exc)
            return relayed

        if isinstance(frame, EndOfStream):
            logger.debug("%s: end of stream after %d messages", label, relayed)
            return relayed
        relayed += 1


async def forward(
    first: Session,
    second: Session,
    *,
    finalizer: Callable[[], None],
) -> None:
    """Relay messages both ways between *first* and *second*.

    Returns once both directions have seen end-of-stream. *finalizer* runs
    exactly once on every exit path, including cancellation and a failing
    relay; if it raises, ``FinalizerError`` is raised.
    """
    try:
        async with asyncio.TaskGroup() as group:
            group.create_task(relay(first, second, label="first->second"))
            group.create_task(relay(second, first, label="second->first"))
    except ExceptionGroup as group_error:
        if len(group_error.exceptions) == 1:
            raise group_error.exceptions[0] from None
        raise
    finally:
        try:
            finalizer()
        except Exception as exc:
            msg = f"failed to release connection: {exc}"
            raise FinalizerError(msg) from exc


__all__ = ["forward", "relay"]
