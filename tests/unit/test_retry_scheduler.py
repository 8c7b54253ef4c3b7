from __future__ import annotations

import asyncio

import pytest

from rpclink.broker import Connected, TransportFailure
from rpclink.retry import RETRY_INTERVAL_SECONDS, Sleeper, retry
from tests.helpers import (
    SOCKET_ENDPOINT,
    ScriptedSession,
    SleeperRecorder,
    probe_found_after,
    wait_until,
)

pytestmark = pytest.mark.unit


def _connected() -> Connected:
    return Connected(handle=object(), session=ScriptedSession())


def test_default_interval_is_200ms() -> None:
    assert RETRY_INTERVAL_SECONDS == 0.2


async def test_immediate_success_creates_no_sleeper() -> None:
    value = _connected()
    recorder = SleeperRecorder()

    result = await retry(probe_found_after(0, value), interval=0.001, sleeper_factory=recorder)

    assert result == (value.handle, value.session)
    assert recorder.created == []


@pytest.mark.parametrize("misses", [1, 2, 5])
async def test_retry_reuses_one_sleeper_and_stops_it_once(misses: int) -> None:
    value = _connected()
    recorder = SleeperRecorder()
    probe = probe_found_after(misses, value)

    result = await retry(probe, interval=0.001, sleeper_factory=recorder)

    assert result == (value.handle, value.session)
    assert len(probe.calls) == misses + 1
    assert len(recorder.created) == 1
    sleeper = recorder.created[0]
    assert sleeper.delays == [0.001] * misses
    assert sleeper.stop_calls == 1
    assert sleeper.stopped


async def test_retry_treats_transport_failures_as_retryable() -> None:
    value = _connected()
    results = [
        TransportFailure(endpoint=SOCKET_ENDPOINT, error=ConnectionRefusedError()),
        value,
    ]

    async def probe():
        return results.pop(0)

    recorder = SleeperRecorder()
    assert await retry(probe, interval=0.001, sleeper_factory=recorder) == (
        value.handle,
        value.session,
    )
    assert recorder.created[0].stop_calls == 1


async def test_cancelling_retry_stops_the_sleeper() -> None:
    recorder = SleeperRecorder()
    probe = probe_found_after(10_000, _connected())

    task = asyncio.create_task(retry(probe, interval=60.0, sleeper_factory=recorder))
    await wait_until(lambda: bool(recorder.created), description="sleeper creation")
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert recorder.created[0].stop_calls == 1


async def test_sleeper_rejects_overlapping_delays() -> None:
    sleeper = Sleeper()
    pending = sleeper.schedule(60.0)

    with pytest.raises(RuntimeError, match="pending"):
        sleeper.schedule(60.0)

    sleeper.stop()
    with pytest.raises(asyncio.CancelledError):
        await pending
    assert pending.cancelled()


async def test_stopped_sleeper_cannot_schedule() -> None:
    sleeper = Sleeper()
    sleeper.stop()
    sleeper.stop()

    with pytest.raises(RuntimeError, match="stopped"):
        sleeper.schedule(0.001)
