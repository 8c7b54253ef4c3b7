"""Test helpers package."""

from tests.helpers.fakes import (
    SOCKET_ENDPOINT,
    FakeHandle,
    FakeTransport,
    RecordingSleeper,
    ScriptedSession,
    SequenceLocator,
    SleeperRecorder,
    probe_found_after,
)
from tests.helpers.runtime import remove_runtime_files, write_runtime_files
from tests.helpers.wait import wait_until

__all__ = [
    "SOCKET_ENDPOINT",
    "FakeHandle",
    "FakeTransport",
    "RecordingSleeper",
    "ScriptedSession",
    "SequenceLocator",
    "SleeperRecorder",
    "probe_found_after",
    "remove_runtime_files",
    "wait_until",
    "write_runtime_files",
]
