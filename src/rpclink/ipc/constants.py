"""Shared IPC framing constants."""

from __future__ import annotations

MAX_LINE_BYTES = 4 * 1024 * 1024  # 4 MiB per JSON line (without framing overhead)
STREAM_LIMIT_BYTES = MAX_LINE_BYTES + 1  # Include trailing newline separator.

HANDSHAKE_ACK = "OK"

DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0
DEFAULT_HANDSHAKE_TIMEOUT_SECONDS = 5.0

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_HANDSHAKE_TIMEOUT_SECONDS",
    "HANDSHAKE_ACK",
    "MAX_LINE_BYTES",
    "STREAM_LIMIT_BYTES",
]
