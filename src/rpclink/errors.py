"""Fatal error types and server error formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rpclink.ipc.contracts import ServerError


class FatalError(Exception):
    """Error that terminates the client operation with a user-facing message."""


class ServerNotRunningError(FatalError):
    """No server location is published at all."""

    def __init__(self) -> None:
        super().__init__("rpc server not running")


class ConnectionRaceError(FatalError):
    """A server location is published, but the single connection attempt failed."""

    def __init__(self) -> None:
        super().__init__("failed to establish connection even though server seems to be running")


class FinalizerError(FatalError):
    """Releasing the connection after forwarding failed."""


def format_error(error: ServerError) -> str:
    """Render a server error as ``"<message> (error kind: <kind>)"``."""
    return f"{error.message} (error kind: {error.kind.value})"


def describe_server_error(error: ServerError) -> str:
    return f"Server returned error: {format_error(error)}"


__all__ = [
    "ConnectionRaceError",
    "FatalError",
    "FinalizerError",
    "ServerNotRunningError",
    "describe_server_error",
    "format_error",
]
