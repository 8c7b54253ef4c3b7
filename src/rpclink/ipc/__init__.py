"""Endpoint discovery, transports and sessions for reaching an RPC server."""

from __future__ import annotations

from rpclink.ipc.client import ConnectHandle, Locator, StreamTransport, Transport
from rpclink.ipc.contracts import (
    END_OF_STREAM,
    EndOfStream,
    Frame,
    MessageUnit,
    ServerError,
    ServerErrorKind,
)
from rpclink.ipc.discovery import EndpointLocator, ServerEndpoint, discover_server_endpoint
from rpclink.ipc.session import FramingError, Session, StreamSession, open_stdio_session

__all__ = [
    "END_OF_STREAM",
    "ConnectHandle",
    "EndOfStream",
    "EndpointLocator",
    "Frame",
    "FramingError",
    "Locator",
    "MessageUnit",
    "ServerEndpoint",
    "ServerError",
    "ServerErrorKind",
    "Session",
    "StreamSession",
    "StreamTransport",
    "Transport",
    "discover_server_endpoint",
    "open_stdio_session",
]
