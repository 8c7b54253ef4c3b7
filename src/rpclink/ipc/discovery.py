"""Endpoint discovery for a running RPC server."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rpclink.paths import get_runtime_dir
from rpclink.process_liveness import pid_exists

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_TRANSPORTS = frozenset({"socket", "tcp"})


@dataclass(frozen=True)
class ServerEndpoint:
    """Describes where a running server can be reached.

    Attributes:
        transport: The transport type (``socket`` or ``tcp``).
        address: The connection address (file path for socket, host for tcp).
        port: TCP port when *transport* is ``tcp``; ``None`` for socket transport.
        pid: OS process ID of the server, when a lease file names one.
        token: Handshake token for the TCP transport.
    """

    transport: str
    address: str
    port: int | None = None
    pid: int | None = None
    token: str | None = None

    def __str__(self) -> str:
        if self.transport == "tcp":
            return f"tcp://{self.address}:{self.port}"
        return f"unix://{self.address}"


def _read_json(path: Path) -> dict[str, Any] | None:
    """Read and parse a JSON file, returning *None* on any failure."""
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        if isinstance(data, dict):
            return data
        return None
    except (OSError, json.JSONDecodeError, ValueError):
        return None


def _read_text(path: Path) -> str | None:
    """Read a text file and return its stripped contents, or *None*."""
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


def _read_pid_from_lease(runtime_dir: Path) -> int | None:
    """Read owner PID from the server lease file, when available."""
    lease = _read_json(runtime_dir / "server.lease.json")
    if lease is None:
        return None
    raw_owner_pid = lease.get("owner_pid")
    if isinstance(raw_owner_pid, int):
        owner_pid = raw_owner_pid
    elif isinstance(raw_owner_pid, str):
        try:
            owner_pid = int(raw_owner_pid)
        except ValueError:
            return None
    else:
        return None
    return owner_pid if owner_pid > 0 else None


def _is_process_alive(pid: int) -> bool:
    return pid_exists(pid)


def discover_server_endpoint(*, runtime_dir: Path | None = None) -> ServerEndpoint | None:
    """Discover a running server by reading its runtime files.

    Returns a ``ServerEndpoint`` when the runtime directory advertises a
    server, or ``None`` if no endpoint file exists, the file is invalid, or
    the process named by the lease is no longer running. Reachability is not
    checked here: the endpoint may still refuse connections.
    """
    resolved_runtime_dir = (
        runtime_dir.expanduser().resolve(strict=False)
        if runtime_dir is not None
        else get_runtime_dir()
    )
    endpoint_path = resolved_runtime_dir / "endpoint.json"
    data = _read_json(endpoint_path)
    if data is None:
        logger.debug("No endpoint file at %s", endpoint_path)
        return None

    transport = data.get("transport")
    address = data.get("address")
    if not transport or not address:
        logger.warning("Malformed endpoint file at %s", endpoint_path)
        return None
    normalized_transport = str(transport)
    if normalized_transport not in SUPPORTED_TRANSPORTS:
        logger.warning(
            "Unsupported transport '%s' in endpoint file at %s",
            transport,
            endpoint_path,
        )
        return None

    port: int | None = None
    if normalized_transport == "tcp":
        raw_port = data.get("port")
        if not isinstance(raw_port, int) or raw_port <= 0:
            logger.warning("Malformed TCP endpoint file at %s", endpoint_path)
            return None
        port = raw_port

    pid = _read_pid_from_lease(resolved_runtime_dir)
    if pid is not None and not _is_process_alive(pid):
        logger.info("Server process (PID %d) is no longer running; stale endpoint", pid)
        return None

    return ServerEndpoint(
        transport=normalized_transport,
        address=str(address),
        port=port,
        pid=pid,
        token=_read_text(resolved_runtime_dir / "token"),
    )


class EndpointLocator:
    """Locator that re-reads the runtime directory on every ``get()``."""

    def __init__(self, runtime_dir: Path | None = None) -> None:
        self._runtime_dir = runtime_dir

    def get(self) -> ServerEndpoint | None:
        return discover_server_endpoint(runtime_dir=self._runtime_dir)


__all__ = [
    "EndpointLocator",
    "ServerEndpoint",
    "discover_server_endpoint",
]
