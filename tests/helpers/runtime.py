"""Helpers that lay out a server runtime directory the way a server would."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def write_runtime_files(
    runtime_dir: Path,
    *,
    owner_pid: int | None = None,
    transport: str = "socket",
    address: str = "/tmp/rpclink-test.sock",
    port: int | None = None,
    token: str | None = "lease-token",
) -> None:
    runtime_dir.mkdir(parents=True, exist_ok=True)
    endpoint_payload: dict[str, object] = {"transport": transport, "address": address}
    if port is not None:
        endpoint_payload["port"] = port
    (runtime_dir / "endpoint.json").write_text(json.dumps(endpoint_payload), encoding="utf-8")
    if token is not None:
        (runtime_dir / "token").write_text(token, encoding="utf-8")
    if owner_pid is not None:
        (runtime_dir / "server.lease.json").write_text(
            json.dumps({"version": 1, "owner_pid": owner_pid}),
            encoding="utf-8",
        )


def remove_runtime_files(runtime_dir: Path) -> None:
    for name in ("endpoint.json", "token", "server.lease.json"):
        (runtime_dir / name).unlink(missing_ok=True)
