"""XDG-compliant path helpers for rpclink runtime and config files."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


def get_data_dir() -> Path:
    """Get the data directory for rpclink."""
    override = os.environ.get("RPCLINK_DATA_DIR")
    if override:
        return Path(override).resolve()
    return Path(user_data_dir("rpclink"))


def get_config_dir() -> Path:
    """Get the config directory for rpclink (config.toml)."""
    override = os.environ.get("RPCLINK_CONFIG_DIR")
    if override:
        return Path(override).resolve()
    return Path(user_config_dir("rpclink"))


def get_config_path() -> Path:
    """Get the path to the main config file."""
    return get_config_dir() / "config.toml"


def get_runtime_dir() -> Path:
    """Get the runtime directory where a running server advertises itself.

    Houses the endpoint descriptor, the lease file and the handshake token
    that clients read to discover and reach the server.
    """
    override = os.environ.get("RPCLINK_RUNTIME_DIR")
    if override:
        return Path(override).resolve()
    return get_data_dir() / "rpc"
