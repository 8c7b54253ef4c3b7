"""Configuration loader for rpclink."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, Field, field_validator

from rpclink.ipc.constants import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
)
from rpclink.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path

type LogLevelLiteral = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

LOG_LEVEL_VALUES = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})
TRANSPORT_PREFERENCE_VALUES = frozenset({"auto", "socket", "tcp"})

RETRY_INTERVAL_SECONDS = 0.2


class ConnectionConfig(BaseModel):
    """Settings for reaching the RPC server."""

    retry_interval_seconds: float = Field(
        default=RETRY_INTERVAL_SECONDS,
        gt=0,
        description="Delay between connection attempts when waiting for the server",
    )
    connect_timeout_seconds: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for opening the transport connection",
    )
    handshake_timeout_seconds: float = Field(
        default=DEFAULT_HANDSHAKE_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for the TCP token handshake",
    )
    transport_preference: str = Field(
        default="auto",
        description="Transport to accept from the advertised endpoint: auto|socket|tcp",
    )

    @field_validator("transport_preference", mode="before")
    @classmethod
    def validate_transport_preference(cls, value: object) -> str:
        """Coerce invalid transport values to 'auto'."""
        match value:
            case str() as transport if transport in TRANSPORT_PREFERENCE_VALUES:
                return transport
            case _:
                pass
        return "auto"


class LoggingConfig(BaseModel):
    """Diagnostic logging settings. Logs always go to stderr."""

    level: LogLevelLiteral = Field(default="WARNING")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> str:
        """Upper-case known level names and coerce anything else to WARNING."""
        match value:
            case str() as level if level.upper() in LOG_LEVEL_VALUES:
                return level.upper()
            case _:
                pass
        return "WARNING"


class RpcLinkConfig(BaseModel):
    """Root configuration model."""

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> RpcLinkConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()


__all__ = [
    "RETRY_INTERVAL_SECONDS",
    "TRANSPORT_PREFERENCE_VALUES",
    "ConnectionConfig",
    "LoggingConfig",
    "RpcLinkConfig",
]
