"""rpclink: connect a process's stdio to a locally discovered RPC server."""

from rpclink.broker import (
    ConnectionAttemptResult,
    ConnectionBroker,
    Connected,
    NotYetAvailable,
    TransportFailure,
)
from rpclink.connect import connect, establish_connection
from rpclink.errors import (
    ConnectionRaceError,
    FatalError,
    FinalizerError,
    ServerNotRunningError,
    format_error,
)
from rpclink.forwarder import forward
from rpclink.retry import RETRY_INTERVAL_SECONDS, Sleeper, retry

__version__ = "0.1.0"

__all__ = [
    "RETRY_INTERVAL_SECONDS",
    "ConnectionAttemptResult",
    "ConnectionBroker",
    "ConnectionRaceError",
    "Connected",
    "FatalError",
    "FinalizerError",
    "NotYetAvailable",
    "ServerNotRunningError",
    "Sleeper",
    "TransportFailure",
    "connect",
    "establish_connection",
    "format_error",
    "forward",
    "retry",
]
