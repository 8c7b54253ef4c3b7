"""Logging setup for the rpclink command line.

Stdout carries the RPC stream, so diagnostics go to stderr only.
"""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_logging_initialized: bool = False


def setup_logging(level: str = "WARNING") -> None:
    """Attach a stderr handler to the ``rpclink`` logger.

    This is idempotent - calling it again only updates the level.
    """
    global _logging_initialized

    package_logger = logging.getLogger("rpclink")
    package_logger.setLevel(level)
    if _logging_initialized:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)

    _logging_initialized = True


__all__ = ["setup_logging"]
