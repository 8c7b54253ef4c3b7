"""Allow ``python -m rpclink``."""

from __future__ import annotations

from rpclink.cli import cli

if __name__ == "__main__":
    cli()
