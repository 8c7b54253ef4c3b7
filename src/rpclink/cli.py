"""Command line entry point for rpclink."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click

from rpclink.config import LOG_LEVEL_VALUES, RpcLinkConfig
from rpclink.errors import FatalError
from rpclink.log import setup_logging
from rpclink.version import get_rpclink_version

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (defaults to the user config directory).",
)
@click.option(
    "--log-level",
    type=click.Choice(sorted(LOG_LEVEL_VALUES), case_sensitive=False),
    default=None,
    help="Override the configured log level. Logs go to stderr.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    config_path: Path | None,
    log_level: str | None,
) -> None:
    """Local RPC client for a running server."""
    if version:
        click.echo(f"rpclink {get_rpclink_version()}")
        ctx.exit(0)

    config = RpcLinkConfig.load(config_path)
    setup_logging((log_level or config.logging.level).upper())
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option(
    "--wait",
    is_flag=True,
    help="Poll until server starts listening and then establish connection.",
)
@click.pass_obj
def init(config: RpcLinkConfig, wait: bool) -> None:
    """Establish a new rpc connection and relay it over stdin/stdout."""
    from rpclink.bridge import bridge_stdio

    try:
        asyncio.run(bridge_stdio(wait=wait, config=config))
    except FatalError as exc:
        raise click.ClickException(str(exc)) from exc
    except KeyboardInterrupt:
        logger.info("Interrupted")
        raise SystemExit(130) from None


__all__ = ["cli"]
