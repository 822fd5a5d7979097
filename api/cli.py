"""
Command-line entrypoints: run the API server, run smoke checks against it.
"""

from __future__ import annotations

import asyncio
import logging

import click
import uvicorn

from core.config import load_settings
from core.log import configure_logging
from smoke.checks import run_smoke_checks

LOGGER_NAMES = ("main", "core", "status", "smoke")


@click.group()
@click.option("--verbose", is_flag=True)
def cli(verbose: bool) -> None:
    configure_logging(load_settings().log_level)
    if verbose:
        for name in LOGGER_NAMES:
            logging.getLogger(name).setLevel(logging.DEBUG)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST).")
@click.option("--port", type=int, default=None, help="Bind port (defaults to PORT).")
@click.option("--reload", is_flag=True, help="Restart on code changes.")
def serve_command(host: str | None, port: int | None, reload: bool) -> None:
    settings = load_settings()
    uvicorn.run(
        "main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level,
    )


@cli.command("smoke")
@click.option("--host", default="localhost", show_default=True)
@click.option("--port", type=int, default=None, help="Port of the running instance (defaults to PORT).")
@click.pass_context
def smoke_command(ctx: click.Context, host: str, port: int | None) -> None:
    port = port or load_settings().port
    results = asyncio.run(run_smoke_checks(host=host, port=port))
    for result in results:
        if result.ok:
            click.echo(f"PASS {result.path}")
        else:
            click.echo(f"FAIL {result.path}: {result.error}")
    if not all(result.ok for result in results):
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
