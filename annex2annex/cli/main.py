"""Main CLI callback: global options."""

from typing import Optional

import typer

from annex2annex import __version__
from annex2annex.cli.utils import configure_logging
from annex2annex.config import ConfigError


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"annex2annex {__version__}")
        raise typer.Exit()


def main_command(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log what is being done at debug level",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Migrate content between git-annex repositories and reclaim the space."""
    try:
        configure_logging(verbose)
    except ConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
