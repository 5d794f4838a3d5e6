"""Shared utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import typer

from annex2annex import config
from annex2annex.annex import Store, find_store


def configure_logging(verbose: bool = False) -> None:
    """Set up logging for a CLI run.

    Args:
        verbose: Log at DEBUG level regardless of configuration.
    """
    level_name = "DEBUG" if verbose else config.get_log_level()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def open_store(path: Optional[Path] = None) -> Store:
    """Get the repository containing path (default: the current directory).

    Exits with status 1 if path is not inside a git repository.
    """
    store = find_store(path or Path.cwd())
    if store is None:
        typer.echo(f"Error: {path or Path.cwd()} is not inside a git repository.", err=True)
        raise typer.Exit(1)
    return store
