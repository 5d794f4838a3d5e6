"""CLI command for dropping content left behind by migrations."""

from pathlib import Path
from typing import Optional

import typer

from annex2annex.cli.utils import open_store
from annex2annex.config import ConfigError
from annex2annex.git import GitError
from annex2annex.reclaim import reclaim_migrated


def reclaim_command(
    path: Optional[Path] = typer.Argument(
        None,
        help="A path inside the repository (default: current directory)",
    ),
) -> None:
    """Drop unused content that was migrated and is still hardlinked elsewhere.

    Run this in a repository content was migrated out of. Content without
    another hardlink is left alone.
    """
    store = open_store(path)
    try:
        dropped = reclaim_migrated(store)
    except (GitError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Dropped {dropped} unused file(s).")
