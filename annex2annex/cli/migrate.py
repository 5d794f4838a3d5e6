"""CLI command for migrating content into another repository."""

from pathlib import Path

import typer

from annex2annex.config import ConfigError
from annex2annex.git import GitError
from annex2annex.migrate import MigrationError, migrate


def migrate_command(
    paths: list[Path] = typer.Argument(
        ...,
        help="Source files or directories, followed by the destination directory",
    ),
    commit: bool = typer.Option(
        False,
        "--commit",
        help="Commit the removals in each source and the additions in the destination",
    ),
) -> None:
    """Move files and directories from git-annex repositories into DEST.

    Annexed content is hardlinked when source and destination share a
    filesystem, and copied and verified otherwise.
    """
    if len(paths) < 2:
        typer.echo("Error: need at least one source and a destination.", err=True)
        raise typer.Exit(2)
    *sources, dest = paths

    try:
        result = migrate(sources, dest, commit=commit)
    except (MigrationError, GitError, ConfigError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Migrated {result.annexed} annexed file(s) "
        f"({result.hardlinked} hardlinked, {result.copied} copied), "
        f"{result.plain_files} plain file(s), {result.directories} new director(ies)."
    )
