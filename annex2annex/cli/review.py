"""CLI command for reviewing unused content interactively."""

from pathlib import Path
from typing import Optional

import typer

from annex2annex.cli.utils import open_store
from annex2annex.config import ConfigError
from annex2annex.git import GitError
from annex2annex.unused import get_unused, render_unused_entry


def review_command(
    path: Optional[Path] = typer.Argument(
        None,
        help="A path inside the repository (default: current directory)",
    ),
    just_print: bool = typer.Option(
        False,
        "--just-print",
        help="Print the unused files and their history without asking to drop them",
    ),
    from_remote: Optional[str] = typer.Option(
        None,
        "--from",
        help="Review unused content in this remote",
    ),
    used_refspec: Optional[str] = typer.Option(
        None,
        "--used-refspec",
        help="Refs to consider used (default: annex.used-refspec)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Drop without checking numcopies",
    ),
) -> None:
    """Show each unused file with its history and offer to drop it.

    Exits with status 1 if unused files remain afterwards.
    """
    store = open_store(path)
    try:
        entries = get_unused(store, from_remote=from_remote, used_refspec=used_refspec, log=True)
    except (GitError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not entries:
        typer.echo("No unused files.")
        return

    to_drop = []
    for entry in entries:
        for line in render_unused_entry(entry):
            typer.echo(line)
        if just_print:
            continue
        answer = typer.prompt("Drop this file? [y/n/q]", default="n", show_default=False)
        answer = answer.strip().lower()
        if answer in ("q", "quit"):
            break
        if answer in ("y", "yes"):
            to_drop.append(entry.number)

    if to_drop:
        try:
            store.drop_unused(to_drop, force=force, from_remote=from_remote)
        except GitError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"Dropped {len(to_drop)} unused file(s).")

    if len(to_drop) < len(entries):
        raise typer.Exit(1)
