"""CLI entry point for annex2annex.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from annex2annex.cli.main import main_command
from annex2annex.cli.migrate import migrate_command
from annex2annex.cli.reclaim import reclaim_command
from annex2annex.cli.review import review_command

# Main application
app = typer.Typer(
    name="annex2annex",
    help="annex2annex: migrate content between git-annex repositories",
    add_completion=False,
)

app.command("migrate")(migrate_command)
app.command("reclaim-migrated")(reclaim_command)
app.command("review-unused")(review_command)

app.callback()(main_command)


__all__ = [
    "app",
    "main_command",
    "migrate_command",
    "reclaim_command",
    "review_command",
]
