"""The git-annex subcommands annex2annex knows how to run.

Contains:
- AnnexCommand: Enumeration of supported git-annex subcommands
- run_annex: Run a git-annex subcommand in a repository
"""

from enum import Enum
from pathlib import Path

from annex2annex.git.runner import _run_git_command


class AnnexCommand(Enum):
    """git-annex subcommands used by annex2annex."""

    ADD = "add"
    CONTENTLOCATION = "contentlocation"
    DROPUNUSED = "dropunused"
    FIND = "find"
    LOOKUPKEY = "lookupkey"
    UNLOCK = "unlock"
    UNUSED = "unused"


def run_annex(
    repo_root: Path,
    command: AnnexCommand,
    args: list[str],
    strip: bool = True,
) -> str:
    """Run `git annex <command> <args>` in repo_root.

    Args:
        repo_root: The root directory of the repository.
        command: The subcommand to run.
        args: Further arguments for the subcommand.
        strip: Strip surrounding whitespace from the output.

    Returns:
        The stdout of the command.

    Raises:
        GitError: If the command fails.
    """
    return _run_git_command(["annex", command.value] + list(args), cwd=repo_root, strip=strip)
