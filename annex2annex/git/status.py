"""Git status utilities.

Contains:
- get_status: Get git status output in porcelain format
- is_clean: Check whether a work tree has no pending changes
"""

from pathlib import Path

from annex2annex.git.runner import _run_git_command


def get_status(repo_root: Path) -> str:
    """Get git status output in porcelain format.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The git status output, one line per changed or untracked path.
    """
    return _run_git_command(["status", "--porcelain=v1"], cwd=repo_root)


def is_clean(repo_root: Path) -> bool:
    """Check that the work tree has no staged, unstaged or untracked changes.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        True if `git status --porcelain` prints nothing.
    """
    return get_status(repo_root) == ""
