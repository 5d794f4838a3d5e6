"""Git branch and ref utilities.

Contains:
- get_branch: Get the current branch name
- is_detached: Check for a detached HEAD
- get_branch_timestamps: Get the committer date of each local branch
"""

from pathlib import Path
from typing import Optional

from annex2annex.git.runner import _run_git_command


def get_branch(repo_root: Path) -> Optional[str]:
    """Get the current branch name.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        The current branch name, or None if HEAD is detached.
    """
    branch = _run_git_command(["branch", "--show-current"], cwd=repo_root)
    return branch or None


def is_detached(repo_root: Path) -> bool:
    """Check whether HEAD is detached rather than on a named branch."""
    return get_branch(repo_root) is None


def get_branch_timestamps(repo_root: Path) -> dict[str, int]:
    """Get the committer timestamp of the tip of every local branch.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Mapping of short branch name to unix committer date.
    """
    output = _run_git_command(
        [
            "for-each-ref",
            "--format=%(refname:short) %(committerdate:unix)",
            "refs/heads/",
        ],
        cwd=repo_root,
    )
    timestamps = {}
    for line in output.split("\n"):
        if not line:
            continue
        name, _, stamp = line.rpartition(" ")
        # Branches without a commit date (e.g. pointing at a tag object)
        if not stamp.isdigit():
            continue
        timestamps[name] = int(stamp)
    return timestamps
