"""Git history utilities.

Contains:
- LogCommit: One commit returned by a history search
- search_history: Find commits whose diff adds or removes a string
- get_log_lines: Raw `git log --stat -S` output for display
- commit: Record a commit in a repository
"""

from dataclasses import dataclass, field
from pathlib import Path

from annex2annex.git.runner import _run_git_command

# Separators unlikely to appear in commit messages
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"

DEFAULT_RENAME_LIMIT = 3000


@dataclass
class LogCommit:
    """A commit found by a pickaxe search, newest first."""

    sha: str
    message: str
    stat_lines: list[str] = field(default_factory=list)


def search_history(repo_root: Path, needle: str) -> list[LogCommit]:
    """Find commits that add or remove needle, newest first.

    Args:
        repo_root: The root directory of the git repository.
        needle: The string to search for, usually a git-annex key.

    Returns:
        List of LogCommit objects.
    """
    output = _run_git_command(
        [
            "log",
            "--no-textconv",
            "--stat",
            f"--format={_RECORD_SEP}%H{_FIELD_SEP}%B{_FIELD_SEP}",
            "-S",
            needle,
        ],
        cwd=repo_root,
    )
    commits = []
    for record in output.split(_RECORD_SEP):
        if not record.strip():
            continue
        sha, message, rest = (record.split(_FIELD_SEP, 2) + ["", ""])[:3]
        commits.append(
            LogCommit(
                sha=sha.strip(),
                message=message.strip(),
                stat_lines=[line for line in rest.split("\n") if line.strip()],
            )
        )
    return commits


def get_log_lines(
    repo_root: Path,
    needle: str,
    rename_limit: int = DEFAULT_RENAME_LIMIT,
) -> list[str]:
    """Get colourised `git log --stat -S` output for needle, line by line.

    The rename limit is raised so that --stat can follow renames in large
    histories.

    Args:
        repo_root: The root directory of the git repository.
        needle: The string to search for.
        rename_limit: Value for diff.renameLimit.

    Returns:
        Output lines, verbatim.
    """
    output = _run_git_command(
        [
            "-c",
            f"diff.renameLimit={rename_limit}",
            "log",
            "--stat",
            "--no-textconv",
            "--color=always",
            "-S",
            needle,
        ],
        cwd=repo_root,
        strip=False,
    )
    if not output:
        return []
    return output.split("\n")


def commit(repo_root: Path, message: str, all_tracked: bool = False) -> None:
    """Create a commit.

    Args:
        repo_root: The root directory of the git repository.
        message: The commit message.
        all_tracked: Stage modifications and deletions of tracked files
            first (`git commit -a`).
    """
    args = ["commit", "--quiet", "-m", message]
    if all_tracked:
        args.insert(1, "-a")
    _run_git_command(args, cwd=repo_root)
