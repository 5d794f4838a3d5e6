"""Git plumbing for annex2annex.

This package provides:
- exceptions: GitError
- runner: _run_git_command, _probe_git_command, get_toplevel
- status: get_status, is_clean
- branch: get_branch, is_detached, get_branch_timestamps
- log: LogCommit, search_history, get_log_lines, commit
"""

# Exceptions
from annex2annex.git.exceptions import GitError

# Runner utilities
from annex2annex.git.runner import (
    _probe_git_command,
    _run_git_command,
    get_toplevel,
)

# Status utilities
from annex2annex.git.status import (
    get_status,
    is_clean,
)

# Branch utilities
from annex2annex.git.branch import (
    get_branch,
    get_branch_timestamps,
    is_detached,
)

# History utilities
from annex2annex.git.log import (
    DEFAULT_RENAME_LIMIT,
    LogCommit,
    commit,
    get_log_lines,
    search_history,
)


__all__ = [
    # Exceptions
    "GitError",
    # Runner
    "_run_git_command",
    "_probe_git_command",
    "get_toplevel",
    # Status
    "get_status",
    "is_clean",
    # Branch
    "get_branch",
    "is_detached",
    "get_branch_timestamps",
    # Log
    "DEFAULT_RENAME_LIMIT",
    "LogCommit",
    "search_history",
    "get_log_lines",
    "commit",
]
