"""git-annex related exception classes.

Contains:
- AnnexError: Base exception for git-annex errors
- SpawnError: Raised when a --batch process cannot be started
- ProtocolError: Raised when a --batch process dies or replies badly
"""

from annex2annex.git.exceptions import GitError


class AnnexError(GitError):
    """Custom exception for git-annex errors."""

    pass


class SpawnError(AnnexError):
    """Raised when a git-annex --batch process cannot be started."""

    pass


class ProtocolError(AnnexError):
    """Raised when a git-annex --batch process closed its pipes or died."""

    pass
