"""Handle on a git-annex repository.

Contains:
- Store: A git-annex repository and the operations annex2annex needs on it
- find_store: Get the Store containing a path, if any
- key_digest: Extract the checksum from a checksum-backend key
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

from annex2annex.annex.batch import BatchCommand
from annex2annex.annex.commands import AnnexCommand, run_annex
from annex2annex.annex.exceptions import AnnexError
from annex2annex.git import (
    LogCommit,
    _probe_git_command,
    _run_git_command,
    commit,
    get_branch_timestamps,
    get_log_lines,
    get_toplevel,
    is_clean,
    is_detached,
    search_history,
)

logger = logging.getLogger(__name__)

# Backends whose keys end in a digest of the content, e.g.
# SHA256E-s1048576--8f0e...b3.tar.gz
_CHECKSUM_BACKENDS = re.compile(r"^(?:SHA|SKEIN|BLAKE2|MD5)")
_KEY_RE = re.compile(r"^(?P<backend>[A-Z0-9]+)(?:-[a-zA-Z][0-9:]+)*--(?P<name>.+)$")


def key_digest(key: str) -> Optional[str]:
    """Extract the content digest from a git-annex key.

    Args:
        key: A git-annex key.

    Returns:
        The hex digest, or None if the key's backend is not checksum based.
    """
    match = _KEY_RE.match(key)
    if not match or not _CHECKSUM_BACKENDS.match(match.group("backend")):
        return None
    # E backends append the file extension after the digest
    digest = re.match(r"[0-9a-fA-F]+", match.group("name"))
    return digest.group(0).lower() if digest else None


def find_store(path: Union[str, Path]) -> Optional["Store"]:
    """Get the Store whose work tree contains path.

    Args:
        path: A file or directory.

    Returns:
        The containing Store, or None if path is not inside a git work tree.
    """
    path = Path(path).absolute()
    directory = path if path.is_dir() else path.parent
    root = get_toplevel(directory)
    if root is None:
        return None
    return Store(root)


class Store:
    """A git repository in which `git annex init` has been run.

    The root is resolved once, when the Store is constructed. Several Store
    objects may refer to the same repository. A Store is not safe to share
    between threads.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        path = Path(path).absolute() if path else Path.cwd()
        # Rise to the root of the work tree, but do not insist on one:
        # a bare repository is used as-is.
        self.root = get_toplevel(path) or path

    def __repr__(self) -> str:
        return f"Store({str(self.root)!r})"

    # ------------------------------------------------------------------
    # git side

    def git(self, args: list[str], strip: bool = True) -> str:
        """Run a git command in the repository and return its output."""
        return _run_git_command(args, cwd=self.root, strip=strip)

    def git_path(self, *parts: str) -> Path:
        """Resolve a path inside the git directory (`git rev-parse --git-path`)."""
        path = self.git(["rev-parse", "--git-path", "/".join(parts)])
        return (self.root / path).absolute()

    def config_get(self, key: str) -> Optional[str]:
        """Get a git config value, or None if it is unset."""
        return _probe_git_command(["config", "--get", key], cwd=self.root)

    def status_is_clean(self) -> bool:
        return is_clean(self.root)

    def is_detached(self) -> bool:
        return is_detached(self.root)

    def branch_timestamps(self) -> dict[str, int]:
        return get_branch_timestamps(self.root)

    def history_search(self, key: str) -> list[LogCommit]:
        """Commits which added or removed key, newest first."""
        return search_history(self.root, key)

    def log_lines(self, key: str, rename_limit: int) -> list[str]:
        return get_log_lines(self.root, key, rename_limit=rename_limit)

    def commit(self, message: str, all_tracked: bool = False) -> None:
        logger.info("committing in %s: %s", self.root, message)
        commit(self.root, message, all_tracked=all_tracked)

    def add_plain(self, path: Union[str, Path]) -> None:
        """Stage path as an ordinary git file, never as an annexed object."""
        self.git(["-c", "annex.largefiles=nothing", "add", "--", str(path)])

    # ------------------------------------------------------------------
    # git-annex side

    def annex(self, command: AnnexCommand, *args: str, strip: bool = True) -> str:
        """Run a git-annex subcommand in the repository."""
        return run_annex(self.root, command, list(args), strip=strip)

    def batch(self, command: AnnexCommand, *args: str) -> BatchCommand:
        """Start a --batch process for command in this repository."""
        return BatchCommand(self.root, command, *args)

    def annex_version(self) -> Optional[int]:
        """The repository's git-annex version, or None if not an annex."""
        value = self.config_get("annex.version")
        if value is None or not value.isdigit():
            return None
        return int(value)

    def lookup_key(self, path: Union[str, Path]) -> Optional[str]:
        """The key of an annexed file, or None for a file git-annex does not manage."""
        key = _probe_git_command(
            ["annex", AnnexCommand.LOOKUPKEY.value, "--", str(path)], cwd=self.root
        )
        return key or None

    def content_location(self, key: str) -> Optional[Path]:
        """Absolute path to the content of key, or None if not present."""
        location = _probe_git_command(
            ["annex", AnnexCommand.CONTENTLOCATION.value, key], cwd=self.root
        )
        if not location:
            return None
        return Path(os.path.normpath(self.root / location))

    def add_annexed(self, path: Union[str, Path]) -> str:
        """Add path to the annex and return its new key."""
        self.annex(AnnexCommand.ADD, "--force-large", "--quiet", "--", str(path))
        key = self.lookup_key(path)
        if key is None:
            raise AnnexError(f"git annex add did not annex {path}")
        return key

    def unlock(self, path: Union[str, Path]) -> None:
        self.annex(AnnexCommand.UNLOCK, "--quiet", "--", str(path))

    def missing_objects(self, paths: list[Union[str, Path]]) -> list[str]:
        """Annexed files under paths whose content is not present here."""
        output = self.annex(
            AnnexCommand.FIND, "--not", "--in=here", "--", *[str(p) for p in paths]
        )
        return [line for line in output.split("\n") if line]

    def scan_unused(self, from_remote: Optional[str], used_refspec: Optional[str]) -> str:
        """Run `git annex unused` and return its report."""
        args = []
        if from_remote:
            args.append(f"--from={from_remote}")
        if used_refspec:
            args.append(f"--used-refspec={used_refspec}")
        return self.annex(AnnexCommand.UNUSED, *args, strip=False)

    def drop_unused(
        self,
        numbers: list[int],
        force: bool = False,
        from_remote: Optional[str] = None,
    ) -> None:
        """Drop unused content by its `git annex unused` number."""
        if not numbers:
            return
        args = []
        if force:
            args.append("--force")
        if from_remote:
            args.append(f"--from={from_remote}")
        self.annex(AnnexCommand.DROPUNUSED, *args, *[str(n) for n in numbers])
