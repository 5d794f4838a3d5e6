"""Move directory trees from one git-annex repository to another.

Annexed content is hardlinked into the destination when it lives on the same
filesystem, so that migration costs no extra space, and is copied and
verified by digest otherwise. Plain git files are copied and verified the
same way. Each migrated source file is removed from its repository.

The engine fails fast: preconditions are checked before anything changes,
and any later error aborts the whole run, leaving entries migrated so far
where they are.

Contains:
- MIGRATION_MESSAGE: Commit message recording a migration
- SourceRoot, MigrationResult: Data models
- check_store: Preconditions for a repository taking part in a migration
- prepare_sources / check_collisions: Preflight checks
- migrate_root: Migrate one source path
- migrate: Migrate several source paths into a destination
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from annex2annex import config
from annex2annex.annex import AnnexCommand, BatchCommand, Store, find_store
from annex2annex.migrate.checksum import keys_disagree, verified_copy
from annex2annex.migrate.exceptions import (
    ChecksumError,
    CollisionError,
    MigrationError,
    MissingObjectError,
    PreconditionError,
)

logger = logging.getLogger(__name__)

# Also how reclaim_migrated recognises content left behind by a migration
MIGRATION_MESSAGE = "migrated by annex-to-annex"

# Repository versions before 7 had direct mode, where there are no hardlinks
# to make.
MIN_ANNEX_VERSION = 7


@dataclass
class SourceRoot:
    """A path to migrate and the repository containing it."""

    path: Path
    store: Store

    @property
    def base(self) -> Path:
        """Directory that destination paths are computed relative to."""
        return self.path.parent


@dataclass
class MigrationResult:
    """Counts of what a migration did."""

    hardlinked: int = 0
    copied: int = 0
    plain_files: int = 0
    directories: int = 0

    @property
    def annexed(self) -> int:
        return self.hardlinked + self.copied

    @property
    def files(self) -> int:
        return self.annexed + self.plain_files


def _canonical(path: Union[str, Path]) -> Path:
    """Absolute path with symlinks resolved in every component but the last.

    The last component is kept because a locked annexed file is itself a
    symlink into the object store.
    """
    path = Path(os.path.abspath(path))
    return Path(os.path.realpath(path.parent)) / path.name


def _device_id(path: Union[str, Path]) -> int:
    return os.stat(path).st_dev


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _collides(entry: Path, target: Path) -> bool:
    """Whether target is taken by something entry cannot be migrated onto.

    Only a directory may already exist, and only where entry is a directory.
    """
    if not os.path.lexists(target):
        return False
    return not (_is_real_dir(entry) and _is_real_dir(target))


def _walk(root: Path) -> Iterator[Path]:
    """Yield root and everything below it, each directory before its contents."""
    if not root.is_dir() or root.is_symlink():
        yield root
        return
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        yield current
        if ".git" in dirnames:
            dirnames.remove(".git")
        dirnames.sort()
        # os.walk does not descend into symlinks to directories; they are
        # migrated as symlinks.
        for name in list(dirnames):
            if (current / name).is_symlink():
                dirnames.remove(name)
                filenames.append(name)
        for name in sorted(filenames):
            yield current / name


def check_store(store: Store, role: str, require_clean: bool = True) -> None:
    """Check that a repository can take part in a migration.

    Args:
        store: The repository.
        role: "source" or "destination", for error messages.
        require_clean: Also require a clean work tree on a named branch.

    Raises:
        PreconditionError: If a check fails.
    """
    version = store.annex_version()
    if version is None:
        raise PreconditionError(f"{role} {store.root} is not a git-annex repository")
    if version < MIN_ANNEX_VERSION:
        raise PreconditionError(
            f"{role} {store.root} is a v{version} repository; "
            f"v{MIN_ANNEX_VERSION} or later is required"
        )
    if not require_clean:
        return
    if not store.status_is_clean():
        raise PreconditionError(f"{role} {store.root} has uncommitted changes")
    if store.is_detached():
        raise PreconditionError(f"{role} {store.root} is not on a branch (detached HEAD)")


def prepare_sources(paths: Sequence[Union[str, Path]], commit: bool) -> list[SourceRoot]:
    """Resolve and check the source paths of a migration.

    Args:
        paths: Files or directories to migrate.
        commit: Whether the source repositories will be committed to.

    Returns:
        One SourceRoot per path, in order.

    Raises:
        PreconditionError: If a path is missing or outside a repository.
        MissingObjectError: If any annexed content is absent, listing all of it.
    """
    roots = []
    missing = []
    for raw in paths:
        path = _canonical(raw)
        if not os.path.lexists(path):
            raise PreconditionError(f"{raw} does not exist")
        store = find_store(path)
        if store is None:
            raise PreconditionError(f"{raw} is not inside a git-annex repository")
        check_store(store, "source", require_clean=commit)
        missing.extend(store.missing_objects([path.relative_to(store.root)]))
        roots.append(SourceRoot(path=path, store=store))
    if missing:
        raise MissingObjectError(missing)
    return roots


def check_collisions(roots: Sequence[SourceRoot], dest_dir: Path) -> None:
    """Check that no destination path is already taken.

    Raises:
        CollisionError: For the first destination path that is taken.
    """
    for root in roots:
        for entry in _walk(root.path):
            target = dest_dir / entry.relative_to(root.base)
            if _collides(entry, target):
                raise CollisionError(target)


def _migrate_annexed(
    entry: Path,
    key: str,
    target: Path,
    root: SourceRoot,
    dest: Store,
    dest_device: int,
    content_location: BatchCommand,
    find_unlocked: BatchCommand,
    algorithm: str,
    result: MigrationResult,
) -> None:
    location = content_location.ask(key)
    if not location:
        raise MissingObjectError([str(entry.relative_to(root.store.root))])
    content = Path(os.path.normpath(root.store.root / location))

    if _device_id(content) == dest_device:
        logger.info("hardlinking %s -> %s", content, target)
        try:
            os.link(content, target)
        except OSError as e:
            raise MigrationError(f"could not hardlink {content} to {target}: {e}") from e
        result.hardlinked += 1
    else:
        logger.info("copying %s -> %s", content, target)
        verified_copy(content, target, algorithm)
        result.copied += 1

    dest_rel = target.relative_to(dest.root)
    dest_key = dest.add_annexed(dest_rel)
    if find_unlocked.ask(str(entry.relative_to(root.store.root))):
        dest.unlock(dest_rel)

    if keys_disagree(key, dest_key):
        raise ChecksumError(target, f"key {dest_key} != {key}")


def _migrate_plain(entry: Path, target: Path, dest: Store, algorithm: str) -> None:
    if entry.is_symlink():
        os.symlink(os.readlink(entry), target)
        if os.readlink(target) != os.readlink(entry):
            raise ChecksumError(target, "symlink target differs")
    else:
        logger.info("copying %s -> %s", entry, target)
        verified_copy(entry, target, algorithm)
    dest.add_plain(target.relative_to(dest.root))


def migrate_root(
    root: SourceRoot,
    dest_dir: Path,
    dest: Store,
    algorithm: Optional[str] = None,
    result: Optional[MigrationResult] = None,
) -> MigrationResult:
    """Migrate one source path into dest_dir.

    Every file under the root lives in the same repository, so one set of
    batch processes serves the whole walk.

    Args:
        root: The source path and its repository.
        dest_dir: Directory in the destination repository.
        dest: The destination repository.
        algorithm: hashlib algorithm for copy verification.
        result: Counters to update; a new one is created if omitted.

    Returns:
        The updated counters.
    """
    if algorithm is None:
        algorithm = config.get_digest_algorithm()
    if result is None:
        result = MigrationResult()
    # git annex add moves the content into the object store under the root
    dest_device = _device_id(dest.root)
    source = root.store

    with source.batch(AnnexCommand.LOOKUPKEY) as lookup_key, \
            source.batch(AnnexCommand.CONTENTLOCATION) as content_location, \
            source.batch(AnnexCommand.FIND, "--unlocked") as find_unlocked:
        for entry in _walk(root.path):
            target = dest_dir / entry.relative_to(root.base)
            if _collides(entry, target):
                raise CollisionError(target)

            if _is_real_dir(entry):
                if not target.is_dir():
                    target.mkdir(parents=True)
                    result.directories += 1
                continue

            key = lookup_key.ask(str(entry.relative_to(source.root)))
            if key:
                _migrate_annexed(
                    entry, key, target, root, dest, dest_device,
                    content_location, find_unlocked, algorithm, result,
                )
            else:
                _migrate_plain(entry, target, dest, algorithm)
                result.plain_files += 1

            entry.unlink()

    return result


def migrate(
    sources: Sequence[Union[str, Path]],
    dest_dir: Union[str, Path],
    commit: bool = False,
) -> MigrationResult:
    """Migrate files and directories from their repositories into dest_dir.

    Each source path ends up at dest_dir/<basename>. Source repositories
    are committed to after each path, the destination once at the end,
    if commit is set.

    Args:
        sources: Files or directories, each inside a git-annex repository.
        dest_dir: Existing directory inside the destination repository.
        commit: Commit the removals and the additions.

    Returns:
        Counts of what was migrated.

    Raises:
        PreconditionError, MissingObjectError, CollisionError, ChecksumError
    """
    dest_path = Path(os.path.realpath(dest_dir))
    if not dest_path.is_dir():
        raise PreconditionError(f"{dest_dir} is not a directory")
    dest = find_store(dest_path)
    if dest is None:
        raise PreconditionError(f"{dest_dir} is not inside a git-annex repository")
    check_store(dest, "destination")

    roots = prepare_sources(sources, commit)
    check_collisions(roots, dest_path)

    algorithm = config.get_digest_algorithm()
    result = MigrationResult()
    for root in roots:
        logger.info("migrating %s to %s", root.path, dest_path)
        files_before = result.files
        migrate_root(root, dest_path, dest, algorithm, result)
        if commit and result.files > files_before:
            root.store.commit(MIGRATION_MESSAGE, all_tracked=True)

    if commit and result.files:
        dest.commit(MIGRATION_MESSAGE)
    return result
