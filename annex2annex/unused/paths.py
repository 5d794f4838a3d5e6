"""Unused cache file path utilities.

Contains:
- get_unused_cache_file: Path to the persisted unused report
- get_unused_marker_file: Path to the file git-annex rewrites on each scan
"""

from pathlib import Path

from annex2annex.annex.store import Store


def get_unused_cache_file(store: Store) -> Path:
    """Return path to the cached unused report, inside the git directory.

    Args:
        store: The repository.

    Returns:
        Path to .git/annex/unused_info.json.
    """
    return store.git_path("annex", "unused_info.json")


def get_unused_marker_file(store: Store) -> Path:
    """Return path to the list git-annex writes when it scans for unused data.

    Args:
        store: The repository.

    Returns:
        Path to .git/annex/unused.
    """
    return store.git_path("annex", "unused")
