"""Unused cache operations for annex2annex.

`git annex unused` and especially `git log -S` over each unused key are slow
in big repositories. The report, and any history already looked up, is
kept in the git directory so that repeated runs (e.g. a user working
through review-unused in several sittings) do not redo that work.

Contains:
- DEFAULT_USED_REFSPEC: Used when annex.used-refspec is not configured
- resolve_params: Fill in defaults for a request
- load_unused_cache / save_unused_cache / invalidate_unused_cache
- marker_not_newer / params_match / no_newer_commits: The validity clauses
- is_unused_cache_valid: All three clauses together
- get_unused: Cached `git annex unused`, optionally with history
"""

import logging
import time
from typing import Optional

from pydantic import ValidationError

from annex2annex import config
from annex2annex.annex.store import Store
from annex2annex.unused.models import UnusedCache, UnusedEntry, UnusedParams
from annex2annex.unused.parse import parse_unused_report
from annex2annex.unused.paths import get_unused_cache_file, get_unused_marker_file

logger = logging.getLogger(__name__)

DEFAULT_USED_REFSPEC = "+refs/heads/*:-refs/heads/synced/*"

# The git-annex branch changes whenever content moves around; a stale report
# only means trying to drop something already dropped.
TRACKING_BRANCH = "git-annex"


def resolve_params(
    store: Store,
    from_remote: Optional[str] = None,
    used_refspec: Optional[str] = None,
) -> UnusedParams:
    """Build the parameters for a request, applying the used-refspec default.

    Args:
        store: The repository.
        from_remote: Remote to check for unused content, if any.
        used_refspec: Explicit --used-refspec, if any.

    Returns:
        Complete UnusedParams.
    """
    if used_refspec is None:
        used_refspec = store.config_get("annex.used-refspec") or DEFAULT_USED_REFSPEC
    return UnusedParams(from_remote=from_remote, used_refspec=used_refspec)


def load_unused_cache(store: Store) -> Optional[UnusedCache]:
    """Load the persisted report.

    Args:
        store: The repository.

    Returns:
        UnusedCache object, or None if there is none or it cannot be read.
    """
    cache_file = get_unused_cache_file(store)
    if not cache_file.exists():
        return None

    try:
        return UnusedCache.model_validate_json(cache_file.read_text())
    except (OSError, ValidationError) as e:
        logger.warning("discarding unreadable unused cache %s: %s", cache_file, e)
        cache_file.unlink(missing_ok=True)
        return None


def save_unused_cache(store: Store, cache: UnusedCache) -> None:
    """Stamp the report with the current time and persist it.

    Args:
        store: The repository.
        cache: The report to save. Its timestamp is updated in place.
    """
    cache.timestamp = time.time()
    cache_file = get_unused_cache_file(store)
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    cache_file.write_text(cache.model_dump_json(indent=2))


def invalidate_unused_cache(store: Store) -> None:
    """Remove the persisted report."""
    get_unused_cache_file(store).unlink(missing_ok=True)


def marker_not_newer(store: Store, cache: UnusedCache) -> bool:
    """Check that git-annex has not rescanned since the report was cached."""
    marker = get_unused_marker_file(store)
    try:
        last_scan = marker.stat().st_mtime
    except FileNotFoundError:
        return False
    return last_scan <= cache.timestamp


def params_match(cache: UnusedCache, params: UnusedParams) -> bool:
    """Check that the report was produced with the same arguments."""
    return cache.params == params


def no_newer_commits(store: Store, cache: UnusedCache) -> bool:
    """Check that no branch but git-annex has a commit since the report was cached."""
    timestamps = store.branch_timestamps()
    timestamps.pop(TRACKING_BRANCH, None)
    return all(stamp < cache.timestamp for stamp in timestamps.values())


def is_unused_cache_valid(store: Store, cache: UnusedCache, params: UnusedParams) -> bool:
    """Check whether the cached report can be used for a request.

    Args:
        store: The repository.
        cache: The cached report.
        params: The parameters of the current request.

    Returns:
        True if all validity clauses hold.
    """
    return (
        marker_not_newer(store, cache)
        and params_match(cache, params)
        and no_newer_commits(store, cache)
    )


def _scan(store: Store, params: UnusedParams) -> UnusedCache:
    logger.info("running git annex unused in %s", store.root)
    report = store.scan_unused(params.from_remote, params.used_refspec)
    cache = UnusedCache(timestamp=time.time(), params=params, entries=parse_unused_report(report))
    save_unused_cache(store, cache)
    return cache


def get_unused(
    store: Store,
    from_remote: Optional[str] = None,
    used_refspec: Optional[str] = None,
    log: bool = False,
    rename_limit: Optional[int] = None,
) -> list[UnusedEntry]:
    """Get the unused content of a repository, using the cache where valid.

    Args:
        store: The repository.
        from_remote: Check for unused content in this remote instead of here.
        used_refspec: Override annex.used-refspec.
        log: Annotate entries with `git log --stat -S` output. History
            already in the cache is always returned and never recomputed.
        rename_limit: diff.renameLimit for the history search. Defaults to
            the user configuration.

    Returns:
        Unused entries in `git annex unused` order.
    """
    params = resolve_params(store, from_remote, used_refspec)

    cache = load_unused_cache(store)
    if cache is not None and not is_unused_cache_valid(store, cache, params):
        logger.debug("unused cache for %s is stale", store.root)
        invalidate_unused_cache(store)
        cache = None

    if cache is None:
        cache = _scan(store, params)

    if log:
        if rename_limit is None:
            rename_limit = config.get_rename_limit()
        changed = False
        for entry in cache.entries:
            if entry.log_lines is not None or entry.bad or entry.tmp:
                continue
            logger.debug("searching history for %s", entry.key)
            entry.log_lines = store.log_lines(entry.key, rename_limit)
            changed = True
        if changed:
            save_unused_cache(store, cache)

    return cache.entries
