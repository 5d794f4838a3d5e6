"""Drop content left unused by a migration.

After `migrate --commit`, content hardlinked into the destination is unused
in the source repository, but it still occupies no extra space there as long
as the destination's hardlink exists. Dropping the source's link is safe in
exactly that case: the data survives in the destination.

Content whose link count has fallen to 1 is never dropped here, even if a
migration left it unused: it may be the only copy. Reinjecting it into the
destination is a separate step.

Contains:
- is_reclaimable: Decide whether one unused entry can be dropped
- reclaim_migrated: Drop every reclaimable entry
"""

import logging
import os

from annex2annex.annex.store import Store
from annex2annex.migrate.engine import MIGRATION_MESSAGE
from annex2annex.unused import UnusedEntry, get_unused

logger = logging.getLogger(__name__)


def is_reclaimable(store: Store, entry: UnusedEntry) -> bool:
    """Check whether an unused entry was migrated and is still hardlinked.

    Args:
        store: The source repository.
        entry: An unused entry of that repository.

    Returns:
        True if the last commit touching the key was a migration and the
        content has another hardlink.
    """
    if entry.bad or entry.tmp:
        return False

    content = store.content_location(entry.key)
    if content is None:
        return False
    link_count = os.stat(content).st_nlink

    commits = store.history_search(entry.key)
    if not commits or MIGRATION_MESSAGE not in commits[0].message:
        return False
    if link_count <= 1:
        logger.info("not dropping %s: no other hardlink to its content", entry.key)
        return False
    return True


def reclaim_migrated(store: Store) -> int:
    """Drop unused content that a migration left hardlinked elsewhere.

    Safe to run repeatedly: content already dropped is no longer reported
    as unused.

    Args:
        store: The repository content was migrated out of.

    Returns:
        The number of unused entries dropped.
    """
    entries = [entry for entry in get_unused(store) if not entry.bad and not entry.tmp]
    to_drop = [entry.number for entry in entries if is_reclaimable(store, entry)]
    if to_drop:
        logger.info("dropping unused %s", " ".join(str(n) for n in to_drop))
        store.drop_unused(to_drop, force=True)
    return len(to_drop)
