"""git-annex repository access for annex2annex.

This package provides:
- exceptions: AnnexError, SpawnError, ProtocolError
- commands: AnnexCommand, run_annex
- batch: BatchCommand
- store: Store, find_store, key_digest
"""

from annex2annex.annex.exceptions import (
    AnnexError,
    ProtocolError,
    SpawnError,
)
from annex2annex.annex.commands import AnnexCommand, run_annex
from annex2annex.annex.batch import BatchCommand
from annex2annex.annex.store import Store, find_store, key_digest


__all__ = [
    "AnnexError",
    "ProtocolError",
    "SpawnError",
    "AnnexCommand",
    "run_annex",
    "BatchCommand",
    "Store",
    "find_store",
    "key_digest",
]
