"""Migration of content between git-annex repositories.

This package provides:
- exceptions: MigrationError, PreconditionError, MissingObjectError,
  CollisionError, ChecksumError
- checksum: file_digest, verified_copy, keys_disagree
- engine: migrate, migrate_root, check_store, MIGRATION_MESSAGE
"""

from annex2annex.migrate.exceptions import (
    ChecksumError,
    CollisionError,
    MigrationError,
    MissingObjectError,
    PreconditionError,
)
from annex2annex.migrate.checksum import (
    file_digest,
    keys_disagree,
    verified_copy,
)
from annex2annex.migrate.engine import (
    MIGRATION_MESSAGE,
    MigrationResult,
    SourceRoot,
    check_collisions,
    check_store,
    migrate,
    migrate_root,
    prepare_sources,
)


__all__ = [
    # Exceptions
    "ChecksumError",
    "CollisionError",
    "MigrationError",
    "MissingObjectError",
    "PreconditionError",
    # Checksums
    "file_digest",
    "keys_disagree",
    "verified_copy",
    # Engine
    "MIGRATION_MESSAGE",
    "MigrationResult",
    "SourceRoot",
    "check_collisions",
    "check_store",
    "migrate",
    "migrate_root",
    "prepare_sources",
]
