"""Migration exception classes.

Contains:
- MigrationError: Base exception for migration failures
- PreconditionError: A repository or path is not fit for migration
- MissingObjectError: Annexed content to be migrated is not present
- CollisionError: A destination path is already taken
- ChecksumError: Migrated content does not match its source
"""

from pathlib import Path
from typing import Union


class MigrationError(Exception):
    """Custom exception for migration failures."""

    pass


class PreconditionError(MigrationError):
    """Raised before anything is changed when a migration cannot go ahead."""

    pass


class MissingObjectError(MigrationError):
    """Raised when annexed files to be migrated lack their content."""

    def __init__(self, paths: list[str]) -> None:
        self.paths = list(paths)
        listing = "\n".join(f"  {path}" for path in self.paths)
        super().__init__(f"Following annexed files are not present in this repo:\n{listing}")


class CollisionError(MigrationError):
    """Raised when something other than a directory exists at a destination path."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path} already exists!")


class ChecksumError(MigrationError):
    """Raised when migrated content differs from the source content."""

    def __init__(self, path: Union[str, Path], detail: str = "") -> None:
        self.path = Path(path)
        message = f"{self.path} corrupted during migration"
        if detail:
            message += f": {detail}"
        super().__init__(message)
