"""Content verification for migrated files.

Contains:
- file_digest: Hex digest of a file's content
- verified_copy: Copy a file and check the copy against the original
- keys_disagree: Compare the digests embedded in two git-annex keys
"""

import hashlib
import shutil
from pathlib import Path
from typing import Union

from annex2annex.annex.store import key_digest
from annex2annex.config import DEFAULT_DIGEST_ALGORITHM
from annex2annex.migrate.exceptions import ChecksumError

_CHUNK_SIZE = 1024 * 1024


def file_digest(path: Union[str, Path], algorithm: str = DEFAULT_DIGEST_ALGORITHM) -> str:
    """Compute the hex digest of a file.

    Args:
        path: The file to hash.
        algorithm: Any algorithm name hashlib accepts.

    Returns:
        Hex digest of the file's content.
    """
    digest = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verified_copy(
    source: Union[str, Path],
    target: Union[str, Path],
    algorithm: str = DEFAULT_DIGEST_ALGORITHM,
) -> None:
    """Copy source to target and verify the copy by digest.

    Args:
        source: File to copy.
        target: Where to write the copy. Must not exist.
        algorithm: hashlib algorithm for the comparison.

    Raises:
        ChecksumError: If the digests differ. The bad copy is left in place
            for inspection.
    """
    shutil.copyfile(source, target)
    shutil.copymode(source, target)
    expected = file_digest(source, algorithm)
    actual = file_digest(target, algorithm)
    if expected != actual:
        raise ChecksumError(target, f"{algorithm} {actual} != {expected}")


def keys_disagree(source_key: str, dest_key: str) -> bool:
    """Check whether two keys record different checksums of their content.

    Keys from non-checksum backends, or checksums of different kinds, cannot
    be compared and never disagree.
    """
    source_digest = key_digest(source_key)
    dest_digest = key_digest(dest_key)
    if source_digest is None or dest_digest is None:
        return False
    if len(source_digest) != len(dest_digest):
        return False
    return source_digest != dest_digest
