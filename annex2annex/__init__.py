"""Tools for migrating and reclaiming content between git-annex repositories."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("annex2annex")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
