"""Cached `git annex unused` reports for annex2annex.

This package provides:
- models: UnusedParams, UnusedEntry, UnusedCache
- paths: Functions for getting cache file paths
- parse: parse_unused_report
- cache: Load, validate, save and compute the cached report
- report: render_unused_entry
"""

# Models
from annex2annex.unused.models import (
    UnusedCache,
    UnusedEntry,
    UnusedParams,
)

# Path utilities
from annex2annex.unused.paths import (
    get_unused_cache_file,
    get_unused_marker_file,
)

# Parser
from annex2annex.unused.parse import parse_unused_report

# Cache operations
from annex2annex.unused.cache import (
    DEFAULT_USED_REFSPEC,
    get_unused,
    invalidate_unused_cache,
    is_unused_cache_valid,
    load_unused_cache,
    marker_not_newer,
    no_newer_commits,
    params_match,
    resolve_params,
    save_unused_cache,
)

# Display
from annex2annex.unused.report import render_unused_entry


__all__ = [
    # Models
    "UnusedCache",
    "UnusedEntry",
    "UnusedParams",
    # Path utilities
    "get_unused_cache_file",
    "get_unused_marker_file",
    # Parser
    "parse_unused_report",
    # Cache operations
    "DEFAULT_USED_REFSPEC",
    "get_unused",
    "invalidate_unused_cache",
    "is_unused_cache_valid",
    "load_unused_cache",
    "marker_not_newer",
    "no_newer_commits",
    "params_match",
    "resolve_params",
    "save_unused_cache",
    # Display
    "render_unused_entry",
]
