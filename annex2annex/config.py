"""User configuration management for annex2annex.

Handles user-level configuration stored in ~/.annex2annex/config.yaml:
- rename_limit: diff.renameLimit used when annotating unused files with history
- log_level: default logging level for the CLI
- digest_algorithm: hashlib algorithm used to verify copied files

Repository-level settings (annex.used-refspec, annex.version) live in git
config and are read through the Store.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from annex2annex.git.log import DEFAULT_RENAME_LIMIT


class ConfigError(Exception):
    """Raised when there's an error with the user configuration."""
    pass


_CONFIG_DIR = Path.home() / ".annex2annex"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_DIGEST_ALGORITHM = "sha256"


def get_config_dir() -> Path:
    """Get the annex2annex configuration directory.

    Returns:
        Path to ~/.annex2annex/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.annex2annex/config.yaml
    """
    return get_config_dir() / "config.yaml"


def load_config() -> Dict[str, Any]:
    """Load configuration from ~/.annex2annex/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Expected a mapping in {config_file}")
    return config


def get_rename_limit() -> int:
    """Get the diff.renameLimit to use for history annotation."""
    value = load_config().get("rename_limit", DEFAULT_RENAME_LIMIT)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ConfigError(f"rename_limit must be a non-negative integer, got {value!r}")
    return value


def get_log_level() -> str:
    """Get the default logging level name."""
    return str(load_config().get("log_level", DEFAULT_LOG_LEVEL)).upper()


def get_digest_algorithm() -> str:
    """Get the hashlib algorithm used to verify copies."""
    return str(load_config().get("digest_algorithm", DEFAULT_DIGEST_ALGORITHM))
