"""Shared test fixtures and configuration."""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from annex2annex.annex import Store
from helpers import add_annexed, git, make_annex


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture(autouse=True)
def isolated_config(temp_dir, mocker):
    """Point the user configuration at an empty directory."""
    config_dir = temp_dir / ".annex2annex-config"
    mocker.patch("annex2annex.config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def fake_store(temp_dir):
    """A Store whose git and git-annex calls are mocks but whose git dir is real."""
    git_dir = temp_dir / ".git"
    (git_dir / "annex").mkdir(parents=True)

    store = MagicMock(spec=Store)
    store.root = temp_dir
    store.git_path.side_effect = lambda *parts: git_dir.joinpath(*parts)
    store.config_get.return_value = None
    store.branch_timestamps.return_value = {}
    store.log_lines.return_value = ["commit abc", "    removed"]
    return store


@pytest.fixture
def sample_unused_report():
    """Sample `git annex unused` output with good, bad and tmp entries."""
    return """unused . (checking for unused data...) (checking master...)
  Some annexed data is no longer used by any files:
    NUMBER  KEY
    1       SHA256E-s6--6a1e7d2cbbd3f3e2e8f2aa6e7f3f64b6e1c5ab5b0bc4bb6c1c1c46e69a4c8a3e.txt
    2       SHA256E-s12--0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8
  (To see where data was previously used, run: git log --stat -S'KEY')

  Some corrupted files have been preserved by fsck, just in case.
    NUMBER  KEY
    3       SHA256E-s4--2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae
  Some partially transferred data exists in temporary files.
    NUMBER  KEY
    4       SHA256E-s7--fcde2b2edba56bf408601fb721fe9b5c338d10ee429ea04fae5511b68fbf8fb9

  To remove unwanted data: git-annex dropunused NUMBER
ok
"""


@pytest.fixture
def temp_annex(temp_dir):
    """A git-annex repository with one committed annexed file, foo."""
    repo = make_annex(temp_dir / "annex")
    add_annexed(repo, "foo", "my cool big file\n")
    git(repo, "commit", "-q", "-m", "add")
    return repo
