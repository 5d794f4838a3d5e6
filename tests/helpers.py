"""Helpers shared by the tests: user config files and real git-annex repositories."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest
import yaml


requires_annex = pytest.mark.skipif(
    shutil.which("git-annex") is None,
    reason="git-annex is not installed",
)


def git(repo: Path, *args: str) -> str:
    """Run git in repo and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def make_annex(path: Path) -> Path:
    """Create an empty git-annex repository at path."""
    path.mkdir(parents=True)
    git(path, "init", "-q")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "user.email", "test@example.com")
    git(path, "annex", "init", "-q", path.name)
    return path


def add_annexed(repo: Path, rel: str, content: str) -> None:
    """Write a file and add it to the annex."""
    path = repo / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "annex", "add", "--force-large", "-q", "--", rel)


def add_plain(repo: Path, rel: str, content: str) -> None:
    """Write a file and add it to git, not the annex."""
    path = repo / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "-c", "annex.largefiles=nothing", "add", "--", rel)


def lookup_key(repo: Path, rel: str) -> str:
    return git(repo, "annex", "lookupkey", rel).strip()


def content_location(repo: Path, rel: str) -> Path:
    """Absolute path to the annexed content of rel."""
    location = git(repo, "annex", "contentlocation", lookup_key(repo, rel)).strip()
    return Path(os.path.normpath(repo / location))


def corrupt_annexed_file(repo: Path, rel: str) -> Path:
    """Append garbage to the annexed content of rel, returning its path."""
    location = content_location(repo, rel)
    os.chmod(location, 0o644)
    with open(location, "a") as f:
        f.write("bazbaz\n")
    return location


def same_device_for_files_and_dirs(path: Path) -> bool:
    """Whether files and directories under path report the same st_dev."""
    probe = path / ".device-probe"
    probe.write_text("x")
    try:
        return os.stat(probe).st_dev == os.stat(path).st_dev
    finally:
        probe.unlink()


def write_config(config_dir: Path, settings: dict) -> None:
    """Write a user config.yaml into config_dir."""
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.yaml").write_text(yaml.dump(settings, default_flow_style=False))
