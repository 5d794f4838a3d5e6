"""Tests for annex2annex.migrate.engine module."""

import os
from unittest.mock import MagicMock

import pytest

from annex2annex.annex import Store
from annex2annex.migrate import (
    CollisionError,
    MigrationResult,
    MissingObjectError,
    PreconditionError,
    SourceRoot,
    check_collisions,
    check_store,
    migrate,
    prepare_sources,
)
from annex2annex.migrate.engine import _walk


def _store(root, version=10, clean=True, detached=False, missing=None):
    store = MagicMock(spec=Store)
    store.root = root
    store.annex_version.return_value = version
    store.status_is_clean.return_value = clean
    store.is_detached.return_value = detached
    store.missing_objects.return_value = missing or []
    return store


class TestWalk:
    """Tests for the depth-first walk."""

    def test_directories_before_contents(self, temp_dir):
        """Test walk order and that .git is skipped."""
        root = temp_dir / "foo"
        (root / "foo2").mkdir(parents=True)
        (root / ".git").mkdir()
        (root / ".git" / "config").write_text("")
        (root / "bar").write_text("bar\n")
        (root / "foo2" / "baz").write_text("baz\n")

        walked = [p.relative_to(temp_dir).as_posix() for p in _walk(root)]

        assert walked == ["foo", "foo/bar", "foo/foo2", "foo/foo2/baz"]

    def test_single_file(self, temp_dir):
        """Test that a file root yields itself."""
        path = temp_dir / "other"
        path.write_text("other\n")

        assert list(_walk(path)) == [path]

    def test_symlink_root_not_followed(self, temp_dir):
        """Test that a symlink (e.g. a locked annexed file) is a single entry."""
        (temp_dir / "target").mkdir()
        link = temp_dir / "link"
        os.symlink(temp_dir / "target", link)

        assert list(_walk(link)) == [link]

    def test_symlinked_directory_is_entry(self, temp_dir):
        """Test that a symlink to a directory inside the tree is not descended."""
        root = temp_dir / "root"
        root.mkdir()
        (temp_dir / "elsewhere").mkdir()
        (temp_dir / "elsewhere" / "file").write_text("x")
        os.symlink(temp_dir / "elsewhere", root / "link")

        assert list(_walk(root)) == [root, root / "link"]


class TestCheckStore:
    """Tests for check_store function."""

    def test_good_store(self, temp_dir):
        """Test a clean v10 repository on a branch."""
        check_store(_store(temp_dir), "source")

    def test_not_annex(self, temp_dir):
        """Test a repository without git-annex."""
        with pytest.raises(PreconditionError, match="not a git-annex repository"):
            check_store(_store(temp_dir, version=None), "destination")

    def test_old_version(self, temp_dir):
        """Test a repository version that may use direct mode."""
        with pytest.raises(PreconditionError, match="v5"):
            check_store(_store(temp_dir, version=5), "destination")

    def test_dirty(self, temp_dir):
        """Test uncommitted changes."""
        with pytest.raises(PreconditionError, match="uncommitted"):
            check_store(_store(temp_dir, clean=False), "destination")

    def test_detached(self, temp_dir):
        """Test a detached HEAD."""
        with pytest.raises(PreconditionError, match="detached"):
            check_store(_store(temp_dir, detached=True), "source")

    def test_dirty_allowed_without_commit(self, temp_dir):
        """Test that cleanliness is not checked when not required."""
        store = _store(temp_dir, clean=False, detached=True)

        check_store(store, "source", require_clean=False)

        store.status_is_clean.assert_not_called()


class TestPrepareSources:
    """Tests for prepare_sources function."""

    def test_missing_path(self, temp_dir):
        """Test a source that does not exist."""
        with pytest.raises(PreconditionError, match="does not exist"):
            prepare_sources([temp_dir / "nope"], commit=False)

    def test_outside_repository(self, mocker, temp_dir):
        """Test a source outside any repository."""
        (temp_dir / "loose").write_text("x")
        mocker.patch("annex2annex.migrate.engine.find_store", return_value=None)

        with pytest.raises(PreconditionError, match="not inside"):
            prepare_sources([temp_dir / "loose"], commit=False)

    def test_reports_all_missing_objects(self, mocker, temp_dir):
        """Test that missing content in every source is listed together."""
        (temp_dir / "a").mkdir()
        (temp_dir / "b").mkdir()
        store = _store(temp_dir)
        store.missing_objects.side_effect = [["a/1", "a/2"], ["b/3"]]
        mocker.patch("annex2annex.migrate.engine.find_store", return_value=store)

        with pytest.raises(MissingObjectError) as exc_info:
            prepare_sources([temp_dir / "a", temp_dir / "b"], commit=False)

        assert exc_info.value.paths == ["a/1", "a/2", "b/3"]
        assert "b/3" in str(exc_info.value)

    def test_returns_roots(self, mocker, temp_dir):
        """Test successful preparation."""
        (temp_dir / "a").mkdir()
        store = _store(temp_dir)
        mocker.patch("annex2annex.migrate.engine.find_store", return_value=store)

        roots = prepare_sources([temp_dir / "a"], commit=True)

        assert roots == [SourceRoot(path=temp_dir / "a", store=store)]
        assert roots[0].base == temp_dir
        store.status_is_clean.assert_called_once()


class TestCheckCollisions:
    """Tests for check_collisions function."""

    def test_file_in_the_way(self, temp_dir):
        """Test that an existing file at a destination path is a collision."""
        (temp_dir / "src" / "foo").mkdir(parents=True)
        (temp_dir / "src" / "foo" / "bar").write_text("bar\n")
        (temp_dir / "dest" / "foo").mkdir(parents=True)
        (temp_dir / "dest" / "foo" / "bar").write_text("already here\n")
        root = SourceRoot(path=temp_dir / "src" / "foo", store=_store(temp_dir / "src"))

        with pytest.raises(CollisionError) as exc_info:
            check_collisions([root], temp_dir / "dest")

        assert exc_info.value.path == temp_dir / "dest" / "foo" / "bar"

    def test_existing_directory_is_fine(self, temp_dir):
        """Test that directories may already exist."""
        (temp_dir / "src" / "foo").mkdir(parents=True)
        (temp_dir / "dest" / "foo").mkdir(parents=True)
        root = SourceRoot(path=temp_dir / "src" / "foo", store=_store(temp_dir / "src"))

        check_collisions([root], temp_dir / "dest")

    def test_directory_in_the_way_of_file(self, temp_dir):
        """Test that an existing directory where a file should go is a collision."""
        (temp_dir / "src").mkdir()
        (temp_dir / "src" / "foo").write_text("foo\n")
        (temp_dir / "dest" / "foo").mkdir(parents=True)
        (temp_dir / "dest" / "foo" / "x").write_text("x\n")
        root = SourceRoot(path=temp_dir / "src" / "foo", store=_store(temp_dir / "src"))

        with pytest.raises(CollisionError) as exc_info:
            check_collisions([root], temp_dir / "dest")

        assert exc_info.value.path == temp_dir / "dest" / "foo"

    def test_file_in_the_way_of_directory(self, temp_dir):
        """Test that an existing file where a directory should go is a collision."""
        (temp_dir / "src" / "foo").mkdir(parents=True)
        (temp_dir / "dest").mkdir()
        (temp_dir / "dest" / "foo").write_text("foo\n")
        root = SourceRoot(path=temp_dir / "src" / "foo", store=_store(temp_dir / "src"))

        with pytest.raises(CollisionError) as exc_info:
            check_collisions([root], temp_dir / "dest")

        assert exc_info.value.path == temp_dir / "dest" / "foo"

    def test_symlink_onto_directory(self, temp_dir):
        """Test that a symlink source is not merged into an existing directory."""
        (temp_dir / "src").mkdir()
        (temp_dir / "elsewhere").mkdir()
        os.symlink(temp_dir / "elsewhere", temp_dir / "src" / "link")
        (temp_dir / "dest" / "link").mkdir(parents=True)
        root = SourceRoot(path=temp_dir / "src" / "link", store=_store(temp_dir / "src"))

        with pytest.raises(CollisionError):
            check_collisions([root], temp_dir / "dest")


class TestMigrate:
    """Tests for migrate preflight behaviour."""

    def test_destination_must_exist(self, temp_dir):
        """Test a missing destination directory."""
        with pytest.raises(PreconditionError, match="not a directory"):
            migrate([temp_dir], temp_dir / "nope")

    def test_destination_checked_before_sources(self, mocker, temp_dir):
        """Test that a dirty destination stops the run before sources are examined."""
        mocker.patch(
            "annex2annex.migrate.engine.find_store", return_value=_store(temp_dir, clean=False)
        )
        mock_prepare = mocker.patch("annex2annex.migrate.engine.prepare_sources")

        with pytest.raises(PreconditionError):
            migrate([temp_dir / "src"], temp_dir)

        mock_prepare.assert_not_called()


class TestMigrationResult:
    """Tests for MigrationResult counters."""

    def test_totals(self):
        """Test derived counts."""
        result = MigrationResult(hardlinked=2, copied=1, plain_files=3, directories=4)

        assert result.annexed == 3
        assert result.files == 6
