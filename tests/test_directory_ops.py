"""Tests for the lock-free directory algorithms."""

import pytest

from memfs.errors import AlreadyExistsError, NotADirectoryError
from memfs.ops import DirectoryOps
from memfs.types import EntryKind


@pytest.fixture
def ops(store, clock) -> DirectoryOps:
    return DirectoryOps(store, clock)


class TestEnsureParentDirectories:
    """Tests for ensure_parent_directories."""

    def test_creates_missing_levels(self, ops, store):
        assert ops.ensure_parent_directories("/a/b/c/file") == 3
        assert all(store.is_directory(p) for p in ("/a", "/a/b", "/a/b/c"))

    def test_existing_parents_create_nothing(self, ops):
        ops.create_entry("/a/b", EntryKind.DIRECTORY)
        assert ops.ensure_parent_directories("/a/b/file") == 0

    def test_top_level_path_needs_nothing(self, ops):
        assert ops.ensure_parent_directories("/file") == 0

    def test_fails_through_file(self, ops, store):
        ops.write_file("/a", b"file")
        with pytest.raises(NotADirectoryError):
            ops.ensure_parent_directories("/a/b/c")
        assert not store.exists("/a/b")


class TestSubtreeCounts:
    """remove/move/copy report how many entries they touched."""

    def test_counts(self, ops, store):
        ops.write_file("/s/x", b"1")
        ops.write_file("/s/y/z", b"2")

        assert ops.copy("/s", "/c") == 4
        assert ops.move("/c", "/m") == 4
        assert ops.remove("/m", recursive=True) == 4
        assert ops.remove("/s/x") == 1

    def test_create_entry_duplicate(self, ops):
        ops.create_entry("/d", EntryKind.DIRECTORY)
        with pytest.raises(AlreadyExistsError):
            ops.create_entry("/d", EntryKind.FILE)

    def test_list_children_sorted(self, ops):
        for name in ("zeta", "alpha", "mid"):
            ops.create_entry(f"/dir/{name}", EntryKind.FILE)
        assert [name for name, _ in ops.list_children("/dir")] == ["alpha", "mid", "zeta"]
