"""
Directory Operations

Hierarchy algorithms built on an EntryStore and the path helpers: parent
creation, direct-children listing, recursive delete, and subtree move/copy.

These functions do not lock. MemoryFileSystem holds its store lock around
every call, so each operation is applied as a unit.

Subtree operations follow one rule: validate everything and build the full
rename plan from a single prefix scan before the first mutation. Inserts go
shallowest-first and erases deepest-first, which keeps the store's ancestor
invariant true after every individual step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from memfs.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    InvalidArgumentError,
    NotADirectoryError,
    NotAFileError,
)
from memfs.shell.path_resolver import (
    ROOT,
    SEPARATOR,
    basename,
    child_prefix,
    depth,
    dirname,
    is_within,
    rebase,
)
from memfs.storage.base import EntryStore
from memfs.types import Entry, EntryInfo, EntryKind, FileSystemStats

logger = logging.getLogger(__name__)


class DirectoryOps:
    """
    File system algorithms over one entry store.

    Args:
        store: The path-keyed store to operate on
        today: Clock for created/modified dates (day resolution)
    """

    def __init__(self, store: EntryStore, today: Callable[[], date] = date.today) -> None:
        self.store = store
        self._today = today

    # === Creation ===

    def ensure_parent_directories(self, path: str) -> int:
        """
        Create every missing ancestor of path as a directory.

        Walks up via dirname until it reaches an existing directory (the
        root always exists), then creates the missing levels top-down.

        Returns:
            Number of directories created

        Raises:
            NotADirectoryError: an ancestor exists but is a file
        """
        parent = dirname(path)
        if parent == ROOT:
            return 0

        if self.store.exists(parent):
            if not self.store.get(parent).is_directory:
                raise NotADirectoryError(
                    parent, f"{parent}: is a file, cannot create {path} inside it"
                )
            return 0

        created = self.ensure_parent_directories(parent)
        self.store.insert(parent, Entry.new_directory(self._today()))
        logger.debug(f"Created parent directory {parent}")
        return created + 1

    def create_entry(self, path: str, kind: EntryKind) -> Entry:
        """Create an empty file or directory. Raises AlreadyExistsError."""
        if self.store.exists(path):
            raise AlreadyExistsError(path, f"{path}: entry with the same path already exists")

        self.ensure_parent_directories(path)
        today = self._today()
        entry = Entry.new_directory(today) if kind is EntryKind.DIRECTORY else Entry.new_file(today)
        self.store.insert(path, entry)
        logger.debug(f"Created {kind.value} {path}")
        return entry

    def write_file(self, path: str, content: bytes) -> bool:
        """
        Write content to a file, creating it (and its parents) if needed.

        Returns:
            True if a new file was created, False if an existing one was updated

        Raises:
            NotAFileError: path is a directory
            NotADirectoryError: an ancestor is a file
        """
        self.ensure_parent_directories(path)

        if self.store.exists(path):
            current = self.store.get(path)
            if not current.is_file:
                raise NotAFileError(path)
            self.store.update(path, current.with_content(content, self._today()))
            logger.debug(f"Updated {path} ({len(content)} bytes)")
            return False

        self.store.insert(path, Entry.new_file(self._today(), content))
        logger.debug(f"Wrote new file {path} ({len(content)} bytes)")
        return True

    # === Reading ===

    def read_file(self, path: str) -> bytes:
        """Return file content. Raises NotFoundError / NotAFileError."""
        return self.store.get_file(path).content

    def list_children(self, path: str) -> list[tuple[str, Entry]]:
        """
        Return the direct children of a directory, sorted by name.

        A key is a direct child when its remainder after the directory
        prefix contains no further separator.
        """
        self.store.get_directory(path)
        prefix = child_prefix(path)

        children = []
        for key, entry in self.store.scan_prefix(prefix):
            name = key[len(prefix):]
            if SEPARATOR not in name:
                children.append((name, entry))
        return sorted(children, key=lambda child: child[0])

    def info(self, path: str) -> EntryInfo:
        """Return metadata for path; directories include their direct child count."""
        entry = self.store.get(path)
        child_count = len(self.list_children(path)) if entry.is_directory else None
        return EntryInfo(
            path=path,
            kind=entry.kind,
            size=entry.size,
            created_at=entry.created_at,
            modified_at=entry.modified_at,
            child_count=child_count,
        )

    def search(self, pattern: str) -> list[tuple[EntryKind, str]]:
        """Return (kind, path) for every entry whose basename contains pattern."""
        if not pattern:
            raise InvalidArgumentError("", "search pattern must not be empty")
        hits = [
            (entry.kind, key)
            for key, entry in self.store.items()
            if pattern in basename(key)
        ]
        return sorted(hits, key=lambda hit: hit[1])

    def stats(self) -> FileSystemStats:
        files = directories = total_size = 0
        for _, entry in self.store.items():
            if entry.is_file:
                files += 1
                total_size += entry.size
            else:
                directories += 1
        return FileSystemStats(
            total_entries=files + directories,
            files=files,
            directories=directories,
            total_size=total_size,
        )

    # === Removal ===

    def remove(
        self,
        path: str,
        recursive: bool = False,
        expect: EntryKind | None = None,
    ) -> int:
        """
        Remove a file, or a directory and (if recursive) its whole subtree.

        Args:
            path: Canonical path to remove
            recursive: Allow removing a non-empty directory
            expect: Optional kind the entry must have

        Returns:
            Number of entries erased

        Raises:
            DirectoryNotEmptyError: non-empty directory without recursive
        """
        if path == ROOT:
            raise InvalidArgumentError(path, "/: the root directory cannot be removed")

        entry = self.store.get(path)
        if expect is EntryKind.FILE and not entry.is_file:
            raise NotAFileError(path)
        if expect is EntryKind.DIRECTORY and not entry.is_directory:
            raise NotADirectoryError(path)

        removed = 0
        if entry.is_directory:
            descendants = [key for key, _ in self.store.scan_prefix(child_prefix(path))]
            if descendants and not recursive:
                raise DirectoryNotEmptyError(path)
            for key in sorted(descendants, key=depth, reverse=True):
                self.store.erase(key)
                removed += 1

        self.store.erase(path)
        logger.debug(f"Removed {path} ({removed} descendants)")
        return removed + 1

    # === Subtree transfer ===

    def _check_transfer(self, verb: str, src: str, dst: str) -> Entry:
        """Validate a move/copy before anything is mutated."""
        if src == ROOT:
            raise InvalidArgumentError(src, f"/: cannot {verb} the root directory")

        entry = self.store.get(src)
        if self.store.exists(dst):
            raise AlreadyExistsError(dst, f"{dst}: destination already exists")
        if entry.is_directory and is_within(dst, src):
            raise InvalidArgumentError(dst, f"{dst}: cannot {verb} {src} into itself")
        return entry

    def _subtree_plan(
        self,
        src: str,
        dst: str,
        transform: Callable[[Entry], Entry],
    ) -> tuple[list[str], list[tuple[str, Entry]]]:
        """Return (old keys, new (path, entry) pairs shallowest-first) for a subtree."""
        scanned = self.store.scan_prefix(child_prefix(src))
        old_keys = [key for key, _ in scanned]
        renames = [(rebase(key, src, dst), transform(entry)) for key, entry in scanned]
        renames.sort(key=lambda item: depth(item[0]))
        return old_keys, renames

    def move(self, src: str, dst: str) -> int:
        """
        Move a file or directory subtree to dst, preserving entry values.

        For a directory, dst is created as a new directory, every descendant
        is re-inserted under dst unchanged, and then every src key is erased.

        Returns:
            Number of entries relocated (subtree size including src)
        """
        entry = self._check_transfer("move", src, dst)
        self.ensure_parent_directories(dst)

        if entry.is_file:
            self.store.insert(dst, entry)
            self.store.erase(src)
            logger.debug(f"Moved file {src} -> {dst}")
            return 1

        old_keys, renames = self._subtree_plan(src, dst, lambda value: value)
        self.store.insert(dst, Entry.new_directory(self._today()))
        for new_path, value in renames:
            self.store.insert(new_path, value)
        for key in sorted(old_keys, key=depth, reverse=True):
            self.store.erase(key)
        self.store.erase(src)

        logger.debug(f"Moved directory {src} -> {dst} ({len(renames)} descendants)")
        return len(renames) + 1

    def copy(self, src: str, dst: str) -> int:
        """
        Copy a file or directory subtree to dst.

        Originals are kept. Every copied entry, the new root included, is
        stamped with today's date for both created and modified.

        Returns:
            Number of entries created
        """
        entry = self._check_transfer("copy", src, dst)
        self.ensure_parent_directories(dst)
        today = self._today()

        if entry.is_file:
            self.store.insert(dst, entry.restamped(today))
            logger.debug(f"Copied file {src} -> {dst}")
            return 1

        _, renames = self._subtree_plan(src, dst, lambda value: value.restamped(today))
        self.store.insert(dst, Entry.new_directory(today))
        for new_path, value in renames:
            self.store.insert(new_path, value)

        logger.debug(f"Copied directory {src} -> {dst} ({len(renames)} descendants)")
        return len(renames) + 1
