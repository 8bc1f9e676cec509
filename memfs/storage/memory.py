"""
Path-Keyed Store

Flat dict implementation of EntryStore. The dict is the whole file system:
one key per file or directory, hierarchy simulated by prefix scans.
"""

from collections.abc import Callable, Iterator
from datetime import date

from memfs.errors import (
    AlreadyExistsError,
    DirectoryNotEmptyError,
    InvalidArgumentError,
    NotADirectoryError,
    NotAFileError,
    NotFoundError,
)
from memfs.shell.path_resolver import ROOT, child_prefix, dirname
from memfs.storage.base import EntryStore
from memfs.types import Entry


class PathKeyedStore(EntryStore):
    """
    Dict-backed entry store.

    The ancestor invariant is enforced here rather than by callers:
    insert requires an existing parent directory and erase refuses a
    directory that still has descendants.

    Args:
        today: Clock used to stamp the root directory.
    """

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today
        self._entries: dict[str, Entry] = {ROOT: Entry.new_directory(today())}

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return path in self._entries

    def get(self, path: str) -> Entry:
        try:
            return self._entries[path]
        except KeyError:
            raise NotFoundError(path) from None

    def scan_prefix(self, prefix: str) -> list[tuple[str, Entry]]:
        return [
            (key, entry)
            for key, entry in self._entries.items()
            if key != ROOT and key.startswith(prefix)
        ]

    def items(self) -> Iterator[tuple[str, Entry]]:
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def has_descendants(self, path: str) -> bool:
        prefix = child_prefix(path)
        return any(key != ROOT and key.startswith(prefix) for key in self._entries)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def insert(self, path: str, entry: Entry) -> None:
        if path in self._entries:
            raise AlreadyExistsError(path)
        parent = dirname(path)
        parent_entry = self._entries.get(parent)
        if parent_entry is None:
            raise NotFoundError(parent, f"{parent}: parent directory does not exist")
        if not parent_entry.is_directory:
            raise NotADirectoryError(parent)
        self._entries[path] = entry

    def update(self, path: str, entry: Entry) -> None:
        current = self.get(path)
        if current.kind is not entry.kind:
            if current.is_directory:
                raise NotAFileError(path)
            raise NotADirectoryError(path)
        self._entries[path] = entry

    def erase(self, path: str) -> None:
        if path == ROOT:
            raise InvalidArgumentError(path, "/: the root directory cannot be removed")
        entry = self.get(path)
        if entry.is_directory and self.has_descendants(path):
            raise DirectoryNotEmptyError(path)
        del self._entries[path]

    def clear(self) -> None:
        self._entries = {ROOT: Entry.new_directory(self._today())}

    def reset_root(self, entry: Entry) -> None:
        if not entry.is_directory:
            raise NotADirectoryError(ROOT)
        self._entries[ROOT] = entry
