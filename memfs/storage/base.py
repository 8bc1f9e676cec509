"""
Abstract Entry Store Interface

Defines the contract for all entry stores.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from memfs.errors import NotADirectoryError, NotAFileError
from memfs.shell.path_resolver import child_prefix
from memfs.types import Entry


class EntryStore(ABC):
    """
    Abstract mapping from canonical absolute path to Entry.

    No parent/child links are stored; hierarchy is derived from path
    prefixes. Implementations must keep the ancestor invariant: every
    non-root key has all of its ancestors present as directories, and the
    root "/" always exists.

    All paths passed in are already canonical. Stores are not thread-safe;
    MemoryFileSystem serializes access with its own lock.
    """

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if path is a stored key."""
        ...

    @abstractmethod
    def get(self, path: str) -> Entry:
        """Return the entry at path. Raises NotFoundError."""
        ...

    @abstractmethod
    def scan_prefix(self, prefix: str) -> list[tuple[str, Entry]]:
        """
        Return every (path, entry) whose key starts with prefix.

        prefix is a directory path plus "/" (or "/" for the root); the
        directory's own key never matches. Order is unspecified.
        """
        ...

    @abstractmethod
    def items(self) -> Iterator[tuple[str, Entry]]:
        """Iterate over all (path, entry) pairs, root included."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)

    def is_file(self, path: str) -> bool:
        return self.exists(path) and self.get(path).is_file

    def is_directory(self, path: str) -> bool:
        return self.exists(path) and self.get(path).is_directory

    def has_descendants(self, path: str) -> bool:
        return bool(self.scan_prefix(child_prefix(path)))

    def get_file(self, path: str) -> Entry:
        """Return the file at path. Raises NotFoundError / NotAFileError."""
        entry = self.get(path)
        if not entry.is_file:
            raise NotAFileError(path)
        return entry

    def get_directory(self, path: str) -> Entry:
        """Return the directory at path. Raises NotFoundError / NotADirectoryError."""
        entry = self.get(path)
        if not entry.is_directory:
            raise NotADirectoryError(path)
        return entry

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @abstractmethod
    def insert(self, path: str, entry: Entry) -> None:
        """
        Insert a new key.

        Raises:
            AlreadyExistsError: path is already present
            NotFoundError: the parent directory is absent
            NotADirectoryError: the parent is a file
        """
        ...

    @abstractmethod
    def update(self, path: str, entry: Entry) -> None:
        """
        Replace the value of an existing key with one of the same kind.

        Raises:
            NotFoundError: path is absent
            NotAFileError / NotADirectoryError: kind differs from the stored one
        """
        ...

    @abstractmethod
    def erase(self, path: str) -> None:
        """
        Remove exactly one key.

        Raises:
            NotFoundError: path is absent
            DirectoryNotEmptyError: path is a directory that still has descendants
            InvalidArgumentError: path is the root
        """
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove everything except a freshly created root."""
        ...

    @abstractmethod
    def reset_root(self, entry: Entry) -> None:
        """Replace the root directory's value (used when loading a dump)."""
        ...
