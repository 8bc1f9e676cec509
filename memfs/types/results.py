"""
Result Types

Structured values returned by MemoryFileSystem. Every public operation
returns an OpResult instead of raising, so the dispatcher (or any other
caller) decides how to present failures.

Operation Results:
    - OpResult: Success or one specific ErrorKind for a single operation
    - BatchResult: Per-item results for multi-path create/write/delete

Query Results:
    - ListingItem, DirectoryListing: Direct children of a directory
    - SearchHit: One basename match
    - EntryInfo: Metadata for one path
    - FileSystemStats: Store-wide totals
    - LoadReport: Outcome of loading a dump
"""

from datetime import date
from typing import Any

from pydantic import BaseModel

from memfs.errors import ErrorKind, MemFSError
from memfs.types.entries import EntryKind

# -----------------------------------------------------------------------------
# Operation Results
# -----------------------------------------------------------------------------


class OpResult(BaseModel):
    """
    Outcome of one file system operation.

    Attributes:
        op: Operation name (e.g. "write", "mv")
        path: Canonical path the operation acted on
        ok: True on success
        value: Operation payload on success (bytes, EntryInfo, ...)
        error: ErrorKind on failure
        message: Human-readable detail on failure
    """

    op: str
    path: str
    ok: bool = True
    value: Any = None
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls, op: str, path: str, value: Any = None) -> "OpResult":
        return cls(op=op, path=path, value=value)

    @classmethod
    def failure(cls, op: str, exc: MemFSError, path: str | None = None) -> "OpResult":
        """
        Build a failed result.

        path is the operand that failed and defaults to the exception's path.
        The two differ when an ancestor is at fault; the message still names
        the ancestor.
        """
        return cls(
            op=op,
            path=exc.path if path is None else path,
            ok=False,
            error=exc.kind,
            message=exc.message,
        )

    def unwrap(self) -> Any:
        """Return value, raising RuntimeError if the operation failed."""
        if not self.ok:
            raise RuntimeError(f"{self.op} failed: {self.message}")
        return self.value


class BatchResult(BaseModel):
    """
    Aggregated results of a batch operation, in input order.

    Items are applied independently: one failure never affects the others.
    """

    op: str
    results: list[OpResult] = []

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> list[OpResult]:
        return [r for r in self.results if not r.ok]

    @property
    def failed_paths(self) -> list[str]:
        return [r.path for r in self.results if not r.ok]

    @property
    def succeeded_paths(self) -> list[str]:
        return [r.path for r in self.results if r.ok]


# -----------------------------------------------------------------------------
# Query Results
# -----------------------------------------------------------------------------


class ListingItem(BaseModel):
    """One direct child of a listed directory."""

    name: str
    kind: EntryKind
    size: int
    created_at: date
    modified_at: date


class DirectoryListing(BaseModel):
    """Direct children of a directory, sorted by name."""

    path: str
    detailed: bool = False
    items: list[ListingItem] = []


class SearchHit(BaseModel):
    """An entry whose basename contains the search pattern."""

    kind: EntryKind
    path: str


class EntryInfo(BaseModel):
    """
    Metadata for one path.

    Attributes:
        child_count: Direct children; None for files
    """

    path: str
    kind: EntryKind
    size: int
    created_at: date
    modified_at: date
    child_count: int | None = None


class FileSystemStats(BaseModel):
    """Store-wide totals."""

    total_entries: int
    files: int
    directories: int
    total_size: int


class LoadReport(BaseModel):
    """
    Outcome of loading a dump.

    Attributes:
        loaded: Records inserted into the store
        skipped: Malformed records that were ignored
        repaired: Missing ancestor directories created for orphaned records
    """

    source: str
    loaded: int = 0
    skipped: int = 0
    repaired: int = 0
