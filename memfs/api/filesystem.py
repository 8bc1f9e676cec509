"""
MemoryFileSystem - Primary Entry Point

The MemoryFileSystem class owns everything the shell needs: the path-keyed
store, the current working directory, the lock that serializes access to
both, and a bounded worker pool for batch operations.

Example:
    >>> with MemoryFileSystem() as fs:
    ...     fs.make_directory("/docs")
    ...     fs.write_file("/docs/readme.txt", "hello")
    ...     fs.copy("/docs", "/backup")
    ...     result = fs.remove("/docs")
    ...     result.error
    <ErrorKind.DIRECTORY_NOT_EMPTY: 'directory_not_empty'>

Every public method normalizes its path arguments against the current
directory and returns an OpResult (or BatchResult). Domain failures never
raise.

Thread safety:
    - One re-entrant lock guards the store and the current directory
    - Reads (list, info, search, stats, save) hold it too, so a reader
      never sees a subtree move half applied
    - Batch items run on a thread pool; each item takes the lock on its own,
      so items are applied exactly once in an unspecified order
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from memfs.errors import MemFSError
from memfs.ops.directory import DirectoryOps
from memfs.persistence.codec import load_store, save_store
from memfs.shell.path_resolver import ROOT, normalize
from memfs.storage.memory import PathKeyedStore
from memfs.types import (
    BatchResult,
    DirectoryListing,
    EntryKind,
    ListingItem,
    OpResult,
    SearchHit,
)

if TYPE_CHECKING:
    from memfs.config.settings import FSConfig
    from memfs.storage.base import EntryStore

logger = logging.getLogger(__name__)


def _as_bytes(content: str | bytes) -> bytes:
    return content.encode("utf-8") if isinstance(content, str) else content


class MemoryFileSystem:
    """
    An in-memory hierarchical file system.

    Args:
        config: Optional configuration. Uses defaults if not provided.
        store: Optional store to operate on. A fresh PathKeyedStore by default.
        today: Clock for entry dates. Defaults to date.today.
    """

    def __init__(
        self,
        config: "FSConfig | None" = None,
        store: "EntryStore | None" = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        """Initialize an empty file system containing only the root."""
        if config is None:
            from memfs.config import FSConfig
            config = FSConfig()
        self._config = config
        self._today = today or date.today
        self._store = store if store is not None else PathKeyedStore(self._today)
        self._ops = DirectoryOps(self._store, self._today)
        self._cwd = ROOT
        self._lock = threading.RLock()

        # Lazy-initialized worker pool for batch operations
        self._executor: ThreadPoolExecutor | None = None
        self._closed = False

    # === Lifecycle ===

    def __enter__(self) -> "MemoryFileSystem":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the batch worker pool. Safe to call more than once."""
        with self._lock:
            executor, self._executor = self._executor, None
            self._closed = True
        if executor is not None:
            executor.shutdown(wait=True)

    def _pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._closed:
                raise RuntimeError("MemoryFileSystem is closed")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.batch_workers,
                    thread_name_prefix="memfs-batch",
                )
            return self._executor

    # === Properties ===

    @property
    def config(self) -> "FSConfig":
        return self._config

    @property
    def store(self) -> "EntryStore":
        """The underlying store. Callers must hold `lock` to touch it."""
        return self._store

    @property
    def lock(self) -> threading.RLock:
        """The store lock. Batch calls made while holding it run inline."""
        return self._lock

    @property
    def cwd(self) -> str:
        with self._lock:
            return self._cwd

    # === Internal helpers ===

    def _resolve(self, path: str) -> str:
        return normalize(path, self._cwd)

    def _run(self, op: str, path: str, action: Callable[[str], Any]) -> OpResult:
        """Resolve path and run action under the lock, capturing MemFSError."""
        with self._lock:
            resolved = self._resolve(path)
            try:
                value = action(resolved)
            except MemFSError as e:
                logger.debug(f"{op} {resolved} failed: {e.kind.value}: {e.message}")
                return OpResult.failure(op, e, path=resolved)
            return OpResult.success(op, resolved, value)

    def _run_pair(
        self,
        op: str,
        src: str,
        dst: str,
        action: Callable[[str, str], Any],
    ) -> OpResult:
        with self._lock:
            src_path, dst_path = self._resolve(src), self._resolve(dst)
            try:
                action(src_path, dst_path)
            except MemFSError as e:
                logger.debug(f"{op} {src_path} -> {dst_path} failed: {e.message}")
                return OpResult.failure(op, e, path=src_path)
            return OpResult.success(op, src_path, dst_path)

    def _batch(self, op: str, tasks: Sequence[Callable[[], OpResult]]) -> BatchResult:
        """Submit one task per item and collect results in input order.

        Runs inline for a single item, or when the calling thread already
        holds the lock: pool workers would block on it forever.
        """
        # RLock has no public ownership query
        if len(tasks) == 1 or self._lock._is_owned():
            return BatchResult(op=op, results=[task() for task in tasks])
        pool = self._pool()
        futures = [pool.submit(task) for task in tasks]
        results = [future.result() for future in futures]
        failed = sum(1 for r in results if not r.ok)
        logger.debug(f"Batch {op}: {len(results) - failed} succeeded, {failed} failed")
        return BatchResult(op=op, results=results)

    # === Navigation ===

    def pwd(self) -> str:
        """Return the current working directory."""
        return self.cwd

    def change_directory(self, path: str) -> OpResult:
        """Change the current directory to an existing directory."""

        def _cd(resolved: str) -> str:
            self._store.get_directory(resolved)
            self._cwd = resolved
            return resolved

        return self._run("cd", path, _cd)

    # === Files ===

    def write_file(self, path: str, content: str | bytes) -> OpResult:
        """Write content to a file, creating it and its parents as needed.

        value is True when a new file was created.
        """
        data = _as_bytes(content)
        return self._run("write", path, lambda p: self._ops.write_file(p, data))

    def read_file(self, path: str) -> OpResult:
        """Read a file; value is its content as bytes."""
        return self._run("read", path, self._ops.read_file)

    def create_file(self, path: str) -> OpResult:
        """Create an empty file."""
        return self._run("create", path, lambda p: self._ops.create_entry(p, EntryKind.FILE))

    def make_directory(self, path: str) -> OpResult:
        """Create a directory (and any missing parents)."""
        return self._run("mkdir", path, lambda p: self._ops.create_entry(p, EntryKind.DIRECTORY))

    # === Batch operations ===

    def create_files(self, paths: Iterable[str]) -> BatchResult:
        """Create several empty files concurrently."""
        return self._batch("create", [lambda p=p: self.create_file(p) for p in paths])

    def write_files(self, items: Iterable[tuple[str, str | bytes]]) -> BatchResult:
        """Write several (path, content) pairs concurrently."""
        return self._batch(
            "write",
            [lambda p=p, c=c: self.write_file(p, c) for p, c in items],
        )

    def delete_files(self, paths: Iterable[str]) -> BatchResult:
        """Delete several files concurrently; directories are rejected."""
        return self._batch(
            "delete",
            [lambda p=p: self.remove(p, expect=EntryKind.FILE, op="delete") for p in paths],
        )

    # === Directories ===

    def list_directory(self, path: str | None = None, detailed: bool = False) -> OpResult:
        """List the direct children of a directory (default: current directory)."""

        def _ls(resolved: str) -> DirectoryListing:
            items = [
                ListingItem(
                    name=name,
                    kind=entry.kind,
                    size=entry.size,
                    created_at=entry.created_at,
                    modified_at=entry.modified_at,
                )
                for name, entry in self._ops.list_children(resolved)
            ]
            return DirectoryListing(path=resolved, detailed=detailed, items=items)

        return self._run("ls", path if path is not None else "", _ls)

    def remove(
        self,
        path: str,
        recursive: bool = False,
        expect: EntryKind | None = None,
        op: str = "rm",
    ) -> OpResult:
        """Remove an entry; value is the number of entries erased."""
        return self._run(op, path, lambda p: self._ops.remove(p, recursive=recursive, expect=expect))

    def remove_directory(self, path: str, recursive: bool = False) -> OpResult:
        return self.remove(path, recursive=recursive, expect=EntryKind.DIRECTORY, op="rmdir")

    def move(self, src: str, dst: str) -> OpResult:
        """Move or rename; value is the canonical destination path."""
        result = self._run_pair("mv", src, dst, self._ops.move)
        if result.ok:
            self._repair_cwd()
        return result

    def copy(self, src: str, dst: str) -> OpResult:
        """Copy a file or subtree; value is the canonical destination path."""
        return self._run_pair("cp", src, dst, self._ops.copy)

    # === Queries ===

    def search(self, pattern: str) -> OpResult:
        """Find entries whose basename contains pattern; value is list[SearchHit]."""
        with self._lock:
            try:
                hits = self._ops.search(pattern)
            except MemFSError as e:
                return OpResult.failure("search", e)
        return OpResult.success(
            "search", pattern, [SearchHit(kind=kind, path=path) for kind, path in hits]
        )

    def info(self, path: str) -> OpResult:
        """value is an EntryInfo."""
        return self._run("info", path, self._ops.info)

    def stats(self) -> OpResult:
        """value is a FileSystemStats."""
        with self._lock:
            return OpResult.success("stats", ROOT, self._ops.stats())

    def exists(self, path: str) -> bool:
        with self._lock:
            return self._store.exists(self._resolve(path))

    def snapshot(self) -> dict[str, Any]:
        """Return a consistent copy of the whole store (path -> Entry)."""
        with self._lock:
            return dict(self._store.items())

    # === Persistence ===

    def save(self, file: str | Path | None = None) -> OpResult:
        """Write the store to a dump file; value is the number of records."""
        target = str(file or self._config.default_dump_file)
        with self._lock:
            try:
                count = save_store(
                    self._store,
                    target,
                    dump_date=self._today(),
                    lock_timeout=self._config.lock_timeout,
                )
            except MemFSError as e:
                return OpResult.failure("save", e)
        return OpResult.success("save", target, count)

    def load(self, file: str | Path | None = None) -> OpResult:
        """Replace the store with a dump file's contents; value is a LoadReport."""
        source = str(file or self._config.default_dump_file)
        with self._lock:
            try:
                report = load_store(
                    self._store,
                    source,
                    today=self._today,
                    lock_timeout=self._config.lock_timeout,
                )
            except MemFSError as e:
                return OpResult.failure("load", e)
            self._repair_cwd()
        return OpResult.success("load", source, report)

    def _repair_cwd(self) -> None:
        """Fall back to the root if the current directory no longer exists."""
        with self._lock:
            try:
                self._store.get_directory(self._cwd)
            except MemFSError:
                logger.info(f"Current directory {self._cwd} is gone, returning to /")
                self._cwd = ROOT
