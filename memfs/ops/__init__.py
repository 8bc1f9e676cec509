"""
File System Operations

Algorithms that simulate a directory tree over the flat path-keyed store.

Modules:
    directory: DirectoryOps (ensure-parents, list, remove, move, copy, search)
"""

from memfs.ops.directory import DirectoryOps

__all__ = ["DirectoryOps"]
