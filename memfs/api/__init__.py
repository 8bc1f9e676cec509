"""
Public API

Modules:
    filesystem: MemoryFileSystem, the owner of store, cwd and lock
"""

from memfs.api.filesystem import MemoryFileSystem

__all__ = ["MemoryFileSystem"]
