"""
Entry Stores

In-process storage for file system entries.

Modules:
    base: Abstract store interface
    memory: Flat dict keyed by canonical path (primary implementation)

Store Layout:
    {
        "/":                  Entry(DIRECTORY),
        "/docs":              Entry(DIRECTORY),
        "/docs/readme.txt":   Entry(FILE, b"hello"),
    }

Design Principles:
    - No tree: parent/child relationships come from path prefixes
    - Ancestor invariant enforced by the store, not by call discipline
    - Frozen entries, so values are never shared mutably between keys
"""

from memfs.storage.base import EntryStore
from memfs.storage.memory import PathKeyedStore

__all__ = [
    "EntryStore",
    "PathKeyedStore",
]
