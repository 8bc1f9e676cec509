"""
Type Definitions

Pydantic models for all data structures.

Storage Models:
    - Entry, EntryKind - Values held by the path-keyed store

Result Models:
    - OpResult, BatchResult - Operation outcomes
    - DirectoryListing, ListingItem, SearchHit, EntryInfo - Query payloads
    - FileSystemStats, LoadReport - Totals and persistence summaries

All types are:
    - Pydantic BaseModel subclasses (except the EntryKind enum)
    - Fully typed with annotations
    - Immutable where stored (Entry is frozen)
"""

from memfs.types.entries import Entry, EntryKind
from memfs.types.results import (
    BatchResult,
    DirectoryListing,
    EntryInfo,
    FileSystemStats,
    ListingItem,
    LoadReport,
    OpResult,
    SearchHit,
)

__all__ = [
    # Storage Models
    "Entry",
    "EntryKind",
    # Result Models
    "OpResult",
    "BatchResult",
    "DirectoryListing",
    "ListingItem",
    "SearchHit",
    "EntryInfo",
    "FileSystemStats",
    "LoadReport",
]
