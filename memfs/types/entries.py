"""
Entry Types

An Entry is the value stored under one canonical path. Entries are frozen:
every mutation builds a new value with model_copy, so two keys can never
alias one mutable record.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class EntryKind(str, Enum):
    """Kind of a stored entry."""

    FILE = "file"
    DIRECTORY = "directory"

    @property
    def label(self) -> str:
        """Short label used in listings and dumps (FILE / DIR)."""
        return "FILE" if self is EntryKind.FILE else "DIR"

    @property
    def display_name(self) -> str:
        """Human label used in messages (File / Directory)."""
        return "File" if self is EntryKind.FILE else "Directory"


class Entry(BaseModel):
    """
    A file or directory record.

    Attributes:
        kind: FILE or DIRECTORY
        content: File bytes (always empty for a directory)
        created_at: Day the entry was created
        modified_at: Day the content last changed
        size: Derived from content, never stored separately
    """

    kind: EntryKind
    content: bytes = b""
    created_at: date
    modified_at: date

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size(self) -> int:
        """Size in bytes; 0 for directories."""
        return len(self.content)

    @model_validator(mode="after")
    def _directories_have_no_content(self) -> "Entry":
        if self.kind is EntryKind.DIRECTORY and self.content:
            raise ValueError("directory entries cannot carry content")
        return self

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @classmethod
    def new_file(cls, today: date, content: bytes = b"") -> "Entry":
        """Build a file created and modified today."""
        return cls(kind=EntryKind.FILE, content=content, created_at=today, modified_at=today)

    @classmethod
    def new_directory(cls, today: date) -> "Entry":
        """Build an empty directory created today."""
        return cls(kind=EntryKind.DIRECTORY, created_at=today, modified_at=today)

    def with_content(self, content: bytes, today: date) -> "Entry":
        """Return a copy holding new content, modified today."""
        return self.model_copy(update={"content": content, "modified_at": today})

    def restamped(self, today: date) -> "Entry":
        """Return a copy with both timestamps set to today (used by copy)."""
        return self.model_copy(update={"created_at": today, "modified_at": today})
