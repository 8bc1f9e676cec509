"""
Error Types

Every failure the core can report has one ErrorKind. The store and the
directory algorithms raise MemFSError subclasses; MemoryFileSystem converts
them into OpResult values so callers never see a raw exception for a domain
failure.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of core failures."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_A_FILE = "not_a_file"
    NOT_A_DIRECTORY = "not_a_directory"
    DIRECTORY_NOT_EMPTY = "directory_not_empty"
    INVALID_ARGUMENT = "invalid_argument"
    IO_ERROR = "io_error"


class MemFSError(Exception):
    """Base class for file system errors.

    Args:
        path: The offending path (canonical where one is known).
        message: Optional override for the default message.
    """

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT
    default_message = "invalid operation"

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        self.message = message or f"{path}: {self.default_message}"
        super().__init__(self.message)


class NotFoundError(MemFSError):
    """Raised when the operand path is absent."""

    kind = ErrorKind.NOT_FOUND
    default_message = "does not exist"


class AlreadyExistsError(MemFSError):
    """Raised when a creation, move, or copy target is already present."""

    kind = ErrorKind.ALREADY_EXISTS
    default_message = "already exists"


class NotAFileError(MemFSError):
    """Raised when the operand exists but is a directory."""

    kind = ErrorKind.NOT_A_FILE
    default_message = "is not a file"


class NotADirectoryError(MemFSError):
    """Raised when the operand (or one of its ancestors) exists but is a file."""

    kind = ErrorKind.NOT_A_DIRECTORY
    default_message = "is not a directory"


class DirectoryNotEmptyError(MemFSError):
    """Raised on a non-recursive delete of a directory with descendants."""

    kind = ErrorKind.DIRECTORY_NOT_EMPTY
    default_message = "directory not empty, use 'rmdir -r' for recursive deletion"


class InvalidArgumentError(MemFSError):
    """Raised for arguments that can never succeed (e.g. moving root)."""

    kind = ErrorKind.INVALID_ARGUMENT


class PersistenceError(MemFSError):
    """Raised when a dump file cannot be read or written."""

    kind = ErrorKind.IO_ERROR
    default_message = "could not access dump file"


__all__ = [
    "ErrorKind",
    "MemFSError",
    "NotFoundError",
    "AlreadyExistsError",
    "NotAFileError",
    "NotADirectoryError",
    "DirectoryNotEmptyError",
    "InvalidArgumentError",
    "PersistenceError",
]
