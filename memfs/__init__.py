"""
MemFS - In-Memory File System Emulator

A hierarchical file system that lives entirely in process memory, keyed by
normalized absolute path, with an interactive command shell and a flat
textual dump format for persistence.

Example:
    >>> from memfs import MemoryFileSystem
    >>> with MemoryFileSystem() as fs:
    ...     fs.make_directory("/docs")
    ...     fs.write_file("/docs/readme.txt", "hello")
    ...     print(fs.read_file("/docs/readme.txt").value)
    b'hello'

Main Classes:
    MemoryFileSystem: Owns the store, current directory, and lock
    FSConfig: Configuration management

See Also:
    - memfs.shell for the command dispatcher
    - memfs.persistence for the dump/load codec
"""

__version__ = "1.0.0"

# Public API - lazy imports keep `import memfs` cheap for the CLI
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "MemoryFileSystem":
        from memfs.api.filesystem import MemoryFileSystem
        return MemoryFileSystem

    if name == "FSConfig":
        from memfs.config.settings import FSConfig
        return FSConfig

    if name == "execute_command":
        from memfs.shell.commands import execute_command
        return execute_command

    # Types
    if name in ("Entry", "EntryKind", "OpResult", "BatchResult", "EntryInfo"):
        from memfs import types
        return getattr(types, name)

    raise AttributeError(f"module 'memfs' has no attribute {name!r}")


__all__ = [
    # Main classes
    "MemoryFileSystem",
    "FSConfig",

    # Shell
    "execute_command",

    # Types
    "Entry",
    "EntryKind",
    "OpResult",
    "BatchResult",
    "EntryInfo",

    # Version
    "__version__",
]
