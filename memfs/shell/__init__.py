"""
Command Shell

Line-oriented interface over a MemoryFileSystem.

Modules:
    path_resolver: Canonical path normalization and prefix helpers
    commands: Command parsing and dispatch (ls, cd, write, mv, ...)
    formatters: Output formatting

Commands:
    ls, cd, pwd, create, mkdir, write, read, delete, rmdir,
    mv, cp, search, info, save, load, stats, help, exit

Only path_resolver is re-exported here: it has no dependencies, and the
storage layer imports it.
"""

from memfs.shell.path_resolver import basename, dirname, normalize

__all__ = ["normalize", "dirname", "basename"]
