"""
Command Dispatcher

Parses shell command lines and runs them against a MemoryFileSystem.

Commands:
    ls [-l] [path]
    cd <path>
    pwd
    create [-n <count>] <name...>
    mkdir <path>
    write <path> <content>
    write -n <count> <path> <content> [<path> <content> ...]
    read <path>
    delete [-n <count>] <name...>
    rmdir [-r] <path>
    mv <src> <dst>
    cp <src> <dst>
    search <pattern>
    info <path>
    save [file]
    load [file]
    stats
    help
    exit | quit

Lines are tokenized with shlex, so quoted content keeps its spaces:
    write notes.txt "hello world"
"""

from __future__ import annotations

import argparse
import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import NoReturn

from memfs.api.filesystem import MemoryFileSystem
from memfs.shell.formatters import (
    format_batch,
    format_batch_delete,
    format_content,
    format_error,
    format_info,
    format_listing,
    format_load,
    format_search,
    format_stats,
)
from memfs.types import EntryKind, OpResult

logger = logging.getLogger(__name__)

GOODBYE = "Exiting Memory File System. Goodbye!"

HELP_TEXT = """Memory File System Commands:
---------------------------
ls                    - List files in current directory
ls -l                 - List files with details
ls <path>             - List files in specified directory
cd <path>             - Change directory
pwd                   - Print working directory
create <filename>     - Create empty file
create -n <n> <files> - Create multiple files
mkdir <dirname>       - Create directory
write <file> <content> - Write content to file
write -n <n> <file> <content> ... - Write multiple files
read <file>           - Read content from file
delete <file>         - Delete file
delete -n <n> <files> - Delete multiple files
rmdir <dir>           - Remove empty directory
rmdir -r <dir>        - Remove directory and contents
mv <src> <dest>       - Move/rename file or directory
cp <src> <dest>       - Copy file or directory
search <pattern>      - Search for files matching pattern
info <path>           - Display detailed information about a file or directory
save [file]           - Save memory file system to disk
load [file]           - Load memory file system from disk
stats                 - Display system statistics
help                  - Display this help information
exit                  - Exit the program (alias: quit)"""


@dataclass
class CommandResult:
    """Text to print for one command line."""
    output: str
    error: bool = False
    exit_requested: bool = False


class _QuietArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits without printing; handlers print their own usage."""

    def error(self, message: str) -> NoReturn:
        logger.debug(f"{self.prog}: {message}")
        raise SystemExit(2)


def _parser(prog: str) -> argparse.ArgumentParser:
    return _QuietArgumentParser(prog=prog, add_help=False, allow_abbrev=False)


def _usage(text: str) -> CommandResult:
    return CommandResult(f"Usage: {text}", error=True)


def _report(result: OpResult, success: Callable[[OpResult], str]) -> CommandResult:
    """Format a single OpResult with success on ok, the error line otherwise."""
    if not result.ok:
        return CommandResult(format_error(result), error=True)
    return CommandResult(success(result))


def parse_command(command: str) -> tuple[str, list[str]]:
    """Parse a command string into (cmd_name, args)."""
    stripped = command.strip()
    if not stripped:
        raise ValueError("Empty command")
    tokens = shlex.split(stripped)
    if not tokens:
        raise ValueError("Empty command")
    return tokens[0].lower(), tokens[1:]


def _count_mismatch(op: str) -> CommandResult:
    return CommandResult(
        f"Error: {op}: Number of filenames doesn't match specified count", error=True
    )


# =============================================================================
# Navigation
# =============================================================================


def cmd_ls(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    """
    List a directory.

    Usage:
        ls
        ls -l
        ls [-l] <path>
    """
    parser = _parser("ls")
    parser.add_argument("-l", dest="detailed", action="store_true")
    parser.add_argument("path", nargs="?")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return _usage("ls [-l] [directory]")

    result = fs.list_directory(parsed.path, detailed=parsed.detailed)
    return _report(result, lambda r: format_listing(r.value))


def cmd_cd(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("cd <directory_path>")
    return _report(
        fs.change_directory(args[0]),
        lambda r: f"Changed directory to: {r.value}",
    )


def cmd_pwd(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    return CommandResult(f"Current directory: {fs.pwd()}")


# =============================================================================
# Creation and writing
# =============================================================================


def cmd_create(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    """
    Create one or more empty files.

    Usage:
        create notes.txt
        create -n 3 a.txt b.txt c.txt
    """
    parser = _parser("create")
    parser.add_argument("-n", dest="count", type=int)
    parser.add_argument("names", nargs="+")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return _usage("create [-n <count>] <filename1> [<filename2> ...]")

    if parsed.count is not None and parsed.count != len(parsed.names):
        return _count_mismatch("create")

    if len(parsed.names) == 1:
        return _report(
            fs.create_file(parsed.names[0]),
            lambda r: f"File created successfully: {r.path}",
        )

    batch = fs.create_files(parsed.names)
    return CommandResult(
        format_batch(batch, "File created successfully: {path}"),
        error=not batch.ok,
    )


def cmd_mkdir(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("mkdir <directory_path>")
    return _report(
        fs.make_directory(args[0]),
        lambda r: f"Directory created successfully: {r.path}",
    )


def cmd_write(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    """
    Write content to one file, or to several files concurrently.

    Parsed by hand rather than with argparse: content is free text and may
    itself start with "-".

    Usage:
        write notes.txt "hello world"
        write -n 2 a.txt "first" b.txt "second"
    """
    usage = 'write [-n <count>] <filename> <"text to write"> ...'
    count = None
    operands = args
    if args and args[0] == "-n":
        if len(args) < 2:
            return _usage(usage)
        try:
            count = int(args[1])
        except ValueError:
            return _usage(usage)
        operands = args[2:]

    if len(operands) < 2 or len(operands) % 2:
        return _usage(usage)

    pairs = list(zip(operands[::2], operands[1::2]))
    if count is None and len(pairs) > 1:
        return _usage(usage)
    if count is not None and count != len(pairs):
        return CommandResult(
            "Error: write: Number of files doesn't match specified count", error=True
        )

    if len(pairs) == 1:
        path, content = pairs[0]
        return _report(
            fs.write_file(path, content),
            lambda r: f"Successfully written to {r.path}",
        )

    batch = fs.write_files(pairs)
    return CommandResult(
        format_batch(batch, "Successfully written to {path}"),
        error=not batch.ok,
    )


def cmd_read(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("read <filename>")
    return _report(fs.read_file(args[0]), lambda r: format_content(r.path, r.value))


# =============================================================================
# Removal and transfer
# =============================================================================


def cmd_delete(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    """
    Delete one or more files. Directories are refused; use rmdir.

    Usage:
        delete notes.txt
        delete -n 2 a.txt b.txt
    """
    parser = _parser("delete")
    parser.add_argument("-n", dest="count", type=int)
    parser.add_argument("names", nargs="+")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return _usage("delete [-n <count>] <filename1> [<filename2> ...]")

    if parsed.count is not None and parsed.count != len(parsed.names):
        return _count_mismatch("delete")

    if len(parsed.names) == 1:
        return _report(
            fs.remove(parsed.names[0], expect=EntryKind.FILE, op="delete"),
            lambda r: f"File deleted successfully: {r.path}",
        )

    batch = fs.delete_files(parsed.names)
    return CommandResult(format_batch_delete(batch), error=not batch.ok)


def cmd_rmdir(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    parser = _parser("rmdir")
    parser.add_argument("-r", dest="recursive", action="store_true")
    parser.add_argument("path")
    try:
        parsed = parser.parse_args(args)
    except SystemExit:
        return _usage("rmdir [-r] <directory_path>")

    return _report(
        fs.remove_directory(parsed.path, recursive=parsed.recursive),
        lambda r: f"Directory deleted successfully: {r.path}",
    )


def cmd_mv(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 2:
        return _usage("mv <source_path> <destination_path>")
    return _report(
        fs.move(args[0], args[1]),
        lambda r: f"Successfully moved {r.path} to {r.value}",
    )


def cmd_cp(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 2:
        return _usage("cp <source_path> <destination_path>")
    return _report(
        fs.copy(args[0], args[1]),
        lambda r: f"Successfully copied {r.path} to {r.value}",
    )


# =============================================================================
# Queries
# =============================================================================


def cmd_search(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("search <pattern>")
    return _report(fs.search(args[0]), lambda r: format_search(args[0], r.value))


def cmd_info(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("info <path>")
    return _report(fs.info(args[0]), lambda r: format_info(r.value))


def cmd_stats(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    return _report(fs.stats(), lambda r: format_stats(r.value))


# =============================================================================
# Persistence
# =============================================================================


def cmd_save(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    """Save to the given file, or to the configured default dump file."""
    if len(args) > 1:
        return _usage("save [filename]")
    return _report(
        fs.save(args[0] if args else None),
        lambda r: f"File system saved to: {r.path}",
    )


def cmd_load(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    if len(args) > 1:
        return _usage("load [filename]")
    return _report(fs.load(args[0] if args else None), lambda r: format_load(r.value))


# =============================================================================
# Command Dispatcher
# =============================================================================


def cmd_help(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    return CommandResult(HELP_TEXT)


def cmd_exit(fs: MemoryFileSystem, args: list[str]) -> CommandResult:
    return CommandResult(GOODBYE, exit_requested=True)


CommandHandler = Callable[[MemoryFileSystem, list[str]], CommandResult]

COMMANDS: dict[str, CommandHandler] = {
    "ls": cmd_ls,
    "cd": cmd_cd,
    "pwd": cmd_pwd,
    "create": cmd_create,
    "mkdir": cmd_mkdir,
    "write": cmd_write,
    "read": cmd_read,
    "delete": cmd_delete,
    "rmdir": cmd_rmdir,
    "mv": cmd_mv,
    "cp": cmd_cp,
    "search": cmd_search,
    "info": cmd_info,
    "stats": cmd_stats,
    "save": cmd_save,
    "load": cmd_load,
    "help": cmd_help,
    "exit": cmd_exit,
    "quit": cmd_exit,
}


def execute_command(fs: MemoryFileSystem, command: str) -> CommandResult:
    """Execute one shell command line against fs."""
    try:
        cmd_name, args = parse_command(command)
    except ValueError as e:
        return CommandResult(f"Error: {e}", error=True)

    handler = COMMANDS.get(cmd_name)
    if handler is None:
        return CommandResult(
            f"Unknown command: {cmd_name}. Type 'help' for available commands.",
            error=True,
        )

    try:
        return handler(fs, args)
    except Exception as e:
        logger.exception(f"Command {cmd_name!r} failed")
        return CommandResult(f"Error executing {cmd_name}: {e}", error=True)
