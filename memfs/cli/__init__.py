"""
Command-Line Interface

CLI commands for MemFS.

Commands:
    memfs shell    - Interactive file system shell
    memfs exec     - Run command lines non-interactively
    memfs inspect  - Summarize a dump file

Usage:
    # Start a shell, restoring a previous session
    memfs shell --load session.dump

    # Script a few commands and save the result
    memfs exec "mkdir /docs" "write /docs/a.txt 'hello'" --save session.dump

    # Look inside a dump without opening a shell
    memfs inspect session.dump
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text

from memfs import __version__
from memfs.api.filesystem import MemoryFileSystem
from memfs.config import FSConfig
from memfs.persistence.codec import format_date
from memfs.shell.commands import GOODBYE, CommandResult, execute_command
from memfs.shell.formatters import format_error, format_load

__all__ = ["main", "app"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = typer.Typer(
    name="memfs",
    help="In-memory hierarchical file system with an interactive shell",
    no_args_is_help=True,
)
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    # Only our modules follow the configured level
    logging.getLogger("memfs").setLevel(level.upper())


def _load_config(config_file: Optional[Path], verbose: bool) -> FSConfig:
    try:
        config = FSConfig.from_file(config_file) if config_file else FSConfig()
    except ValueError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise typer.Exit(code=2) from e
    _configure_logging("DEBUG" if verbose else config.log_level)
    return config


def _emit(result: CommandResult) -> None:
    """Print command output verbatim; errors go to stderr."""
    if result.output:
        typer.echo(result.output, err=result.error)


def _preload(fs: MemoryFileSystem, dump: Optional[Path]) -> None:
    if dump is None:
        return
    result = fs.load(dump)
    if not result.ok:
        typer.echo(format_error(result), err=True)
        raise typer.Exit(code=1)
    typer.echo(format_load(result.value))


@app.command()
def shell(
    load: Optional[Path] = typer.Option(
        None,
        "--load", "-l",
        help="Dump file to load before the first prompt",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Start the interactive shell."""
    config = _load_config(config_file, verbose)

    with MemoryFileSystem(config=config) as fs:
        _preload(fs, load)

        console.print(f"[bold]Memory File System v{__version__}[/]")
        console.print("Type 'help' for available commands, 'exit' to quit.")

        while True:
            try:
                line = console.input(Text(f"{fs.cwd}{config.prompt_suffix}"))
            except EOFError:
                console.print()
                console.print(GOODBYE)
                break
            except KeyboardInterrupt:
                console.print()
                continue

            if not line.strip():
                continue

            result = execute_command(fs, line)
            _emit(result)
            if result.exit_requested:
                break


@app.command("exec")
def exec_commands(
    commands: List[str] = typer.Argument(
        ...,
        help="Command lines, one per argument (quote each)",
    ),
    load: Optional[Path] = typer.Option(
        None,
        "--load", "-l",
        help="Dump file to load first",
    ),
    save: Optional[Path] = typer.Option(
        None,
        "--save", "-s",
        help="Dump file to save to after the last command",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Run command lines in order; exits 1 if any of them failed."""
    config = _load_config(config_file, verbose)
    failed = False

    with MemoryFileSystem(config=config) as fs:
        _preload(fs, load)

        for line in commands:
            if not line.strip():
                continue
            result = execute_command(fs, line)
            _emit(result)
            failed = failed or result.error
            if result.exit_requested:
                break

        if save is not None:
            saved = fs.save(save)
            if saved.ok:
                typer.echo(f"File system saved to: {saved.path}")
            else:
                typer.echo(format_error(saved), err=True)
                failed = True

    if failed:
        raise typer.Exit(code=1)


@app.command()
def inspect(
    dump: Path = typer.Argument(
        ...,
        help="Dump file to summarize",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Display the statistics and entries of a dump file."""
    _configure_logging("WARNING")

    with MemoryFileSystem() as fs:
        loaded = fs.load(dump)
        if not loaded.ok:
            err_console.print(Text(f"Error: {loaded.message}", style="red"))
            raise typer.Exit(code=1)

        stats = fs.stats().unwrap()
        report = loaded.value

        summary = Table(title=f"Dump: {dump}")
        summary.add_column("Metric", style="cyan")
        summary.add_column("Count", justify="right", style="green")
        summary.add_row("Entries", str(stats.total_entries))
        summary.add_row("Files", str(stats.files))
        summary.add_row("Directories", str(stats.directories))
        summary.add_row("Total File Size", f"{stats.total_size} bytes")
        summary.add_row("Skipped Records", str(report.skipped))
        summary.add_row("Repaired Directories", str(report.repaired))
        console.print(summary)

        entries = Table(title="Entries")
        entries.add_column("Type", style="cyan")
        entries.add_column("Path")
        entries.add_column("Size", justify="right")
        entries.add_column("Created")
        entries.add_column("Modified")
        for path, entry in sorted(fs.snapshot().items()):
            entries.add_row(
                entry.kind.label,
                Text(path),
                str(entry.size),
                format_date(entry.created_at),
                format_date(entry.modified_at),
            )
        console.print(entries)


def main() -> None:
    """Entry point for the CLI."""
    load_dotenv()
    app()
