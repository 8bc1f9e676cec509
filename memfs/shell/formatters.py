"""
Output Formatting

Turns OpResult payloads into the plain text the shell prints. Kept apart
from the command handlers so the CLI and tests can reuse the exact strings.
"""

from __future__ import annotations

from memfs.persistence.codec import format_date
from memfs.types import (
    BatchResult,
    DirectoryListing,
    EntryInfo,
    EntryKind,
    FileSystemStats,
    LoadReport,
    OpResult,
    SearchHit,
)

LISTING_HEADER = "Type\tSize\tCreated\t\tLast Modified\tName"


def format_error(result: OpResult) -> str:
    return f"Error: {result.op}: {result.message}"


def format_listing(listing: DirectoryListing) -> str:
    if not listing.items:
        return f"No entries in directory: {listing.path}"

    if not listing.detailed:
        return "\n".join(
            item.name + ("/" if item.kind is EntryKind.DIRECTORY else "")
            for item in listing.items
        )

    lines = [LISTING_HEADER]
    for item in listing.items:
        lines.append("\t".join([
            item.kind.label,
            str(item.size),
            format_date(item.created_at),
            format_date(item.modified_at),
            item.name,
        ]))
    return "\n".join(lines)


def format_info(info: EntryInfo) -> str:
    lines = [
        f"Information for: {info.path}",
        f"Type: {info.kind.display_name}",
        f"Size: {info.size} bytes",
        f"Created: {format_date(info.created_at)}",
        f"Modified: {format_date(info.modified_at)}",
    ]
    if info.child_count is not None:
        lines.append(f"Direct children: {info.child_count}")
    return "\n".join(lines)


def format_stats(stats: FileSystemStats) -> str:
    return "\n".join([
        "System Statistics:",
        f"Total Entries: {stats.total_entries}",
        f"Files: {stats.files}",
        f"Directories: {stats.directories}",
        f"Total File Size: {stats.total_size} bytes",
    ])


def format_search(pattern: str, hits: list[SearchHit]) -> str:
    lines = [f"Search results for pattern: {pattern}"]
    if not hits:
        lines.append("No matching entries found.")
    for hit in hits:
        lines.append(f"{hit.kind.label}\t{hit.path}")
    return "\n".join(lines)


def format_content(path: str, content: bytes) -> str:
    # Undecodable bytes are shown as replacement characters, never dropped
    return f"Content of {path}: {content.decode('utf-8', errors='replace')}"


def format_batch(batch: BatchResult, success: str) -> str:
    """
    One line per item: the success template (formatted with path) or the error.

    Args:
        batch: Results in input order
        success: Template such as "File created successfully: {path}"
    """
    return "\n".join(
        success.format(path=r.path) if r.ok else format_error(r)
        for r in batch.results
    )


def format_batch_delete(batch: BatchResult) -> str:
    """Summary for multi-file delete, listing files that could not be removed."""
    if batch.ok:
        return "Files deleted successfully"

    lines = ["Some files were not found: " + " ".join(batch.failed_paths)]
    lines.extend(format_error(r) for r in batch.failed)
    if batch.succeeded_paths:
        lines.append("Remaining files deleted successfully")
    return "\n".join(lines)


def format_load(report: LoadReport) -> str:
    lines = [f"File system loaded from: {report.source}"]
    if report.skipped:
        lines.append(f"Warning: skipped {report.skipped} invalid record(s)")
    if report.repaired:
        lines.append(f"Warning: created {report.repaired} missing parent directories")
    return "\n".join(lines)
