r"""
Dump Codec

Serializes the whole entry store to a line-oriented text file and back.

Format:
    # Memory File System Dump - 18/10/2026
    # Format: <type>|<path>|<size>|<created>|<modified>|<data>
    DIR|/|0|18/10/2026|18/10/2026|
    DIR|/docs|0|18/10/2026|18/10/2026|
    FILE|/docs/readme.txt|5|18/10/2026|18/10/2026|hello

<data> is the rest of the line and may itself contain "|". Backslash,
newline, and carriage return inside <data> are escaped as \\, \n and \r
so each record stays on one line.

The escaping makes dumps differ from the unescaped layout older dumps
use. Content holding a backslash (C:\dir) is written as C:\\dir, and an
older dump whose data contains a literal backslash-n reads back as a
newline. Such dumps load, but their contents may change.

The codec talks to the EntryStore directly: stored paths are already
canonical, so no path resolution against a working directory happens here.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Iterator
from datetime import date, datetime
from pathlib import Path

from filelock import FileLock, Timeout

from memfs.errors import PersistenceError
from memfs.shell.path_resolver import ROOT, ancestors, depth, normalize
from memfs.storage.base import EntryStore
from memfs.types import Entry, EntryKind, LoadReport

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
FIELD_SEPARATOR = "|"
FORMAT_LINE = "# Format: <type>|<path>|<size>|<created>|<modified>|<data>"
ENCODING = "utf-8"
# surrogateescape lets arbitrary (non-UTF-8) file bytes survive a round trip
ENCODING_ERRORS = "surrogateescape"

_KIND_BY_LABEL = {kind.label: kind for kind in EntryKind}
_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


class RecordFormatError(ValueError):
    """A dump line that cannot be turned into an entry."""


# -----------------------------------------------------------------------------
# Field Encoding
# -----------------------------------------------------------------------------


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def escape_data(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape_data(text: str) -> str:
    """Reverse escape_data. Unknown escapes are kept verbatim."""
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text) and text[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[text[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


def encode_record(path: str, entry: Entry) -> str:
    """Format one entry as a dump line (without the trailing newline)."""
    data = ""
    if entry.is_file:
        data = escape_data(entry.content.decode(ENCODING, errors=ENCODING_ERRORS))
    return FIELD_SEPARATOR.join([
        entry.kind.label,
        path,
        str(entry.size),
        format_date(entry.created_at),
        format_date(entry.modified_at),
        data,
    ])


def decode_record(line: str) -> tuple[str, Entry]:
    """
    Parse one dump line into (canonical path, entry).

    Raises:
        RecordFormatError: fewer than five leading fields, unknown type,
            bad size or date, or a relative path
    """
    fields = line.split(FIELD_SEPARATOR, 5)
    if len(fields) < 5:
        raise RecordFormatError(f"expected at least 5 fields, found {len(fields)}")

    label, path, size_text, created_text, modified_text = fields[:5]
    data = fields[5] if len(fields) == 6 else ""

    kind = _KIND_BY_LABEL.get(label)
    if kind is None:
        raise RecordFormatError(f"unknown entry type {label!r}")
    if not path.startswith(ROOT):
        raise RecordFormatError(f"path is not absolute: {path!r}")
    try:
        declared_size = int(size_text)
        created_at = parse_date(created_text)
        modified_at = parse_date(modified_text)
    except ValueError as e:
        raise RecordFormatError(str(e)) from e

    canonical = normalize(path)
    if canonical != path:
        logger.warning(f"Dump path {path!r} is not canonical, loading it as {canonical!r}")

    content = b""
    if kind is EntryKind.FILE:
        content = unescape_data(data).encode(ENCODING, errors=ENCODING_ERRORS)
    elif data:
        logger.warning(f"Ignoring data on directory record {canonical}")

    entry = Entry(kind=kind, content=content, created_at=created_at, modified_at=modified_at)
    if declared_size != entry.size:
        logger.warning(
            f"Size mismatch for {canonical}: dump says {declared_size}, data is {entry.size} bytes"
        )
    return canonical, entry


def dump_lines(store: EntryStore, dump_date: date) -> Iterator[str]:
    """Yield the header and one record per entry, sorted by path."""
    yield f"# Memory File System Dump - {format_date(dump_date)}"
    yield FORMAT_LINE
    for path, entry in sorted(store.items(), key=lambda item: item[0]):
        yield encode_record(path, entry)


# -----------------------------------------------------------------------------
# Files
# -----------------------------------------------------------------------------


def _lock_for(path: Path, timeout: float) -> FileLock:
    return FileLock(f"{path}.lock", timeout=timeout)


def save_store(
    store: EntryStore,
    target: str | Path,
    *,
    dump_date: date,
    lock_timeout: float = 30.0,
) -> int:
    """
    Write the store to target, replacing it atomically.

    Returns:
        Number of records written

    Raises:
        PersistenceError: the file or its lock cannot be written
    """
    target = Path(target)
    count = 0
    try:
        with _lock_for(target, lock_timeout):
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", dir=target.parent
            )
            try:
                with os.fdopen(fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS) as f:
                    for line in dump_lines(store, dump_date):
                        f.write(line + "\n")
                        count += 1
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
    except Timeout as e:
        raise PersistenceError(str(target), f"{target}: dump file is locked by another process") from e
    except OSError as e:
        raise PersistenceError(str(target), f"{target}: could not open file for writing ({e})") from e

    records = count - 2
    logger.info(f"Saved {records} entries to {target}")
    return records


def load_store(
    store: EntryStore,
    source: str | Path,
    *,
    today: Callable[[], date] = date.today,
    lock_timeout: float = 30.0,
) -> LoadReport:
    """
    Replace the store's contents with the records in source.

    The file is read completely before the store is cleared, so an
    unreadable file leaves the current contents untouched. Records are
    inserted shallowest-first; ancestors missing from the dump are created
    as directories.

    Raises:
        PersistenceError: the file cannot be read
    """
    source = Path(source)
    try:
        with _lock_for(source, lock_timeout):
            with open(source, encoding=ENCODING, errors=ENCODING_ERRORS) as f:
                lines = f.read().split("\n")
    except Timeout as e:
        raise PersistenceError(str(source), f"{source}: dump file is locked by another process") from e
    except OSError as e:
        raise PersistenceError(str(source), f"{source}: could not open file for reading ({e})") from e

    report = LoadReport(source=str(source))
    records: dict[str, Entry] = {}
    for line_number, line in enumerate(lines, 1):
        if not line or line.startswith("#"):
            continue
        try:
            path, entry = decode_record(line)
        except RecordFormatError as e:
            logger.warning(f"Invalid format at line {line_number} of {source}, skipping: {e}")
            report.skipped += 1
            continue
        records[path] = entry

    store.clear()
    for path in sorted(records, key=depth):
        entry = records[path]
        if path == ROOT:
            if entry.is_directory:
                store.reset_root(entry)
                report.loaded += 1
            else:
                logger.warning(f"Root record in {source} is not a directory, skipping")
                report.skipped += 1
            continue

        if not _ensure_loaded_ancestors(store, path, today, report):
            logger.warning(f"Ancestor of {path} is a file, skipping record")
            report.skipped += 1
            continue

        store.insert(path, entry)
        report.loaded += 1

    logger.info(
        f"Loaded {report.loaded} entries from {source} "
        f"({report.skipped} skipped, {report.repaired} repaired)"
    )
    return report


def _ensure_loaded_ancestors(
    store: EntryStore,
    path: str,
    today: Callable[[], date],
    report: LoadReport,
) -> bool:
    """Create ancestors a dump left out. False if one of them is a file."""
    for ancestor in reversed(ancestors(path)):
        if not store.exists(ancestor):
            logger.warning(f"Dump is missing directory {ancestor}, creating it")
            store.insert(ancestor, Entry.new_directory(today()))
            report.repaired += 1
        elif not store.get(ancestor).is_directory:
            return False
    return True
