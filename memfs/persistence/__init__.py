"""
Persistence

Flat textual dump of the whole store, one record per entry.

Modules:
    codec: Record encoding plus locked, atomic save/load

Design Principles:
    - Human-readable: one "|"-separated line per entry
    - Loading replaces the store; malformed lines are skipped, not fatal
    - A FileLock next to the dump guards concurrent save/load
"""

from memfs.persistence.codec import (
    RecordFormatError,
    decode_record,
    encode_record,
    load_store,
    save_store,
)

__all__ = [
    "RecordFormatError",
    "decode_record",
    "encode_record",
    "load_store",
    "save_store",
]
