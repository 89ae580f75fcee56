"""
Snapshot Layer

Persistence and comparison of region snapshots.
"""

from code_control.snapshot.codec import (
    SNAPSHOT_MAGIC,
    SNAPSHOT_VERSION,
    decode_regions,
    dump_snapshot,
    encode_regions,
    load_snapshot,
    read_snapshot,
    write_snapshot,
)
from code_control.snapshot.differ import common_regions, diff_regions

__all__ = [
    "SNAPSHOT_MAGIC",
    "SNAPSHOT_VERSION",
    "common_regions",
    "decode_regions",
    "diff_regions",
    "dump_snapshot",
    "encode_regions",
    "load_snapshot",
    "read_snapshot",
    "write_snapshot",
]
