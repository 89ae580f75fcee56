"""
Snapshot Codec

On-disk format (the "control log"):

    zlib( msgpack( ["control-log", VERSION, [region, ...]] ) )

where each region is

    [path, annotation, content, [start_row, start_col], [end_row, end_col]]

msgpack is length-prefixed and big-endian, so files are portable across
machines. Decompression and decoding fail with distinct errors.
"""

import os
import tempfile
import zlib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import msgpack

from code_control.errors import (
    SnapshotCompressionError,
    SnapshotDecodeError,
    SnapshotNotFoundError,
    SnapshotVersionError,
    SnapshotWriteError,
)
from code_control.models import AnnotatedRegion, Position
from code_control.observability import get_logger

logger = get_logger(__name__)

SNAPSHOT_MAGIC = "control-log"
SNAPSHOT_VERSION = 1
DEFAULT_COMPRESSION_LEVEL = 6


# ============================================================
# Encoding (msgpack stage)
# ============================================================


def _encode_position(position: Position) -> list[int]:
    return [position.row, position.column]


def encode_regions(regions: Sequence[AnnotatedRegion]) -> bytes:
    payload = [
        SNAPSHOT_MAGIC,
        SNAPSHOT_VERSION,
        [
            [
                region.path,
                region.annotation,
                region.content,
                _encode_position(region.start),
                _encode_position(region.end),
            ]
            for region in regions
        ],
    ]
    return msgpack.packb(payload, use_bin_type=True)


def _decode_position(value: Any, index: int, name: str) -> Position:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in value)
    ):
        raise SnapshotDecodeError(f"region {index}: malformed {name} position")
    return Position(value[0], value[1])


def _decode_region(value: Any, index: int) -> AnnotatedRegion:
    if not isinstance(value, (list, tuple)) or len(value) != 5:
        raise SnapshotDecodeError(f"region {index}: expected 5 fields")

    path, annotation, content, start, end = value
    if not all(isinstance(v, str) for v in (path, annotation, content)):
        raise SnapshotDecodeError(f"region {index}: path, annotation and content must be strings")

    return AnnotatedRegion(
        path=path,
        annotation=annotation,
        content=content,
        start=_decode_position(start, index, "start"),
        end=_decode_position(end, index, "end"),
    )


def decode_regions(data: bytes) -> list[AnnotatedRegion]:
    """
    Decode a msgpack snapshot payload.

    Raises:
        SnapshotDecodeError: Payload is not a well-formed snapshot
        SnapshotVersionError: Payload was written by an unknown format version
    """
    try:
        payload = msgpack.unpackb(data, raw=False)
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        raise SnapshotDecodeError(str(e) or type(e).__name__) from e

    if not isinstance(payload, (list, tuple)) or len(payload) != 3 or payload[0] != SNAPSHOT_MAGIC:
        raise SnapshotDecodeError("not a control log")

    _, version, regions = payload
    if version != SNAPSHOT_VERSION:
        raise SnapshotVersionError(version, SNAPSHOT_VERSION)

    if not isinstance(regions, (list, tuple)):
        raise SnapshotDecodeError("region list missing")

    return [_decode_region(region, index) for index, region in enumerate(regions)]


# ============================================================
# Compression (zlib stage)
# ============================================================


def dump_snapshot(regions: Sequence[AnnotatedRegion], level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    return zlib.compress(encode_regions(regions), level)


def load_snapshot(data: bytes) -> list[AnnotatedRegion]:
    """
    Decompress then decode a snapshot.

    Raises:
        SnapshotCompressionError: Bytes are not a zlib stream
        SnapshotDecodeError: Decompressed payload is malformed
    """
    try:
        payload = zlib.decompress(data)
    except zlib.error as e:
        raise SnapshotCompressionError(str(e)) from e

    return decode_regions(payload)


# ============================================================
# File I/O
# ============================================================


def write_snapshot(
    path: str | Path,
    regions: Sequence[AnnotatedRegion],
    level: int = DEFAULT_COMPRESSION_LEVEL,
) -> int:
    """
    Write regions to a snapshot file.

    The file is replaced atomically; a failed write leaves any previous
    snapshot untouched.

    Returns:
        Number of bytes written
    """
    path = Path(path)
    data = dump_snapshot(regions, level)
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)

            os.replace(tmp_path, path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise
    except OSError as e:
        raise SnapshotWriteError(str(path), str(e)) from e

    logger.info("snapshot_written", path=str(path), regions=len(regions), size=len(data))
    return len(data)


def read_snapshot(path: str | Path) -> list[AnnotatedRegion]:
    """
    Read a snapshot file.

    Raises:
        SnapshotNotFoundError: File missing or unreadable
        SnapshotCompressionError / SnapshotDecodeError: Corrupt content
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SnapshotNotFoundError(str(path), e.strerror or str(e)) from e

    regions = load_snapshot(data)
    logger.debug("snapshot_read", path=str(path), regions=len(regions))
    return regions
