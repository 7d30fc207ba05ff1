"""Binary layout of the analysis cache files.

Every file starts with a signed 32-bit little-endian count, followed by that
many records: 64-bit floats for value curves, rows of a fixed number of floats
for spectra, or single bytes for boolean flags.
"""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Iterable, Sequence

_COUNT = struct.Struct("<i")
_DOUBLE = struct.Struct("<d")

PathLike = str | os.PathLike


def _count_bytes(count: int) -> bytes:
    return _COUNT.pack(count)


def _split_count(raw: bytes) -> tuple[int, bytes]:
    if len(raw) < _COUNT.size:
        raise ValueError("cache file is too short to hold a record count")
    (count,) = _COUNT.unpack_from(raw)
    return max(count, 0), raw[_COUNT.size :]


def _pack_doubles(values: Iterable[float]) -> bytes:
    packed = [float(v) for v in values]
    return struct.pack(f"<{len(packed)}d", *packed)


def _unpack_doubles(body: bytes, count: int) -> list[float]:
    needed = count * _DOUBLE.size
    if len(body) < needed:
        raise ValueError(
            f"cache file holds {len(body)} bytes of data, {needed} expected"
        )
    return list(struct.unpack_from(f"<{count}d", body))


def write_doubles(path: PathLike, data: Sequence[float]) -> None:
    """Write a list of floats, replacing any existing file."""
    values = list(data)
    Path(path).write_bytes(_count_bytes(len(values)) + _pack_doubles(values))


def read_doubles(path: PathLike) -> list[float]:
    """Read a list of floats written by :func:`write_doubles`."""
    count, body = _split_count(Path(path).read_bytes())
    return _unpack_doubles(body, count)


def write_matrix(path: PathLike, rows: Sequence[Sequence[float]], width: int) -> None:
    """Write the first ``width`` values of every row, replacing any existing file."""
    if width < 0:
        raise ValueError("width must not be negative")
    rows = list(rows)
    parts = [_count_bytes(len(rows))]
    for number, row in enumerate(rows):
        values = list(row)
        if len(values) < width:
            raise ValueError(
                f"row {number} holds {len(values)} values, {width} needed"
            )
        parts.append(_pack_doubles(values[:width]))
    Path(path).write_bytes(b"".join(parts))


def read_matrix(path: PathLike, width: int) -> list[list[float]]:
    """Read rows of ``width`` floats written by :func:`write_matrix`."""
    if width < 0:
        raise ValueError("width must not be negative")
    count, body = _split_count(Path(path).read_bytes())
    values = _unpack_doubles(body, count * width)
    return [values[i * width : (i + 1) * width] for i in range(count)]


def write_flags(path: PathLike, data: Sequence[bool]) -> None:
    """Write booleans as one byte each, replacing any existing file."""
    flags = bytes(1 if flag else 0 for flag in data)
    Path(path).write_bytes(_count_bytes(len(flags)) + flags)


def read_flags(path: PathLike) -> list[bool]:
    """Read booleans written by :func:`write_flags`."""
    count, body = _split_count(Path(path).read_bytes())
    if len(body) < count:
        raise ValueError(f"cache file holds {len(body)} flags, {count} expected")
    return [byte != 0 for byte in body[:count]]