"""Reading and writing of PCM RIFF/WAVE files with 8- or 16-bit samples."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_BITS_PER_SAMPLE = 16

_SCALE = {16: 32767, 8: 127}
_SAMPLE_FORMAT = {16: "<h", 8: "<b"}
_LIMITS = {16: (-32768, 32767), 8: (-128, 127)}
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


class WaveError(Exception):
    """Raised when a wave file cannot be read or written."""


@dataclass
class WaveHeader:
    """The fields of a canonical WAVE header."""

    riff_size: int
    format_size: int
    format_tag: int
    channels: int
    samples_per_sec: int
    avg_bytes_per_sec: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def data_length(self) -> int:
        """Number of sample frames announced by the data chunk."""
        return self.data_size // (self.bits_per_sample // 8) // self.channels


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise WaveError("unexpected end of file in header")
    return chunk


def _expect(stream: BinaryIO, tag: bytes) -> None:
    found = _read_exact(stream, 4)
    if found != tag:
        raise WaveError(f"expected {tag!r}, found {found!r}")


def parse_header(stream: BinaryIO) -> WaveHeader:
    """Read and validate a WAVE header, leaving ``stream`` at the sample data."""
    _expect(stream, b"RIFF")
    (riff_size,) = struct.unpack("<I", _read_exact(stream, 4))
    _expect(stream, b"WAVE")
    _expect(stream, b"fmt ")
    (
        format_size,
        format_tag,
        channels,
        samples_per_sec,
        avg_bytes_per_sec,
        block_align,
        bits_per_sample,
    ) = struct.unpack("<IHHIIHH", _read_exact(stream, 20))
    if format_size == 18:
        _read_exact(stream, 2)
    _expect(stream, b"data")
    (data_size,) = struct.unpack("<I", _read_exact(stream, 4))
    if bits_per_sample not in _SCALE:
        raise WaveError(f"unsupported sample width: {bits_per_sample} bits")
    if channels not in (1, 2):
        raise WaveError(f"unsupported channel count: {channels}")
    return WaveHeader(
        riff_size=riff_size,
        format_size=format_size,
        format_tag=format_tag,
        channels=channels,
        samples_per_sec=samples_per_sec,
        avg_bytes_per_sec=avg_bytes_per_sec,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def _read_samples(stream: BinaryIO, header: WaveHeader) -> tuple[list[float], list[float]]:
    bits = header.bits_per_sample
    width = bits // 8
    channels = header.channels
    # One frame beyond the announced length is read; missing data repeats
    # the last value that was read.
    total = (header.data_length + 1) * channels
    raw = stream.read(total * width)
    whole = len(raw) // width
    decoded = [v for (v,) in struct.iter_unpack(_SAMPLE_FORMAT[bits], raw[: whole * width])]
    fill = decoded[-1] if decoded else 0
    decoded.extend([fill] * (total - whole))
    scale = _SCALE[bits]
    scaled = [v / scale for v in decoded]
    if channels == 1:
        return scaled, []
    return scaled[0::2], scaled[1::2]


def _open_for_reading(path: str | os.PathLike) -> BinaryIO:
    if not os.fspath(path):
        raise WaveError("no file name given")
    try:
        return open(path, "rb")
    except OSError as exc:
        raise WaveError(f"cannot open {os.fspath(path)!r}: {exc}") from exc


@dataclass
class Wave:
    """Sample data of one or two channels, normalised to about [-1, 1]."""

    left: list[float] = field(default_factory=list)
    right: list[float] = field(default_factory=list)
    samples_per_sec: int = DEFAULT_SAMPLE_RATE
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE
    header: WaveHeader | None = None

    @property
    def channels(self) -> int:
        return 2 if self.right else 1

    def clear(self) -> None:
        """Drop all sample data."""
        self.left.clear()
        self.right.clear()

    def write(self, path: str | os.PathLike) -> None:
        """Write the samples as a PCM wave file, replacing any existing file."""
        if not os.fspath(path):
            raise WaveError("no file name given")
        bits = self.bits_per_sample
        if bits not in _SCALE:
            raise WaveError(f"unsupported sample width: {bits} bits")
        channels = self.channels
        if channels == 2 and len(self.right) != len(self.left):
            raise ValueError("left and right channels differ in length")

        width = bits // 8
        data_size = (len(self.left) + len(self.right)) * width
        header = WaveHeader(
            riff_size=data_size + 36,
            format_size=16,
            format_tag=1,
            channels=channels,
            samples_per_sec=self.samples_per_sec,
            avg_bytes_per_sec=(self.samples_per_sec * bits * channels) // 8,
            block_align=(bits * channels) // 8,
            bits_per_sample=bits,
            data_size=data_size,
        )

        if channels == 1:
            interleaved = list(self.left)
        else:
            interleaved = [v for pair in zip(self.left, self.right) for v in pair]
        scale = _SCALE[bits]
        low, high = _LIMITS[bits]
        codes = [min(high, max(low, int(v * scale))) for v in interleaved]
        sample_format = "<" + _SAMPLE_FORMAT[bits][1] * len(codes)

        head = _HEADER.pack(
            b"RIFF",
            header.riff_size,
            b"WAVE",
            b"fmt ",
            header.format_size,
            header.format_tag,
            header.channels,
            header.samples_per_sec,
            header.avg_bytes_per_sec,
            header.block_align,
            header.bits_per_sample,
            b"data",
            header.data_size,
        )
        try:
            with open(path, "wb") as out:
                out.write(head)
                out.write(struct.pack(sample_format, *codes))
        except OSError as exc:
            raise WaveError(f"cannot write {os.fspath(path)!r}: {exc}") from exc
        self.header = header


def read_wave(path: str | os.PathLike) -> Wave:
    """Read a wave file into a :class:`Wave`."""
    with _open_for_reading(path) as stream:
        header = parse_header(stream)
        left, right = _read_samples(stream, header)
    return Wave(
        left=left,
        right=right,
        samples_per_sec=header.samples_per_sec,
        bits_per_sample=header.bits_per_sample,
        header=header,
    )


def check_wave_file(
    path: str | os.PathLike,
    channels: int = 1,
    samples_per_sec: int = DEFAULT_SAMPLE_RATE,
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE,
    min_length: int = 0,
    max_length: int | None = None,
) -> bool:
    """Return True if the file's header matches the format and length limits."""
    try:
        with _open_for_reading(path) as stream:
            header = parse_header(stream)
    except WaveError:
        return False
    if (
        header.channels != channels
        or header.samples_per_sec != samples_per_sec
        or header.bits_per_sample != bits_per_sample
    ):
        return False
    length = header.data_length
    if length < min_length:
        return False
    return max_length is None or length <= max_length