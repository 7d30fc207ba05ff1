"""Header-only inspection of PCM wave files."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .wavefile import (
    DEFAULT_BITS_PER_SAMPLE,
    DEFAULT_SAMPLE_RATE,
    WaveError,
    WaveHeader,
    check_wave_file,
    parse_header,
)

DEFAULT_MAX_LENGTH = 20 * DEFAULT_SAMPLE_RATE


@dataclass(frozen=True)
class WaveInfo:
    """The header fields of a wave file and the number of sample frames it announces."""

    riff_size: int
    format_size: int
    format_tag: int
    channels: int
    samples_per_sec: int
    avg_bytes_per_sec: int
    block_align: int
    bits_per_sample: int
    data_size: int
    data_length: int

    @classmethod
    def from_header(cls, header: WaveHeader) -> "WaveInfo":
        return cls(
            riff_size=header.riff_size,
            format_size=header.format_size,
            format_tag=header.format_tag,
            channels=header.channels,
            samples_per_sec=header.samples_per_sec,
            avg_bytes_per_sec=header.avg_bytes_per_sec,
            block_align=header.block_align,
            bits_per_sample=header.bits_per_sample,
            data_size=header.data_size,
            data_length=header.data_length,
        )

    @property
    def duration(self) -> float:
        """Length of the announced data in seconds."""
        if not self.samples_per_sec:
            return 0.0
        return self.data_length / self.samples_per_sec


def read_info(path: str | os.PathLike) -> WaveInfo:
    """Read the header of a wave file without decoding its samples."""
    if not os.fspath(path):
        raise WaveError("no file name given")
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise WaveError(f"cannot open {os.fspath(path)!r}: {exc}") from exc
    with stream:
        return WaveInfo.from_header(parse_header(stream))


def check_wave(
    path: str | os.PathLike,
    channels: int = 1,
    samples_per_sec: int = DEFAULT_SAMPLE_RATE,
    bits_per_sample: int = DEFAULT_BITS_PER_SAMPLE,
    min_length: int = 0,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> bool:
    """Return True if the file matches the format and its length lies in the limits."""
    return check_wave_file(
        path,
        channels=channels,
        samples_per_sec=samples_per_sec,
        bits_per_sample=bits_per_sample,
        min_length=min_length,
        max_length=max_length,
    )