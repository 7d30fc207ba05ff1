"""Framing of a waveform for short-time analysis and spectrogram colouring."""

from __future__ import annotations

import math
from typing import Iterator, Sequence


def _hop(step: int, times: int) -> int:
    if step <= 0 or times <= 0:
        raise ValueError("step and times must be positive")
    hop = step // times
    if hop == 0:
        raise ValueError("step must be at least times")
    return hop


def frame_count(length: int, step: int, times: int) -> int:
    """Number of frames of ``step`` samples, advancing by ``step // times``."""
    hop = _hop(step, times)
    span = length - step
    # Integer division truncating towards zero.
    quotient = abs(span) // hop
    count = (quotient if span >= 0 else -quotient) + 1
    if count < 0:
        raise ValueError(f"{length} samples are too few for frames of {step}")
    return count


def frames(samples: Sequence[float], step: int, times: int) -> Iterator[list[float]]:
    """Yield the overlapping analysis frames of ``samples``."""
    for i in range(frame_count(len(samples), step, times)):
        start = i * step // times
        frame = list(samples[start : start + step])
        if len(frame) < step:
            raise ValueError(f"frame {i} runs past the end of the samples")
        yield frame


def spectrum_color(value: float, min_bound: float, max_bound: float) -> tuple[int, int, int]:
    """Map ``value`` onto the black-blue-red-yellow-white spectrogram palette."""
    numerator = value - min_bound
    denominator = max_bound - min_bound
    if denominator:
        v = numerator / denominator
    elif numerator == 0 or math.isnan(numerator):
        v = math.nan
    else:
        v = math.copysign(math.inf, numerator)

    red = green = blue = 0
    if 0 <= v < 0.25:
        blue = int(v / 0.25 * 255)
    elif 0.25 <= v < 0.5:
        blue = int((0.5 - v) / 0.25 * 255)
        red = int((v - 0.25) / 0.25 * 255)
    elif 0.5 <= v < 0.75:
        red = 255
        green = int((v - 0.5) / 0.25 * 255)
    elif 0.75 <= v < 1:
        red = 255
        green = 255
        blue = int((v - 0.75) / 0.25 * 255)
    elif v >= 1:
        red = green = blue = 255
    return red, green, blue