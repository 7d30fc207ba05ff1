"""Signal-processing primitives used by the frame analysis.

All functions take plain sequences of numbers and return new lists; nothing
is modified in place.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_ACF_CUT = 0.3
DEFAULT_PITCH_THRESHOLD = 0.2


def _divide(numerator: float, denominator: float) -> float:
    """Divide following IEEE rules instead of raising on a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _decibels(value: float) -> float:
    if value > 0:
        return 20 * math.log10(value)
    if value == 0:
        return -math.inf
    return math.nan


def _frequency(lag: int, fs: int) -> float:
    if lag == 0:
        return math.inf
    return 1 / (lag / fs)


def _triples(values: Sequence[float]):
    """Yield (index, previous, current, next) for every interior point."""
    return (
        (i, prev, cur, nxt)
        for i, (prev, cur, nxt) in enumerate(zip(values, values[1:], values[2:]), start=1)
    )


def is_power_of_two(n: int) -> bool:
    """Return True if ``n`` is a positive power of two."""
    return n > 0 and n & (n - 1) == 0


def _require_power_of_two(n: int) -> None:
    if not is_power_of_two(n):
        raise ValueError(f"length {n} is not a power of two")


def acf(data: Iterable[float], acfcut: float = DEFAULT_ACF_CUT) -> list[float]:
    """Normalised short-time autocorrelation for the first ``len*acfcut`` lags."""
    values = [float(v) for v in data]
    n = len(values)
    k = int(n * acfcut)
    if k > n:
        raise ValueError("acfcut must not exceed 1")
    window = n - k
    e0 = sum(v * v for v in values[: window + 1])
    out = []
    for lag in range(k):
        sigma = sum(a * b for a, b in zip(values[:window], values[lag:]))
        energy = sum(v * v for v in values[lag : lag + window + 1])
        out.append(_divide(sigma, math.sqrt(e0 * energy)))
    return out


def pitch(
    data: Sequence[float],
    fs: int = DEFAULT_SAMPLE_RATE,
    cut: float = DEFAULT_PITCH_THRESHOLD,
) -> float:
    """Estimate the fundamental frequency from the last rising ACF point above ``cut``.

    Returns 0 for empty input and infinity when no lag qualifies.
    """
    if not data:
        return 0.0
    curve = acf(data)
    lag = 0
    past_trough = False
    for i, prev, cur, nxt in _triples(curve):
        if not past_trough:
            if cur < prev and cur <= nxt:
                past_trough = True
        elif cur > prev and cur <= nxt and cur > cut:
            lag = i
    return _frequency(lag, fs)


def pitch_peak(data: Sequence[float], fs: int = DEFAULT_SAMPLE_RATE) -> float:
    """Estimate the fundamental frequency from the highest ACF value after the first trough.

    Returns 0 for empty input and infinity when no peak is found.
    """
    if not data:
        return 0.0
    curve = acf(data)
    peak = 0.0
    trough = 0
    past_trough = False
    for i, prev, cur, nxt in _triples(curve):
        if not past_trough:
            if cur < prev and cur <= nxt:
                past_trough = True
                trough = i
        else:
            peak = max(peak, cur)
    lag = next(
        (i for i, value in enumerate(curve[trough:], start=trough) if value == peak),
        0,
    )
    return _frequency(lag, fs)


def mean_energy(data: Sequence[float]) -> float:
    """Mean absolute amplitude; 0 for empty input."""
    if not data:
        return 0.0
    return sum(abs(v) for v in data) / len(data)


def _positive(x: float) -> int:
    return 1 if x > 0 else 0


def zero_crossing_rate(data: Sequence[float]) -> float:
    """Fraction of neighbouring samples whose positivity differs; 0 for empty input."""
    if not data:
        return 0.0
    changes = sum(abs(_positive(a) - _positive(b)) for a, b in zip(data, data[1:]))
    return changes / len(data)


def _bit_reverse(index: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (index & 1)
        index >>= 1
    return result


def _transform(
    real: Sequence[float], imag: Sequence[float] | None, sign: float
) -> list[complex]:
    n = len(real)
    _require_power_of_two(n)
    imaginary = list(imag or [])[:n]
    imaginary += [0.0] * (n - len(imaginary))
    values = [complex(r, i) for r, i in zip(real, imaginary)]

    bits = n.bit_length() - 1
    values = [values[_bit_reverse(i, bits)] for i in range(n)]

    arg = sign * 2 * math.pi / n
    step = complex(math.cos(arg), math.sin(arg))
    twiddles = [complex(1.0, 0.0)]
    for _ in range(1, n // 2):
        twiddles.append(twiddles[-1] * step)

    m = 2
    while m <= n:
        half = m // 2
        for k in range(0, n, m):
            for j in range(half):
                t = twiddles[n * j // m] * values[k + j + half]
                u = values[k + j]
                values[k + j] = u + t
                values[k + j + half] = u - t
        m *= 2
    return values


def fft(
    real: Sequence[float], imag: Sequence[float] | None = None
) -> tuple[list[float], list[float]]:
    """Radix-2 forward FFT. Returns (real, imag); the length must be a power of two."""
    values = _transform(real, imag, -1.0)
    return [v.real for v in values], [v.imag for v in values]


def ifft(
    real: Sequence[float], imag: Sequence[float] | None = None
) -> tuple[list[float], list[float]]:
    """Radix-2 inverse FFT, scaled by 1/n. Returns (real, imag)."""
    values = _transform(real, imag, 1.0)
    n = len(values)
    return [v.real / n for v in values], [v.imag / n for v in values]


def magnitude_spectrum(data: Sequence[float]) -> list[float]:
    """Single-sided amplitude spectrum of the first n/2 bins."""
    n = len(data)
    _require_power_of_two(n)
    re, im = fft(data)
    out = []
    for i, (r, j) in enumerate(zip(re[: n // 2], im[: n // 2])):
        magnitude = math.sqrt(r * r + j * j)
        out.append(magnitude / n if i == 0 else magnitude * 2 / n)
    return out


def phase_spectrum(data: Sequence[float]) -> list[float]:
    """tanh(imag/real) of the first n/2 FFT bins."""
    n = len(data)
    _require_power_of_two(n)
    re, im = fft(data)
    return [math.tanh(_divide(j, r)) for r, j in zip(re[: n // 2], im[: n // 2])]


def log_spectrum(data: Sequence[float]) -> list[float]:
    """Magnitude spectrum in decibels."""
    return [_decibels(v) for v in magnitude_spectrum(data)]


def log_spectrum_relative(data: Sequence[float]) -> list[float]:
    """Magnitude spectrum in decibels relative to the DC bin."""
    magnitudes = magnitude_spectrum(data)
    if not magnitudes:
        return []
    base = magnitudes[0]
    return [_decibels(v - base) for v in magnitudes]


def _hann(n: int, size: int) -> float:
    return (1 + math.cos(2 * math.pi * _divide(n, size - 1))) / 2


def hanning(data: Sequence[float]) -> list[float]:
    """Apply the Hann weighting used by the analyser to ``data``."""
    size = len(data)
    return [
        float(v) * _hann(int(i + (size - 1) / 2), size) for i, v in enumerate(data)
    ]


def spectral_peaks(data: Sequence[float], fs: int, step: int) -> list[float]:
    """Frequencies of the first four local maxima of a spectrum of ``step`` points.

    Unused slots stay 0.
    """
    out = [0.0] * 4
    found = 0
    for i, prev, cur, nxt in _triples(data):
        if cur >= prev and nxt < cur:
            if found >= 4:
                break
            out[found] = i * (fs / step)
            found += 1
    return out