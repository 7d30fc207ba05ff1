# auplot

Short-time analysis of mono and stereo PCM WAV files.

## Modules

### `auplot.dsp`

Signal primitives. Every function takes plain sequences of numbers and returns new lists. Nothing is modified in place.

- `fft` and `ifft` are radix-2 transforms. They return `(real, imag)` lists. The input length must be a power of two; any other length raises `ValueError`. `ifft` scales its result by `1/n`.
- Spectra:
  - `magnitude_spectrum` gives a single-sided amplitude spectrum of the first `n/2` bins.
  - `phase_spectrum` gives `tanh(imag/real)` for each bin.
  - `log_spectrum` gives the magnitudes in decibels.
  - `log_spectrum_relative` gives decibels relative to the DC bin.
- `hanning` applies the Hann weighting to a frame.
- `acf` computes the normalised autocorrelation. Its default cut is 0.3 of the frame length.
- Pitch estimates from the autocorrelation:
  - `pitch` uses the last rising point above a threshold, 0.2 by default.
  - `pitch_peak` uses the highest value after the first trough.
  - Both return 0 for empty input and infinity when no lag qualifies.
- `mean_energy` gives the mean absolute amplitude.
- `zero_crossing_rate` gives the fraction of neighbouring samples whose positivity differs.
- `spectral_peaks` gives the frequencies of the first four local maxima of a spectrum. Slots that are not used stay 0.
- `is_power_of_two` tests a length.

### `auplot.analysis`

- `frame_count` and `frames` split a signal into frames of `step` samples. Each frame starts `step // times` samples after the one before it.
- `spectrum_color` maps a value between two bounds onto an RGB triple on a black–blue–red–yellow–white scale.

### `auplot.wavefile`

- `read_wave` reads 8- and 16-bit PCM files with one or two channels into a `Wave`.
  - `Wave.left` and `Wave.right` hold samples normalised by 127 or 32767.
  - `Wave.header` holds the parsed `WaveHeader`.
- `Wave.write` writes the samples back as a PCM file and clamps them to the sample range.
- `Wave.clear` drops the sample data.
- `parse_header` reads and validates a header from a binary stream.
- `WaveError` is raised for malformed or unsupported files.
- `check_wave_file` checks a file's channel count, sample rate, sample width and length. It returns `False` on any mismatch or read error.

### `auplot.waveinfo`

- `read_info` reads only the header into a frozen `WaveInfo`. A `WaveInfo` includes `data_length` and `duration`.
- `check_wave` works like `check_wave_file`. Its default maximum length is 20 seconds at 44.1 kHz.

### `auplot.cache_format`

These functions read and write the binary layout of stored analysis results. Every file starts with a signed 32-bit little-endian record count.

- `write_doubles` and `read_doubles` handle lists of floats.
- `write_matrix` and `read_matrix` handle rows of a fixed width.
- `write_flags` and `read_flags` handle booleans stored as one byte each.

### `auplot.tilestore` and `auplot.tiles`

`TiledImage` is a large raster image kept on disk as PNG tiles. Only the tile touched last is held in memory. It has these methods:

- `draw` sets a pixel. It raises `IndexError` outside the image.
- `image` assembles the whole image.
- `set_image` replaces the contents.
- `crop` cuts out a region and scales it.
- `scale` resamples the image.
- `resize` changes the canvas size, keeps the top-left content and pads with the background.
- `fill` fills the image with one colour.
- `clear` deletes the tiles and sets the size to zero.
- `copy_from` copies another tiled image.
- `close` deletes the tiles.

`TileStore` manages the tile files in a numbered directory of their own. `tile_grid` computes the tile layout.

## What it does not do

- The package has no directory-backed cache that maps analysed files to their stored results. It also does not use MD5 digests to notice changed files. `auplot.cache_format` only reads and writes the individual result files; where to keep them is up to the caller.
- It has no command-line program and no plotting window.

## Installation

```
pip install .
```

## Example

```python
from auplot.wavefile import read_wave
from auplot.analysis import frames
from auplot.cache_format import write_doubles, read_doubles
from auplot import dsp

wave = read_wave("speech.wav")
energies = []
for frame in frames(wave.left, 1024, 4):
    energies.append(dsp.mean_energy(frame))
    zcr = dsp.zero_crossing_rate(frame)
    spectrum = dsp.magnitude_spectrum(frame)

write_doubles("speech_ene.bin", energies)
assert read_doubles("speech_ene.bin") == energies
```

Keep a large spectrogram on disk:

```python
from auplot.tiles import TiledImage

with TiledImage("tile-dir", 3000, 512) as picture:
    picture.draw(10, 20, (255, 0, 0))
    preview = picture.crop(0, 0, 3000, 512, 600, 100)
```

## Tests

```
pip install .[test]
pytest
```