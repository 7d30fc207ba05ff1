"""Short-time audio analysis of PCM WAV files, with cache file layouts and tiled on-disk images."""

__version__ = "0.1.0"