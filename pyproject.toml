[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "auplot"
version = "0.1.0"
description = "Short-time audio analysis of PCM WAV files: spectra, energy, zero-crossing rate, pitch, cache file layout and tiled images"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["audio", "wav", "fft", "spectrum", "zero-crossing", "pitch", "speech analysis", "tiles"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["auplot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
