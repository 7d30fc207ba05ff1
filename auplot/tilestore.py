"""A private directory of PNG tiles that together hold one large image."""

from __future__ import annotations

import math
import os
import shutil
from pathlib import Path

from PIL import Image

MARKER_NAME = "tile-cache-do-not-edit"
DEFAULT_PART = 1000
DEFAULT_MODE = "RGB"
BACKGROUND = (0, 0, 0)


def tile_grid(w: int, h: int, part: int = DEFAULT_PART) -> tuple[int, int, int, int]:
    """Return (columns, rows, width of the last column, height of the last row)."""
    if part <= 0:
        raise ValueError("part must be positive")
    if w < 0 or h < 0:
        raise ValueError("size must not be negative")
    columns = max(1, math.ceil(w / part))
    rows = max(1, math.ceil(h / part))
    return columns, rows, w - (columns - 1) * part, h - (rows - 1) * part


class TileStore:
    """Tiles ``<x>_<y>.png`` kept in a numbered directory of its own below ``root``.

    The lowest number not yet taken by another store is used. Closing the store
    deletes its directory and the marker file in ``root``.
    """

    def __init__(self, root: str | os.PathLike, mode: str = DEFAULT_MODE) -> None:
        self.root = Path(root)
        self.mode = mode
        self.root.mkdir(parents=True, exist_ok=True)
        self.id = self._claim_id()
        self.directory = self.root / str(self.id)
        (self.root / MARKER_NAME).touch()
        self._closed = False

    def _claim_id(self) -> int:
        num = 0
        while True:
            try:
                (self.root / str(num)).mkdir()
            except FileExistsError:
                num += 1
                continue
            return num

    def path(self, x: int, y: int) -> Path:
        """Path of the tile in column ``x``, row ``y``."""
        return self.directory / f"{x}_{y}.png"

    def exists(self, x: int, y: int) -> bool:
        return self.path(x, y).is_file()

    def read(self, x: int, y: int) -> Image.Image:
        """Load a tile; raises FileNotFoundError if it is absent."""
        with Image.open(self.path(x, y)) as image:
            image.load()
            return image.copy()

    def save(self, x: int, y: int, image: Image.Image) -> None:
        """Store ``image`` as a tile, replacing any existing one."""
        if image.width <= 0 or image.height <= 0:
            raise ValueError("a tile must have a positive size")
        image.save(self.path(x, y), "PNG")

    def create(
        self, x: int, y: int, w: int, h: int, color: tuple[int, ...] = BACKGROUND
    ) -> Image.Image:
        """Write a ``w`` by ``h`` tile filled with ``color`` and return it."""
        if w <= 0 or h <= 0:
            raise ValueError("a tile must have a positive size")
        image = Image.new(self.mode, (w, h), color)
        self.save(x, y, image)
        return image

    def remove(self, x: int, y: int) -> bool:
        """Delete a tile; return False if there was none."""
        try:
            self.path(x, y).unlink()
        except FileNotFoundError:
            return False
        return True

    def close(self) -> None:
        """Delete the store's directory and the marker file."""
        if self._closed:
            return
        self._closed = True
        shutil.rmtree(self.directory, ignore_errors=True)
        (self.root / MARKER_NAME).unlink(missing_ok=True)

    def __enter__(self) -> "TileStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()