"""A large raster image kept on disk as PNG tiles, with one tile in memory."""

from __future__ import annotations

import math
import os
import shutil
from typing import Iterator

from PIL import Image

from .tilestore import (
    BACKGROUND,
    DEFAULT_MODE,
    DEFAULT_PART,
    MARKER_NAME,
    TileStore,
    tile_grid,
)

_RESAMPLE = Image.Resampling.NEAREST


class TiledImage:
    """An image of ``width`` by ``height`` pixels split into ``part``-sized tiles.

    Only the tile that was touched last is held in memory; it is written back
    to disk before another tile is loaded.
    """

    def __init__(
        self,
        root: str | os.PathLike,
        w: int = 0,
        h: int = 0,
        mode: str = DEFAULT_MODE,
        part: int = DEFAULT_PART,
        background: tuple[int, ...] = BACKGROUND,
    ) -> None:
        if part <= 0:
            raise ValueError("part must be positive")
        self._check_size(w, h)
        self.root = os.fspath(root)
        self.mode = mode
        self.part = part
        self.background = background
        self._store = TileStore(root, mode)
        self._w = 0
        self._h = 0
        self._current: Image.Image | None = None
        self._pos: tuple[int, int] | None = None
        self._dirty = False
        self._create_grid(w, h, background)

    # -- geometry ------------------------------------------------------

    @staticmethod
    def _check_size(w: int, h: int) -> None:
        if w < 0 or h < 0:
            raise ValueError("size must not be negative")

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def size(self) -> tuple[int, int]:
        return self._w, self._h

    def _grid(self, w: int, h: int) -> Iterator[tuple[int, int, int, int]]:
        """Yield (column, row, tile width, tile height) for an image of w by h."""
        if w == 0 or h == 0:
            return
        columns, rows, last_w, last_h = tile_grid(w, h, self.part)
        for i in range(columns):
            for j in range(rows):
                tw = last_w if i == columns - 1 else self.part
                th = last_h if j == rows - 1 else self.part
                yield i, j, tw, th

    def _blank(self, w: int, h: int, color: tuple[int, ...] | None = None) -> Image.Image:
        return Image.new(self.mode, (w, h), self.background if color is None else color)

    def _create_grid(self, w: int, h: int, color: tuple[int, ...]) -> None:
        for i, j, tw, th in self._grid(w, h):
            self._store.create(i, j, tw, th, color)
        self._w, self._h = w, h

    # -- the tile in memory --------------------------------------------

    def _flush(self) -> None:
        if self._dirty and self._current is not None and self._pos is not None:
            self._store.save(*self._pos, self._current)
        self._dirty = False

    def _forget(self) -> None:
        self._flush()
        self._current = None
        self._pos = None

    def _load(self, i: int, j: int) -> Image.Image:
        if self._pos == (i, j) and self._current is not None:
            return self._current
        self._flush()
        self._current = self._store.read(i, j)
        self._pos = (i, j)
        return self._current

    def _read(self, i: int, j: int) -> Image.Image:
        if self._pos == (i, j) and self._current is not None:
            return self._current
        return self._store.read(i, j)

    # -- drawing and reading -------------------------------------------

    def draw(self, x: int, y: int, color: tuple[int, ...]) -> None:
        """Set the pixel at (x, y) to ``color``."""
        if not (0 <= x < self._w and 0 <= y < self._h):
            raise IndexError(f"pixel ({x}, {y}) is outside {self._w}x{self._h}")
        i, j = x // self.part, y // self.part
        tile = self._load(i, j)
        tile.putpixel((x - i * self.part, y - j * self.part), color)
        self._dirty = True

    def image(self) -> Image.Image:
        """Assemble the whole image in memory."""
        self._flush()
        out = self._blank(self._w, self._h)
        for i, j, _, _ in self._grid(self._w, self._h):
            out.paste(self._read(i, j), (i * self.part, j * self.part))
        return out

    def set_image(self, image: Image.Image) -> None:
        """Replace the contents with ``image``, converted to this image's mode."""
        source = image if image.mode == self.mode else image.convert(self.mode)
        self.clear()
        w, h = source.size
        for i, j, tw, th in self._grid(w, h):
            x, y = i * self.part, j * self.part
            self._store.save(i, j, source.crop((x, y, x + tw, y + th)))
        self._w, self._h = w, h

    def crop(self, sx: int, sy: int, sw: int, sh: int, pw: int, ph: int) -> Image.Image:
        """Return the region at (sx, sy) of sw by sh pixels, scaled to pw by ph."""
        if min(sw, sh, pw, ph) <= 0:
            raise ValueError("region and output sizes must be positive")
        if sx < 0 or sy < 0 or sx + sw > self._w or sy + sh > self._h:
            raise ValueError(
                f"region ({sx}, {sy}, {sw}, {sh}) is outside {self._w}x{self._h}"
            )
        self._flush()
        region = self._blank(sw, sh)
        for i in range(sx // self.part, (sx + sw - 1) // self.part + 1):
            for j in range(sy // self.part, (sy + sh - 1) // self.part + 1):
                region.paste(self._read(i, j), (i * self.part - sx, j * self.part - sy))
        if (pw, ph) != (sw, sh):
            region = region.resize((pw, ph), _RESAMPLE)
        return region

    # -- whole-image operations ----------------------------------------

    def scale(self, w: int, h: int) -> None:
        """Resample the image to w by h pixels."""
        self._check_size(w, h)
        if not (self._w and self._h) or not (w and h):
            self.clear()
            self._create_grid(w, h, self.background)
            return
        self._flush()
        fx = self._w / w
        fy = self._h / h
        target = TileStore(self.root, self.mode)
        try:
            for i, j, tw, th in self._grid(w, h):
                x0, y0 = i * self.part, j * self.part
                left, top = x0 * fx, y0 * fy
                il, it = math.floor(left), math.floor(top)
                ir = min(self._w, max(il + 1, math.ceil((x0 + tw) * fx)))
                ib = min(self._h, max(it + 1, math.ceil((y0 + th) * fy)))
                right = min((x0 + tw) * fx, ir)
                bottom = min((y0 + th) * fy, ib)
                source = self.crop(il, it, ir - il, ib - it, ir - il, ib - it)
                tile = source.resize(
                    (tw, th), _RESAMPLE, box=(left - il, top - it, right - il, bottom - it)
                )
                target.save(i, j, tile)
        except BaseException:
            target.close()
            (self._store.root / MARKER_NAME).touch()
            raise
        self._store.close()
        (target.root / MARKER_NAME).touch()
        self._store = target
        self._current = None
        self._pos = None
        self._w, self._h = w, h

    def clear(self) -> None:
        """Delete every tile and set the size to zero."""
        self._current = None
        self._pos = None
        self._dirty = False
        for i, j, _, _ in self._grid(self._w, self._h):
            self._store.remove(i, j)
        self._w = self._h = 0

    def resize(self, w: int, h: int) -> None:
        """Change the canvas size, keeping the top-left content and padding with background."""
        self._check_size(w, h)
        self._forget()
        kept = set()
        for i, j, tw, th in self._grid(w, h):
            kept.add((i, j))
            if self._store.exists(i, j):
                tile = self._store.read(i, j)
                if tile.size != (tw, th):
                    canvas = self._blank(tw, th)
                    canvas.paste(tile, (0, 0))
                    self._store.save(i, j, canvas)
            else:
                self._store.create(i, j, tw, th, self.background)
        for i, j, _, _ in self._grid(self._w, self._h):
            if (i, j) not in kept:
                self._store.remove(i, j)
        self._w, self._h = w, h

    def fill(self, color: tuple[int, ...] | None = None) -> None:
        """Fill the whole image with ``color``, or the background if None."""
        self._forget()
        fill_color = self.background if color is None else color
        for i, j, tw, th in self._grid(self._w, self._h):
            self._store.create(i, j, tw, th, fill_color)

    def copy_from(self, other: "TiledImage") -> None:
        """Make this image a copy of ``other``."""
        if other is self:
            return
        other._flush()
        self.clear()
        self.mode = other.mode
        self._store.mode = other.mode
        if other.part == self.part:
            for i, j, _, _ in other._grid(other._w, other._h):
                shutil.copyfile(other._store.path(i, j), self._store.path(i, j))
            self._w, self._h = other._w, other._h
        else:
            self.set_image(other.image())

    def close(self) -> None:
        """Delete the tiles from disk."""
        self._current = None
        self._pos = None
        self._dirty = False
        self._store.close()

    def __enter__(self) -> "TiledImage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()