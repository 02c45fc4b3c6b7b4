#!/usr/bin/env python3
"""
raster.py

In-memory RGBA8 bitmap shared by every filter:
- width / height in pixels
- flat row-major pixel buffer, top-left origin
- each pixel an (r, g, b, a) tuple of 0..255 ints
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

RGBA = Tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)


def clip8(x) -> int:
    """Clamp to 0..255 and truncate toward zero."""
    return int(max(0, min(255, x)))


@dataclass
class RasterImage:
    width: int
    height: int
    pixels: List[RGBA] = field(repr=False)

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Raster dimensions must be positive, got {self.width}x{self.height}")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Pixel buffer holds {len(self.pixels)} pixels, "
                f"expected {self.width * self.height} for {self.width}x{self.height}"
            )

    @classmethod
    def solid(cls, width: int, height: int, color: RGBA) -> "RasterImage":
        return cls(width, height, [tuple(color)] * (width * height))

    @classmethod
    def from_rows(cls, rows: List[List[RGBA]]) -> "RasterImage":
        height = len(rows)
        width = len(rows[0]) if height else 0
        return cls(width, height, [tuple(px) for row in rows for px in row])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> RGBA:
        return self.pixels[y * self.width + x]

    def rows(self) -> Iterator[List[RGBA]]:
        w = self.width
        for y in range(self.height):
            yield self.pixels[y * w:(y + 1) * w]

