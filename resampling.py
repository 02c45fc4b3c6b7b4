#!/usr/bin/env python3
"""
resampling.py

Geometric resampling:
- resize_nearest: arbitrary target size, nearest neighbor (used by the load clamp)
- zoom_nearest / zoom_bilinear: fixed 2x upscaling
"""

import math
from typing import List, Tuple

from raster import RasterImage, clip8


def nearest_index(src_len: int, dst_len: int) -> List[int]:
    """Source index sampled for each of dst_len output positions."""
    return [i * src_len // dst_len for i in range(dst_len)]


def resize_nearest(image: RasterImage, width: int, height: int) -> RasterImage:
    w = image.width
    xs = nearest_index(w, width)
    out = []
    for sy in nearest_index(image.height, height):
        base = sy * w
        out.extend(image.pixels[base + sx] for sx in xs)
    return RasterImage(width, height, out)


def clamped_size(width: int, height: int, max_dim: int) -> Tuple[int, int]:
    """
    Size after bounding the longer side to max_dim, aspect ratio kept
    (shorter side truncated, never below 1).
    """
    longest = max(width, height)
    if longest <= max_dim:
        return width, height
    return max(1, width * max_dim // longest), max(1, height * max_dim // longest)


def clamp_to_max_dim(image: RasterImage, max_dim: int) -> RasterImage:
    """Images already within bound are returned as is."""
    size = clamped_size(image.width, image.height, max_dim)
    if size == image.size:
        return image
    return resize_nearest(image, *size)


def zoom_nearest(image: RasterImage) -> RasterImage:
    """2x zoom; every source pixel becomes a solid 2x2 block."""
    return resize_nearest(image, image.width * 2, image.height * 2)


def zoom_bilinear(image: RasterImage) -> RasterImage:
    w, h = image.width, image.height
    nw, nh = w * 2, h * 2
    px = image.pixels
    out = []
    for y in range(nh):
        fy = y / 2.0
        y0 = int(math.floor(fy))
        y1 = min(y0 + 1, h - 1)
        dy = fy - y0
        for x in range(nw):
            fx = x / 2.0
            x0 = int(math.floor(fx))
            x1 = min(x0 + 1, w - 1)
            dx = fx - x0
            p00 = px[y0*w + x0]
            p10 = px[y0*w + x1]
            p01 = px[y1*w + x0]
            p11 = px[y1*w + x1]
            rgba = []
            for i in range(4):
                v0 = p00[i]*(1 - dx) + p10[i]*dx
                v1 = p01[i]*(1 - dx) + p11[i]*dx
                rgba.append(clip8(v0*(1 - dy) + v1*dy))
            out.append(tuple(rgba))
    return RasterImage(nw, nh, out)
