#!/usr/bin/env python3
"""
filters.py

Spatial domain filters over a 3x3 neighborhood, applied per RGB channel:
- Generic kernel convolution with factor and bias
- Blur / Mean (3x3 box, 1/9)
- Sharpen, Edge detection, Sobel (horizontal), Laplacian
- Median (channel-independent)
- Maximum / Minimum (whole pixel ranked by BT.709 luminance)

Only interior pixels are filtered; the outermost ring of pixels is copied
verbatim from the source so no dark or transparent frame appears.
"""

from typing import Callable, List, Sequence

from raster import RGBA, RasterImage, clip8

Kernel = Sequence[Sequence[float]]

# Truncation guard for fractional kernels (1/9 * 9v can land just under v)
_EPS = 1e-7

# BT.709 weights; grayscale conversion in image_processing uses BT.601
LUMA_709 = (0.2126, 0.7152, 0.0722)

BOX_KERNEL = [[1.0 / 9.0] * 3 for _ in range(3)]
SHARPEN_KERNEL = [[0, -1, 0], [-1, 5, -1], [0, -1, 0]]
EDGE_KERNEL = [[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]]
SOBEL_KERNEL = [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]]
LAPLACIAN_KERNEL = [[0, 1, 0], [1, -4, 1], [0, 1, 0]]

# ------------------ Utility functions ------------------

def neighborhood(image: RasterImage, x: int, y: int) -> List[RGBA]:
    """The 9 pixels around (x, y), sampled row by row, left to right."""
    w, px = image.width, image.pixels
    return [px[(y + dy) * w + (x + dx)] for dy in (-1, 0, 1) for dx in (-1, 0, 1)]

def luminance(p: RGBA) -> float:
    return LUMA_709[0]*p[0] + LUMA_709[1]*p[1] + LUMA_709[2]*p[2]

def map_interior(image: RasterImage, fn: Callable[[List[RGBA], RGBA], RGBA]) -> RasterImage:
    """
    Build a new raster where every interior pixel is fn(window, center).
    Border pixels are copied through unchanged.
    """
    w, h = image.width, image.height
    out = list(image.pixels)
    for y in range(1, h - 1):
        for x in range(1, w - 1):
            center = image.pixels[y*w + x]
            out[y*w + x] = fn(neighborhood(image, x, y), center)
    return RasterImage(w, h, out)

# ------------------ Convolution ------------------

def apply_kernel(image: RasterImage, kernel: Kernel, factor: float = 1.0, bias: float = 0.0) -> RasterImage:
    if len(kernel) != 3 or any(len(row) != 3 for row in kernel):
        raise ValueError("Kernel must be 3x3")
    weights = [kernel[ky][kx] for ky in range(3) for kx in range(3)]

    def convolve(window: List[RGBA], center: RGBA) -> RGBA:
        r = g = b = 0.0
        for k, p in zip(weights, window):
            r += p[0]*k
            g += p[1]*k
            b += p[2]*k
        return (clip8(factor*r + bias + _EPS),
                clip8(factor*g + bias + _EPS),
                clip8(factor*b + bias + _EPS),
                center[3])

    return map_interior(image, convolve)

def blur(image: RasterImage) -> RasterImage:
    return apply_kernel(image, BOX_KERNEL)

# Mean shares the box kernel with Blur
mean = blur

def sharpen(image: RasterImage) -> RasterImage:
    return apply_kernel(image, SHARPEN_KERNEL)

def edge_detect(image: RasterImage) -> RasterImage:
    return apply_kernel(image, EDGE_KERNEL)

def sobel(image: RasterImage) -> RasterImage:
    return apply_kernel(image, SOBEL_KERNEL)

def laplacian(image: RasterImage) -> RasterImage:
    return apply_kernel(image, LAPLACIAN_KERNEL)

# ------------------ Order statistics ------------------

def _median_pixel(window: List[RGBA], center: RGBA) -> RGBA:
    rs = sorted(p[0] for p in window)
    gs = sorted(p[1] for p in window)
    bs = sorted(p[2] for p in window)
    # alpha follows the last sampled neighbor
    return (rs[4], gs[4], bs[4], window[-1][3])

def median_filter(image: RasterImage) -> RasterImage:
    """
    3x3 median taken on each channel independently. The result may be a
    color that none of the 9 neighbors actually has.
    """
    return map_interior(image, _median_pixel)

def maximum_filter(image: RasterImage) -> RasterImage:
    """Brightest neighbor by luminance; ties go to the later-sampled pixel."""
    return map_interior(image, lambda window, _: sorted(window, key=luminance)[-1])

def minimum_filter(image: RasterImage) -> RasterImage:
    """Darkest neighbor by luminance; ties go to the earlier-sampled pixel."""
    return map_interior(image, lambda window, _: sorted(window, key=luminance)[0])
