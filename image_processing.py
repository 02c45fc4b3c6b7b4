# image_processing.py
"""
Point-processing methods: every output pixel depends only on the pixel
at the same position. No border handling needed.
"""

from typing import List, Tuple

from raster import BLACK, RGBA, WHITE, RasterImage

# BT.601 weights (per mille) for grayscale; filters.LUMA_709 is for ranking only
GRAY_WEIGHTS_601 = (299, 587, 114)

# ---------------------------------------------------------------------
# 1. Grayscale Transformation
# ---------------------------------------------------------------------
def gray_level(r: int, g: int, b: int) -> int:
    """s = 0.299 R + 0.587 G + 0.114 B, truncated (exact integer form)."""
    wr, wg, wb = GRAY_WEIGHTS_601
    return (wr*r + wg*g + wb*b) // 1000

def to_grayscale(image: RasterImage) -> RasterImage:
    out = []
    for (r, g, b, a) in image.pixels:
        s = gray_level(r, g, b)
        out.append((s, s, s, a))
    return RasterImage(image.width, image.height, out)

# ---------------------------------------------------------------------
# 2. Negative Transformation
# ---------------------------------------------------------------------
def to_negative(image: RasterImage) -> RasterImage:
    """Negative transformation: s = 255 - r (for each color channel)."""
    out = [(255 - r, 255 - g, 255 - b, a) for (r, g, b, a) in image.pixels]
    return RasterImage(image.width, image.height, out)

# Invert and Negative are the same operation
invert = to_negative

# ---------------------------------------------------------------------
# 3. Threshold (Black/White)
# ---------------------------------------------------------------------
def threshold(image: RasterImage, level: int) -> RasterImage:
    """White where the grayscale value is strictly above level, else black."""
    out = [WHITE if gray_level(r, g, b) > level else BLACK
           for (r, g, b, _) in image.pixels]
    return RasterImage(image.width, image.height, out)

def binarize(image: RasterImage) -> RasterImage:
    return threshold(image, 128)

# ---------------------------------------------------------------------
# 4. Pseudo-coloring
# ---------------------------------------------------------------------
def pseudo_color_of(i: int) -> RGBA:
    """Map intensity 0..255 through four contiguous bands (blue→cyan→green→yellow)."""
    if i < 64:
        return (0, 0, 4*i, 255)
    if i < 128:
        return (0, 4*(i - 64), 255, 255)
    if i < 192:
        return (0, 255, 255 - 4*(i - 128), 255)
    return (4*(i - 192), 255, 0, 255)

def pseudo_color(image: RasterImage) -> RasterImage:
    """
    Reads the red channel as intensity; feed a grayscale image for a
    luminance ramp.
    """
    lut = [pseudo_color_of(i) for i in range(256)]
    out = [lut[p[0]] for p in image.pixels]
    return RasterImage(image.width, image.height, out)

# ---------------------------------------------------------------------
# 5. Histograms (for display only)
# ---------------------------------------------------------------------
def compute_rgb_histograms(image: RasterImage) -> Tuple[List[int], List[int], List[int]]:
    rhist = [0]*256
    ghist = [0]*256
    bhist = [0]*256
    for (r, g, b, _) in image.pixels:
        rhist[r] += 1
        ghist[g] += 1
        bhist[b] += 1
    return rhist, ghist, bhist

def compute_gray_histogram(image: RasterImage) -> List[int]:
    hist = [0]*256
    for (r, g, b, _) in image.pixels:
        hist[gray_level(r, g, b)] += 1
    return hist

def histogram_series(image: RasterImage) -> Tuple[List[List[int]], Tuple[str, ...]]:
    """Curves for the viewer's histogram strip: one gray curve when R=G=B everywhere."""
    if all(r == g == b for (r, g, b, _) in image.pixels):
        return [compute_gray_histogram(image)], ("gray",)
    return list(compute_rgb_histograms(image)), ("red", "green", "blue")
