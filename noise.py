"""
noise.py

Salt-and-pepper noise. The random stream is passed in so callers can use a
seeded numpy Generator and get the same corruption every time.
"""

from typing import Optional

import numpy as np

from errors import InvalidParameter
from raster import BLACK, WHITE, RasterImage


def check_probability(probability) -> float:
    try:
        p = float(probability)
    except (TypeError, ValueError):
        raise InvalidParameter(f"Noise probability must be a number, got {probability!r}")
    if not 0.0 <= p <= 1.0:
        raise InvalidParameter(f"Noise probability must lie in [0, 1], got {p}")
    return p


def salt_and_pepper(image: RasterImage, probability: float,
                    rng: Optional[np.random.Generator] = None) -> RasterImage:
    """
    Each pixel is hit with the given probability; a hit pixel becomes opaque
    white or opaque black with equal odds. Draws are consumed in pixel order.
    """
    p = check_probability(probability)
    if rng is None:
        rng = np.random.default_rng()

    n = len(image.pixels)
    hits = rng.random(n) < p
    salt = rng.random(n) < 0.5

    out = list(image.pixels)
    for i in np.flatnonzero(hits):
        out[i] = WHITE if salt[i] else BLACK
    return RasterImage(image.width, image.height, out)
