"""
image_io.py

Boundary between files and RasterImage. Pillow does the actual decoding and
encoding; numpy moves the pixel buffer in and out of Pillow.
"""

from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from errors import DecodeFailure, EncodeFailure
from logging_config import get_logger
from raster import RasterImage
from resampling import clamped_size

logger = get_logger(__name__)

# Pillow formats that cannot store an alpha channel
_NO_ALPHA_FORMATS = {"JPEG", "PCX", "PPM", "EPS"}


def from_pil(img: Image.Image, max_dim: Optional[int] = None) -> RasterImage:
    """
    Convert to a RasterImage. With max_dim, the longer side is bounded by
    nearest-neighbor subsampling on the array, before any per-pixel tuple
    is built.
    """
    arr = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    h, w = arr.shape[:2]
    if max_dim is not None:
        nw, nh = clamped_size(w, h, max_dim)
        if (nw, nh) != (w, h):
            xs = np.arange(nw) * w // nw
            ys = np.arange(nh) * h // nh
            arr = arr[ys[:, None], xs]
            w, h = nw, nh
    pixels = [tuple(px) for px in arr.reshape(-1, 4).tolist()]
    return RasterImage(w, h, pixels)


def to_pil(raster: RasterImage) -> Image.Image:
    arr = np.array(raster.pixels, dtype=np.uint8).reshape(raster.height, raster.width, 4)
    return Image.fromarray(arr, "RGBA")


def decode_image(path, max_dim: Optional[int] = None) -> RasterImage:
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            raster = from_pil(img, max_dim)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.error(f"Failed to decode {path}: {e}")
        raise DecodeFailure(f"Failed to open image {path.name}: {e}") from e
    logger.debug(f"Decoded {path.name}: {raster.width}x{raster.height}")
    return raster


def encode_image(raster: RasterImage, path) -> Path:
    """
    Write raster to path; the format follows the suffix (PNG when there is
    none). Formats without alpha get the RGB channels only.
    """
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(".png")
    img = to_pil(raster)
    if Image.registered_extensions().get(path.suffix.lower()) in _NO_ALPHA_FORMATS:
        img = img.convert("RGB")
    try:
        img.save(path)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Failed to save {path}: {e}")
        raise EncodeFailure(f"Failed to save image {path.name}: {e}") from e
    logger.info(f"Saved {raster.width}x{raster.height} image to {path}")
    return path
