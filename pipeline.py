#!/usr/bin/env python3
"""
pipeline.py

Holds the current input/output pair and the selected algorithm:
- load: clamp the raster to MAX_DIM and make it the input (clears output)
- select: choose the algorithm (Threshold / SaltPepper carry a parameter)
- apply: run the selected algorithm on the input, store the result as output
- promote: move output into input for iterative filtering
- save: encode the output through image_io
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

import filters
import image_processing
import image_io
import noise
import resampling
from errors import InvalidParameter, NoOutputAvailable
from logging_config import get_logger
from raster import RasterImage
from settings import MAX_DIM

logger = get_logger(__name__)


class Algorithm(Enum):
    BLUR = "Blur"
    SHARPEN = "Sharpen"
    EDGE_DETECT = "Edge Detect"
    INVERT = "Invert"
    MEAN = "Mean"
    MAXIMUM = "Maximum"
    MEDIAN = "Median"
    MINIMUM = "Minimum"
    ZOOM_NEAREST = "Zoom NN 2x"
    ZOOM_BILINEAR = "Zoom Bilinear 2x"
    GRAYSCALE = "Grayscale"
    NEGATIVE = "Negative"
    SOBEL = "Sobel"
    LAPLACIAN = "Laplacian"
    BINARIZE = "Binarize"
    PSEUDO_COLOR = "Pseudo Color"


@dataclass(frozen=True)
class Threshold:
    level: int

    def __post_init__(self):
        if isinstance(self.level, bool) or not isinstance(self.level, (int, np.integer)):
            raise InvalidParameter(f"Threshold level must be an integer, got {self.level!r}")
        if not 0 <= self.level <= 255:
            raise InvalidParameter(f"Threshold level must lie in [0, 255], got {self.level}")


@dataclass(frozen=True)
class SaltPepper:
    probability: float

    def __post_init__(self):
        noise.check_probability(self.probability)


Selection = Union[Algorithm, Threshold, SaltPepper]

_FILTERS: Dict[Algorithm, Callable[[RasterImage], RasterImage]] = {
    Algorithm.BLUR: filters.blur,
    Algorithm.SHARPEN: filters.sharpen,
    Algorithm.EDGE_DETECT: filters.edge_detect,
    Algorithm.INVERT: image_processing.invert,
    Algorithm.MEAN: filters.mean,
    Algorithm.MAXIMUM: filters.maximum_filter,
    Algorithm.MEDIAN: filters.median_filter,
    Algorithm.MINIMUM: filters.minimum_filter,
    Algorithm.ZOOM_NEAREST: resampling.zoom_nearest,
    Algorithm.ZOOM_BILINEAR: resampling.zoom_bilinear,
    Algorithm.GRAYSCALE: image_processing.to_grayscale,
    Algorithm.NEGATIVE: image_processing.to_negative,
    Algorithm.SOBEL: filters.sobel,
    Algorithm.LAPLACIAN: filters.laplacian,
    Algorithm.BINARIZE: image_processing.binarize,
    Algorithm.PSEUDO_COLOR: image_processing.pseudo_color,
}

_missing = set(Algorithm) - set(_FILTERS)
if _missing:
    raise RuntimeError(f"No filter registered for: {sorted(a.name for a in _missing)}")


def describe(selection: Selection) -> str:
    if isinstance(selection, Threshold):
        return f"Threshold ({selection.level})"
    if isinstance(selection, SaltPepper):
        return f"Salt & Pepper (p={selection.probability})"
    return selection.value


class Pipeline:
    def __init__(self, selection: Selection = Algorithm.BLUR,
                 rng: Optional[np.random.Generator] = None, max_dim: int = MAX_DIM):
        self.input: Optional[RasterImage] = None
        self.output: Optional[RasterImage] = None
        self.max_dim = max_dim
        self.rng = rng if rng is not None else np.random.default_rng()
        self.selection: Selection = Algorithm.BLUR
        self.select(selection)

    # ---- Input ----
    def load(self, raster: RasterImage) -> RasterImage:
        clamped = resampling.clamp_to_max_dim(raster, self.max_dim)
        if clamped is not raster:
            logger.info(f"Resized {raster.width}x{raster.height} to "
                        f"{clamped.width}x{clamped.height} (max {self.max_dim})")
        self.input = clamped
        self.output = None
        return clamped

    def load_file(self, path) -> RasterImage:
        # decode first so a failure leaves both slots untouched; the decoder
        # subsamples to max_dim itself, so load() sees an in-bound raster
        raster = image_io.decode_image(path, self.max_dim)
        logger.info(f"Loaded {path} as {raster.width}x{raster.height}")
        return self.load(raster)

    # ---- Algorithm ----
    def select(self, selection: Selection):
        if not isinstance(selection, (Algorithm, Threshold, SaltPepper)):
            raise InvalidParameter(f"Unknown algorithm selection: {selection!r}")
        self.selection = selection
        logger.debug(f"Selected {describe(selection)}")

    def _run(self, image: RasterImage) -> RasterImage:
        sel = self.selection
        if isinstance(sel, Threshold):
            return image_processing.threshold(image, sel.level)
        if isinstance(sel, SaltPepper):
            return noise.salt_and_pepper(image, sel.probability, self.rng)
        return _FILTERS[sel](image)

    def apply(self) -> Optional[RasterImage]:
        if self.input is None:
            logger.debug("Apply requested with no input loaded; ignoring")
            return None
        self.output = self._run(self.input)
        logger.info(f"Applied {describe(self.selection)} -> "
                    f"{self.output.width}x{self.output.height}")
        return self.output

    # ---- Output ----
    def promote(self):
        """Use output as the next input. Ownership moves; nothing is copied."""
        if self.output is None:
            return
        self.input, self.output = self.output, None
        logger.debug("Output promoted to input")

    def save(self, path):
        if self.output is None:
            raise NoOutputAvailable("No output image to save; apply a filter first.")
        return image_io.encode_image(self.output, path)
