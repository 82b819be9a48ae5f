"""
Row renderer that fills a block of the grayscale pixel buffer.
"""

import logging
import threading
from typing import Optional, Tuple

import numpy as np

from ..core.math_functions import (
    ITERATION_LIMIT,
    create_coordinate_arrays,
    escape_counts,
    intensities,
)

logger = logging.getLogger(__name__)


def allocate_pixels(bounds: Tuple[int, int]) -> np.ndarray:
    """Allocate a zeroed (height, width) grayscale buffer."""
    width, height = bounds
    return np.zeros((height, width), dtype=np.uint8)


def render_rows(pixels: np.ndarray, bounds: Tuple[int, int],
                upper_left: complex, lower_right: complex,
                top: int = 0, rows: Optional[int] = None,
                cancel: Optional[threading.Event] = None) -> None:
    """
    Render a block of rows into `pixels`.

    Every pixel is mapped against the full raster `bounds` and window, offset
    by `top`, so a block renders identically whether it is the whole image or
    one band of it.

    Args:
        pixels: Buffer (or band view) receiving `rows` rows of `bounds[0]` pixels
        bounds: (width, height) of the full raster
        upper_left, lower_right: Complex window of the full raster
        top: Index of the first row of the block within the full raster
        rows: Number of rows in the block (defaults to the rest of the raster)
        cancel: Optional event that aborts the escape-time loop
    """
    width, height = bounds
    if rows is None:
        rows = height - top

    assert pixels.size == width * rows, \
        f"buffer of {pixels.size} pixels does not match {width}x{rows} block"
    assert 0 <= top and top + rows <= height, \
        f"rows {top}..{top + rows} outside raster of height {height}"

    real, imag = create_coordinate_arrays(bounds, upper_left, lower_right, top, rows)
    counts = escape_counts(real, imag, ITERATION_LIMIT, cancel)
    np.copyto(pixels, intensities(counts).reshape(pixels.shape))

    logger.debug(f"Rendered rows {top}..{top + rows} ({width}x{rows})")
