"""
Core mathematical functions for Mandelbrot rendering.

This module provides the pixel to complex-plane mapping and the escape-time
test for z -> z^2 + c, in a scalar form for single points and a vectorized
numpy form for whole blocks of rows. Both forms perform the same floating
point operations in the same order, so they agree bit for bit.
"""

import threading
from typing import Optional, Tuple

import numpy as np

# Escape counts must fit one byte.
ITERATION_LIMIT = 255

ESCAPE_RADIUS_SQ = 4.0

Bounds = Tuple[int, int]
Pixel = Tuple[int, int]


def pixel_to_point(bounds: Bounds, pixel: Pixel,
                   upper_left: complex, lower_right: complex) -> complex:
    """
    Translate a pixel position to a point in the complex plane.

    Args:
        bounds: (width, height) of the pixel raster
        pixel: (column, row) of the pixel; row 0 is the top row
        upper_left: Complex coordinate of the raster's upper-left corner
        lower_right: Complex coordinate of the raster's lower-right corner

    Returns:
        The complex point under linear interpolation
    """
    plane_width = lower_right.real - upper_left.real
    plane_height = upper_left.imag - lower_right.imag

    # Rows grow downwards while the imaginary axis grows upwards.
    return complex(
        upper_left.real + pixel[0] * plane_width / bounds[0],
        upper_left.imag - pixel[1] * plane_height / bounds[1],
    )


def create_coordinate_arrays(bounds: Bounds, upper_left: complex, lower_right: complex,
                             top: int = 0, rows: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Create real and imaginary coordinate arrays for a block of rows.

    Args:
        bounds: (width, height) of the full raster
        upper_left, lower_right: Complex window of the full raster
        top: First row of the block
        rows: Number of rows in the block (defaults to the rest of the raster)

    Returns:
        Tuple of (real, imag) arrays of shape (rows, width)
    """
    width, height = bounds
    if rows is None:
        rows = height - top

    plane_width = lower_right.real - upper_left.real
    plane_height = upper_left.imag - lower_right.imag

    cols = np.arange(width, dtype=np.float64)
    row_index = np.arange(top, top + rows, dtype=np.float64)

    re = upper_left.real + cols * plane_width / width
    im = upper_left.imag - row_index * plane_height / height
    return np.meshgrid(re, im)


def escape_time(c: complex, limit: int = ITERATION_LIMIT) -> Optional[int]:
    """
    Approximate Mandelbrot membership test for a single point.

    Args:
        c: Point to test
        limit: Maximum number of iterations

    Returns:
        The iteration at which the orbit of 0 left the disk of radius 2,
        or None if it stayed inside for `limit` iterations
    """
    zr = 0.0
    zi = 0.0
    cr = c.real
    ci = c.imag
    for i in range(limit):
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQ:
            return i
    return None


def escape_counts(real: np.ndarray, imag: np.ndarray, limit: int = ITERATION_LIMIT,
                  cancel: Optional[threading.Event] = None) -> np.ndarray:
    """
    Vectorized escape-time test.

    Args:
        real, imag: Coordinate arrays of equal shape
        limit: Maximum number of iterations
        cancel: Optional event; when set, iteration stops early

    Returns:
        int32 array of escape iterations, -1 where the point did not escape
    """
    counts = np.full(real.shape, -1, dtype=np.int32)
    zr = np.zeros_like(real)
    zi = np.zeros_like(imag)
    active = np.ones(real.shape, dtype=bool)

    for i in range(limit):
        if cancel is not None and cancel.is_set():
            break
        if not active.any():
            break

        r = zr[active]
        m = zi[active]
        nr = r * r - m * m + real[active]
        ni = 2.0 * r * m + imag[active]
        zr[active] = nr
        zi[active] = ni

        escaped = np.zeros_like(active)
        escaped[active] = nr * nr + ni * ni > ESCAPE_RADIUS_SQ
        counts[escaped] = i
        active &= ~escaped

    return counts


def intensity(count: Optional[int]) -> int:
    """Map an escape result to a grayscale value; faster escapes are brighter."""
    if count is None:
        return 0
    return 255 - count


def intensities(counts: np.ndarray) -> np.ndarray:
    """Vectorized form of `intensity` for the output of `escape_counts`."""
    return np.where(counts < 0, 0, 255 - counts).astype(np.uint8)
