"""
Mandelbrot set rendering server.

Renders grayscale images of the Mandelbrot set over arbitrary windows of the
complex plane, splitting each render into horizontal bands computed in
parallel, and serves them as PNG over HTTP.

Example usage:
    >>> from mandelbrot_server import render, RenderConfig
    >>> pixels = render((1000, 750), complex(-1.20, 0.35), complex(-1.0, 0.20),
    ...                 RenderConfig(workers=8))
    >>> pixels.shape
    (750, 1000)
"""

__version__ = "1.0.0"

from mandelbrot_server.api import RenderConfig, render, render_png
from mandelbrot_server.core.math_functions import escape_time, pixel_to_point
from mandelbrot_server.core.parsing import parse_bounds, parse_complex, parse_pair
from mandelbrot_server.acceleration.bands import BandScheduler, partition_bands
from mandelbrot_server.rendering.image_output import encode_png
from mandelbrot_server.errors import (
    EncodingError,
    InvalidParameter,
    MandelbrotError,
    RenderError,
    RenderTimeout,
)

__all__ = [
    "RenderConfig",
    "render",
    "render_png",
    "escape_time",
    "pixel_to_point",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "BandScheduler",
    "partition_bands",
    "encode_png",
    "EncodingError",
    "InvalidParameter",
    "MandelbrotError",
    "RenderError",
    "RenderTimeout",
]
