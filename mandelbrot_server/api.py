"""
Main rendering API.

This module combines the numeric core, the band scheduler and the image
encoder into the operations used by the web service and the CLI.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .acceleration.bands import DEFAULT_WORKERS, BandScheduler
from .core.parsing import validate_bounds, validate_window
from .rendering.image_output import RenderMetadata, encode_png
from .rendering.pixel_buffer import allocate_pixels

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Configuration for Mandelbrot rendering."""

    workers: int = DEFAULT_WORKERS
    timeout: Optional[float] = None
    max_pixels: Optional[int] = 16_000_000

    def validate(self):
        """Validate configuration parameters."""
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if self.max_pixels is not None and self.max_pixels <= 0:
            raise ValueError("max_pixels must be positive")


def render(bounds: Tuple[int, int], upper_left: complex, lower_right: complex,
           config: Optional[RenderConfig] = None) -> np.ndarray:
    """
    Render the Mandelbrot set over a complex window.

    Args:
        bounds: (width, height) of the raster in pixels
        upper_left: Complex coordinate of the upper-left corner
        lower_right: Complex coordinate of the lower-right corner
        config: Rendering configuration (uses defaults if None)

    Returns:
        (height, width) uint8 grayscale buffer, row 0 at the top

    Raises:
        InvalidParameter: Degenerate raster or window
        RenderError: A band failed or the render timed out
    """
    config = config or RenderConfig()
    config.validate()

    validate_bounds(bounds, config.max_pixels)
    validate_window(upper_left, lower_right)

    width, height = bounds
    logger.info(f"Starting render: {width}x{height} from {upper_left} to {lower_right}")

    pixels = allocate_pixels(bounds)
    BandScheduler(config.workers, config.timeout).run(pixels, bounds, upper_left, lower_right)
    return pixels


def render_png(bounds: Tuple[int, int], upper_left: complex, lower_right: complex,
               config: Optional[RenderConfig] = None) -> bytes:
    """Render and encode to PNG bytes with the render parameters embedded."""
    config = config or RenderConfig()
    start_time = time.time()

    pixels = render(bounds, upper_left, lower_right, config)

    metadata = RenderMetadata(
        bounds=bounds,
        upper_left=upper_left,
        lower_right=lower_right,
        workers=config.workers,
        render_time_seconds=time.time() - start_time,
    )

    data = encode_png(pixels, bounds, metadata)
    logger.info(f"Render complete: {time.time() - start_time:.2f}s, {len(data)} bytes")
    return data
