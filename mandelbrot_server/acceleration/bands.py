"""
Thread-pool backend for parallel band rendering.

The pixel buffer is split into contiguous horizontal bands before any work
starts. Each band is rendered by its own task into a disjoint row slice of
the buffer, and the scheduler joins every task before returning.
"""

import logging
import threading
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..core.math_functions import pixel_to_point
from ..errors import RenderError, RenderTimeout
from ..rendering.pixel_buffer import render_rows

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


@dataclass(frozen=True)
class Band:
    """A run of whole rows of the output raster."""
    index: int
    top: int
    height: int
    upper_left: complex
    lower_right: complex

    @property
    def bottom(self) -> int:
        return self.top + self.height


def rows_per_band(height: int, workers: int) -> int:
    """Ceiling of height / workers."""
    return (height + workers - 1) // workers


def partition_bands(bounds: Tuple[int, int], upper_left: complex, lower_right: complex,
                    workers: int = DEFAULT_WORKERS) -> List[Band]:
    """
    Split a raster into at most `workers` bands of whole rows.

    Args:
        bounds: (width, height) of the raster
        upper_left, lower_right: Complex window of the raster
        workers: Parallelism degree (>= 1)

    Returns:
        Bands in top-to-bottom order; the last one may be shorter, and
        fewer than `workers` bands result when the raster has fewer rows
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")

    width, height = bounds
    step = rows_per_band(height, workers)

    bands = []
    for index, top in enumerate(range(0, height, step)):
        band_height = min(step, height - top)
        # Sub-windows come from the full raster so band edges line up.
        bands.append(Band(
            index=index,
            top=top,
            height=band_height,
            upper_left=pixel_to_point(bounds, (0, top), upper_left, lower_right),
            lower_right=pixel_to_point(bounds, (width, top + band_height), upper_left, lower_right),
        ))

    logger.debug(f"Partitioned {width}x{height} raster into {len(bands)} bands of {step} rows")
    return bands


class BandScheduler:
    """Fan-out/fan-in renderer over horizontal bands."""

    def __init__(self, workers: int = DEFAULT_WORKERS, timeout: Optional[float] = None):
        """
        Initialize band scheduler.

        Args:
            workers: Number of bands (and threads) to split a render into
            timeout: Seconds to wait for all bands, or None to wait forever
        """
        if workers < 1:
            raise ValueError("workers must be >= 1")
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")

        self.workers = workers
        self.timeout = timeout

    def run(self, pixels: np.ndarray, bounds: Tuple[int, int],
            upper_left: complex, lower_right: complex) -> None:
        """
        Render every band of `pixels` in parallel and wait for all of them.

        Args:
            pixels: (height, width) buffer owned by the caller
            bounds: (width, height) of the raster
            upper_left, lower_right: Complex window of the raster

        Raises:
            RenderError: A band task raised; no band is left running
            RenderTimeout: The timeout expired; in-flight bands were stopped
        """
        width, height = bounds
        assert pixels.shape == (height, width), \
            f"buffer shape {pixels.shape} does not match bounds {width}x{height}"

        start_time = time.time()
        bands = partition_bands(bounds, upper_left, lower_right, self.workers)
        cancel = threading.Event()

        logger.info(f"Rendering {len(bands)} bands with {len(bands)} threads")

        executor = ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="band")
        try:
            futures = {
                executor.submit(render_rows, pixels[band.top:band.bottom], bounds,
                                upper_left, lower_right, band.top, band.height, cancel): band
                for band in bands
            }
            done, not_done = wait(futures, timeout=self.timeout, return_when=FIRST_EXCEPTION)
            if not_done:
                cancel.set()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        for future, band in futures.items():
            if future.cancelled():
                continue
            error = future.exception()
            if error is not None:
                logger.error(f"Band {band.index} (rows {band.top}..{band.bottom}) failed: {error}")
                raise RenderError(f"band {band.index} failed: {error}") from error

        if not_done:
            logger.warning(f"Render of {width}x{height} cancelled after {self.timeout}s")
            raise RenderTimeout(f"render did not finish within {self.timeout}s")

        logger.info(f"Parallel rendering complete: {time.time() - start_time:.3f}s")
