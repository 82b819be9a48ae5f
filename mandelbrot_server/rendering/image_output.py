"""
PNG export for rendered pixel buffers.

This module encodes single-channel 8-bit grayscale buffers as PNG, either to
bytes for HTTP responses or to files, with optional render metadata embedded
as PNG text chunks.
"""

import io
import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
from PIL import Image, PngImagePlugin

from .. import __version__
from ..errors import EncodingError

logger = logging.getLogger(__name__)

COLOR_MODE = 'L'


@dataclass
class RenderMetadata:
    """Metadata for Mandelbrot renders."""

    bounds: Tuple[int, int]
    upper_left: complex
    lower_right: complex
    workers: int
    render_time_seconds: float

    timestamp: str = ""
    software_version: str = __version__

    def __post_init__(self):
        """Set default timestamp if not provided."""
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to a JSON-safe dictionary."""
        data = asdict(self)
        data['upper_left'] = [self.upper_left.real, self.upper_left.imag]
        data['lower_right'] = [self.lower_right.real, self.lower_right.imag]
        data['bounds'] = list(self.bounds)
        return data

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def _prepare_image(pixels: np.ndarray, bounds: Tuple[int, int]) -> Image.Image:
    width, height = bounds
    if pixels.dtype != np.uint8:
        raise EncodingError(f"expected uint8 pixels, got {pixels.dtype}")
    if pixels.size != width * height:
        raise EncodingError(f"buffer of {pixels.size} pixels does not match {width}x{height}")

    try:
        return Image.frombytes(COLOR_MODE, (width, height), np.ascontiguousarray(pixels).tobytes())
    except (ValueError, MemoryError) as e:
        raise EncodingError(str(e)) from e


def _png_info(metadata: Optional[RenderMetadata]) -> PngImagePlugin.PngInfo:
    pnginfo = PngImagePlugin.PngInfo()

    if metadata:
        pnginfo.add_text("Title", "Mandelbrot set")
        pnginfo.add_text("Software", f"mandelbrot-server v{metadata.software_version}")
        pnginfo.add_text("Creation Time", metadata.timestamp)
        pnginfo.add_text("RenderMetadata", metadata.to_json(indent=None))

    return pnginfo


def encode_png(pixels: np.ndarray, bounds: Tuple[int, int],
               metadata: Optional[RenderMetadata] = None) -> bytes:
    """
    Encode a grayscale buffer as PNG.

    Args:
        pixels: uint8 buffer of width * height pixels, row-major
        bounds: (width, height) of the image
        metadata: Render metadata to embed

    Returns:
        PNG byte stream

    Raises:
        EncodingError: The buffer does not match the bounds or the codec failed
    """
    image = _prepare_image(pixels, bounds)

    buffer = io.BytesIO()
    try:
        image.save(buffer, "PNG", pnginfo=_png_info(metadata))
    except (OSError, ValueError) as e:
        raise EncodingError(str(e)) from e

    return buffer.getvalue()


def save_png(pixels: np.ndarray, bounds: Tuple[int, int], filepath: Path,
             metadata: Optional[RenderMetadata] = None) -> None:
    """Encode a grayscale buffer and write it to `filepath`."""
    filepath = Path(filepath)
    data = encode_png(pixels, bounds, metadata)

    try:
        filepath.write_bytes(data)
    except OSError as e:
        raise EncodingError(f"could not write {filepath}: {e}") from e

    logger.info(f"Saved image: {filepath} ({bounds[0]}x{bounds[1]})")
