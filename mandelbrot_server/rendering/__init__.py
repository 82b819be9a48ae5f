"""Pixel buffer rendering and PNG output."""

from .image_output import RenderMetadata, encode_png, save_png
from .pixel_buffer import allocate_pixels, render_rows

__all__ = ["RenderMetadata", "encode_png", "save_png", "allocate_pixels", "render_rows"]
