"""Numeric core: coordinate mapping, escape-time test and parameter parsing."""

from .math_functions import (
    ITERATION_LIMIT,
    create_coordinate_arrays,
    escape_counts,
    escape_time,
    intensities,
    intensity,
    pixel_to_point,
)
from .parsing import parse_bounds, parse_complex, parse_pair, validate_bounds, validate_window

__all__ = [
    "ITERATION_LIMIT",
    "create_coordinate_arrays",
    "escape_counts",
    "escape_time",
    "intensities",
    "intensity",
    "pixel_to_point",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "validate_bounds",
    "validate_window",
]
