"""
Parsers and validators for render parameters.

The parsers are pure: they return None for anything that is not exactly
`<left><sep><right>` with both sides fully numeric. Validation of the parsed
values (degenerate geometry, raster size caps) raises InvalidParameter so
that bad input never reaches the numeric core.
"""

import math
import re
from typing import Callable, Optional, Tuple, TypeVar

from ..errors import InvalidParameter

T = TypeVar('T', int, float)

# int() and float() tolerate surrounding whitespace and digit separators.
_REJECTED = re.compile(r'[\s_]')


def _parse_number(text: str, kind: Callable[[str], T]) -> Optional[T]:
    if not text or _REJECTED.search(text):
        return None
    try:
        return kind(text)
    except ValueError:
        return None


def parse_pair(s: str, separator: str, kind: Callable[[str], T]) -> Optional[Tuple[T, T]]:
    """
    Parse a string of the form `<left><sep><right>` into a pair.

    Args:
        s: Input string
        separator: Single character separating the two values
        kind: Numeric type of both sides (int or float)

    Returns:
        Tuple (left, right), or None if the input is malformed
    """
    index = s.find(separator)
    if index < 0:
        return None

    left = _parse_number(s[:index], kind)
    right = _parse_number(s[index + 1:], kind)
    if left is None or right is None:
        return None
    return left, right


def parse_complex(s: str) -> Optional[complex]:
    """Parse `<real>,<imaginary>` into a complex number."""
    pair = parse_pair(s, ',', float)
    if pair is None:
        return None
    return complex(*pair)


def parse_bounds(s: str) -> Optional[Tuple[int, int]]:
    """Parse `<width>x<height>` into a pair of integers."""
    return parse_pair(s, 'x', int)


def validate_bounds(bounds: Tuple[int, int], max_pixels: Optional[int] = None) -> None:
    """Reject empty rasters and rasters above the configured pixel cap."""
    width, height = bounds
    if width <= 0 or height <= 0:
        raise InvalidParameter(f"bounds must be positive, got {width}x{height}", 'b')
    if max_pixels is not None and width * height > max_pixels:
        raise InvalidParameter(
            f"bounds {width}x{height} exceed the limit of {max_pixels} pixels", 'b')


def validate_window(upper_left: complex, lower_right: complex) -> None:
    """Reject non-finite corners and windows with zero width or height."""
    for name, corner in (('u', upper_left), ('l', lower_right)):
        if not (math.isfinite(corner.real) and math.isfinite(corner.imag)):
            raise InvalidParameter(f"corner {corner} is not finite", name)

    if lower_right.real == upper_left.real:
        raise InvalidParameter("window has zero width", 'l')
    if upper_left.imag == lower_right.imag:
        raise InvalidParameter("window has zero height", 'l')
