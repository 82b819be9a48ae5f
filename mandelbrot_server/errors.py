"""
Exception types raised by the Mandelbrot server.

Parameter problems are detected before any rendering work begins and are
reported as client errors. Failures inside a render or the image codec are
server-side failures.
"""

from typing import Optional


class MandelbrotError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameter(MandelbrotError, ValueError):
    """A request or command-line parameter is missing, malformed or degenerate."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.parameter = parameter


class RenderError(MandelbrotError):
    """A band task failed; the whole render is aborted."""


class RenderTimeout(RenderError):
    """The render did not finish within the configured timeout."""


class EncodingError(MandelbrotError):
    """The image codec rejected the pixel buffer."""


class ConfigError(MandelbrotError):
    """Configuration could not be loaded or is invalid."""
