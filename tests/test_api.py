"""Tests for the top-level render operations."""
import io

import numpy as np
import pytest
from PIL import Image

from mandelbrot_server.api import RenderConfig, render, render_png
from mandelbrot_server.core.math_functions import escape_time, intensity, pixel_to_point
from mandelbrot_server.errors import InvalidParameter

UPPER_LEFT = complex(-1.20, 0.35)
LOWER_RIGHT = complex(-1.0, 0.20)


@pytest.mark.parametrize("bounds", [(1, 1), (1, 9), (9, 1), (13, 7), (64, 48)])
def test_render_buffer_size(bounds):
    pixels = render(bounds, UPPER_LEFT, LOWER_RIGHT)
    assert pixels.dtype == np.uint8
    assert pixels.shape == (bounds[1], bounds[0])
    assert pixels.size == bounds[0] * bounds[1]


def test_render_is_independent_of_worker_count():
    bounds = (80, 61)
    window = (complex(-2.0, 1.2), complex(0.6, -1.2))
    one = render(bounds, *window, RenderConfig(workers=1))
    eight = render(bounds, *window, RenderConfig(workers=8))
    assert one.tobytes() == eight.tobytes()


def test_render_matches_pointwise_escape_test():
    bounds = (20, 15)
    upper_left, lower_right = complex(-2.0, 1.0), complex(1.0, -1.0)
    pixels = render(bounds, upper_left, lower_right, RenderConfig(workers=3))

    for row in range(bounds[1]):
        for col in range(bounds[0]):
            point = pixel_to_point(bounds, (col, row), upper_left, lower_right)
            assert pixels[row, col] == intensity(escape_time(point))


def test_render_inside_set_is_black():
    pixels = render((10, 10), complex(-0.1, 0.1), complex(0.1, -0.1))
    assert not pixels.any()


def test_render_rejects_degenerate_input():
    with pytest.raises(InvalidParameter):
        render((0, 10), UPPER_LEFT, LOWER_RIGHT)
    with pytest.raises(InvalidParameter):
        render((10, 10), UPPER_LEFT, UPPER_LEFT)
    with pytest.raises(InvalidParameter):
        render((5000, 5000), UPPER_LEFT, LOWER_RIGHT, RenderConfig(max_pixels=1000))


def test_render_config_validation():
    with pytest.raises(ValueError):
        RenderConfig(workers=0).validate()
    with pytest.raises(ValueError):
        RenderConfig(timeout=0).validate()


def test_render_png():
    data = render_png((30, 20), UPPER_LEFT, LOWER_RIGHT, RenderConfig(workers=2))
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.size == (30, 20)
        decoded = np.array(image)

    assert np.array_equal(decoded, render((30, 20), UPPER_LEFT, LOWER_RIGHT))
