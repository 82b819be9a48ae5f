"""Tests for coordinate mapping and the escape-time test."""
import numpy as np

from mandelbrot_server.core.math_functions import (
    ITERATION_LIMIT,
    create_coordinate_arrays,
    escape_counts,
    escape_time,
    intensities,
    intensity,
    pixel_to_point,
)


def test_pixel_to_point():
    point = pixel_to_point((100, 100), (25, 75), complex(-1.0, 1.0), complex(1.0, -1.0))
    assert point == complex(-0.5, -0.5)


def test_pixel_to_point_corners():
    upper_left, lower_right = complex(-2.0, 1.5), complex(1.0, -1.5)
    assert pixel_to_point((300, 200), (0, 0), upper_left, lower_right) == upper_left
    assert pixel_to_point((300, 200), (300, 200), upper_left, lower_right) == lower_right


def test_coordinate_arrays_match_scalar_mapping():
    bounds = (7, 5)
    upper_left, lower_right = complex(-1.3, 0.7), complex(0.4, -0.9)
    real, imag = create_coordinate_arrays(bounds, upper_left, lower_right, top=2, rows=3)

    assert real.shape == (3, 7)
    for row in range(3):
        for col in range(7):
            point = pixel_to_point(bounds, (col, row + 2), upper_left, lower_right)
            assert real[row, col] == point.real
            assert imag[row, col] == point.imag


def test_origin_never_escapes():
    for limit in (1, 10, ITERATION_LIMIT):
        assert escape_time(0j, limit) is None


def test_far_points_escape_immediately():
    assert escape_time(complex(3.0, 0.0)) == 0
    assert escape_time(complex(-1.5, 1.5)) == 0


def test_known_escape_iterations():
    # 1 -> 2 -> 5
    assert escape_time(complex(1.0, 0.0)) == 2
    # |z| == 2 is not outside the disk
    assert escape_time(complex(2.0, 0.0)) == 1
    # period-2 cycle between 0 and -1
    assert escape_time(complex(-1.0, 0.0)) is None


def test_limit_caps_iterations():
    assert escape_time(complex(1.0, 0.0), limit=2) is None
    assert escape_time(complex(1.0, 0.0), limit=3) == 2


def test_intensity_mapping():
    assert intensity(None) == 0
    assert intensity(0) == 255
    assert intensity(254) == 1


def test_vectorized_matches_scalar():
    bounds = (24, 18)
    upper_left, lower_right = complex(-2.2, 1.3), complex(0.8, -1.3)
    real, imag = create_coordinate_arrays(bounds, upper_left, lower_right)

    counts = escape_counts(real, imag)
    for row in range(bounds[1]):
        for col in range(bounds[0]):
            expected = escape_time(complex(real[row, col], imag[row, col]))
            assert counts[row, col] == (-1 if expected is None else expected)

    pixels = intensities(counts)
    assert pixels.dtype == np.uint8
    assert pixels[counts < 0].max(initial=0) == 0


def test_zero_limit_escapes_nothing():
    real = np.array([[3.0, 0.0]])
    imag = np.zeros((1, 2))
    assert escape_counts(real, imag, limit=0).tolist() == [[-1, -1]]
