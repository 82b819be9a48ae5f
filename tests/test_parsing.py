"""Tests for parameter parsing and validation."""
import math

import pytest

from mandelbrot_server.core.parsing import (
    parse_bounds,
    parse_complex,
    parse_pair,
    validate_bounds,
    validate_window,
)
from mandelbrot_server.errors import InvalidParameter


def test_parse_pair_int():
    assert parse_pair("", ',', int) is None
    assert parse_pair("10,", ',', int) is None
    assert parse_pair(",10", ',', int) is None
    assert parse_pair("10,20", ',', int) == (10, 20)
    assert parse_pair("10,20xy", ',', int) is None


def test_parse_pair_float():
    assert parse_pair("0.5x", 'x', float) is None
    assert parse_pair("0.5x1.5", 'x', float) == (0.5, 1.5)
    assert parse_pair("0.5 x 1.5", 'x', float) is None


def test_parse_pair_rejects_whitespace_and_underscores():
    assert parse_pair(" 10,20", ',', int) is None
    assert parse_pair("10,20\n", ',', int) is None
    assert parse_pair("1_000,20", ',', int) is None


def test_parse_pair_splits_on_first_separator():
    assert parse_pair("1,2,3", ',', float) is None
    assert parse_pair("10", ',', int) is None


def test_parse_complex():
    assert parse_complex("1.25,-0.0625") == complex(1.25, -0.0625)
    assert parse_complex(",-0.0625") is None
    assert parse_complex("-1,0.20") == complex(-1.0, 0.2)


def test_parse_bounds():
    assert parse_bounds("1000x750") == (1000, 750)
    assert parse_bounds("1000x750.5") is None
    assert parse_bounds("1000,750") is None


def test_validate_bounds():
    validate_bounds((1, 1))
    with pytest.raises(InvalidParameter) as excinfo:
        validate_bounds((100, 0))
    assert excinfo.value.parameter == 'b'
    with pytest.raises(InvalidParameter):
        validate_bounds((-4, 10))
    with pytest.raises(InvalidParameter):
        validate_bounds((100, 100), max_pixels=9999)


def test_validate_window():
    validate_window(complex(-1.2, 0.35), complex(-1.0, 0.2))
    # mirrored windows are allowed
    validate_window(complex(1.0, -1.0), complex(-1.0, 1.0))

    with pytest.raises(InvalidParameter):
        validate_window(complex(-1.0, 1.0), complex(-1.0, -1.0))
    with pytest.raises(InvalidParameter):
        validate_window(complex(-1.0, 1.0), complex(1.0, 1.0))
    with pytest.raises(InvalidParameter) as excinfo:
        validate_window(complex(math.nan, 1.0), complex(1.0, -1.0))
    assert excinfo.value.parameter == 'u'
    with pytest.raises(InvalidParameter):
        validate_window(complex(-1.0, 1.0), parse_complex("inf,-1"))
