import pytest
from pytest import approx

from spcsviz.utils.functions import *


def test_round_half_up():
    assert round_half_up(1.59, 1) == 1.6
    assert round_half_up(1.51, 1) == 1.5
    assert round_half_up(1.55, 1) == 1.6
    assert round_half_up(1.65, 1) == 1.7

    assert round_half_up(-1.59, 1) == -1.6
    assert round_half_up(-1.51, 1) == -1.5
    assert round_half_up(-1.55, 1) == -1.5
    assert round_half_up(-1.65, 1) == -1.6


def test_parse_scale_denominator():
    assert parse_scale_denominator(10000) == 10000
    assert parse_scale_denominator(10000.) == 10000
    assert parse_scale_denominator('10000') == 10000
    assert parse_scale_denominator(' 25000 ') == 25000
    assert parse_scale_denominator('1/25000') == 25000
    assert parse_scale_denominator(' 1 / 15000 ') == 15000

    for value in (None, True, 1, 0, -10000, 10000.5, float('inf'), '', 'abc', '1/0', '2/3', []):
        assert parse_scale_denominator(value) is None


def test_scale_factor_from_denominator():
    assert scale_factor_from_denominator(10000) == approx(0.9999)
    assert scale_factor_from_denominator(25000) == approx(0.99996)
    assert scale_factor_from_denominator(2) == 0.5


def test_stepped_range():
    values = stepped_range(-90., 90., 15.)
    assert len(values) == 13
    assert values[0] == -90.
    assert values[6] == 0.
    assert values[-1] == 90.

    values = stepped_range(0., 360., 2., inclusive=False)
    assert len(values) == 180
    assert values[-1] == 358.

    # Stop not on a step
    assert stepped_range(0., 10., 4.) == [0., 4., 8.]
    assert stepped_range(0., 10., 4., inclusive=False) == [0., 4., 8.]

    values = stepped_range(0., 1., 0.1)
    assert len(values) == 11
    assert values[-1] == approx(1.)

    assert stepped_range(5., 0., 1.) == []

    with pytest.raises(ValueError):
        stepped_range(0., 1., 0.)

    with pytest.raises(ValueError):
        stepped_range(0., 1., -1.)


def test_wrap_longitude():
    assert wrap_longitude(0.) == 0.
    assert wrap_longitude(180.) == 180.
    assert wrap_longitude(-180.) == 180.
    assert wrap_longitude(181.) == -179.
    assert wrap_longitude(-181.) == 179.
    assert wrap_longitude(360.) == 0.
    assert wrap_longitude(540.) == 180.
    assert wrap_longitude(-370.) == -10.
