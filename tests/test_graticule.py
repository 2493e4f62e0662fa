import pytest
from pytest import approx

from spcsviz.ellipsoid import GRS80, Ellipsoid
from spcsviz.graticule import sample_graticule
from tests.functions import assert_points_close


def test_sample_graticule_defaults():
    graticule = sample_graticule()
    assert [line.value for line in graticule.parallels] == [
        -90., -75., -60., -45., -30., -15., 0., 15., 30., 45., 60., 75., 90.
    ]
    assert len(graticule.meridians) == 24
    assert graticule.meridians[0].value == 0.
    assert graticule.meridians[-1].value == 345.
    assert len(graticule.lines) == 37


def test_sample_graticule_parallels_closed():
    graticule = sample_graticule()
    for line in graticule.parallels:
        assert line.kind == 'parallel'
        assert len(line.points) == 181
        assert line.is_closed
        assert line.points[0] == line.points[-1]


def test_sample_graticule_meridians_open():
    graticule = sample_graticule()
    for line in graticule.meridians:
        assert line.kind == 'meridian'
        assert len(line.points) == 91
        assert not line.is_closed

    prime = graticule.meridians[0]
    assert_points_close(prime.points[0], (0., -GRS80.semi_minor_axis, 0.), abs_tol=1e-6)
    assert_points_close(prime.points[45], (0., 0., GRS80.semi_major_axis), abs_tol=1e-6)
    assert_points_close(prime.points[-1], (0., GRS80.semi_minor_axis, 0.), abs_tol=1e-6)


def test_sample_graticule_primary_lines():
    graticule = sample_graticule()
    primary = graticule.primary_lines
    assert [(line.kind, line.value) for line in primary] == [('parallel', 0.), ('meridian', 0.)]

    equator = primary[0]
    for point in equator.points:
        assert point.y == approx(0., abs=1e-6)
        assert point.norm == approx(GRS80.semi_major_axis)


def test_sample_graticule_poles_degenerate():
    graticule = sample_graticule()
    north = graticule.parallels[-1]
    for point in north.points:
        assert_points_close(point, (0., GRS80.semi_minor_axis, 0.), abs_tol=1e-3)


def test_sample_graticule_custom():
    graticule = sample_graticule(Ellipsoid(1., 0.), lat_interval=30, lon_interval=90, sample_step=10)
    assert len(graticule.parallels) == 7
    assert [line.value for line in graticule.meridians] == [0., 90., 180., 270.]
    assert len(graticule.parallels[0].points) == 37
    assert len(graticule.meridians[0].points) == 19

    array = graticule.parallels[3].to_numpy()
    assert array.shape == (37, 3)
    assert array[:, 1] == approx([0.] * 37, abs=1e-12)


def test_sample_graticule_validation():
    with pytest.raises(ValueError):
        sample_graticule(lat_interval=0)

    with pytest.raises(ValueError):
        sample_graticule(lon_interval=-15)

    with pytest.raises(ValueError):
        sample_graticule(sample_step=0.)

    with pytest.raises(ValueError):
        sample_graticule('GRS80')
