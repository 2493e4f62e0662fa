from typing import Any, Dict, List, Optional, Sequence

from pytest import approx


def assert_points_close(p1: Sequence[float], p2: Sequence[float], abs_tol=1e-9):
    """
    Asserts that two 3D points are equal within a specified absolute tolerance.

    Args:
        p1: The first point (CartesianPoint, tuple or array)
        p2: The second point
        abs_tol: The absolute tolerance for floating point comparison
    """
    try:
        assert len(p1) == len(p2) == 3
        for a, b in zip(p1, p2):
            assert a == approx(b, abs=abs_tol)
    except AssertionError as e:
        print(tuple(p1))
        print(tuple(p2))
        raise e


class FakeClock:
    """
    A millisecond clock for driving orbits deterministically. Each call returns the
    current time, then advances it by `step`.
    """

    def __init__(self, start: float = 0., step: float = 0.):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


def polygon(min_lon: float, min_lat: float, max_lon: float, max_lat: float) -> List[List[List[float]]]:
    """Polygon coordinates (a single closed outer ring) for a lon/lat box"""
    return [[
        [min_lon, min_lat], [max_lon, min_lat], [max_lon, max_lat],
        [min_lon, max_lat], [min_lon, min_lat],
    ]]


def zone_feature(
    fipszone: Any = None,
    name: Optional[str] = None,
    geometry: Optional[Dict[str, Any]] = None,
    **properties
) -> Dict[str, Any]:
    """A boundary-feed GeoJSON feature with the given properties"""
    props = dict(properties)
    if fipszone is not None:
        props['FIPSZONE'] = fipszone
    if name is not None:
        props['ZONENAME'] = name

    return {
        'type': 'Feature',
        'properties': props,
        'geometry': geometry if geometry is not None else {
            'type': 'Polygon',
            'coordinates': polygon(-88., 30., -85., 35.),
        },
    }
