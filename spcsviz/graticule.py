"""
Sampling of graticule curves (parallels and meridians) on a reference ellipsoid
"""

__all__ = ['Graticule', 'GraticuleLine', 'sample_graticule']

from typing import List, NamedTuple, Tuple

import numpy as np
from pydantic import PositiveFloat, validate_call

from spcsviz._const import (
    GRATICULE_LAT_INTERVAL, GRATICULE_LON_INTERVAL, GRATICULE_SAMPLE_STEP
)
from spcsviz.coordinates import CartesianPoint
from spcsviz.ellipsoid import GRS80, Ellipsoid
from spcsviz.utils.functions import stepped_range


class GraticuleLine(NamedTuple):
    """
    A single sampled graticule curve.

    kind is 'parallel' or 'meridian'; value is its latitude or longitude in degrees.
    Primary lines (the equator and the prime meridian) are styled differently
    downstream; the flag is the only metadata besides geometry.
    """
    kind: str
    value: float
    points: Tuple[CartesianPoint, ...]
    is_primary: bool

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 1 and self.points[0] == self.points[-1]

    def to_numpy(self) -> np.ndarray:
        """The points as an (n, 3) array"""
        return np.array(self.points, dtype=float)


class Graticule(NamedTuple):
    parallels: Tuple[GraticuleLine, ...]
    meridians: Tuple[GraticuleLine, ...]

    @property
    def lines(self) -> List[GraticuleLine]:
        return [*self.parallels, *self.meridians]

    @property
    def primary_lines(self) -> List[GraticuleLine]:
        return [line for line in self.lines if line.is_primary]


def _ring(ellipsoid: Ellipsoid, latitude: float, longitudes: List[float]) -> Tuple[CartesianPoint, ...]:
    points = [ellipsoid.point(latitude, lon) for lon in longitudes]
    # Close the ring on its first point exactly
    points.append(points[0])
    return tuple(points)


@validate_call(config=dict(arbitrary_types_allowed=True))
def sample_graticule(
    ellipsoid: Ellipsoid = GRS80,
    lat_interval: PositiveFloat = GRATICULE_LAT_INTERVAL,
    lon_interval: PositiveFloat = GRATICULE_LON_INTERVAL,
    sample_step: PositiveFloat = GRATICULE_SAMPLE_STEP,
) -> Graticule:
    """
    Samples parallels and meridians on an ellipsoid.

    Parallels are drawn for every latitude in [-90, 90] (both poles included), each as a
    closed ring sampled every `sample_step` degrees of longitude from 0 through 360.
    Meridians are drawn for every longitude in [0, 360), each as an open arc from the
    south pole to the north pole.

    Args:
        ellipsoid: (Ellipsoid)
            (Default GRS80) The reference surface

        lat_interval: (float)
            (Default 15) Degrees between parallels

        lon_interval: (float)
            (Default 15) Degrees between meridians

        sample_step: (float)
            (Default 2) Degrees between successive points along each curve

    Returns:
        Graticule
    """
    sample_lons = stepped_range(0., 360., sample_step, inclusive=False)
    sample_lats = stepped_range(-90., 90., sample_step)

    parallels = tuple(
        GraticuleLine(
            'parallel',
            lat,
            _ring(ellipsoid, lat, sample_lons),
            lat == 0,
        )
        for lat in stepped_range(-90., 90., lat_interval)
    )
    meridians = tuple(
        GraticuleLine(
            'meridian',
            lon,
            tuple(ellipsoid.point(lat, lon) for lat in sample_lats),
            lon == 0,
        )
        for lon in stepped_range(0., 360., lon_interval, inclusive=False)
    )

    return Graticule(parallels, meridians)
