"""
Biaxial reference ellipsoids (datums) and points on their surfaces
"""

__all__ = ['CLARKE_1866', 'Ellipsoid', 'GRS80', 'WGS84']

import math
from typing import Optional, Tuple

import numpy as np
from pydantic import validate_call

from spcsviz._const import (
    CLARKE1866_A, CLARKE1866_F, GRS80_A, GRS80_F, SURFACE_U_SEGMENTS, SURFACE_V_SEGMENTS,
    WGS84_A, WGS84_F
)
from spcsviz.coordinates import CartesianPoint, point_on_sphere


class Ellipsoid:
    """
    A reference ellipsoid of revolution, defined by its semi-major axis (meters)
    and flattening. The polar axis is the scene's Y axis.
    """

    @validate_call
    def __init__(self, semi_major_axis: float, flattening: float, name: Optional[str] = None):
        if semi_major_axis <= 0:
            raise ValueError(f'semi_major_axis must be positive, got {semi_major_axis}')

        if not 0 <= flattening < 1:
            raise ValueError(f'flattening must be within [0, 1), got {flattening}')

        self._a = float(semi_major_axis)
        self._f = float(flattening)
        self.name = name

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return self._a == other._a and self._f == other._f

    def __hash__(self):
        return hash((self._a, self._f))

    def __repr__(self):
        label = f'{self.name}, ' if self.name else ''
        return f'<Ellipsoid({label}a={self._a}, 1/f={self.inverse_flattening:.9f})>'

    @property
    def semi_major_axis(self) -> float:
        return self._a

    @property
    def flattening(self) -> float:
        return self._f

    @property
    def semi_minor_axis(self) -> float:
        return self._a * (1 - self._f)

    @property
    def axis_ratio(self) -> float:
        """b / a; the factor applied to Y when deforming a sphere into this ellipsoid"""
        return 1 - self._f

    @property
    def inverse_flattening(self) -> float:
        return math.inf if self._f == 0 else 1 / self._f

    @property
    def eccentricity_squared(self) -> float:
        return self._f * (2 - self._f)

    def point(self, latitude: float, longitude: float) -> CartesianPoint:
        """
        The surface point at a geographic latitude/longitude, obtained by flattening
        the circumscribing sphere along the polar axis.

        Args:
            latitude:
                Latitude in degrees

            longitude:
                Longitude in degrees, east positive

        Returns:
            CartesianPoint
        """
        return point_on_sphere(latitude, longitude, self._a).scaled(sy=self.axis_ratio)

    def surface_point(self, u: float, v: float) -> CartesianPoint:
        """
        Parametric surface point over the unit square: lon = 2πu, lat = π(v - 0.5).

        Args:
            u: (float)
                In [0, 1], sweeping longitude eastward from the prime meridian

            v: (float)
                In [0, 1], sweeping latitude from the south pole to the north pole

        Returns:
            CartesianPoint
        """
        lon = u * 2 * math.pi
        lat = (v - 0.5) * math.pi
        return CartesianPoint(
            self._a * math.cos(lat) * math.sin(lon),
            self.semi_minor_axis * math.sin(lat),
            self._a * math.cos(lat) * math.cos(lon),
        )

    def surface_mesh(
        self,
        u_segments: int = SURFACE_U_SEGMENTS,
        v_segments: int = SURFACE_V_SEGMENTS
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Samples the parametric surface on a (v_segments + 1) x (u_segments + 1) grid.

        Returns:
            Tuple of x, y, z arrays, each shaped (v_segments + 1, u_segments + 1)
        """
        if u_segments < 1 or v_segments < 1:
            raise ValueError('Mesh resolution must be at least one segment per direction.')

        u, v = np.meshgrid(
            np.linspace(0., 1., u_segments + 1),
            np.linspace(0., 1., v_segments + 1),
        )
        lon = u * 2 * np.pi
        lat = (v - 0.5) * np.pi

        x = self._a * np.cos(lat) * np.sin(lon)
        y = self.semi_minor_axis * np.sin(lat)
        z = self._a * np.cos(lat) * np.cos(lon)
        return x, y, z


GRS80 = Ellipsoid(GRS80_A, GRS80_F, name='GRS80')
CLARKE_1866 = Ellipsoid(CLARKE1866_A, CLARKE1866_F, name='Clarke 1866')
WGS84 = Ellipsoid(WGS84_A, WGS84_F, name='WGS84')
