"""
Geographic and Cartesian point representations.

The Cartesian frame is right-handed with +Y toward the north pole, +Z toward the
intersection of the equator and the prime meridian, and +X toward 90°E.
"""

__all__ = ['CartesianPoint', 'GeographicPoint', 'parse_lat_lon', 'point_on_sphere']

import math
from typing import NamedTuple, Union

from spcsviz.angles import AngleDMS
from spcsviz.utils.functions import wrap_longitude


class CartesianPoint(NamedTuple):
    """A point in the scene frame, in the same units as the radius it was built with"""
    x: float
    y: float
    z: float

    @property
    def norm(self) -> float:
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    def scaled(self, sx: float = 1., sy: float = 1., sz: float = 1.) -> 'CartesianPoint':
        """Returns a copy of this point scaled independently along each axis"""
        return CartesianPoint(self.x * sx, self.y * sy, self.z * sz)


class GeographicPoint:
    """A latitude/longitude pair, in decimal degrees"""

    def __init__(
        self,
        latitude: Union[float, int, str],
        longitude: Union[float, int, str],
    ):
        lat, lon = float(latitude), float(longitude)
        if not -90 <= lat <= 90:
            raise ValueError(f'Latitude must be within [-90, 90], got {lat}')

        self.latitude = lat
        self.longitude = wrap_longitude(lon)

    def __eq__(self, other):
        if not isinstance(other, GeographicPoint):
            return False

        return self.latitude == other.latitude and self.longitude == other.longitude

    def __hash__(self):
        return hash((self.latitude, self.longitude))

    def __repr__(self):
        return f'<GeographicPoint({self.latitude}, {self.longitude})>'

    @classmethod
    def from_dms(cls, latitude: AngleDMS, longitude: AngleDMS):
        """
        Creates a GeographicPoint from a pair of DMS angles.

        Args:
            latitude:
                An AngleDMS in the N or S hemisphere

            longitude:
                An AngleDMS in the E or W hemisphere

        Returns:
            GeographicPoint
        """
        if not latitude.is_latitude or longitude.is_latitude:
            raise ValueError('Expected a N/S latitude and an E/W longitude.')

        return cls(latitude.decimal_degrees, longitude.decimal_degrees)

    def to_dms(self):
        """Returns (latitude, longitude) as a pair of AngleDMS"""
        return (
            AngleDMS.from_decimal(self.latitude, 'latitude'),
            AngleDMS.from_decimal(self.longitude, 'longitude'),
        )

    def to_cartesian(self, radius: float = 1.) -> CartesianPoint:
        """Converts to a point on a sphere of the given radius"""
        return point_on_sphere(self.latitude, self.longitude, radius)


def point_on_sphere(latitude: float, longitude: float, radius: float) -> CartesianPoint:
    """
    Converts latitude and longitude (degrees) to a 3D point on a sphere.

    Args:
        latitude:
            Latitude in degrees

        longitude:
            Longitude in degrees, east positive

        radius:
            The sphere radius

    Returns:
        CartesianPoint
    """
    lat_rad = math.radians(latitude)
    lon_rad = math.radians(longitude)

    return CartesianPoint(
        radius * math.cos(lat_rad) * math.sin(lon_rad),
        radius * math.sin(lat_rad),
        radius * math.cos(lat_rad) * math.cos(lon_rad),
    )


def parse_lat_lon(text: str) -> GeographicPoint:
    """
    Parses user coordinate input of the form 'lat,lon' (e.g. '30.5, -85.83').

    Args:
        text:
            The raw input

    Returns:
        GeographicPoint
    """
    parts = text.split(',')
    if len(parts) != 2:
        raise ValueError(f"Invalid coordinate format {text!r}; expected 'lat,lon'")

    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise ValueError(f"Invalid coordinate format {text!r}; expected 'lat,lon'") from exc

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f'Coordinate values must be finite, got {text!r}')

    return GeographicPoint(lat, lon)
