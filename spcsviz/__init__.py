from spcsviz._version import __version__  # noqa: F401
from spcsviz.utils.logging import LOGGER
from spcsviz.angles import NOT_SPECIFIED, AngleDMS, format_angle, parse_angle
from spcsviz.coordinates import CartesianPoint, GeographicPoint, point_on_sphere
from spcsviz.ellipsoid import CLARKE_1866, GRS80, WGS84, Ellipsoid
from spcsviz.graticule import Graticule, sample_graticule
from spcsviz.repository import (
    ProjectionType, ZoneParameterRecord, ZoneParameterRepository,
    lookup_zone_parameters
)
from spcsviz.projection import (
    ProjectionTransform, UnsupportedProjectionError, align_projection
)
from spcsviz.orbit import OrbitInterpolator
from spcsviz.zones import Zone, combined_bounds, process_zone_data

__all__ = [
    'AngleDMS',
    'CLARKE_1866',
    'CartesianPoint',
    'Ellipsoid',
    'GRS80',
    'GeographicPoint',
    'Graticule',
    'NOT_SPECIFIED',
    'OrbitInterpolator',
    'ProjectionTransform',
    'ProjectionType',
    'UnsupportedProjectionError',
    'WGS84',
    'Zone',
    'ZoneParameterRecord',
    'ZoneParameterRepository',
    'align_projection',
    'combined_bounds',
    'format_angle',
    'lookup_zone_parameters',
    'parse_angle',
    'point_on_sphere',
    'process_zone_data',
    'sample_graticule',
    'LOGGER',
]
