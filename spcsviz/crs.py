"""
PROJ definitions for SPCS zones, and forward projection of geographic
coordinates into zone grid coordinates. Requires the optional pyproj
dependency (pip install spcsviz[proj]).
"""

__all__ = ['proj_string', 'project_coordinate']

from typing import Optional, Tuple

from spcsviz.angles import LATITUDE_HEMISPHERES, LONGITUDE_HEMISPHERES, angle_to_degrees
from spcsviz.ellipsoid import GRS80, Ellipsoid
from spcsviz.projection import UnsupportedProjectionError
from spcsviz.repository import ProjectionType, ZoneParameterRecord, ZoneParameterRepository


def _ellipsoid_terms(ellipsoid: Ellipsoid) -> str:
    return f'+a={ellipsoid.semi_major_axis!r} +rf={ellipsoid.inverse_flattening!r}'


def _require(value: Optional[float], name: str, record: ZoneParameterRecord) -> float:
    if value is None:
        raise ValueError(f'Zone {record.name} ({record.regional_code}) has no usable {name}')
    return value


def _resolve_ellipsoid(record: ZoneParameterRecord, ellipsoid: Optional[Ellipsoid]) -> Ellipsoid:
    if ellipsoid is not None:
        return ellipsoid
    return ZoneParameterRepository.default().ellipsoid(record.datum) or GRS80


def proj_string(record: ZoneParameterRecord, ellipsoid: Optional[Ellipsoid] = None) -> str:
    """
    Builds the PROJ definition of a zone's grid.

    False easting/northing are converted to meters (PROJ's +x_0/+y_0 are always
    meters); the grid's output units follow the record.

    Args:
        record:
            The zone's parameter record

        ellipsoid: (Optional)
            Overrides the datum's ellipsoid

    Returns:
        str

    Raises:
        UnsupportedProjectionError: for Oblique Mercator zones
        ValueError: if a required parameter is missing
    """
    ellipsoid = _resolve_ellipsoid(record, ellipsoid)
    params = record.params
    to_meters = params.units.meters_per_unit
    x_0 = (params.false_easting or 0.) * to_meters
    y_0 = (params.false_northing or 0.) * to_meters
    lat_0 = _require(
        angle_to_degrees(params.latitude_of_origin, LATITUDE_HEMISPHERES),
        'latitude of origin', record
    )
    units = 'm' if to_meters == 1. else 'us-ft'

    if record.projection_type is ProjectionType.TM:
        lon_0 = _require(
            angle_to_degrees(params.central_meridian, LONGITUDE_HEMISPHERES),
            'central meridian', record
        )
        k = record.scale_factor or 1.
        head = f'+proj=tmerc +lat_0={lat_0!r} +lon_0={lon_0!r} +k={k!r}'

    elif record.projection_type is ProjectionType.LCC:
        lon_0 = _require(
            angle_to_degrees(
                params.longitude_of_origin or params.central_meridian, LONGITUDE_HEMISPHERES
            ),
            'longitude of origin', record
        )
        lat_1 = _require(
            angle_to_degrees(params.standard_parallel_1, LATITUDE_HEMISPHERES),
            'standard parallel 1', record
        )
        lat_2 = _require(
            angle_to_degrees(params.standard_parallel_2, LATITUDE_HEMISPHERES),
            'standard parallel 2', record
        )
        head = (
            f'+proj=lcc +lat_1={lat_1!r} +lat_2={lat_2!r} '
            f'+lat_0={lat_0!r} +lon_0={lon_0!r}'
        )

    else:
        raise UnsupportedProjectionError(record.projection_type)

    return f'{head} +x_0={x_0!r} +y_0={y_0!r} {_ellipsoid_terms(ellipsoid)} +units={units} +no_defs'


def project_coordinate(
    record: ZoneParameterRecord,
    longitude: float,
    latitude: float,
    ellipsoid: Optional[Ellipsoid] = None,
) -> Tuple[float, float]:
    """
    Projects a longitude/latitude (on the zone's own datum) into the zone's grid.

    Args:
        record:
            The zone's parameter record

        longitude:
            Longitude in decimal degrees, east positive

        latitude:
            Latitude in decimal degrees

        ellipsoid: (Optional)
            Overrides the datum's ellipsoid

    Returns:
        (easting, northing) in the zone's units
    """
    from pyproj import CRS, Transformer  # pylint: disable=import-outside-toplevel

    ellipsoid = _resolve_ellipsoid(record, ellipsoid)
    geographic = CRS.from_proj4(f'+proj=longlat {_ellipsoid_terms(ellipsoid)} +no_defs')
    grid = CRS.from_proj4(proj_string(record, ellipsoid))

    transformer = Transformer.from_crs(geographic, grid, always_xy=True)
    easting, northing = transformer.transform(longitude, latitude)
    return float(easting), float(northing)
