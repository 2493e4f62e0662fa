"""
SPCS zones as delivered by the zone-boundary GeoJSON feed, joined with their
detailed parameters from the zone parameter repository.

A zone's projection parameters come from one of two sources: the repository
record (authoritative, DMS strings) or the feed's own properties (decimal
degrees). The repository record wins whenever one exists.
"""

__all__ = [
    'DatabaseParameters', 'FeedParameters', 'Zone', 'combined_bounds', 'process_zone_data'
]

from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from spcsviz._const import DEFAULT_DATUM
from spcsviz.angles import format_angle
from spcsviz.repository import (
    ProjectionType, Units, ZoneParameterRecord, ZoneParameterRepository, normalize_regional_code
)
from spcsviz.utils.functions import round_half_up
from spcsviz.utils.logging import LOGGER

Bounds = Tuple[float, float, float, float]


class DatabaseParameters(NamedTuple):
    """Parameters resolved from the zone parameter repository"""
    record: ZoneParameterRecord

    @property
    def projection_code(self) -> str:
        return self.record.projection_type.value


class FeedParameters(NamedTuple):
    """Parameters carried by the boundary feed itself, in decimal degrees"""
    projection: Optional[str] = None
    central_meridian: Optional[float] = None
    latitude_of_origin: Optional[float] = None
    scale_factor: Optional[float] = None
    false_easting: Optional[float] = None
    false_northing: Optional[float] = None
    standard_parallel_1: Optional[float] = None
    standard_parallel_2: Optional[float] = None

    @property
    def projection_code(self) -> Optional[str]:
        return self.projection

    @property
    def scale_factor_denominator(self) -> Optional[int]:
        """Recovers D from a decimal scale factor k = 1 - 1/D"""
        if self.scale_factor is None or not 0 < self.scale_factor < 1:
            return None
        return round(1 / (1 - self.scale_factor))

    def to_record(
        self,
        regional_code: Optional[str],
        name: str,
        datum: str = DEFAULT_DATUM,
    ) -> Optional[ZoneParameterRecord]:
        """
        Synthesizes a parameter record from the feed values so feed-only zones can
        still be aligned. Angles are carried as decimal-degree strings, and codes
        that aren't valid zone codes fall back to '0000'.
        """
        try:
            projection_type = ProjectionType(self.projection)
        except ValueError:
            return None

        def _angle(value: Optional[float]) -> Optional[str]:
            return None if value is None else f'{float(value):.10f}'

        params: Dict[str, Any] = {
            'latitude_of_origin': _angle(self.latitude_of_origin),
            'false_easting': self.false_easting,
            'false_northing': self.false_northing,
        }
        if projection_type is ProjectionType.LCC:
            params.update({
                'longitude_of_origin': _angle(self.central_meridian),
                'standard_parallel_1': _angle(self.standard_parallel_1),
                'standard_parallel_2': _angle(self.standard_parallel_2),
            })
        else:
            params.update({
                'central_meridian': _angle(self.central_meridian),
                'scale_factor_denominator': self.scale_factor_denominator,
            })

        return ZoneParameterRecord(
            regional_code=normalize_regional_code(regional_code) or '0000',
            name=name,
            datum=datum,
            projection_type=projection_type,
            params=params,
        )


ParameterSource = Union[DatabaseParameters, FeedParameters]


def _float_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _format_distance(value: float) -> str:
    return f'{value:,.0f}' if float(value).is_integer() else f'{value:,.4f}'


def _ring_bounds(ring: Sequence[Sequence[float]]) -> Optional[Bounds]:
    if not ring:
        return None
    lons = [point[0] for point in ring]
    lats = [point[1] for point in ring]
    return min(lons), min(lats), max(lons), max(lats)


def _union_bounds(bounds: Iterable[Optional[Bounds]]) -> Optional[Bounds]:
    out: Optional[Bounds] = None
    for b in bounds:
        if b is None:
            continue
        if out is None:
            out = b
            continue
        out = (min(out[0], b[0]), min(out[1], b[1]), max(out[2], b[2]), max(out[3], b[3]))
    return out


class Zone:
    """A single SPCS zone from the boundary feed"""

    def __init__(
        self,
        name: str,
        regional_code: Optional[str],
        parameters: ParameterSource,
        feed_parameters: Optional[FeedParameters] = None,
        geometry: Optional[Dict[str, Any]] = None,
        properties: Optional[Dict[str, Any]] = None,
        datum: str = DEFAULT_DATUM,
    ):
        self.name = name
        self.datum = datum
        self.regional_code = regional_code
        self.parameters = parameters
        self.feed_parameters = feed_parameters or (
            parameters if isinstance(parameters, FeedParameters) else FeedParameters()
        )
        self.geometry = geometry or {}
        self.properties = properties or {}

    def __repr__(self):
        return f'<Zone({self.name!r}, {self.regional_code}, {self.projection_label})>'

    @classmethod
    def from_feature(
        cls,
        feature: Dict[str, Any],
        repository: Optional[ZoneParameterRepository] = None,
        datum: str = DEFAULT_DATUM,
    ):
        """
        Creates a Zone from a boundary-feed GeoJSON feature.

        Args:
            feature:
                A GeoJSON Feature whose properties follow the feed's schema (ZONENAME,
                FIPSZONE, PROJECTION, CENTRAL_MERIDIAN, ...)

            repository: (Optional)
                The repository to resolve detailed parameters from; defaults to the
                bundled dataset

            datum: (str)
                (Default 'NAD83') The datum to resolve parameters under

        Returns:
            Zone
        """
        if repository is None:
            repository = ZoneParameterRepository.default()
        props = dict(feature.get('properties') or {})

        feed = FeedParameters(
            projection=props.get('PROJECTION'),
            central_meridian=_float_or_none(props.get('CENTRAL_MERIDIAN')),
            latitude_of_origin=_float_or_none(props.get('LATITUDE_OF_ORIGIN')),
            scale_factor=_float_or_none(props.get('SCALE_FACTOR')),
            false_easting=_float_or_none(props.get('FALSE_EASTING')),
            false_northing=_float_or_none(props.get('FALSE_NORTHING')),
            standard_parallel_1=_float_or_none(props.get('STANDARD_PARALLEL_1')),
            standard_parallel_2=_float_or_none(props.get('STANDARD_PARALLEL_2')),
        )

        regional_code = normalize_regional_code(props.get('FIPSZONE'))
        record = repository.lookup(regional_code, datum) if regional_code else None
        parameters: ParameterSource = DatabaseParameters(record) if record else feed

        return cls(
            name=props.get('ZONENAME') or (record.name if record else 'Unnamed Zone'),
            regional_code=regional_code,
            parameters=parameters,
            feed_parameters=feed,
            geometry=feature.get('geometry'),
            properties=props,
            datum=datum,
        )

    @property
    def zone_code(self) -> Optional[str]:
        return self.properties.get('ZONE')

    @property
    def object_id(self) -> Optional[int]:
        return self.properties.get('OBJECTID')

    @property
    def square_miles(self) -> Optional[float]:
        return _float_or_none(self.properties.get('SQMI'))

    @property
    def color_map(self) -> Optional[int]:
        return self.properties.get('COLORMAP')

    @property
    def has_database_parameters(self) -> bool:
        return isinstance(self.parameters, DatabaseParameters)

    @property
    def record(self) -> Optional[ZoneParameterRecord]:
        """
        The zone's parameter record: the repository record when available,
        otherwise one synthesized from the feed values (None if the feed doesn't
        name a known projection type)
        """
        if isinstance(self.parameters, DatabaseParameters):
            return self.parameters.record
        return self.parameters.to_record(self.regional_code, self.name, self.datum)

    @property
    def projection_label(self) -> str:
        """Human-readable projection type"""
        code = self.parameters.projection_code
        if not code:
            return 'Unknown Projection'
        try:
            return ProjectionType(code).label
        except ValueError:
            return code

    @property
    def bounds(self) -> Optional[Bounds]:
        """
        (min_lon, min_lat, max_lon, max_lat) over the outer ring of each polygon, or
        None for geometry types other than Polygon and MultiPolygon
        """
        geom_type = self.geometry.get('type')
        coords = self.geometry.get('coordinates') or []
        if geom_type == 'Polygon':
            return _ring_bounds(coords[0]) if coords else None

        if geom_type == 'MultiPolygon':
            return _union_bounds(_ring_bounds(polygon[0]) for polygon in coords if polygon)

        LOGGER.warning('Unsupported geometry type: %s for zone %s', geom_type, self.name)
        return None

    def describe(self) -> List[Tuple[str, str]]:
        """
        Lists the zone's projection parameters as (label, value) pairs, formatted for
        display, and logs them at INFO.

        Returns:
            List[Tuple[str, str]]
        """
        lines: List[Tuple[str, str]] = []
        if isinstance(self.parameters, DatabaseParameters):
            record = self.parameters.record
            params = record.params
            lines.append(('Source', 'database'))
            for attr, label in (
                ('central_meridian', 'Central Meridian'),
                ('longitude_of_origin', 'Longitude of Origin'),
                ('latitude_of_origin', 'Latitude of Origin'),
            ):
                value = getattr(params, attr, None)
                if value is not None:
                    lines.append((label, format_angle(value)))

            denominator = getattr(params, 'scale_factor_denominator', None)
            if denominator is not None:
                lines.append((
                    'Scale Factor',
                    f'{record.scale_factor:.6f} (1 - 1/{denominator})'
                ))

            for attr, label in (
                ('standard_parallel_1', 'Standard Parallel 1'),
                ('standard_parallel_2', 'Standard Parallel 2'),
            ):
                value = getattr(params, attr, None)
                if value is not None:
                    lines.append((label, format_angle(value)))

            for attr, label in (('false_easting', 'False Easting'), ('false_northing', 'False Northing')):
                value = getattr(params, attr)
                if value is not None:
                    lines.append((label, f'{_format_distance(value)} {params.units.value}'))

        else:
            feed = self.parameters
            lines.append(('Source', 'feed'))
            for value, label in (
                (feed.central_meridian, 'Central Meridian'),
                (feed.latitude_of_origin, 'Latitude of Origin'),
            ):
                if value is not None:
                    lines.append((label, format_angle(value)))

            if feed.scale_factor is not None:
                lines.append(('Scale Factor', f'{round_half_up(feed.scale_factor, 6):.6f}'))

            for value, label in (
                (feed.standard_parallel_1, 'Standard Parallel 1'),
                (feed.standard_parallel_2, 'Standard Parallel 2'),
            ):
                if value is not None:
                    lines.append((label, format_angle(value)))

            for value, label in (
                (feed.false_easting, 'False Easting'),
                (feed.false_northing, 'False Northing'),
            ):
                if value is not None:
                    lines.append((label, f'{_format_distance(value)} {Units.METERS.value}'))

        LOGGER.info(
            'SPCS Zone: %s (%s)\n%s',
            self.name, self.projection_label,
            '\n'.join(f'  {label}: {value}' for label, value in lines)
        )
        return lines

    def boundary_feature(self) -> Dict[str, Any]:
        """The zone boundary as a GeoJSON Feature"""
        return {
            'type': 'Feature',
            'properties': {
                'name': self.name,
                'projection': self.parameters.projection_code,
            },
            'geometry': self.geometry,
        }


def process_zone_data(
    feature_collection: Dict[str, Any],
    repository: Optional[ZoneParameterRepository] = None,
    datum: str = DEFAULT_DATUM,
) -> List[Zone]:
    """
    Converts a boundary-feed FeatureCollection into Zones.

    Args:
        feature_collection:
            The parsed GeoJSON FeatureCollection

        repository: (Optional)
            Source of detailed parameters; defaults to the bundled dataset

        datum: (str)
            (Default 'NAD83') The datum to resolve parameters under

    Returns:
        List[Zone], in feature order
    """
    return [
        Zone.from_feature(feature, repository, datum)
        for feature in feature_collection.get('features') or []
    ]


def combined_bounds(zones: Sequence[Zone], visible: Iterable[int]) -> Optional[Bounds]:
    """
    The union of the bounds of the visible zones.

    Args:
        zones:
            All zones

        visible:
            Indices of the zones currently shown

    Returns:
        (min_lon, min_lat, max_lon, max_lat), or None if nothing visible has bounds
    """
    return _union_bounds(
        zones[idx].bounds for idx in visible if 0 <= idx < len(zones)
    )
