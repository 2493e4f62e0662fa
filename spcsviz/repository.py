"""
Zone parameter records and the read-only repository that resolves them from a
(datum, regional code) pair
"""

__all__ = [
    'LambertConformalConicParams', 'ObliqueMercatorParams', 'ProjectionParams',
    'ProjectionType', 'TransverseMercatorParams', 'Units', 'ZoneParameterRecord',
    'ZoneParameterRepository', 'lookup_zone_parameters', 'normalize_regional_code',
]

from enum import Enum
import functools
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import (
    BaseModel, ConfigDict, Field, SerializeAsAny, ValidationError, field_validator,
    model_validator
)

from spcsviz._const import DEFAULT_DATUM, US_SURVEY_FOOT_METERS, ZONE_PARAMETERS_PATH
from spcsviz.ellipsoid import CLARKE_1866, GRS80, Ellipsoid
from spcsviz.utils.functions import parse_scale_denominator
from spcsviz.utils.logging import warn_once
from spcsviz.utils.mixins import LoggingMixin


class ProjectionType(str, Enum):
    """Projection kinds used by SPCS zones"""

    TM = 'TM'
    LCC = 'LCC'
    OM = 'OM'

    @property
    def label(self) -> str:
        """Human-readable projection name"""
        return _PROJECTION_LABELS[self]


_PROJECTION_LABELS = {
    ProjectionType.TM: 'Transverse Mercator',
    ProjectionType.LCC: 'Lambert Conformal Conic',
    ProjectionType.OM: 'Oblique Mercator',
}


class Units(str, Enum):
    """Linear units of a zone's false easting/northing"""

    METERS = 'meters'
    US_SURVEY_FEET = 'us-survey-feet'

    @property
    def meters_per_unit(self) -> float:
        return 1. if self is Units.METERS else US_SURVEY_FOOT_METERS


AngleValue = Optional[Union[str, float]]


class ProjectionParams(BaseModel):
    """
    Parameters common to every projection kind. Every field is optional so that an
    incomplete record still loads; consumers skip whatever is missing.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    latitude_of_origin: AngleValue = Field(None, alias='latitudeOfOrigin')
    false_easting: Optional[float] = Field(None, alias='falseEasting')
    false_northing: Optional[float] = Field(None, alias='falseNorthing')
    units: Units = Units.METERS


class TransverseMercatorParams(ProjectionParams):
    central_meridian: AngleValue = Field(None, alias='centralMeridian')
    scale_factor_denominator: Optional[int] = Field(None, alias='scaleFactorDenominator')

    @field_validator('scale_factor_denominator', mode='before')
    @classmethod
    def _normalize_denominator(cls, value):
        return parse_scale_denominator(value)


class LambertConformalConicParams(ProjectionParams):
    longitude_of_origin: AngleValue = Field(None, alias='longitudeOfOrigin')
    central_meridian: AngleValue = Field(None, alias='centralMeridian')
    standard_parallel_1: AngleValue = Field(None, alias='standardParallel1')
    standard_parallel_2: AngleValue = Field(None, alias='standardParallel2')


class ObliqueMercatorParams(ProjectionParams):
    """Alaska zone 1 only"""
    longitude_of_origin: AngleValue = Field(None, alias='longitudeOfOrigin')
    azimuth: Optional[str] = None
    scale_factor_denominator: Optional[int] = Field(None, alias='scaleFactorDenominator')

    @field_validator('scale_factor_denominator', mode='before')
    @classmethod
    def _normalize_denominator(cls, value):
        return parse_scale_denominator(value)


_PARAMS_MAP = {
    ProjectionType.TM: TransverseMercatorParams,
    ProjectionType.LCC: LambertConformalConicParams,
    ProjectionType.OM: ObliqueMercatorParams,
}


class ZoneParameterRecord(BaseModel):
    """The defining parameters of one SPCS zone under one datum"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    regional_code: str = Field(..., alias='regionalCode', pattern=r'^\d{4}$')
    name: str
    datum: str = DEFAULT_DATUM
    projection_type: ProjectionType = Field(..., alias='projectionType')
    params: SerializeAsAny[ProjectionParams] = Field(default_factory=ProjectionParams)

    @model_validator(mode='before')
    @classmethod
    def _select_params_model(cls, data: Any):
        """Builds `params` with the model matching the record's projection type"""
        if not isinstance(data, dict):
            return data

        raw_type = data.get('projection_type', data.get('projectionType'))
        try:
            projection_type = ProjectionType(raw_type)
        except ValueError:
            # Left for field validation to reject
            return data

        params = data.get('params') or {}
        if isinstance(params, dict):
            data = {**data, 'params': _PARAMS_MAP[projection_type](**params)}

        return data

    @property
    def scale_factor(self) -> Optional[float]:
        """1 - 1/D, if the record carries a scale factor denominator"""
        denominator = getattr(self.params, 'scale_factor_denominator', None)
        if denominator is None:
            return None
        return 1 - 1 / denominator


def normalize_regional_code(code: Any) -> Optional[str]:
    """
    Normalizes a regional (FIPS zone) code to its 4-character, zero-padded form,
    e.g. 101, '101' and '0101' all become '0101'.

    Args:
        code:
            The code, as an int or str

    Returns:
        str, or None if the value can't be a zone code
    """
    if isinstance(code, bool) or code is None:
        return None

    if isinstance(code, float):
        if not code.is_integer():
            return None
        code = int(code)

    if isinstance(code, int):
        if code < 0:
            return None
        code = str(code)

    if not isinstance(code, str):
        return None

    code = code.strip()
    if not code.isdigit() or len(code) > 4:
        return None

    return code.zfill(4)


def _ellipsoid_from_dict(datum: str, definition: Optional[Mapping[str, Any]]) -> Optional[Ellipsoid]:
    if not definition:
        return {'NAD83': GRS80, 'NAD27': CLARKE_1866}.get(datum)

    a = float(definition['a'])
    if 'inverseFlattening' in definition:
        flattening = 1 / float(definition['inverseFlattening'])
    else:
        flattening = 1 - float(definition['b']) / a

    return Ellipsoid(a, flattening, name=definition.get('name'))


class ZoneParameterRepository(LoggingMixin):
    """
    Read-only lookup of zone parameter records, keyed first by datum name and then
    by 4-character regional code. Built once from a static dataset; never mutated
    afterward.
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, ZoneParameterRecord]],
        ellipsoids: Optional[Mapping[str, Ellipsoid]] = None,
    ):
        super().__init__()
        self._tables = MappingProxyType({
            datum.upper(): MappingProxyType(dict(records))
            for datum, records in tables.items()
        })
        self._ellipsoids = MappingProxyType({
            datum.upper(): ellipsoid for datum, ellipsoid in (ellipsoids or {}).items()
        })

    def __repr__(self):
        counts = ', '.join(f'{datum}: {len(records)}' for datum, records in self._tables.items())
        return f'<ZoneParameterRepository({counts})>'

    def __len__(self):
        return sum(len(records) for records in self._tables.values())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ZoneParameterRepository':
        """
        Builds a repository from the dataset structure:

            {<datum>: {"ellipsoid": {...}, "zones": {<code>: {name, projectionType, params}}}}

        Records that fail validation (e.g. an unknown projectionType) are skipped
        with a warning rather than failing the whole load.

        Args:
            data:
                The parsed dataset

        Returns:
            ZoneParameterRepository
        """
        tables: Dict[str, Dict[str, ZoneParameterRecord]] = {}
        ellipsoids: Dict[str, Ellipsoid] = {}
        for datum, namespace in data.items():
            datum = datum.upper()
            tables[datum] = {}
            ellipsoid = _ellipsoid_from_dict(datum, namespace.get('ellipsoid'))
            if ellipsoid is not None:
                ellipsoids[datum] = ellipsoid

            for raw_code, raw_record in (namespace.get('zones') or {}).items():
                code = normalize_regional_code(raw_code)
                if code is None:
                    warn_once(f'Skipping {datum} zone with invalid regional code {raw_code!r}')
                    continue

                try:
                    record = ZoneParameterRecord(
                        **{**raw_record, 'regional_code': code, 'datum': datum}
                    )
                except (ValidationError, TypeError) as exc:
                    warn_once(f'Skipping invalid {datum} zone {code}: {exc}')
                    continue

                tables[datum][code] = record

        return cls(tables, ellipsoids)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'ZoneParameterRepository':
        """Builds a repository from a JSON dataset file"""
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def default(cls) -> 'ZoneParameterRepository':
        """The process-wide repository built from the bundled dataset"""
        return _default_repository()

    @property
    def datums(self) -> List[str]:
        return list(self._tables)

    def codes(self, datum: str = DEFAULT_DATUM) -> List[str]:
        """The regional codes known under a datum (empty if the datum is unknown)"""
        return sorted(self._tables.get(datum.upper(), {}))

    def records(self, datum: str = DEFAULT_DATUM) -> Iterable[ZoneParameterRecord]:
        return self._tables.get(datum.upper(), {}).values()

    def ellipsoid(self, datum: str = DEFAULT_DATUM) -> Optional[Ellipsoid]:
        """The reference ellipsoid of a datum, if known"""
        return self._ellipsoids.get(datum.upper())

    def lookup(
        self,
        regional_code: Union[str, int],
        datum: str = DEFAULT_DATUM
    ) -> Optional[ZoneParameterRecord]:
        """
        Resolves the parameter record of a zone.

        Args:
            regional_code:
                The zone's regional (FIPS) code, e.g. '0101', '101' or 101

            datum: (str)
                (Default 'NAD83') The datum namespace

        Returns:
            ZoneParameterRecord, or None if the datum or code is unknown
        """
        code = normalize_regional_code(regional_code)
        if code is None or not isinstance(datum, str):
            return None

        table = self._tables.get(datum.upper())
        if table is None:
            self.logger.debug('Unknown datum %r', datum)
            return None

        record = table.get(code)
        if record is None:
            self.logger.debug('No %s zone with regional code %s', datum, code)

        return record


@functools.lru_cache(maxsize=None)
def _default_repository() -> ZoneParameterRepository:
    return ZoneParameterRepository.from_json(ZONE_PARAMETERS_PATH)


def lookup_zone_parameters(
    regional_code: Union[str, int],
    datum: str = DEFAULT_DATUM
) -> Optional[ZoneParameterRecord]:
    """Looks up a zone in the bundled dataset. See ZoneParameterRepository.lookup"""
    return ZoneParameterRepository.default().lookup(regional_code, datum)
