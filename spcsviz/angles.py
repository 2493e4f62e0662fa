"""
Parsing and formatting of degrees-minutes-seconds (DMS) angle strings, as used
throughout the SPCS zone parameter tables (e.g. '85 50 W', '122 19 45 W').
"""

__all__ = [
    'AngleDMS', 'NOT_SPECIFIED', 'angle_to_degrees', 'format_angle', 'parse_angle'
]

import math
import re
from typing import Any, Iterable, Optional, Union

from spcsviz.utils.functions import round_half_up


_DMS_RE = re.compile(
    r'(\d+)\s*°?\s+([0-5]?\d)\s*[′\']?(?:\s+([0-5]?\d)\s*(?:″|")?)?\s*([NSEW])',
    re.IGNORECASE
)
_HEMISPHERE_LETTERS = re.compile(r'[NSEW]', re.IGNORECASE)

LATITUDE_HEMISPHERES = ('N', 'S')
LONGITUDE_HEMISPHERES = ('E', 'W')


class _NotSpecified:
    """Sentinel returned when there is no angle to parse at all"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return '<NOT_SPECIFIED>'

    def __str__(self):
        return 'Not specified'


NOT_SPECIFIED = _NotSpecified()


class AngleDMS:
    """An angle expressed as unsigned degrees, minutes and seconds plus a hemisphere"""

    def __init__(self, degrees: int, minutes: int, seconds: int = 0, hemisphere: str = 'N'):
        hemisphere = hemisphere.upper()
        if hemisphere not in ('N', 'S', 'E', 'W'):
            raise ValueError(f'Hemisphere must be one of N, S, E, W; got {hemisphere!r}')

        if min(degrees, minutes, seconds) < 0:
            raise ValueError('Degrees, minutes and seconds must be unsigned.')

        if max(minutes, seconds) >= 60:
            raise ValueError('Minutes and seconds must be less than 60.')

        self.degrees = int(degrees)
        self.minutes = int(minutes)
        self.seconds = int(seconds)
        self.hemisphere = hemisphere

    def __eq__(self, other):
        if not isinstance(other, AngleDMS):
            return False

        return (
            self.degrees == other.degrees and
            self.minutes == other.minutes and
            self.seconds == other.seconds and
            self.hemisphere == other.hemisphere
        )

    def __hash__(self):
        return hash((self.degrees, self.minutes, self.seconds, self.hemisphere))

    def __repr__(self):
        return f'<AngleDMS({self.to_string()})>'

    def __str__(self):
        return format_angle(self)

    @property
    def sign(self) -> int:
        """-1 for the southern/western hemispheres, otherwise 1"""
        return -1 if self.hemisphere in ('S', 'W') else 1

    @property
    def decimal_degrees(self) -> float:
        """The signed angle in decimal degrees"""
        return self.sign * (self.degrees + self.minutes / 60 + self.seconds / 3600)

    @property
    def radians(self) -> float:
        return math.radians(self.decimal_degrees)

    @property
    def is_latitude(self) -> bool:
        return self.hemisphere in LATITUDE_HEMISPHERES

    @classmethod
    def from_decimal(cls, value: float, axis: str = 'longitude'):
        """
        Converts a signed decimal-degree value into DMS. Seconds are rounded to the
        nearest whole second, carrying into minutes and degrees as needed.

        Args:
            value:
                The angle, in decimal degrees

            axis:
                Either 'latitude' (N/S hemispheres) or 'longitude' (E/W hemispheres)

        Returns:
            AngleDMS
        """
        if axis not in ('latitude', 'longitude'):
            raise ValueError(f"axis must be 'latitude' or 'longitude', not {axis!r}")

        positive, negative = LATITUDE_HEMISPHERES if axis == 'latitude' else LONGITUDE_HEMISPHERES
        total_seconds = int(round_half_up(abs(value) * 3600, 0))
        minutes, seconds = divmod(total_seconds, 60)
        degrees, minutes = divmod(minutes, 60)

        return cls(degrees, minutes, seconds, negative if value < 0 else positive)

    def to_string(self) -> str:
        """Renders the angle in the plain table form, e.g. '85 50 W' or '122 19 45 W'"""
        out = f'{self.degrees} {self.minutes:02d}'
        if self.seconds:
            out += f' {self.seconds:02d}'
        return f'{out} {self.hemisphere}'


def parse_angle(value: Any) -> Union[AngleDMS, float, str, _NotSpecified]:
    """
    Parses an angle string of the form 'D M [S] H'.

    Malformed input is never an error:
        * None, or anything that isn't a string, yields NOT_SPECIFIED
        * a string containing a decimal point and no hemisphere letter is taken
          to already be decimal degrees, and is returned as a float
        * any other unrecognized string is returned unchanged, including DMS strings
          whose minutes or seconds are 60 or more

    Args:
        value:
            The angle string, e.g. '85 50 W', '122 19 45 w' or '-84.3667'

    Returns:
        AngleDMS, float, the original str, or NOT_SPECIFIED
    """
    if not isinstance(value, str):
        return NOT_SPECIFIED

    text = value.strip()
    match = _DMS_RE.fullmatch(text)
    if match:
        degrees, minutes, seconds, hemisphere = match.groups()
        return AngleDMS(int(degrees), int(minutes), int(seconds or 0), hemisphere)

    if '.' in text and not _HEMISPHERE_LETTERS.search(text):
        try:
            return float(text)
        except ValueError:
            return value

    return value


def format_angle(value: Any) -> str:
    """
    Renders an angle for display: DMS as "D° MM′ [SS″] H" (seconds omitted when zero),
    decimal degrees as "D.DDDD°".

    Strings are parsed first; strings that can't be parsed are returned unchanged.

    Args:
        value:
            An AngleDMS, a number of decimal degrees, or an angle string

    Returns:
        str
    """
    if isinstance(value, str):
        value = parse_angle(value)
        if isinstance(value, str):
            return value

    if isinstance(value, AngleDMS):
        out = f'{value.degrees}° {value.minutes:02d}′'
        if value.seconds:
            out += f' {value.seconds:02d}″'
        return f'{out} {value.hemisphere}'

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f'{value:.4f}°'

    return str(NOT_SPECIFIED)


def angle_to_degrees(
    value: Any,
    hemispheres: Optional[Iterable[str]] = None
) -> Optional[float]:
    """
    Normalizes any supported angle representation to signed decimal degrees.

    Args:
        value:
            An AngleDMS, an angle string, or a plain number

        hemispheres: (Optional)
            If provided, DMS values with a hemisphere outside this set (e.g. a
            latitude given where a meridian is expected) are rejected

    Returns:
        float, or None if the value is absent or unreadable
    """
    if isinstance(value, str):
        value = parse_angle(value)

    if isinstance(value, AngleDMS):
        if hemispheres is not None and value.hemisphere not in set(hemispheres):
            return None
        return value.decimal_degrees

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if math.isfinite(value) else None

    return None
