"""Module for miscellaneous multi-use functions"""

__all__ = [
    'parse_scale_denominator', 'round_half_up', 'scale_factor_from_denominator',
    'stepped_range', 'wrap_longitude'
]

import math
import re
from typing import Any, List, Optional

_FRACTION_RE = re.compile(r'^\s*1\s*/\s*(\d+)\s*$')


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def parse_scale_denominator(value: Any) -> Optional[int]:
    """
    Normalizes a scale factor denominator to an int. SPCS tables express the scale
    factor at the line of tangency as 1 - 1/D; D may arrive as an int, an integer
    string ('10000') or a fraction string ('1/10000').

    Args:
        value:
            The raw denominator

    Returns:
        The denominator as an int, or None if it can't be read or is not greater than 1
    """
    if isinstance(value, bool) or value is None:
        return None

    denominator: Optional[int] = None
    if isinstance(value, int):
        denominator = value
    elif isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            denominator = int(value)
    elif isinstance(value, str):
        match = _FRACTION_RE.match(value)
        if match:
            denominator = int(match.group(1))
        elif value.strip().isdigit():
            denominator = int(value.strip())

    if denominator is None or denominator <= 1:
        return None

    return denominator


def scale_factor_from_denominator(denominator: int) -> float:
    """Scale factor k = 1 - 1/D"""
    return 1 - (1 / denominator)


def stepped_range(start: float, stop: float, step: float, inclusive: bool = True) -> List[float]:
    """
    Evenly stepped values from start toward stop. Values are computed as start + i * step
    rather than accumulated, so that e.g. the equator lands on exactly 0.0.

    Args:
        start:
            The first value

        stop:
            The bound

        step: (float)
            A positive increment

        inclusive: (bool)
            (Default True) Whether stop itself is included if it falls on a step

    Returns:
        List[float]
    """
    if step <= 0:
        raise ValueError(f'step must be positive, got {step}')

    count = math.floor((stop - start) / step + 1e-9)
    values = [start + i * step for i in range(count + 1)]
    if not inclusive and values and math.isclose(values[-1], stop, abs_tol=1e-9):
        values.pop()

    return values


def wrap_longitude(longitude: float) -> float:
    """Wraps a longitude into the half-open range (-180, 180]"""
    lon = math.fmod(longitude, 360.)
    if lon <= -180:
        lon += 360
    elif lon > 180:
        lon -= 360

    return lon
