import math

import pytest
from pytest import approx

from spcsviz.angles import (
    LATITUDE_HEMISPHERES, LONGITUDE_HEMISPHERES, NOT_SPECIFIED, AngleDMS,
    angle_to_degrees, format_angle, parse_angle
)


def test_angle_dms_init():
    angle = AngleDMS(85, 50, 0, 'w')
    assert angle.degrees == 85
    assert angle.minutes == 50
    assert angle.seconds == 0
    assert angle.hemisphere == 'W'

    with pytest.raises(ValueError):
        AngleDMS(85, 50, 0, 'Q')

    with pytest.raises(ValueError):
        AngleDMS(-85, 50, 0, 'W')

    with pytest.raises(ValueError):
        AngleDMS(85, 75, 0, 'W')

    with pytest.raises(ValueError):
        AngleDMS(85, 50, 60, 'W')


def test_angle_dms_eq():
    assert AngleDMS(85, 50, 0, 'W') == AngleDMS(85, 50, 0, 'W')
    assert AngleDMS(85, 50, 0, 'W') != AngleDMS(85, 50, 0, 'E')
    assert AngleDMS(85, 50, 0, 'W') != -85.8333


def test_angle_dms_hash():
    angles = [
        AngleDMS(85, 50, 0, 'W'),
        AngleDMS(85, 50, 0, 'W'),
        AngleDMS(30, 30, 0, 'N'),
    ]
    assert len(set(angles)) == 2


def test_angle_dms_repr():
    assert repr(AngleDMS(85, 50, 0, 'W')) == '<AngleDMS(85 50 W)>'
    assert repr(AngleDMS(122, 19, 45, 'W')) == '<AngleDMS(122 19 45 W)>'


def test_angle_dms_decimal_degrees():
    assert AngleDMS(85, 50, 0, 'W').decimal_degrees == approx(-85.833333333)
    assert AngleDMS(30, 30, 0, 'N').decimal_degrees == approx(30.5)
    assert AngleDMS(122, 19, 45, 'W').decimal_degrees == approx(-122.329166667)
    assert AngleDMS(18, 50, 0, 'S').radians == approx(math.radians(-18.833333333))

    assert AngleDMS(30, 30, 0, 'N').is_latitude
    assert not AngleDMS(85, 50, 0, 'W').is_latitude


def test_angle_dms_from_decimal():
    assert AngleDMS.from_decimal(-85.8333333, 'longitude') == AngleDMS(85, 50, 0, 'W')
    assert AngleDMS.from_decimal(30.5, 'latitude') == AngleDMS(30, 30, 0, 'N')
    assert AngleDMS.from_decimal(-122.3291667) == AngleDMS(122, 19, 45, 'W')

    # Rounded seconds carry into minutes and degrees
    assert AngleDMS.from_decimal(30.9999999, 'latitude') == AngleDMS(31, 0, 0, 'N')

    with pytest.raises(ValueError):
        AngleDMS.from_decimal(1., 'altitude')


def test_parse_angle():
    assert parse_angle('85 50 W') == AngleDMS(85, 50, 0, 'W')
    assert parse_angle('122 19 45 w') == AngleDMS(122, 19, 45, 'W')
    assert parse_angle('  30 30 N ') == AngleDMS(30, 30, 0, 'N')
    assert parse_angle('30° 30′ N') == AngleDMS(30, 30, 0, 'N')
    assert parse_angle("122° 19' 45\" W") == AngleDMS(122, 19, 45, 'W')

    # Decimal degrees pass through as floats
    assert parse_angle('-84.3667') == approx(-84.3667)

    # Unrecognized strings come back unchanged
    assert parse_angle('84.5 W') == '84.5 W'
    assert parse_angle('1.2.3') == '1.2.3'
    assert parse_angle('not an angle') == 'not an angle'
    assert parse_angle('85 50') == '85 50'
    assert parse_angle('85 75 W') == '85 75 W'
    assert parse_angle('85 50 60 W') == '85 50 60 W'
    assert parse_angle('85 59 59 W') == AngleDMS(85, 59, 59, 'W')

    # Non-strings are not specified
    assert parse_angle(None) is NOT_SPECIFIED
    assert parse_angle(-84.3667) is NOT_SPECIFIED


def test_not_specified():
    assert not NOT_SPECIFIED
    assert str(NOT_SPECIFIED) == 'Not specified'
    assert repr(NOT_SPECIFIED) == '<NOT_SPECIFIED>'
    assert type(NOT_SPECIFIED)() is NOT_SPECIFIED


def test_format_angle():
    assert format_angle('85 50 W') == '85° 50′ W'
    assert format_angle('146 00 W') == '146° 00′ W'
    assert format_angle('122 19 45 W') == '122° 19′ 45″ W'
    assert format_angle('54 00 N') == '54° 00′ N'
    assert format_angle(AngleDMS(1, 2, 3, 'S')) == '1° 02′ 03″ S'
    assert str(AngleDMS(85, 50, 0, 'W')) == '85° 50′ W'

    assert format_angle(-84.36667) == '-84.3667°'
    assert format_angle('-84.3667') == '-84.3667°'
    assert format_angle(30) == '30.0000°'

    assert format_angle('not an angle') == 'not an angle'
    assert format_angle(None) == 'Not specified'
    assert format_angle(True) == 'Not specified'


def test_angle_to_degrees():
    assert angle_to_degrees('30 30 N', LATITUDE_HEMISPHERES) == approx(30.5)
    assert angle_to_degrees('85 50 W', LONGITUDE_HEMISPHERES) == approx(-85.833333333)
    assert angle_to_degrees(AngleDMS(85, 50, 0, 'E')) == approx(85.833333333)
    assert angle_to_degrees('-84.3667', LATITUDE_HEMISPHERES) == approx(-84.3667)
    assert angle_to_degrees(12) == 12.

    # Hemisphere on the wrong axis
    assert angle_to_degrees('85 50 W', LATITUDE_HEMISPHERES) is None
    assert angle_to_degrees('30 30 N', LONGITUDE_HEMISPHERES) is None

    assert angle_to_degrees(None) is None
    assert angle_to_degrees('garbage') is None
    assert angle_to_degrees(float('nan')) is None
    assert angle_to_degrees(True) is None


@pytest.mark.parametrize('text', ['85 50 W', '146 00 W', '54 00 N', '30 30 n', '0 00 E'])
def test_angle_format_parse_round_trip(text):
    angle = parse_angle(text)
    assert parse_angle(angle.to_string()) == angle
    assert format_angle(parse_angle(angle.to_string())) == format_angle(angle)
    assert parse_angle(format_angle(angle)) == angle
