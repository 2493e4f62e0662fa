"""
Constants declarations for spcsviz
"""
from pathlib import Path

# GRS80 Ellipsoid Constants (NAD83)
GRS80_A = 6378137.0  # Semi-major axis (meters)
GRS80_F = 1 / 298.257222101  # Flattening

# Clarke 1866 Ellipsoid Constants (NAD27)
CLARKE1866_A = 6378206.4
CLARKE1866_B = 6356583.8
CLARKE1866_F = 1 - CLARKE1866_B / CLARKE1866_A

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0
WGS84_F = 1 / 298.257223563

# U.S. survey foot, exactly 1200/3937 meters
US_SURVEY_FOOT_METERS = 1200 / 3937

DEFAULT_DATUM = 'NAD83'
ZONE_PARAMETERS_PATH = Path(__file__).with_name('data') / 'spcs_zone_parameters.json'

# Graticule sampling (degrees)
GRATICULE_LAT_INTERVAL = 15.
GRATICULE_LON_INTERVAL = 15.
GRATICULE_SAMPLE_STEP = 2.

# Parametric surface resolution
SURFACE_U_SEGMENTS = 64
SURFACE_V_SEGMENTS = 32
CYLINDER_SEGMENTS = 64
CYLINDER_RINGS = 20

DEFAULT_ORBIT_DURATION_MS = 1000.
