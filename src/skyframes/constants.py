"""
The `constants` module defines the mathematical, time and physical constants used by the frame conversions.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

"""
Constant to convert radians to arcseconds. Equal to (360*3600)/(2pi). Units: *as/rad*
"""
RAD2AS = 360.0 * 3600.0 / PI / 2.0

"""
Constant to convert milliarcseconds to radians. Units: *rad/mas*
"""
MAS2RAD = AS2RAD / 1000.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD2000 = 2451545.0

"""
Modified Julian Date of the J2000.0 epoch. Units: *days*
"""
MJD2000 = 51544.5

"""
Julian Date of the Besselian epoch B1950.0. Units: *days*
"""
JD_B1950 = 2433282.4235

"""
Days per Julian century. Units: *days*
"""
DAYS_PER_JULIAN_CENTURY = 36525.0

"""
Length of the Julian year. Units: *days*
"""
JULIAN_YEAR = 365.25

"""
Length of the tropical (Besselian) year at B1900. Units: *days*
"""
BESSELIAN_YEAR = 365.242198781

"""
Julian Date of the Besselian epoch B1900.0. Units: *days*
"""
JD_B1900 = 2415020.31352

"""
Seconds per day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

# Physical Constants

"""
Astronomical Unit. Units: *m*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11

"""
Earth's equatorial radius used for diurnal parallax. Units: *m*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 11.
"""
R_EARTH_EQUATOR = 6378140.0

"""
Ratio of Earth's polar to equatorial radius (b/a). Units: *dimensionless*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 11.
"""
EARTH_AXIS_RATIO = 0.99664719

"""
Constant of annual aberration. Units: *as*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 23.
"""
ABERRATION_CONSTANT = 20.49552

"""
Schwarzschild radius of the Sun. Units: *AU*

References:

1. IAU SOFA, ``SRS`` in ``sofam.h``.
"""
SCHWARZSCHILD_RADIUS_SUN = 1.97412574336e-8

# Galactic reference directions, equinoctial J2000

"""
Right ascension of the north galactic pole, J2000. Units: *deg*
"""
GALACTIC_POLE_RA_J2000 = 192.85948

"""
Declination of the north galactic pole, J2000. Units: *deg*
"""
GALACTIC_POLE_DEC_J2000 = 27.12825

"""
Right ascension of the galactic center, J2000. Units: *deg*
"""
GALACTIC_CENTER_RA_J2000 = 266.405

"""
Declination of the galactic center, J2000. Units: *deg*
"""
GALACTIC_CENTER_DEC_J2000 = -28.936

# Frame limits

"""
Smallest radius accepted for a position. Units: *AU*
"""
RADIUS_FLOOR = 1e-7

"""
Allowed observer elevation range. Units: *m*
"""
ELEVATION_MIN = -12000.0
ELEVATION_MAX = 3e7
