"""
The `constants` module defines the mathematical, time and physical constants used by orbitcore.
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
Arcseconds in a full turn. Units: *as*
"""
TURNAS = 1296000.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5  # Offset between Julian Date and Modified Julian Date

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00 TT). Units: *days*
"""
JD2000 = 2451545.0

"""
Seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Days in a Julian century. Units: *days*
"""
DAYS_PER_CENTURY = 36525.0

"""
Days in a Julian millennium, the time unit of the VSOP87 series. Units: *days*
"""
DAYS_PER_MILLENNIUM = 365250.0

# Physical Constants

"""
Astronomical Unit. Equal to the mean distance of the Earth from the sun.
TDB-compatible value. Units: *m*

References:

1. P. Gérard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11  # [m] Astronomical Unit IAU 2010

"""
One astronomical unit per Julian millennium expressed in meters per second. Units: *(m/s)/(AU/millennium)*
"""
AU_PER_MILLENNIUM = AU / (DAYS_PER_MILLENNIUM * 86400.0)

# Earth Constants

"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Earth's first eccentricity as defined by the WGS84 geodetic system. [dimensionless]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_e = 0.081819190842966

"""
Mean obliquity of the ecliptic at J2000.0 (84381.448 arcseconds). [deg]

References:

1. J. H. Lieske et al., *Expressions for the Precession Quantities Based upon the IAU (1976) System of Astronomical Constants*, 1977
"""
OBLIQUITY_J2000 = 23.439279444444445

# Solar System Masses

"""
Mass of the Sun. [kg]
"""
MASS_SUN = 1.989e30

"""
Masses of the eight planets, Mercury through Neptune. [kg]
"""
PLANET_MASSES = {
    "mercury": 3.285e23,
    "venus": 4.867e24,
    "earth": 5.972e24,
    "mars": 6.39e23,
    "jupiter": 1.898e27,
    "saturn": 5.683e26,
    "uranus": 8.681e25,
    "neptune": 1.024e26,
}
