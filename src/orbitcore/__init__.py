"""
orbitcore is a satellite orbit propagation and reference-frame library implemented in JAX.
"""

from .config import set_dtype, get_dtype

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    JD_MJD_OFFSET,
    JD2000,
    AU,
    WGS84_a,
    WGS84_e,
    OBLIQUITY_J2000,
)

from .errors import FormatError, MissingFieldError, PropagationError

from .rotations import (
    Rx,
    Ry,
    Rz
)

from .time import (
    GregorianTime,
    date_julian_ymd,
    time_julian_ymdhms,
    time_julian_datetime,
    time_gregorian,
)

from .timecorr import (
    TimeScale,
    TimeStamp,
    TimeCorrelationData,
    time_stamp,
    default_time_correlation,
)

from .nutation import NutationData, nutation
from .sidereal import time_gmst, time_gast

from .coordinates import (
    EarthPosition,
    coord_wgs84_efi,
    coord_efi_wgs84,
)

from .frames import (
    Frame,
    OsvFrame,
    OsvAllFrames,
    transform,
    compute_all,
)

from .ephemeris import planet_heliocentric, barycentric_offset

from .sgp4 import (
    OrbitalElementRecord,
    Sgp4Propagator,
    parse_tle,
    parse_tle_catalog,
    serialize_tle,
    from_key_value,
    to_key_value,
)

from .propagation import propagate, CatalogPropagator
from .sun import sun_osv_efi, subsolar_point

__all__ = [
    # Config
    "set_dtype",
    "get_dtype",
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AS2RAD",
    "JD_MJD_OFFSET",
    "JD2000",
    "AU",
    "WGS84_a",
    "WGS84_e",
    "OBLIQUITY_J2000",
    # Errors
    "FormatError",
    "MissingFieldError",
    "PropagationError",
    # Rotations
    "Rx",
    "Ry",
    "Rz",
    # Time
    "GregorianTime",
    "date_julian_ymd",
    "time_julian_ymdhms",
    "time_julian_datetime",
    "time_gregorian",
    "TimeScale",
    "TimeStamp",
    "TimeCorrelationData",
    "time_stamp",
    "default_time_correlation",
    # Earth orientation
    "NutationData",
    "nutation",
    "time_gmst",
    "time_gast",
    # Coordinates and frames
    "EarthPosition",
    "coord_wgs84_efi",
    "coord_efi_wgs84",
    "Frame",
    "OsvFrame",
    "OsvAllFrames",
    "transform",
    "compute_all",
    # Ephemeris
    "planet_heliocentric",
    "barycentric_offset",
    # Element records and propagation
    "OrbitalElementRecord",
    "Sgp4Propagator",
    "parse_tle",
    "parse_tle_catalog",
    "serialize_tle",
    "from_key_value",
    "to_key_value",
    "propagate",
    "CatalogPropagator",
    # Sun
    "sun_osv_efi",
    "subsolar_point",
]
