"""
SGP4 orbit propagation from orbital element records, in JAX.

Provides the element record type and its codecs (three-line fixed-column
text and the generic key-value form), the near-Earth SGP4 theory as a
JIT-compatible kernel, and :class:`Sgp4Propagator`, which owns the derived
parameters for one record.
"""

from orbitcore.sgp4._constants import WGS72, WGS72OLD, WGS84, GRAVITY_MODELS, EarthGravity
from orbitcore.sgp4._propagation import check_error, sgp4_init, sgp4_propagate
from orbitcore.sgp4._propagator import PropagatorState, Sgp4Propagator
from orbitcore.sgp4._tle import (
    compute_checksum,
    from_key_value,
    parse_tle,
    parse_tle_catalog,
    parse_tle_lines,
    serialize_tle,
    to_key_value,
    validate_tle_line,
)
from orbitcore.sgp4._types import OrbitalElementRecord

__all__ = [
    # Types
    "OrbitalElementRecord",
    "EarthGravity",
    "PropagatorState",
    # Constants
    "WGS72OLD",
    "WGS72",
    "WGS84",
    "GRAVITY_MODELS",
    # Codec
    "parse_tle",
    "parse_tle_lines",
    "parse_tle_catalog",
    "serialize_tle",
    "compute_checksum",
    "validate_tle_line",
    "from_key_value",
    "to_key_value",
    # Propagation
    "sgp4_init",
    "sgp4_propagate",
    "check_error",
    "Sgp4Propagator",
]
