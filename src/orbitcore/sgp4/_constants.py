"""
Earth gravity models for the SGP4 propagator.

Three standard models are provided: WGS72 (the model element sets are fitted
with, and the default), WGS72OLD and WGS84.  Values match the reference
``sgp4`` Python library exactly.
"""

from math import pi, sqrt
from typing import NamedTuple


class EarthGravity(NamedTuple):
    """Earth gravity constants used by SGP4.

    Attributes:
        tumin: Minutes per SGP4 time unit (1/xke).
        mu: Gravitational parameter [km^3/s^2].
        radiusearthkm: Earth equatorial radius [km].
        xke: sqrt(GM) in Earth radii^1.5 per minute.
        j2: Second zonal harmonic.
        j3: Third zonal harmonic.
        j4: Fourth zonal harmonic.
        j3oj2: Ratio j3/j2.
    """

    tumin: float
    mu: float
    radiusearthkm: float
    xke: float
    j2: float
    j3: float
    j4: float
    j3oj2: float


def _gravity(mu: float, re: float, j2: float, j3: float, j4: float, xke: float | None = None) -> EarthGravity:
    if xke is None:
        xke = 60.0 / sqrt(re**3 / mu)
    return EarthGravity(
        tumin=1.0 / xke,
        mu=mu,
        radiusearthkm=re,
        xke=xke,
        j2=j2,
        j3=j3,
        j4=j4,
        j3oj2=j3 / j2,
    )


WGS72OLD = _gravity(398600.79964, 6378.135, 0.001082616, -0.00000253881, -0.00000165597, xke=0.0743669161)
"""WGS 72 with the legacy rounded xke."""

WGS72 = _gravity(398600.8, 6378.135, 0.001082616, -0.00000253881, -0.00000165597)
"""WGS 72, the standard model for SGP4."""

WGS84 = _gravity(398600.5, 6378.137, 0.00108262998905, -0.00000253215306, -0.00000161098761)
"""WGS 84."""

GRAVITY_MODELS = {
    "wgs72old": WGS72OLD,
    "wgs72": WGS72,
    "wgs84": WGS84,
}
"""Mapping of gravity model names to ``EarthGravity`` instances."""

XPDOTP = 1440.0 / (2.0 * pi)
"""Revolutions per day to radians per minute divisor (229.1831180523293)."""

DEG2RAD = pi / 180.0
"""Degrees to radians, as a Python float."""
