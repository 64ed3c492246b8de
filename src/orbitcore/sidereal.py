"""Greenwich mean and apparent sidereal time.

References:
    1. S. Urban, K. Seidelmann, *Explanatory Supplement to the Astronomical
       Almanac (3rd Ed.)*, 2013, eq. 6.64.
    2. J. Sanz Subirana, J.M. Juan Zornoza, M. Hernandez-Pajares, *GNSS Data
       Processing, Volume I*, ESA TM-23/1, 2013, eq. A.37.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.constants import DAYS_PER_CENTURY, JD2000, SECONDS_PER_DAY
from orbitcore.nutation import NutationData
from orbitcore.utils import cosd, limit_angle_deg


def time_gmst(jt_ut1: ArrayLike, jt_tdb: ArrayLike) -> Array:
    """Greenwich mean sidereal time.

    Args:
        jt_ut1: Julian date, UT1.
        jt_tdb: Julian date, TDB.

    Returns:
        GMST [deg] in [0, 360).
    """
    du = jnp.asarray(jt_ut1, dtype=get_dtype()) - JD2000
    t = (jnp.asarray(jt_tdb, dtype=get_dtype()) - JD2000) / DAYS_PER_CENTURY

    gmst_s = (
        SECONDS_PER_DAY * (0.7790572732640 + 0.00273781191135448 * du + jnp.mod(du, 1.0))
        + 0.00096707
        + t * (307.47710227 + t * (0.092772113 + t * (-2.93e-8 + t * (-1.99708e-5 - 2.453e-9 * t))))
    )

    return limit_angle_deg(gmst_s * 360.0 / SECONDS_PER_DAY)


def time_gast(jt_ut1: ArrayLike, jt_tdb: ArrayLike, nutation: NutationData) -> Array:
    """Greenwich apparent sidereal time.

    Adds the equation of the equinoxes, ``dpsi * cos(eps)``, to GMST.

    Args:
        jt_ut1: Julian date, UT1.
        jt_tdb: Julian date, TDB.
        nutation: Nutation parameters at the same instant.

    Returns:
        GAST [deg] in [0, 360).
    """
    gmst = time_gmst(jt_ut1, jt_tdb)
    return limit_angle_deg(gmst + nutation.dpsi * cosd(nutation.eps))


def earth_rotation_rate(jt_ut1: ArrayLike) -> Array:
    """Rate of change of sidereal time.

    Derivative of the cubic sidereal-time polynomial in days since
    2000-01-01 0h UT1.

    Args:
        jt_ut1: Julian date, UT1.

    Returns:
        Rotation rate [deg/s].
    """
    mjd = jnp.asarray(jt_ut1, dtype=get_dtype()) - 2451544.5
    k1 = 360.985647366
    k2 = 2.90788e-13
    k3 = -5.3016e-22
    return (k1 + 2.0 * k2 * mjd + 3.0 * k3 * mjd * mjd) / SECONDS_PER_DAY
