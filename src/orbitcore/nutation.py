"""IAU 1980 nutation.

Computes the mean obliquity of the ecliptic together with the nutation in
obliquity and in longitude for an instant.  Results are recomputed for
every instant; callers that run several frame transforms at one instant
compute the :class:`NutationData` once and pass it to each of them.

References:
    1. P.K. Seidelmann, "1980 IAU Theory of Nutation", Celestial
       Mechanics 27, 1982.
    2. IAU SOFA routine ``iauNut80``.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore._nutation_coefficients import NUTATION_1980_TERMS
from orbitcore.config import get_dtype
from orbitcore.constants import AS2RAD, DAYS_PER_CENTURY, JD2000, TURNAS
from orbitcore.timecorr import TimeStamp


class NutationData(NamedTuple):
    """Earth nutation parameters at one instant.

    Attributes:
        eps: Mean obliquity of the ecliptic [deg].
        deps: Nutation in obliquity [deg].
        dpsi: Nutation in longitude [deg].
    """

    eps: Array
    deps: Array
    dpsi: Array


def _julian_centuries(jt_tdb: ArrayLike) -> Array:
    return (jnp.asarray(jt_tdb, dtype=get_dtype()) - JD2000) / DAYS_PER_CENTURY


def mean_obliquity(jt_tdb: ArrayLike) -> Array:
    """IAU 1980 mean obliquity of the ecliptic.

    Args:
        jt_tdb: Julian date, TDB.

    Returns:
        Mean obliquity [deg].
    """
    t = _julian_centuries(jt_tdb)
    eps_as = 84381.448 + (-46.8150 + (-0.00059 + 0.001813 * t) * t) * t
    return eps_as / 3600.0


def _fundamental_arguments(t: Array) -> Array:
    """Delaunay arguments l, l', F, D, Om [rad] at ``t`` Julian centuries."""
    two_pi = 2.0 * jnp.pi

    def arg(c0, c1, c2, c3, turns):
        arcsec = c0 + (c1 + (c2 + c3 * t) * t) * t
        return jnp.mod(arcsec, TURNAS) * AS2RAD + jnp.mod(turns * t, 1.0) * two_pi

    # Mean anomaly of the Moon
    el = arg(485866.733, 715922.633, 31.310, 0.064, 1325.0)
    # Mean anomaly of the Sun
    elp = arg(1287099.804, 1292581.224, -0.577, -0.012, 99.0)
    # Mean argument of latitude of the Moon
    f = arg(335778.877, 295263.137, -13.257, 0.011, 1342.0)
    # Mean elongation of the Moon from the Sun
    d = arg(1072261.307, 1105601.328, -6.891, 0.019, 1236.0)
    # Longitude of the Moon's ascending node
    om = arg(450160.280, -482890.539, 7.455, 0.008, -5.0)

    return jnp.stack([el, elp, f, d, om])


def nutation_terms(jt_tdb: ArrayLike) -> NutationData:
    """Evaluate the IAU 1980 nutation series.

    Args:
        jt_tdb: Julian date, TDB.

    Returns:
        NutationData: Mean obliquity, nutation in obliquity and nutation in
            longitude, all in degrees.

    Examples:
        ```python
        from orbitcore.nutation import nutation_terms
        nut = nutation_terms(2451545.0)
        print(nut.dpsi * 3600.0)  # arcseconds
        ```
    """
    t = _julian_centuries(jt_tdb)
    terms = jnp.asarray(NUTATION_1980_TERMS, dtype=get_dtype())

    args = terms[:, :5] @ _fundamental_arguments(t)
    sp = terms[:, 5] + terms[:, 6] * t
    ce = terms[:, 7] + terms[:, 8] * t

    # Coefficients are in units of 0.1 mas
    dpsi = jnp.sum(sp * jnp.sin(args)) * 1e-4 / 3600.0
    deps = jnp.sum(ce * jnp.cos(args)) * 1e-4 / 3600.0

    return NutationData(eps=mean_obliquity(jt_tdb), deps=deps, dpsi=dpsi)


def nutation(timestamp: TimeStamp) -> NutationData:
    """Nutation parameters at the TDB value of ``timestamp``."""
    return nutation_terms(timestamp.jt_tdb)
