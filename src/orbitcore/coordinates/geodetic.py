"""Geodetic (WGS84 ellipsoid) coordinate transformations.

Converts between geodetic positions (latitude, longitude, height) and
Earth-fixed Cartesian coordinates.  The forward transformation is
closed-form; the inverse is a fixed-point iteration on latitude
implemented with ``jax.lax.while_loop`` for JAX traceability.

Angles are in degrees and distances in metres.

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
    2. J. Sanz Subirana, J.M. Juan Zornoza, M. Hernandez-Pajares, *GNSS Data
       Processing, Volume I*, ESA TM-23/1, 2013, Appendix B.
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.constants import WGS84_a, WGS84_e
from orbitcore.utils import atan2d, atand, cosd, sind

# First eccentricity squared of the WGS84 ellipsoid
ECC2 = WGS84_e * WGS84_e


class EarthPosition(NamedTuple):
    """Position relative to the WGS84 ellipsoid.

    Attributes:
        lat: Geodetic latitude [deg].
        lon: Longitude [deg].
        h: Height above the ellipsoid [m].
    """

    lat: Array | float
    lon: Array | float
    h: Array | float


def coord_wgs84_efi(position: EarthPosition) -> Array:
    """Convert a WGS84 geodetic position to Earth-fixed coordinates.

    Uses the prime vertical radius of curvature
    ``N = a / sqrt(1 - e^2 sin^2(lat))``.

    Args:
        position: Geodetic latitude, longitude [deg] and height [m].

    Returns:
        jax.Array: Earth-fixed position ``[x, y, z]`` in *m*.

    Example:
        >>> from orbitcore.coordinates import EarthPosition, coord_wgs84_efi
        >>> r = coord_wgs84_efi(EarthPosition(lat=0.0, lon=0.0, h=0.0))
        >>> float(r[0])  # WGS84_a on the equator
        6378137.0
    """
    dtype = get_dtype()
    lat = jnp.asarray(position.lat, dtype=dtype)
    lon = jnp.asarray(position.lon, dtype=dtype)
    h = jnp.asarray(position.h, dtype=dtype)

    sin_lat = sind(lat)
    n = WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat)

    return jnp.array([
        (n + h) * cosd(lat) * cosd(lon),
        (n + h) * cosd(lat) * sind(lon),
        ((1.0 - ECC2) * n + h) * sin_lat,
    ])


def coord_efi_wgs84(
    r: ArrayLike,
    max_iter: int = 5,
    max_err: float = 1e-10,
) -> EarthPosition:
    """Convert Earth-fixed coordinates to a WGS84 geodetic position.

    Starts from ``lat0 = atan((z/p) / (1 - e^2))`` and iterates

    .. math::

        h = p / \\cos(lat) - N, \\quad
        lat = \\arctan\\left(\\frac{z/p}{1 - e^2 N / (N + h)}\\right)

    until the position rebuilt from ``(lat, lon, h)`` differs from ``r`` by
    less than ``max_err`` relative to ``|r|``, or ``max_iter`` iterations
    have run.  Undefined on the polar axis (``p = 0``).

    Args:
        r: Earth-fixed position ``[x, y, z]`` in *m*.
        max_iter: Maximum number of iterations. Default: ``5``
        max_err: Relative position error to stop at. Default: ``1e-10``

    Returns:
        EarthPosition: Latitude and longitude [deg] and height [m].
    """
    r = jnp.asarray(r, dtype=get_dtype())

    lon = atan2d(r[1], r[0])
    p = jnp.sqrt(r[0] * r[0] + r[1] * r[1])
    r_norm = jnp.linalg.norm(r)
    lat0 = atand((r[2] / p) / (1.0 - ECC2))

    # State: (lat, h, relative error, iteration count)
    def cond(state):
        _, _, err, i = state
        return (err >= max_err) & (i < max_iter)

    def body(state):
        lat, _, _, i = state
        sin_lat = sind(lat)
        n = WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat)
        h = p / cosd(lat) - n
        lat_new = atand((r[2] / p) / (1.0 - ECC2 * (n / (n + h))))
        r_iter = coord_wgs84_efi(EarthPosition(lat_new, lon, h))
        err = jnp.linalg.norm(r_iter - r) / r_norm
        return (lat_new, h, err, i + 1)

    init_state = (lat0, jnp.zeros_like(lat0), jnp.full_like(lat0, jnp.inf), jnp.int32(0))
    lat, h, _, _ = jax.lax.while_loop(cond, body, init_state)

    return EarthPosition(lat=lat, lon=lon, h=h)
