"""IAU 1976 precession between J2000 and mean-of-date.

Precession depends only on elapsed Julian centuries of TDB since J2000;
no Earth orientation data is used.

References:
    1. J. H. Lieske et al., *Expressions for the Precession Quantities
       Based upon the IAU (1976) System of Astronomical Constants*, A&A 58,
       1977.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.constants import DAYS_PER_CENTURY, JD2000
from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.rotations import Ry, Rz


def precession_angles(jt_tdb: ArrayLike) -> tuple[Array, Array, Array]:
    """Equatorial precession angles ``(zeta, theta, z)`` [deg]."""
    t = (jnp.asarray(jt_tdb, dtype=get_dtype()) - JD2000) / DAYS_PER_CENTURY

    zeta = t * (0.6406161388 + t * (8.3855555555e-05 + t * 4.9994444444e-06))
    theta = t * (0.5567530277 + t * (-1.1851388888e-04 - t * 1.1620277777e-05))
    z = t * (0.6406161388 + t * (3.0407777777e-04 + t * 5.0563888888e-06))

    return zeta, theta, z


def rotation_j2000_to_mod(jt_tdb: ArrayLike) -> Array:
    """Precession matrix ``Rz(-z) Ry(theta) Rz(-zeta)``.

    Args:
        jt_tdb: Julian date, TDB.

    Returns:
        3x3 rotation matrix (J2000 -> MOD).
    """
    zeta, theta, z = precession_angles(jt_tdb)
    return Rz(-z, use_degrees=True) @ Ry(theta, use_degrees=True) @ Rz(-zeta, use_degrees=True)


def rotation_mod_to_j2000(jt_tdb: ArrayLike) -> Array:
    """Inverse precession matrix ``Rz(zeta) Ry(-theta) Rz(z)``.

    Args:
        jt_tdb: Julian date, TDB.

    Returns:
        3x3 rotation matrix (MOD -> J2000).
    """
    zeta, theta, z = precession_angles(jt_tdb)
    return Rz(zeta, use_degrees=True) @ Ry(-theta, use_degrees=True) @ Rz(z, use_degrees=True)


def osv_j2000_to_mod(osv: OsvFrame) -> OsvFrame:
    """J2000 to mean-of-date at the state's own instant."""
    check_frame(osv, Frame.J2000)
    R = rotation_j2000_to_mod(osv.timestamp.jt_tdb)
    return OsvFrame(
        frame=Frame.MOD,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_mod_to_j2000(osv: OsvFrame) -> OsvFrame:
    """Mean-of-date to J2000 at the state's own instant."""
    check_frame(osv, Frame.MOD)
    R = rotation_mod_to_j2000(osv.timestamp.jt_tdb)
    return OsvFrame(
        frame=Frame.J2000,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )
