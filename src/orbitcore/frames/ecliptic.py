"""Ecliptic frame transformations.

Heliocentric ↔ geocentric ecliptic is a translation by Earth's
heliocentric state.  Geocentric ecliptic ↔ J2000 equatorial is a fixed
rotation about the x-axis by the J2000 mean obliquity; neither frame
rotates, so no epoch, Earth orientation data or velocity correction is
needed.

All inputs and outputs use SI base units (metres, metres/second).
"""

from __future__ import annotations

from jax import Array

from orbitcore.constants import OBLIQUITY_J2000
from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.rotations import Rx


def rotation_ecliptic_to_j2000() -> Array:
    """Compute the 3x3 rotation matrix from ecliptic to J2000 equatorial.

    Returns the matrix ``Rx(-ε)`` where ε is the J2000 mean obliquity.

    Returns:
        3x3 rotation matrix (ecliptic -> J2000).
    """
    return Rx(-OBLIQUITY_J2000, use_degrees=True)


def rotation_j2000_to_ecliptic() -> Array:
    """Compute the 3x3 rotation matrix from J2000 equatorial to ecliptic.

    This is the transpose of :func:`rotation_ecliptic_to_j2000`.

    Returns:
        3x3 rotation matrix (J2000 -> ecliptic).
    """
    return Rx(OBLIQUITY_J2000, use_degrees=True)


def osv_hel_to_geo(osv: OsvFrame, earth: OsvFrame) -> OsvFrame:
    """Heliocentric ecliptic to geocentric ecliptic.

    Args:
        osv: State in ``Frame.ECLHEL``.
        earth: Earth's state in ``Frame.ECLHEL`` at the same instant.

    Returns:
        OsvFrame: State in ``Frame.ECLGEO``.
    """
    check_frame(osv, Frame.ECLHEL)
    check_frame(earth, Frame.ECLHEL)
    return OsvFrame(
        frame=Frame.ECLGEO,
        position=osv.position - earth.position,
        velocity=osv.velocity - earth.velocity,
        timestamp=osv.timestamp,
    )


def osv_geo_to_hel(osv: OsvFrame, earth: OsvFrame) -> OsvFrame:
    """Geocentric ecliptic to heliocentric ecliptic.

    Args:
        osv: State in ``Frame.ECLGEO``.
        earth: Earth's state in ``Frame.ECLHEL`` at the same instant.

    Returns:
        OsvFrame: State in ``Frame.ECLHEL``.
    """
    check_frame(osv, Frame.ECLGEO)
    check_frame(earth, Frame.ECLHEL)
    return OsvFrame(
        frame=Frame.ECLHEL,
        position=osv.position + earth.position,
        velocity=osv.velocity + earth.velocity,
        timestamp=osv.timestamp,
    )


def osv_ecl_to_j2000(osv: OsvFrame) -> OsvFrame:
    """Geocentric ecliptic to J2000 equatorial.

    Args:
        osv: State in ``Frame.ECLGEO``.

    Returns:
        OsvFrame: State in ``Frame.J2000``.

    Examples:
        ```python
        import jax.numpy as jnp
        from orbitcore.frames import Frame, OsvFrame, osv_ecl_to_j2000
        from orbitcore.timecorr import time_stamp, zero_time_correlation
        ts = time_stamp(zero_time_correlation(), 2451545.0)
        osv = OsvFrame(Frame.ECLGEO, jnp.array([0.0, 7000e3, 0.0]), jnp.zeros(3), ts)
        osv_eq = osv_ecl_to_j2000(osv)
        ```
    """
    check_frame(osv, Frame.ECLGEO)
    R = rotation_ecliptic_to_j2000()
    return OsvFrame(
        frame=Frame.J2000,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_j2000_to_ecl(osv: OsvFrame) -> OsvFrame:
    """J2000 equatorial to geocentric ecliptic.

    Args:
        osv: State in ``Frame.J2000``.

    Returns:
        OsvFrame: State in ``Frame.ECLGEO``.
    """
    check_frame(osv, Frame.J2000)
    R = rotation_j2000_to_ecliptic()
    return OsvFrame(
        frame=Frame.ECLGEO,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )
