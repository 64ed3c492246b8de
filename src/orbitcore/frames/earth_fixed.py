"""Earth rotation and polar motion.

- True-of-date ↔ pseudo-Earth-fixed rotates about the z-axis by Greenwich
  apparent sidereal time.  Velocities pick up the transport term of the
  rotating frame, using the rate of sidereal time.  Needs nutation.
- Pseudo-Earth-fixed ↔ Earth-fixed applies the polar motion angles carried
  by the state's :class:`~orbitcore.timecorr.TimeStamp`.

All inputs and outputs use SI base units (metres, metres/second).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.nutation import NutationData
from orbitcore.rotations import Rx, Ry, Rz
from orbitcore.sidereal import earth_rotation_rate, time_gast
from orbitcore.timecorr import TimeStamp


def _rotation_rate_term(gast: Array, omega: Array, r_tod: Array) -> Array:
    """Time derivative of ``Rz(GAST)`` applied to a TOD position."""
    s = jnp.sin(jnp.deg2rad(gast))
    c = jnp.cos(jnp.deg2rad(gast))
    w = omega * jnp.pi / 180.0
    return jnp.array([
        w * (-s * r_tod[0] + c * r_tod[1]),
        w * (-c * r_tod[0] - s * r_tod[1]),
        jnp.zeros_like(w),
    ])


def rotation_tod_to_pef(timestamp: TimeStamp, nutation: NutationData) -> Array:
    """Earth rotation matrix ``Rz(GAST)``.

    Args:
        timestamp: Instant of the rotation.
        nutation: Nutation parameters at ``timestamp``.

    Returns:
        3x3 rotation matrix (TOD -> PEF).
    """
    gast = time_gast(timestamp.jt_ut1, timestamp.jt_tdb, nutation)
    return Rz(gast, use_degrees=True)


def osv_tod_to_pef(osv: OsvFrame, nutation: NutationData) -> OsvFrame:
    """True-of-date to pseudo-Earth-fixed.

    ``v_pef = Rz(G) v_tod + dRz(G)/dt r_tod``

    Args:
        osv: State in ``Frame.TOD``.
        nutation: Nutation parameters at ``osv.timestamp``.

    Returns:
        OsvFrame: State in ``Frame.PEF``.
    """
    check_frame(osv, Frame.TOD)
    ts = osv.timestamp
    gast = time_gast(ts.jt_ut1, ts.jt_tdb, nutation)
    omega = earth_rotation_rate(ts.jt_ut1)
    R = Rz(gast, use_degrees=True)

    r_pef = R @ osv.position
    v_pef = R @ osv.velocity + _rotation_rate_term(gast, omega, osv.position)

    return OsvFrame(frame=Frame.PEF, position=r_pef, velocity=v_pef, timestamp=ts)


def osv_pef_to_tod(osv: OsvFrame, nutation: NutationData) -> OsvFrame:
    """Pseudo-Earth-fixed to true-of-date.

    ``v_tod = Rz(-G) (v_pef - dRz(G)/dt r_tod)``

    Args:
        osv: State in ``Frame.PEF``.
        nutation: Nutation parameters at ``osv.timestamp``.

    Returns:
        OsvFrame: State in ``Frame.TOD``.
    """
    check_frame(osv, Frame.PEF)
    ts = osv.timestamp
    gast = time_gast(ts.jt_ut1, ts.jt_tdb, nutation)
    omega = earth_rotation_rate(ts.jt_ut1)
    R = Rz(-gast, use_degrees=True)

    r_tod = R @ osv.position
    v_tod = R @ (osv.velocity - _rotation_rate_term(gast, omega, r_tod))

    return OsvFrame(frame=Frame.TOD, position=r_tod, velocity=v_tod, timestamp=ts)


def rotation_pef_to_efi(polar_dx: ArrayLike, polar_dy: ArrayLike) -> Array:
    """Polar motion matrix ``Ry(-dx) Rx(-dy)``.

    Args:
        polar_dx: Polar motion x-angle [deg].
        polar_dy: Polar motion y-angle [deg].

    Returns:
        3x3 rotation matrix (PEF -> EFI).
    """
    return Ry(-polar_dx, use_degrees=True) @ Rx(-polar_dy, use_degrees=True)


def rotation_efi_to_pef(polar_dx: ArrayLike, polar_dy: ArrayLike) -> Array:
    """Inverse polar motion matrix ``Rx(dy) Ry(dx)``.

    Args:
        polar_dx: Polar motion x-angle [deg].
        polar_dy: Polar motion y-angle [deg].

    Returns:
        3x3 rotation matrix (EFI -> PEF).
    """
    return Rx(polar_dy, use_degrees=True) @ Ry(polar_dx, use_degrees=True)


def osv_pef_to_efi(osv: OsvFrame) -> OsvFrame:
    """Pseudo-Earth-fixed to Earth-fixed using the state's polar motion."""
    check_frame(osv, Frame.PEF)
    R = rotation_pef_to_efi(osv.timestamp.polar_dx, osv.timestamp.polar_dy)
    return OsvFrame(
        frame=Frame.EFI,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_efi_to_pef(osv: OsvFrame) -> OsvFrame:
    """Earth-fixed to pseudo-Earth-fixed using the state's polar motion."""
    check_frame(osv, Frame.EFI)
    R = rotation_efi_to_pef(osv.timestamp.polar_dx, osv.timestamp.polar_dy)
    return OsvFrame(
        frame=Frame.PEF,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )
