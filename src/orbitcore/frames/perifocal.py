"""Perifocal ↔ inertial frame transformations.

The perifocal frame has x towards perigee and z along the orbit angular
momentum.  It is related to any inertial equatorial frame by the three
orientation angles of the orbit: right ascension of the ascending node
``raan``, inclination ``incl`` and argument of perigee ``argp`` (degrees).
"""

from __future__ import annotations

from jax import Array
from jax.typing import ArrayLike

from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.rotations import Rx, Rz


def rotation_peri_to_inertial(raan: ArrayLike, incl: ArrayLike, argp: ArrayLike) -> Array:
    """Rotation ``Rz(-raan) Rx(-incl) Rz(-argp)`` from perifocal to inertial."""
    return Rz(-raan, use_degrees=True) @ Rx(-incl, use_degrees=True) @ Rz(-argp, use_degrees=True)


def rotation_inertial_to_peri(raan: ArrayLike, incl: ArrayLike, argp: ArrayLike) -> Array:
    """Rotation ``Rz(argp) Rx(incl) Rz(raan)`` from inertial to perifocal."""
    return Rz(argp, use_degrees=True) @ Rx(incl, use_degrees=True) @ Rz(raan, use_degrees=True)


def osv_peri_to_inertial(
    osv: OsvFrame,
    raan: ArrayLike,
    incl: ArrayLike,
    argp: ArrayLike,
    target: Frame = Frame.J2000,
) -> OsvFrame:
    """Perifocal to an inertial frame.

    Args:
        osv: State in ``Frame.PERI``.
        raan: Right ascension of the ascending node [deg].
        incl: Inclination [deg].
        argp: Argument of perigee [deg].
        target: Inertial frame the orientation angles refer to.
            Default: ``Frame.J2000``

    Returns:
        OsvFrame: State in ``target``.
    """
    check_frame(osv, Frame.PERI)
    R = rotation_peri_to_inertial(raan, incl, argp)
    return OsvFrame(
        frame=target,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_inertial_to_peri(
    osv: OsvFrame,
    raan: ArrayLike,
    incl: ArrayLike,
    argp: ArrayLike,
) -> OsvFrame:
    """An inertial frame to perifocal.

    The orientation angles must refer to the frame ``osv`` is expressed in.

    Args:
        osv: State in an inertial frame.
        raan: Right ascension of the ascending node [deg].
        incl: Inclination [deg].
        argp: Argument of perigee [deg].

    Returns:
        OsvFrame: State in ``Frame.PERI``.
    """
    if osv.frame in (Frame.PERI, Frame.PEF, Frame.EFI, Frame.ENU):
        raise ValueError(f"Perifocal conversion needs an inertial frame, got {osv.frame.name}")
    R = rotation_inertial_to_peri(raan, incl, argp)
    return OsvFrame(
        frame=Frame.PERI,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )
