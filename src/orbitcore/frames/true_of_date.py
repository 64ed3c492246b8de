"""Nutation between mean-of-date and true-of-date.

These legs need the :class:`~orbitcore.nutation.NutationData` of the
state's instant.  The same value must be used for every leg of a
multi-frame conversion.
"""

from __future__ import annotations

from jax import Array

from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.nutation import NutationData
from orbitcore.rotations import Rx, Rz


def rotation_mod_to_tod(nutation: NutationData) -> Array:
    """Nutation matrix ``Rx(-eps - deps) Rz(-dpsi) Rx(eps)``.

    Args:
        nutation: Nutation parameters.

    Returns:
        3x3 rotation matrix (MOD -> TOD).
    """
    eps, deps, dpsi = nutation
    return (
        Rx(-eps - deps, use_degrees=True)
        @ Rz(-dpsi, use_degrees=True)
        @ Rx(eps, use_degrees=True)
    )


def rotation_tod_to_mod(nutation: NutationData) -> Array:
    """Inverse nutation matrix ``Rx(-eps) Rz(dpsi) Rx(eps + deps)``.

    Args:
        nutation: Nutation parameters.

    Returns:
        3x3 rotation matrix (TOD -> MOD).
    """
    eps, deps, dpsi = nutation
    return (
        Rx(-eps, use_degrees=True)
        @ Rz(dpsi, use_degrees=True)
        @ Rx(eps + deps, use_degrees=True)
    )


def osv_mod_to_tod(osv: OsvFrame, nutation: NutationData) -> OsvFrame:
    """Mean-of-date to true-of-date.

    Args:
        osv: State in ``Frame.MOD``.
        nutation: Nutation parameters at ``osv.timestamp``.

    Returns:
        OsvFrame: State in ``Frame.TOD``.
    """
    check_frame(osv, Frame.MOD)
    R = rotation_mod_to_tod(nutation)
    return OsvFrame(
        frame=Frame.TOD,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_tod_to_mod(osv: OsvFrame, nutation: NutationData) -> OsvFrame:
    """True-of-date to mean-of-date.

    Args:
        osv: State in ``Frame.TOD``.
        nutation: Nutation parameters at ``osv.timestamp``.

    Returns:
        OsvFrame: State in ``Frame.MOD``.
    """
    check_frame(osv, Frame.TOD)
    R = rotation_tod_to_mod(nutation)
    return OsvFrame(
        frame=Frame.MOD,
        position=R @ osv.position,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )
