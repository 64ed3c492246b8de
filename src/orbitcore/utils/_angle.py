"""Angle and unit conversion helpers.

These helpers wrap the ``use_degrees`` convention used throughout
orbitcore, providing JAX-traceable degree/radian conversion via
``jnp.where``, plus reduction of angles into a canonical range and
sexagesimal formatting.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle to radians if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    return jnp.where(use_degrees, jnp.deg2rad(angle), angle)


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert angle from radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.where(use_degrees, jnp.rad2deg(angle), angle)


def limit_angle_deg(angle: ArrayLike) -> Array:
    """Reduce an angle to the range [0, 360) degrees.

    Args:
        angle (ArrayLike): Angle in degrees.

    Returns:
        Equivalent angle in [0, 360).
    """
    return jnp.mod(angle, 360.0)


def limit_angle_deg180(angle: ArrayLike) -> Array:
    """Reduce an angle to the range (-180, 180] degrees.

    Args:
        angle (ArrayLike): Angle in degrees.

    Returns:
        Equivalent angle in (-180, 180].
    """
    angle = limit_angle_deg(angle)
    return jnp.where(angle > 180.0, angle - 360.0, angle)


def angle_diff(angle1: ArrayLike, angle2: ArrayLike) -> Array:
    """Shortest signed difference ``angle1 - angle2`` in degrees.

    Args:
        angle1 (ArrayLike): First angle in degrees.
        angle2 (ArrayLike): Second angle in degrees.

    Returns:
        Difference in (-180, 180].
    """
    return limit_angle_deg180(jnp.asarray(angle1) - jnp.asarray(angle2))


def angle_deg_hms(angle: float) -> tuple[int, int, float]:
    """Convert an angle in degrees to hours, minutes and seconds.

    The angle is first reduced to [0, 360).

    Args:
        angle (float): Angle in degrees.

    Returns:
        tuple[int, int, float]: ``(hours, minutes, seconds)``.
    """
    hours = (float(angle) % 360.0) / 15.0
    h = math.floor(hours)
    m = math.floor((hours - h) * 60.0)
    s = (hours - h - m / 60.0) * 3600.0
    return h, m, s


def angle_hms_deg(hours: float, minutes: float, seconds: float) -> float:
    """Convert hours, minutes and seconds to degrees."""
    return 15.0 * (hours + minutes / 60.0 + seconds / 3600.0)


def angle_deg_arc(angle: float) -> tuple[int, int, float]:
    """Convert an angle in degrees to degrees, arcminutes and arcseconds.

    The sign is carried by the first non-zero component.

    Args:
        angle (float): Angle in degrees.

    Returns:
        tuple[int, int, float]: ``(degrees, arcminutes, arcseconds)``.
    """
    sign = -1 if angle < 0 else 1
    value = abs(float(angle))
    d = math.floor(value)
    m = math.floor((value - d) * 60.0)
    s = (value - d - m / 60.0) * 3600.0
    if d != 0:
        return sign * d, m, s
    if m != 0:
        return 0, sign * m, s
    return 0, 0, sign * s


def angle_arc_deg(degrees: float, arcmin: float, arcsec: float) -> float:
    """Convert degrees, arcminutes and arcseconds to degrees.

    A negative sign on any component makes the whole angle negative.
    """
    sign = -1.0 if min(degrees, arcmin, arcsec) < 0 else 1.0
    return sign * (abs(degrees) + abs(arcmin) / 60.0 + abs(arcsec) / 3600.0)
