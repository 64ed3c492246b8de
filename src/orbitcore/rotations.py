"""Single-axis rotation matrices and vector rotations.

The matrices are passive (frame) rotations: ``Rz(a) @ v`` expresses ``v``
in a frame rotated by ``a`` about the z-axis.  All frame transforms in
:mod:`orbitcore.frames` are chains of these three primitives.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.utils import to_radians


def Rx(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[one, zero, zero],
                      [zero,  +c,   +s],
                      [zero,  -s,   +c]])


def Ry(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c, zero,   -s],
                      [zero,  one, zero],
                      [  +s, zero,   +c]])


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.
    """
    angle = to_radians(jnp.asarray(angle, dtype=get_dtype()), use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c,   +s, zero],
                      [  -s,   +c, zero],
                      [zero, zero,  one]])


def rotate_x(vec: ArrayLike, angle: ArrayLike) -> Array:
    """Rotate the frame of ``vec`` about the x-axis by ``angle`` degrees."""
    return Rx(angle, use_degrees=True) @ jnp.asarray(vec, dtype=get_dtype())


def rotate_y(vec: ArrayLike, angle: ArrayLike) -> Array:
    """Rotate the frame of ``vec`` about the y-axis by ``angle`` degrees."""
    return Ry(angle, use_degrees=True) @ jnp.asarray(vec, dtype=get_dtype())


def rotate_z(vec: ArrayLike, angle: ArrayLike) -> Array:
    """Rotate the frame of ``vec`` about the z-axis by ``angle`` degrees."""
    return Rz(angle, use_degrees=True) @ jnp.asarray(vec, dtype=get_dtype())
