"""Trigonometric functions with arguments and results in degrees."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


def sind(angle: ArrayLike) -> Array:
    return jnp.sin(jnp.deg2rad(angle))


def cosd(angle: ArrayLike) -> Array:
    return jnp.cos(jnp.deg2rad(angle))


def tand(angle: ArrayLike) -> Array:
    return jnp.tan(jnp.deg2rad(angle))


def asind(x: ArrayLike) -> Array:
    return jnp.rad2deg(jnp.arcsin(x))


def acosd(x: ArrayLike) -> Array:
    return jnp.rad2deg(jnp.arccos(x))


def atand(x: ArrayLike) -> Array:
    return jnp.rad2deg(jnp.arctan(x))


def atan2d(y: ArrayLike, x: ArrayLike) -> Array:
    """Four-quadrant arctangent of ``y / x`` in degrees."""
    return jnp.rad2deg(jnp.arctan2(y, x))
