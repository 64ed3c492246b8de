"""Type definitions for the reference-frame pipeline.

- :class:`Frame`: Tag identifying the frame a state vector is expressed in.
- :class:`OsvFrame`: Orbit state vector (position, velocity, instant) with
  its frame tag.

Transforms never change the tag of an existing value; they return a new
``OsvFrame`` carrying the target tag.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from orbitcore.timecorr import TimeStamp


class Frame(enum.Enum):
    """Supported reference frames.

    Attributes:
        ECLHEL: Heliocentric ecliptic (J2000 ecliptic and equinox).
        ECLGEO: Geocentric ecliptic (J2000 ecliptic and equinox).
        J2000: Geocentric equatorial, mean equator and equinox of J2000.
        MOD: Mean equator and equinox of date.
        TOD: True equator and equinox of date.
        PEF: Pseudo-Earth-fixed (rotates with GAST, no polar motion).
        EFI: Earth-fixed.
        ENU: Topocentric east-north-up of an observer.
        PERI: Perifocal (x to perigee, z along angular momentum).
    """

    ECLHEL = "eclhel"
    ECLGEO = "eclgeo"
    J2000 = "j2000"
    MOD = "mod"
    TOD = "tod"
    PEF = "pef"
    EFI = "efi"
    ENU = "enu"
    PERI = "peri"


class OsvFrame(NamedTuple):
    """Orbit state vector in a tagged frame.

    Attributes:
        frame: Frame the vectors are expressed in.
        position: Position ``[x, y, z]`` [m].
        velocity: Velocity ``[vx, vy, vz]`` [m/s].
        timestamp: Instant the state is valid at.
    """

    frame: Frame
    position: Array
    velocity: Array
    timestamp: TimeStamp

    @property
    def state(self) -> Array:
        """Six-element state ``[x, y, z, vx, vy, vz]``."""
        return jnp.concatenate([self.position, self.velocity])


def check_frame(osv: OsvFrame, expected: Frame) -> None:
    """Raise ``ValueError`` unless ``osv`` is tagged with ``expected``."""
    if osv.frame != expected:
        raise ValueError(f"Expected a state in frame {expected.name}, got {osv.frame.name}")
