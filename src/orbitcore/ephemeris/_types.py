"""Type definitions for the planetary series ephemeris.

A VSOP87A-style series gives each rectangular heliocentric coordinate as

    X(t) = sum_p t^p * sum_k A_k cos(B_k + C_k t)

with ``t`` in Julian millennia of TDB from J2000, ``A`` in AU, ``B`` in
radians and ``C`` in radians per millennium.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple

from jax import Array


class Vsop87ASeries(NamedTuple):
    """Series of one planet.

    Each axis is a tuple indexed by the power of time; every entry is an
    array of ``(A, B, C)`` rows with shape ``(N, 3)`` (``N`` may be zero).

    Attributes:
        x: Terms of the X coordinate.
        y: Terms of the Y coordinate.
        z: Terms of the Z coordinate.
    """

    x: tuple[Array, ...]
    y: tuple[Array, ...]
    z: tuple[Array, ...]


@dataclass(frozen=True)
class Vsop87AData:
    """Immutable set of planetary series, keyed by lower-case planet name.

    Attributes:
        series: Planet name to series.
        source: Description of where the coefficients came from.
    """

    series: Mapping[str, Vsop87ASeries]
    source: str = ""

    def __contains__(self, planet: object) -> bool:
        return planet in self.series

    @property
    def planets(self) -> tuple[str, ...]:
        return tuple(self.series)

    def get(self, planet: str) -> Vsop87ASeries:
        """Return the series of ``planet``.

        Raises:
            ValueError: If the dataset has no series for ``planet``.
        """
        try:
            return self.series[planet.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown planet {planet!r}; available: {', '.join(self.planets)}"
            ) from None
