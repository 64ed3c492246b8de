"""Planetary ephemeris from VSOP87A-style series.

Provides heliocentric ecliptic states of the eight planets and the
position of the solar-system barycenter relative to the Sun.

Submodules:
    - ``_types``: :class:`Vsop87ASeries`, :class:`Vsop87AData`
    - ``_series``: Series evaluation
    - ``_providers``: Bundled and file-based series data
"""

from orbitcore.ephemeris._providers import (
    load_vsop87a_json,
    mean_element_series,
    vsop87a_from_dict,
)
from orbitcore.ephemeris._series import (
    barycentric_offset,
    evaluate_series,
    planet_heliocentric,
)
from orbitcore.ephemeris._types import Vsop87AData, Vsop87ASeries

__all__ = [
    "Vsop87AData",
    "Vsop87ASeries",
    "barycentric_offset",
    "evaluate_series",
    "load_vsop87a_json",
    "mean_element_series",
    "planet_heliocentric",
    "vsop87a_from_dict",
]
