"""Sources of planetary series data.

- :func:`mean_element_series`: First-order series derived from the JPL
  approximate mean elements. Bundled, covers all eight planets.
- :func:`vsop87a_from_dict`: From an in-memory mapping.
- :func:`load_vsop87a_json`: From a JSON file of full VSOP87A
  coefficients.

The JSON layout is ``{planet: [axis][power][[A, B, C], ...]}`` with the
axes ordered X, Y, Z.
"""

from __future__ import annotations

import functools
import json
import logging
import math
from collections.abc import Mapping, Sequence
from pathlib import Path

import jax.numpy as jnp

from orbitcore.config import get_dtype
from orbitcore.ephemeris._mean_elements import MEAN_ELEMENTS
from orbitcore.ephemeris._types import Vsop87AData, Vsop87ASeries

logger = logging.getLogger(__name__)

_AXES = ("x", "y", "z")


def _terms_array(rows: Sequence[Sequence[float]], where: str):
    if any(len(row) != 3 for row in rows):
        raise ValueError(f"VSOP87A terms of {where} must be [A, B, C] triples")
    if len(rows) == 0:
        return jnp.zeros((0, 3), dtype=get_dtype())
    return jnp.array(rows, dtype=get_dtype())


def vsop87a_from_dict(
    data: Mapping[str, Sequence[Sequence[Sequence[Sequence[float]]]]],
    source: str = "dict",
) -> Vsop87AData:
    """Build series data from a ``{planet: [axis][power][[A, B, C], ...]}`` mapping.

    Args:
        data: Coefficients per planet. Planet names are lower-cased.
        source: Description stored on the result.

    Returns:
        Vsop87AData: The series.

    Raises:
        ValueError: If a planet does not have exactly three axes or a term
            is not a triple.
    """
    series = {}
    for planet, axes in data.items():
        if len(axes) != 3:
            raise ValueError(f"VSOP87A series of {planet!r} must have 3 axes, got {len(axes)}")
        per_axis = []
        for axis_name, powers in zip(_AXES, axes):
            per_axis.append(
                tuple(
                    _terms_array(rows, f"{planet}.{axis_name}^{p}")
                    for p, rows in enumerate(powers)
                )
            )
        series[planet.lower()] = Vsop87ASeries(*per_axis)
    return Vsop87AData(series=series, source=source)


def load_vsop87a_json(filepath: str | Path) -> Vsop87AData:
    """Load series data from a JSON file.

    Args:
        filepath: Path to the JSON file.

    Returns:
        Vsop87AData: The series.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file content is malformed.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"VSOP87A file not found: {path}")

    with open(path) as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"VSOP87A file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"VSOP87A file {path} must hold an object keyed by planet")

    data = vsop87a_from_dict(raw, source=str(path))
    logger.info("Loaded VSOP87A series for %d planets from %s", len(data.series), path)
    return data


def _mean_element_terms(elements: tuple[tuple[float, float], ...]) -> list:
    """First-order (in e and I) series of one planet, all in time power 0.

    With mean longitude L, longitude of perihelion w and node W:

        X = a[(1+cI)/2 cos L + (1-cI)/2 cos(L-2W) + e/2 cos(2L-w) - 3e/2 cos w]
        Y = a[(1+cI)/2 sin L - (1-cI)/2 sin(L-2W) + e/2 sin(2L-w) - 3e/2 sin w]
        Z = a sin I sin(L-W)

    Sines become cosines with a quarter-turn phase so every term is
    ``A cos(B + C t)``.
    """
    (a, _), (e, _), (incl, _), (L0, L_dot), (peri, peri_dot), (node, node_dot) = elements

    # Rates per century of degrees to radians per millennium
    n = math.radians(L_dot * 10.0)
    n_peri = math.radians(peri_dot * 10.0)
    n_node = math.radians(node_dot * 10.0)
    L = math.radians(L0)
    w = math.radians(peri)
    W = math.radians(node)
    cI = math.cos(math.radians(incl))
    sI = math.sin(math.radians(incl))
    half_pi = math.pi / 2.0

    # fmt: off
    x = [
        [a * (1.0 + cI) / 2.0, L,                     n],
        [a * (1.0 - cI) / 2.0, L - 2.0 * W,           n - 2.0 * n_node],
        [a * e / 2.0,          2.0 * L - w,           2.0 * n - n_peri],
        [1.5 * a * e,          w + math.pi,           n_peri],
    ]
    y = [
        [a * (1.0 + cI) / 2.0, L - half_pi,           n],
        [a * (1.0 - cI) / 2.0, L - 2.0 * W + half_pi, n - 2.0 * n_node],
        [a * e / 2.0,          2.0 * L - w - half_pi, 2.0 * n - n_peri],
        [1.5 * a * e,          w + half_pi,           n_peri],
    ]
    z = [
        [a * sI,               L - W - half_pi,       n - n_node],
    ]
    # fmt: on
    return [[x], [y], [z]]


@functools.lru_cache(maxsize=1)
def mean_element_series() -> Vsop87AData:
    """Bundled series derived from the JPL approximate mean elements.

    Accurate to a few thousandths of an AU for the inner planets between
    1800 and 2050; enough for Earth-Sun geometry and frame offsets.  Load
    full VSOP87A coefficients with :func:`load_vsop87a_json` for more.

    Returns:
        Vsop87AData: Series for Mercury through Neptune.
    """
    raw = {planet: _mean_element_terms(elements) for planet, elements in MEAN_ELEMENTS.items()}
    data = vsop87a_from_dict(raw, source="jpl-mean-elements")
    logger.debug("Built mean-element series for %d planets", len(data.series))
    return data
