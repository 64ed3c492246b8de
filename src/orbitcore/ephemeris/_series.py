"""Evaluation of VSOP87A-style planetary series.

Time argument ``t`` is Julian millennia of TDB from J2000.  Each coordinate
is ``sum_p t^p * sum_k A cos(B + C t)``; its time derivative includes the
``p t^(p-1)`` factor of the power term as well as the derivative of the
cosine.  Positions come out in AU and velocities in AU per millennium
before scaling to SI.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype
from orbitcore.constants import (
    AU,
    AU_PER_MILLENNIUM,
    DAYS_PER_MILLENNIUM,
    JD2000,
    MASS_SUN,
    PLANET_MASSES,
)
from orbitcore.ephemeris._types import Vsop87AData, Vsop87ASeries
from orbitcore.frames._types import Frame, OsvFrame
from orbitcore.timecorr import TimeStamp


def _default_data() -> Vsop87AData:
    from orbitcore.ephemeris._providers import mean_element_series

    return mean_element_series()


def _evaluate_axis(terms: tuple[Array, ...], t: Array) -> tuple[Array, Array]:
    """Value and time derivative of one coordinate."""
    value = jnp.zeros_like(t)
    rate = jnp.zeros_like(t)
    for power, rows in enumerate(terms):
        if rows.shape[0] == 0:
            continue
        A, B, C = rows[:, 0], rows[:, 1], rows[:, 2]
        arg = B + C * t
        s = jnp.sum(A * jnp.cos(arg))
        ds = jnp.sum(-A * C * jnp.sin(arg))
        tp = t**power
        value = value + tp * s
        rate = rate + tp * ds
        if power > 0:
            rate = rate + power * t ** (power - 1) * s
    return value, rate


def evaluate_series(series: Vsop87ASeries, jt_tdb: ArrayLike) -> tuple[Array, Array]:
    """Evaluate a series at a TDB Julian date.

    Args:
        series: Series of one planet.
        jt_tdb: Julian date, TDB.

    Returns:
        tuple[Array, Array]: Position [AU] and velocity [AU/millennium].
    """
    t = (jnp.asarray(jt_tdb, dtype=get_dtype()) - JD2000) / DAYS_PER_MILLENNIUM
    x, vx = _evaluate_axis(series.x, t)
    y, vy = _evaluate_axis(series.y, t)
    z, vz = _evaluate_axis(series.z, t)
    return jnp.stack([x, y, z]), jnp.stack([vx, vy, vz])


def planet_heliocentric(
    planet: str,
    timestamp: TimeStamp,
    data: Vsop87AData | None = None,
) -> OsvFrame:
    """Heliocentric ecliptic state of a planet.

    Args:
        planet: Planet name, case-insensitive (``"earth"``, ``"mars"``, ...).
        timestamp: Instant to evaluate at; the TDB scale is used.
        data: Series to evaluate. Defaults to :func:`mean_element_series`.

    Returns:
        OsvFrame: State in ``Frame.ECLHEL`` [m, m/s].

    Raises:
        ValueError: If ``data`` holds no series for ``planet``.

    Examples:
        ```python
        from orbitcore.ephemeris import planet_heliocentric
        from orbitcore.timecorr import default_time_correlation, time_stamp
        ts = time_stamp(default_time_correlation(), 2451545.0)
        earth = planet_heliocentric("earth", ts)
        ```
    """
    if data is None:
        data = _default_data()
    position, velocity = evaluate_series(data.get(planet), timestamp.jt_tdb)
    return OsvFrame(
        frame=Frame.ECLHEL,
        position=position * AU,
        velocity=velocity * AU_PER_MILLENNIUM,
        timestamp=timestamp,
    )


def barycentric_offset(
    timestamp: TimeStamp | ArrayLike,
    data: Vsop87AData | None = None,
) -> tuple[Array, Array]:
    """Position and velocity of the solar-system barycenter relative to the Sun.

    Computed as the mass-weighted mean of the eight planets' heliocentric
    states, ``sum(m_i r_i) / (M_sun + sum(m_i))``, in the heliocentric
    ecliptic frame.

    Args:
        timestamp: Instant, or a TDB Julian date.
        data: Series to evaluate. Must hold all eight planets.

    Returns:
        tuple[Array, Array]: Offset position [m] and velocity [m/s].
    """
    if data is None:
        data = _default_data()
    jt_tdb = timestamp.jt_tdb if isinstance(timestamp, TimeStamp) else timestamp

    total_mass = MASS_SUN + sum(PLANET_MASSES.values())
    position = jnp.zeros(3, dtype=get_dtype())
    velocity = jnp.zeros(3, dtype=get_dtype())
    for planet, mass in PLANET_MASSES.items():
        r, v = evaluate_series(data.get(planet), jt_tdb)
        position = position + mass * r
        velocity = velocity + mass * v
    return position * AU / total_mass, velocity * AU_PER_MILLENNIUM / total_mass
