"""Conversions between the TDB, TAI, UT1 and UTC time scales.

TAI and TDB differ by the fixed 32.184 s offset of TT (TDB is taken equal
to TT).  UT1-TAI and polar motion vary smoothly and are interpolated;
UT1-UTC steps at leap seconds and is read from the left-hand table row.

All functions are JIT-compatible.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.config import get_dtype, get_time_tolerance
from orbitcore.constants import SECONDS_PER_DAY
from orbitcore.time import TT_TAI
from orbitcore.timecorr._lookup import interpolate_table, lookup_table_left
from orbitcore.timecorr._types import TimeCorrelationData, TimeScale, TimeStamp

_JT_SECOND = 1.0 / SECONDS_PER_DAY


def tai_to_tdb(jt_tai: ArrayLike) -> Array:
    """Convert a TAI Julian date to TDB."""
    return jnp.asarray(jt_tai, dtype=get_dtype()) + TT_TAI / SECONDS_PER_DAY


def tdb_to_tai(jt_tdb: ArrayLike) -> Array:
    """Convert a TDB Julian date to TAI."""
    return jnp.asarray(jt_tdb, dtype=get_dtype()) - TT_TAI / SECONDS_PER_DAY


def ut1_to_tai(data: TimeCorrelationData, jt_ut1: ArrayLike) -> Array:
    """Convert a UT1 Julian date to TAI using interpolated UT1-TAI."""
    jt_ut1 = jnp.asarray(jt_ut1, dtype=get_dtype())
    return jt_ut1 - interpolate_table(data.ut1_tai, jt_ut1)[0] / SECONDS_PER_DAY


def tai_to_ut1(data: TimeCorrelationData, jt_tai: ArrayLike) -> Array:
    """Convert a TAI Julian date to UT1 using interpolated UT1-TAI."""
    jt_tai = jnp.asarray(jt_tai, dtype=get_dtype())
    return jt_tai + interpolate_table(data.ut1_tai, jt_tai)[0] / SECONDS_PER_DAY


def ut1_to_utc(data: TimeCorrelationData, jt_ut1: ArrayLike) -> Array:
    """Convert a UT1 Julian date to UTC.

    UT1-UTC is taken from the left-hand table row only.
    """
    jt_ut1 = jnp.asarray(jt_ut1, dtype=get_dtype())
    return jt_ut1 - lookup_table_left(data.ut1_utc, jt_ut1)[0] / SECONDS_PER_DAY


def utc_to_ut1(data: TimeCorrelationData, jt_utc: ArrayLike) -> Array:
    """Convert a UTC Julian date to UT1.

    The first estimate uses UT1-UTC looked up at ``jt_utc``.  When mapping
    that estimate back to UTC misses ``jt_utc`` by more than
    :func:`~orbitcore.config.get_time_tolerance` (one millisecond in
    float64), the query straddled a step in UT1-UTC, and the offset is
    looked up again one second later (one second earlier if ``jt_utc`` has
    no fractional part).

    Args:
        data: Time correlation tables.
        jt_utc: Julian date, UTC.

    Returns:
        Julian date, UT1.
    """
    jt_utc = jnp.asarray(jt_utc, dtype=get_dtype())
    jt_ut1 = jt_utc + lookup_table_left(data.ut1_utc, jt_utc)[0] / SECONDS_PER_DAY

    mismatch = jnp.abs(jt_utc - ut1_to_utc(data, jt_ut1)) > get_time_tolerance() * _JT_SECOND
    shift = jnp.where(jt_utc - jnp.floor(jt_utc) > 0.0, _JT_SECOND, -_JT_SECOND)
    jt_ut1_retry = jt_utc + lookup_table_left(data.ut1_utc, jt_utc + shift)[0] / SECONDS_PER_DAY

    return jnp.where(mismatch, jt_ut1_retry, jt_ut1)


def polar_motion(data: TimeCorrelationData, jt_ut1: ArrayLike) -> tuple[Array, Array]:
    """Interpolated polar motion at a UT1 Julian date.

    Args:
        data: Time correlation tables.
        jt_ut1: Julian date, UT1.

    Returns:
        tuple[Array, Array]: ``(dx, dy)`` in degrees.
    """
    row = interpolate_table(data.polar, jt_ut1)
    return row[0] / 3600.0, row[1] / 3600.0


def time_stamp(
    data: TimeCorrelationData,
    jt: ArrayLike,
    scale: TimeScale = TimeScale.UTC,
    compute_polar: bool = True,
) -> TimeStamp:
    """Express an instant in all four time scales.

    ``scale`` and ``compute_polar`` are resolved at trace time.

    Args:
        data: Time correlation tables.
        jt: Julian date in ``scale``.
        scale: Time scale of ``jt``. Default: ``TimeScale.UTC``
        compute_polar: Look up polar motion; zeros otherwise. Default: ``True``

    Returns:
        TimeStamp: The instant in TDB, TAI, UT1 and UTC, with polar motion.

    Examples:
        ```python
        from orbitcore.timecorr import TimeScale, default_time_correlation, time_stamp
        data = default_time_correlation()
        ts = time_stamp(data, 2460107.5, TimeScale.UTC)
        ```
    """
    jt = jnp.asarray(jt, dtype=get_dtype())

    if scale == TimeScale.TDB:
        jt_tdb = jt
        jt_tai = tdb_to_tai(jt_tdb)
        jt_ut1 = tai_to_ut1(data, jt_tai)
        jt_utc = ut1_to_utc(data, jt_ut1)
    elif scale == TimeScale.TAI:
        jt_tai = jt
        jt_tdb = tai_to_tdb(jt_tai)
        jt_ut1 = tai_to_ut1(data, jt_tai)
        jt_utc = ut1_to_utc(data, jt_ut1)
    elif scale == TimeScale.UTC:
        jt_utc = jt
        jt_ut1 = utc_to_ut1(data, jt_utc)
        jt_tai = ut1_to_tai(data, jt_ut1)
        jt_tdb = tai_to_tdb(jt_tai)
    elif scale == TimeScale.UT1:
        jt_ut1 = jt
        jt_utc = ut1_to_utc(data, jt_ut1)
        jt_tai = ut1_to_tai(data, jt_ut1)
        jt_tdb = tai_to_tdb(jt_tai)
    else:
        raise ValueError(f"Unsupported time scale: {scale!r}")

    if compute_polar:
        polar_dx, polar_dy = polar_motion(data, jt_ut1)
    else:
        polar_dx = jnp.zeros_like(jt)
        polar_dy = jnp.zeros_like(jt)

    return TimeStamp(
        jt_ut1=jt_ut1,
        jt_utc=jt_utc,
        jt_tai=jt_tai,
        jt_tdb=jt_tdb,
        polar_dx=polar_dx,
        polar_dy=polar_dy,
    )
