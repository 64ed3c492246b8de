"""Julian date arithmetic and the leap-second table.

Calendar conversions follow Meeus, *Astronomical Algorithms* (2nd Ed.),
chapter 7, and are valid for Gregorian dates.  They run at Python time on
plain floats: they are used when parsing element sets and building data
tables, never inside traced kernels.  The leap-second lookup is
JIT-compatible.
"""

from __future__ import annotations

import datetime
import math
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import JD_MJD_OFFSET

# TT - TAI offset in seconds (constant by definition)
TT_TAI: float = 32.184

# Leap second table: (MJD of introduction, TAI-UTC in seconds)
# Each entry marks the MJD at which TAI-UTC steps to the given value.
# Source: IERS Bulletin C / USNO leap second table (1972-01-01 through 2017-01-01).
_LEAP_SECOND_TABLE: tuple[tuple[float, float], ...] = (
    (41317.0, 10.0),  # 1972-01-01
    (41499.0, 11.0),  # 1972-07-01
    (41683.0, 12.0),  # 1973-01-01
    (42048.0, 13.0),  # 1974-01-01
    (42413.0, 14.0),  # 1975-01-01
    (42778.0, 15.0),  # 1976-01-01
    (43144.0, 16.0),  # 1977-01-01
    (43509.0, 17.0),  # 1978-01-01
    (43874.0, 18.0),  # 1979-01-01
    (44239.0, 19.0),  # 1980-01-01
    (44786.0, 20.0),  # 1981-07-01
    (45151.0, 21.0),  # 1982-07-01
    (45516.0, 22.0),  # 1983-07-01
    (46247.0, 23.0),  # 1985-07-01
    (47161.0, 24.0),  # 1988-01-01
    (47892.0, 25.0),  # 1990-01-01
    (48257.0, 26.0),  # 1991-01-01
    (48804.0, 27.0),  # 1992-07-01
    (49169.0, 28.0),  # 1993-07-01
    (49534.0, 29.0),  # 1994-07-01
    (50083.0, 30.0),  # 1996-01-01
    (50630.0, 31.0),  # 1997-07-01
    (51179.0, 32.0),  # 1999-01-01
    (53736.0, 33.0),  # 2006-01-01
    (54832.0, 34.0),  # 2009-01-01
    (56109.0, 35.0),  # 2012-07-01
    (57204.0, 36.0),  # 2015-07-01
    (57754.0, 37.0),  # 2017-01-01
)


class GregorianTime(NamedTuple):
    """Calendar date and time of day.

    Attributes:
        year: Calendar year.
        month: Month, 1-12.
        day: Day of month, 1-31.
        hour: Hour, 0-23.
        minute: Minute, 0-59.
        second: Seconds with fraction, [0, 60).
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float

    def isoformat(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS.ffffff``."""
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:09.6f}"
        )


def leap_seconds_tai_utc(mjd: ArrayLike) -> jax.Array:
    """Return TAI-UTC (cumulative leap seconds) for a given MJD.

    Uses a hardcoded step-function lookup table covering 1972-01-01 through
    2017-01-01. For dates before 1972, returns 10.0; for dates after the last
    entry, returns the most recent value (37.0).

    JIT-compatible: uses ``jnp.searchsorted`` for O(log n) lookup.

    Args:
        mjd: Modified Julian Date (UTC), scalar or array.

    Returns:
        TAI-UTC in seconds.
    """
    mjd = jnp.asarray(mjd, dtype=get_dtype())
    mjd_breaks = jnp.array([m for m, _ in _LEAP_SECOND_TABLE], dtype=get_dtype())
    tai_utc_vals = jnp.array([v for _, v in _LEAP_SECOND_TABLE], dtype=get_dtype())

    # searchsorted(side='right') returns the index of the first entry > mjd,
    # so idx-1 is the last entry <= mjd.
    idx = jnp.searchsorted(mjd_breaks, mjd, side="right")

    return jnp.where(idx == 0, get_dtype()(10.0), tai_utc_vals[idx - 1])


def leap_second_table() -> tuple[tuple[float, float], ...]:
    """Return the bundled ``(MJD, TAI-UTC)`` leap-second steps."""
    return _LEAP_SECOND_TABLE


def date_julian_ymd(year: int, month: int, day: float) -> float:
    """Julian date at 0h of a Gregorian calendar date.

    ``day`` may carry a fraction, and out-of-range days roll over into the
    adjacent month (day 0 is the last day of the previous month).

    Args:
        year (int): Calendar year.
        month (int): Month, 1-12.
        day (float): Day of month.

    Returns:
        float: Julian date.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, p. 61.
    """
    if month < 3:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = math.floor(a / 4)
    c = 2 - a + b
    e = math.floor(365.25 * (year + 4716))
    f = math.floor(30.6001 * (month + 1))

    return c + day + e + f - 1524.5


def time_julian_ymdhms(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Julian date of a Gregorian calendar date and time of day.

    Args:
        year (int): Calendar year.
        month (int): Month, 1-12.
        day (int): Day of month.
        hour (int): Hour. Default: ``0``
        minute (int): Minute. Default: ``0``
        second (float): Seconds. Default: ``0.0``

    Returns:
        float: Julian date.
    """
    return date_julian_ymd(year, month, day) + (hour + minute / 60.0 + second / 3600.0) / 24.0


def time_julian_datetime(dt: datetime.datetime) -> float:
    """Julian date of a ``datetime``.

    Naive datetimes are taken to be UTC; aware ones are converted to UTC.

    Args:
        dt (datetime.datetime): Instant to convert.

    Returns:
        float: Julian date.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    return time_julian_ymdhms(
        dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second + dt.microsecond * 1e-6
    )


def time_gregorian(jt: float) -> GregorianTime:
    """Convert a Julian date to a Gregorian calendar date and time.

    The time of day is resolved to whole microseconds.

    Args:
        jt (float): Julian date.

    Returns:
        GregorianTime: Calendar representation of ``jt``.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, p. 63.
    """
    jt = float(jt)
    z = math.floor(jt + 0.5)
    f = jt + 0.5 - z

    if z < 2299161:
        a = z
    else:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    total_us = round(f * 86400e6)
    if total_us >= 86_400_000_000:
        # Rounded up to the following midnight.
        return time_gregorian(z + 0.5)

    hour, total_us = divmod(total_us, 3_600_000_000)
    minute, total_us = divmod(total_us, 60_000_000)

    return GregorianTime(int(year), int(month), int(day), int(hour), int(minute), total_us / 1e6)


def parse_epoch(year: int, day_of_year: float) -> float:
    """Julian date of a year and fractional day of year.

    The day of year is 1-based: ``day_of_year = 1.0`` is January 1st, 0h.

    Args:
        year (int): Four-digit year.
        day_of_year (float): Fractional day of year.

    Returns:
        float: Julian date.
    """
    return date_julian_ymd(year, 1, 1) + day_of_year - 1.0


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date."""
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date."""
    return mjd + JD_MJD_OFFSET
