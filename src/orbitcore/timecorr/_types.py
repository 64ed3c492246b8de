"""Type definitions for time correlation.

Provides the core data types for converting instants between time scales:

- :class:`TimeScale`: The four supported time scales.
- :class:`TimeCorrelationTable`: One sorted ``(JT, values...)`` table.
- :class:`TimeCorrelationData`: The three tables the engine needs.
- :class:`TimeStamp`: One instant expressed in every scale, plus polar
  motion.

All containers are :class:`~typing.NamedTuple` instances, which JAX treats
as pytrees, so they pass through ``jax.jit`` and ``jax.vmap`` unchanged.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from jax import Array
from jax.typing import ArrayLike


class TimeScale(enum.Enum):
    """Time scale of a Julian date.

    Attributes:
        TDB: Barycentric dynamical time (taken equal to TT).
        UT1: Universal time, tied to Earth rotation.
        UTC: Coordinated universal time (civil time, with leap seconds).
        TAI: International atomic time.
    """

    TDB = "tdb"
    UT1 = "ut1"
    UTC = "utc"
    TAI = "tai"


class TimeCorrelationTable(NamedTuple):
    """A sorted table of offsets indexed by Julian date.

    Queries at or below ``jt_min`` return the first row and queries at or
    above ``jt_max`` return the last row.

    Attributes:
        jt: Strictly increasing Julian dates, shape ``(N,)`` with ``N >= 2``.
        values: Offset columns, shape ``(N, K)``.
        jt_min: Scalar, lower clamp boundary.
        jt_max: Scalar, upper clamp boundary.
    """

    jt: Array
    values: Array
    jt_min: Array
    jt_max: Array


class TimeCorrelationData(NamedTuple):
    """Tables driving the time correlation engine.

    Attributes:
        ut1_tai: UT1-TAI [s], one column. Interpolated linearly.
        ut1_utc: UT1-UTC [s], one column. Never interpolated; the offset
            steps by one second at each leap second.
        polar: Polar motion ``(dx, dy)`` [arcsec], two columns.
            Interpolated linearly.
    """

    ut1_tai: TimeCorrelationTable
    ut1_utc: TimeCorrelationTable
    polar: TimeCorrelationTable


class TimeStamp(NamedTuple):
    """A single instant expressed in all four time scales.

    The four Julian dates are mutually consistent by construction when the
    stamp comes from :func:`~orbitcore.timecorr.time_stamp`; nothing checks
    this on direct construction.

    Attributes:
        jt_ut1: Julian date, UT1.
        jt_utc: Julian date, UTC.
        jt_tai: Julian date, TAI.
        jt_tdb: Julian date, TDB.
        polar_dx: Polar motion x-angle [deg].
        polar_dy: Polar motion y-angle [deg].
    """

    jt_ut1: Array
    jt_utc: Array
    jt_tai: Array
    jt_tdb: Array
    polar_dx: Array
    polar_dy: Array

    def add_delta(self, delta_jt: ArrayLike) -> TimeStamp:
        """Shift every scale by ``delta_jt`` days.

        The shift must be small enough that the offsets between scales do
        not change; polar motion is carried over unchanged.

        Args:
            delta_jt: Shift in days.

        Returns:
            TimeStamp: The shifted instant.
        """
        return self._replace(
            jt_ut1=self.jt_ut1 + delta_jt,
            jt_utc=self.jt_utc + delta_jt,
            jt_tai=self.jt_tai + delta_jt,
            jt_tdb=self.jt_tdb + delta_jt,
        )
