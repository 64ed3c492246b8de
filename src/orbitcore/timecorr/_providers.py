"""Factory functions for creating TimeCorrelationData instances.

Provides convenience constructors for common configurations:

- :func:`static_time_correlation`: Constant offsets (useful for testing or
  when specific values are known).
- :func:`zero_time_correlation`: UT1, UTC and TAI all coincide.
- :func:`default_time_correlation`: Built from the bundled leap-second
  table, with UT1 taken equal to UTC.
- :func:`time_correlation_from_rows`: From in-memory ``[jt, values...]``
  rows.
- :func:`load_time_correlation_json`: From a JSON file holding the three
  tables.

Tables are built once and never modified afterwards; pass the resulting
value to every conversion that needs it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

import jax.numpy as jnp

from orbitcore.config import get_dtype
from orbitcore.constants import JD_MJD_OFFSET, SECONDS_PER_DAY
from orbitcore.time import leap_second_table
from orbitcore.timecorr._types import TimeCorrelationData, TimeCorrelationTable

logger = logging.getLogger(__name__)

_JT_MIN_DEFAULT: float = 2400000.5
"""Lower clamp boundary of constant tables (MJD 0)."""

_JT_MAX_DEFAULT: float = 2500000.5
"""Upper clamp boundary of constant tables (MJD 100000)."""


def _make_table(
    rows: Sequence[Sequence[float]],
    jt_min: float | None = None,
    jt_max: float | None = None,
    name: str = "table",
) -> TimeCorrelationTable:
    """Build a table from ``[jt, values...]`` rows, checking that it is sorted."""
    if len(rows) < 2:
        raise ValueError(f"Time correlation {name} needs at least two rows, got {len(rows)}")

    width = len(rows[0])
    if width < 2 or any(len(row) != width for row in rows):
        raise ValueError(f"Time correlation {name} rows must all hold a JT and the same number of values")

    jts = [float(row[0]) for row in rows]
    if any(b <= a for a, b in zip(jts, jts[1:])):
        raise ValueError(f"Time correlation {name} must be strictly increasing in JT")

    dtype = get_dtype()
    return TimeCorrelationTable(
        jt=jnp.array(jts, dtype=dtype),
        values=jnp.array([[float(v) for v in row[1:]] for row in rows], dtype=dtype),
        jt_min=jnp.array(jts[0] if jt_min is None else jt_min, dtype=dtype),
        jt_max=jnp.array(jts[-1] if jt_max is None else jt_max, dtype=dtype),
    )


def time_correlation_from_rows(
    ut1_tai_rows: Sequence[Sequence[float]],
    ut1_utc_rows: Sequence[Sequence[float]],
    polar_rows: Sequence[Sequence[float]],
) -> TimeCorrelationData:
    """Create TimeCorrelationData from in-memory rows.

    Args:
        ut1_tai_rows: ``[jt, UT1-TAI (s)]`` rows.
        ut1_utc_rows: ``[jt, UT1-UTC (s)]`` rows.
        polar_rows: ``[jt, dx (arcsec), dy (arcsec)]`` rows.

    Returns:
        TimeCorrelationData clamped to the first and last row of each table.

    Raises:
        ValueError: If a table has fewer than two rows, ragged rows, or is
            not strictly increasing in JT.
    """
    return TimeCorrelationData(
        ut1_tai=_make_table(ut1_tai_rows, name="ut1_tai"),
        ut1_utc=_make_table(ut1_utc_rows, name="ut1_utc"),
        polar=_make_table(polar_rows, name="polar"),
    )


def static_time_correlation(
    ut1_utc: float = 0.0,
    tai_utc: float = 37.0,
    polar_dx: float = 0.0,
    polar_dy: float = 0.0,
    jt_min: float = _JT_MIN_DEFAULT,
    jt_max: float = _JT_MAX_DEFAULT,
) -> TimeCorrelationData:
    """Create TimeCorrelationData with constant offsets.

    Each table holds two identical rows (at ``jt_min`` and ``jt_max``), so
    every lookup returns the constant.

    Args:
        ut1_utc: UT1-UTC [s]. Default: 0.0.
        tai_utc: TAI-UTC [s]. Default: 37.0 (leap seconds since 2017).
        polar_dx: Polar motion x [arcsec]. Default: 0.0.
        polar_dy: Polar motion y [arcsec]. Default: 0.0.
        jt_min: Start of the table range. Default: MJD 0.
        jt_max: End of the table range. Default: MJD 100000.

    Returns:
        TimeCorrelationData with constant values.

    Examples:
        ```python
        from orbitcore.timecorr import static_time_correlation, utc_to_ut1
        data = static_time_correlation(ut1_utc=0.1)
        jt_ut1 = utc_to_ut1(data, 2460000.5)
        ```
    """
    ut1_tai = ut1_utc - tai_utc
    return time_correlation_from_rows(
        [[jt_min, ut1_tai], [jt_max, ut1_tai]],
        [[jt_min, ut1_utc], [jt_max, ut1_utc]],
        [[jt_min, polar_dx, polar_dy], [jt_max, polar_dx, polar_dy]],
    )


def zero_time_correlation() -> TimeCorrelationData:
    """Create TimeCorrelationData in which UT1, UTC and TAI coincide.

    TDB still differs from TAI by the fixed 32.184 s.

    Returns:
        TimeCorrelationData with all offsets set to zero.
    """
    return static_time_correlation(ut1_utc=0.0, tai_utc=0.0)


def default_time_correlation() -> TimeCorrelationData:
    """Create TimeCorrelationData from the bundled leap-second table.

    UT1-UTC is approximated as zero (it stays within 0.9 s by definition)
    and polar motion as zero.  UT1-TAI therefore equals -(TAI-UTC) and
    steps by one second at each leap second, ramping over the final second
    before the step.  Use :func:`load_time_correlation_json` when measured
    Earth orientation values are available.

    Returns:
        TimeCorrelationData covering 1972-01-01 onward.
    """
    ut1_tai_rows: list[list[float]] = []
    previous = None
    for mjd, tai_utc in leap_second_table():
        jt = mjd + JD_MJD_OFFSET
        if previous is not None:
            ut1_tai_rows.append([jt - 1.0 / SECONDS_PER_DAY, -previous])
        ut1_tai_rows.append([jt, -tai_utc])
        previous = tai_utc

    jt_first = ut1_tai_rows[0][0]
    jt_last = ut1_tai_rows[-1][0]

    logger.info(
        "Built default time correlation from %d leap seconds (UT1-UTC and polar motion zero)",
        len(leap_second_table()),
    )

    return time_correlation_from_rows(
        ut1_tai_rows,
        [[jt_first, 0.0], [jt_last, 0.0]],
        [[jt_first, 0.0, 0.0], [jt_last, 0.0, 0.0]],
    )


def _table_from_json(obj: dict, name: str) -> TimeCorrelationTable:
    try:
        rows = obj["data"]
        jt_min = obj.get("minJD")
        jt_max = obj.get("maxJD")
    except (KeyError, TypeError, AttributeError) as exc:
        raise ValueError(f"Malformed time correlation table {name!r}") from exc
    return _make_table(rows, jt_min, jt_max, name=name)


def load_time_correlation_json(filepath: str | Path) -> TimeCorrelationData:
    """Load TimeCorrelationData from a JSON file.

    The file holds three objects, ``ut1Tai``, ``ut1Utc`` and ``polar``, each
    with a ``data`` array of ``[jt, values...]`` rows and optional ``minJD``
    and ``maxJD`` clamp boundaries::

        {"ut1Tai": {"data": [[2441317.5, -10.0], ...], "minJD": ..., "maxJD": ...},
         "ut1Utc": {"data": [[2441317.5, 0.0], ...]},
         "polar":  {"data": [[2441317.5, 0.01, 0.23], ...]}}

    Args:
        filepath: Path to the JSON file.

    Returns:
        TimeCorrelationData ready for JIT-compatible lookups.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a table is missing or malformed.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Time correlation file not found: {filepath}")

    with filepath.open("r", encoding="utf-8") as fh:
        content = json.load(fh)

    try:
        tables = {key: content[key] for key in ("ut1Tai", "ut1Utc", "polar")}
    except KeyError as exc:
        raise ValueError(f"Time correlation file {filepath} lacks table {exc.args[0]!r}") from exc

    data = TimeCorrelationData(
        ut1_tai=_table_from_json(tables["ut1Tai"], "ut1Tai"),
        ut1_utc=_table_from_json(tables["ut1Utc"], "ut1Utc"),
        polar=_table_from_json(tables["polar"], "polar"),
    )
    logger.info(
        "Loaded time correlation data from %s (%d UT1-TAI, %d UT1-UTC, %d polar rows)",
        filepath,
        data.ut1_tai.jt.shape[0],
        data.ut1_utc.jt.shape[0],
        data.polar.jt.shape[0],
    )
    return data
