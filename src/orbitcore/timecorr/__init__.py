"""Time correlation between the TDB, TAI, UT1 and UTC scales.

Converts an instant given in any one scale into a :class:`TimeStamp`
holding all four, together with Earth polar motion, using injected
lookup tables.

Usage::

    from orbitcore.timecorr import TimeScale, default_time_correlation, time_stamp

    data = default_time_correlation()
    ts = time_stamp(data, 2460107.5, TimeScale.UTC)
    print(ts.jt_ut1, ts.jt_tdb)
"""

from orbitcore.timecorr._correlation import (
    polar_motion,
    tai_to_tdb,
    tai_to_ut1,
    tdb_to_tai,
    time_stamp,
    ut1_to_tai,
    ut1_to_utc,
    utc_to_ut1,
)
from orbitcore.timecorr._lookup import interpolate_table, lookup_table_left
from orbitcore.timecorr._providers import (
    default_time_correlation,
    load_time_correlation_json,
    static_time_correlation,
    time_correlation_from_rows,
    zero_time_correlation,
)
from orbitcore.timecorr._types import (
    TimeCorrelationData,
    TimeCorrelationTable,
    TimeScale,
    TimeStamp,
)

__all__ = [
    "TimeCorrelationData",
    "TimeCorrelationTable",
    "TimeScale",
    "TimeStamp",
    "default_time_correlation",
    "interpolate_table",
    "load_time_correlation_json",
    "lookup_table_left",
    "polar_motion",
    "static_time_correlation",
    "tai_to_tdb",
    "tai_to_ut1",
    "tdb_to_tai",
    "time_correlation_from_rows",
    "time_stamp",
    "ut1_to_tai",
    "ut1_to_utc",
    "utc_to_ut1",
    "zero_time_correlation",
]
