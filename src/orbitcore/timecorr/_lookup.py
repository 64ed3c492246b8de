"""JIT-compatible table lookup for time correlation.

All functions use only JAX primitives (``jnp.searchsorted``, array indexing,
``jnp.where``) and are compatible with ``jax.jit`` and ``jax.vmap``.

Two policies are provided: linear interpolation between the bracketing
rows, and the left-hand row only.  Both clamp to the first/last row outside
``[jt_min, jt_max]``.  A query that falls exactly on a node is bracketed by
the interval to its left.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from orbitcore.timecorr._types import TimeCorrelationTable


def _bracket(table: TimeCorrelationTable, jt: Array) -> tuple[Array, Array]:
    """Return the indices of the rows bracketing ``jt``."""
    n = table.jt.shape[0]
    idx = jnp.searchsorted(table.jt, jt, side="left")
    idx_lo = jnp.clip(idx - 1, 0, n - 2)
    return idx_lo, idx_lo + 1


def _clamp(table: TimeCorrelationTable, jt: Array, inner: Array) -> Array:
    first = table.values[0]
    last = table.values[-1]
    out = jnp.where(jt <= table.jt_min, first, inner)
    return jnp.where(jt >= table.jt_max, last, out)


def interpolate_table(table: TimeCorrelationTable, jt: ArrayLike) -> Array:
    """Linearly interpolate every value column at ``jt``.

    Args:
        table: Sorted time correlation table.
        jt: Scalar Julian date to query.

    Returns:
        Interpolated row, shape ``(K,)``.

    Examples:
        ```python
        from orbitcore.timecorr import static_time_correlation, interpolate_table
        data = static_time_correlation(tai_utc=37.0)
        ut1_tai = interpolate_table(data.ut1_tai, 2460000.5)[0]
        ```
    """
    jt = jnp.asarray(jt, dtype=table.jt.dtype)
    idx_lo, idx_hi = _bracket(table, jt)

    jt_lo = table.jt[idx_lo]
    jt_hi = table.jt[idx_hi]
    val_lo = table.values[idx_lo]
    val_hi = table.values[idx_hi]

    djt = jt_hi - jt_lo
    frac = jnp.where(djt > 0.0, (jt - jt_lo) / djt, 0.0)
    interpolated = val_lo + frac * (val_hi - val_lo)

    return _clamp(table, jt, interpolated)


def lookup_table_left(table: TimeCorrelationTable, jt: ArrayLike) -> Array:
    """Return the left-hand bracketing row at ``jt`` without interpolation.

    Used for offsets that are discontinuous at table nodes, where
    interpolating across a step would produce a value that never existed.

    Args:
        table: Sorted time correlation table.
        jt: Scalar Julian date to query.

    Returns:
        Row values, shape ``(K,)``.
    """
    jt = jnp.asarray(jt, dtype=table.jt.dtype)
    idx_lo, _ = _bracket(table, jt)
    return _clamp(table, jt, table.values[idx_lo])
