"""Stateful SGP4 propagator for one element record.

:class:`Sgp4Propagator` owns the parameter array derived from a record and
recomputes it whenever the record or gravity model is replaced.  One
instance per tracked object; instances are not shared between objects.
"""

from __future__ import annotations

import enum
import logging

import jax
import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from orbitcore.errors import PropagationError
from orbitcore.frames import Frame, OsvFrame
from orbitcore.sgp4._constants import WGS72, EarthGravity
from orbitcore.sgp4._propagation import check_error, sgp4_init, sgp4_propagate
from orbitcore.sgp4._types import OrbitalElementRecord
from orbitcore.timecorr import TimeStamp

logger = logging.getLogger(__name__)

_kernel = jax.jit(sgp4_propagate)
_batch_kernel = jax.jit(jax.vmap(sgp4_propagate, in_axes=(None, 0)))

_KM = 1000.0


class PropagatorState(enum.Enum):
    """Lifecycle of an :class:`Sgp4Propagator`.

    Attributes:
        UNINITIALIZED: No parameters derived for the current record.
        INITIALIZED: Parameters derived, nothing computed yet.
        COMPUTED: At least one state computed with the current parameters.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    COMPUTED = "computed"


class Sgp4Propagator:
    """SGP4 propagator bound to one orbital element record.

    The parameter array is derived on :meth:`initialize`, or lazily on the
    first computation, and reused by every later call.  Assigning a new
    :attr:`record` or :attr:`gravity` discards it.

    Examples:
        ```python
        from orbitcore.sgp4 import Sgp4Propagator, parse_tle
        prop = Sgp4Propagator(parse_tle(line0, line1, line2))
        r, v = prop.compute(1000.0)  # metres, metres/second
        ```

    Args:
        record: Element record to propagate.
        gravity: Earth gravity model constants.
    """

    def __init__(self, record: OrbitalElementRecord | None = None, gravity: EarthGravity = WGS72) -> None:
        self._record = record
        self._gravity = gravity
        self._params: Array | None = None
        self._state = PropagatorState.UNINITIALIZED
        self._last_tsince: float | None = None

    @property
    def record(self) -> OrbitalElementRecord | None:
        """Element record being propagated."""
        return self._record

    @record.setter
    def record(self, record: OrbitalElementRecord) -> None:
        self._record = record
        self._invalidate()

    @property
    def gravity(self) -> EarthGravity:
        """Earth gravity model."""
        return self._gravity

    @gravity.setter
    def gravity(self, gravity: EarthGravity) -> None:
        self._gravity = gravity
        self._invalidate()

    @property
    def state(self) -> PropagatorState:
        return self._state

    @property
    def params(self) -> Array:
        """SGP4 parameter array, deriving it if needed."""
        if self._params is None:
            self.initialize()
        return self._params

    @property
    def last_tsince(self) -> float | None:
        """Minutes since epoch of the last successful computation."""
        return self._last_tsince

    def _invalidate(self) -> None:
        self._params = None
        self._last_tsince = None
        self._state = PropagatorState.UNINITIALIZED

    def initialize(self) -> None:
        """Derive the parameter array from the current record.

        The record is propagated to its epoch once, as the reference
        implementation does, so that records the theory cannot handle are
        rejected here.

        Raises:
            ValueError: If no record is set.
            PropagationError: If the record is outside the theory's domain.
        """
        if self._record is None:
            raise ValueError("Sgp4Propagator has no element record")
        params = sgp4_init(self._record, self._gravity)
        _, _, error = _kernel(params, 0.0)
        check_error(error, 0.0)
        self._params = params
        self._last_tsince = None
        self._state = PropagatorState.INITIALIZED

    def compute(self, tsince: float) -> tuple[Array, Array]:
        """Position and velocity at a time after epoch.

        Args:
            tsince: Minutes since the record's epoch.

        Returns:
            tuple[Array, Array]: Position [m] and velocity [m/s] in the
                frame of the element set.

        Raises:
            PropagationError: If the orbit leaves the theory's domain.
        """
        r, v, error = _kernel(self.params, tsince)
        check_error(error, float(tsince))
        self._last_tsince = float(tsince)
        self._state = PropagatorState.COMPUTED
        return r * _KM, v * _KM

    def compute_many(self, tsince: ArrayLike) -> tuple[Array, Array]:
        """Positions and velocities at several times after epoch.

        Args:
            tsince: Minutes since epoch, shape ``(N,)``.

        Returns:
            tuple[Array, Array]: Positions [m] and velocities [m/s], each
                of shape ``(N, 3)``.

        Raises:
            PropagationError: For the first time that fails.
        """
        tsince = jnp.atleast_1d(jnp.asarray(tsince, dtype=self.params.dtype))
        r, v, errors = _batch_kernel(self.params, tsince)
        errors = np.asarray(errors)
        failed = np.flatnonzero(errors)
        if failed.size:
            i = int(failed[0])
            raise PropagationError(int(errors[i]), float(tsince[i]))
        self._last_tsince = float(tsince[-1])
        self._state = PropagatorState.COMPUTED
        return r * _KM, v * _KM

    def minutes_since_epoch(self, timestamp: TimeStamp) -> float:
        """Minutes from the record's epoch to ``timestamp`` (UTC)."""
        if self._record is None:
            raise ValueError("Sgp4Propagator has no element record")
        return (float(timestamp.jt_utc) - self._record.jt_epoch) * 1440.0

    def propagate(self, timestamp: TimeStamp) -> OsvFrame:
        """State at an instant.

        Args:
            timestamp: Instant to propagate to.

        Returns:
            OsvFrame: State in ``Frame.J2000`` [m, m/s].

        Raises:
            PropagationError: If the orbit leaves the theory's domain.
        """
        r, v = self.compute(self.minutes_since_epoch(timestamp))
        return OsvFrame(frame=Frame.J2000, position=r, velocity=v, timestamp=timestamp)
