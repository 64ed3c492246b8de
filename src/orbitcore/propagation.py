"""Propagation entry points.

The two call shapes external collaborators need:

- :func:`propagate`: state of one element record at an instant, in J2000.
- :func:`transform`: move that state along the frame chain (re-exported
  from :mod:`orbitcore.frames`).

:class:`CatalogPropagator` keeps one :class:`Sgp4Propagator` per catalog
object and produces Earth-fixed states for all of them at once, or ground
positions of one object over a time range.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from orbitcore.coordinates import EarthPosition, coord_efi_wgs84
from orbitcore.errors import PropagationError
from orbitcore.frames import Frame, OsvFrame, transform
from orbitcore.nutation import NutationData, nutation as compute_nutation
from orbitcore.sgp4 import WGS72, EarthGravity, OrbitalElementRecord, Sgp4Propagator
from orbitcore.timecorr import TimeCorrelationData, TimeScale, TimeStamp, time_stamp

logger = logging.getLogger(__name__)

__all__ = ["CatalogPropagator", "propagate", "transform"]


def propagate(
    record: OrbitalElementRecord,
    instant: TimeStamp,
    gravity: EarthGravity = WGS72,
) -> OsvFrame:
    """State of an element record at an instant.

    Builds a fresh propagator for the record; keep an
    :class:`~orbitcore.sgp4.Sgp4Propagator` around to reuse the derived
    parameters across calls.

    Args:
        record: Element record.
        instant: Instant to propagate to.
        gravity: Earth gravity model.

    Returns:
        OsvFrame: State in ``Frame.J2000`` [m, m/s].

    Raises:
        PropagationError: If the orbit leaves the theory's domain.
    """
    return Sgp4Propagator(record, gravity).propagate(instant)


class CatalogPropagator:
    """Propagates a catalog of element records together.

    Objects are keyed by name (the record title without padding, or the
    catalog number when the title is empty).  Records the propagator
    cannot initialize are logged and left out.

    Args:
        records: Element records.
        time_correlation: Time correlation data used to build instants.
        gravity: Earth gravity model.
    """

    def __init__(
        self,
        records: Iterable[OrbitalElementRecord],
        time_correlation: TimeCorrelationData,
        gravity: EarthGravity = WGS72,
    ) -> None:
        self.time_correlation = time_correlation
        self._propagators: dict[str, Sgp4Propagator] = {}

        for record in records:
            name = record.name or str(record.catalog_number)
            if name in self._propagators:
                logger.warning("Duplicate object name %r; keeping the later record", name)
            if not record.checksum_valid:
                logger.warning("Accepting %r despite a checksum mismatch", name)
            propagator = Sgp4Propagator(record, gravity)
            try:
                propagator.initialize()
            except PropagationError as e:
                logger.warning("Skipping %r: %s", name, e)
                continue
            self._propagators[name] = propagator

        logger.info("Initialized %d propagators", len(self._propagators))

    def __len__(self) -> int:
        return len(self._propagators)

    def __contains__(self, name: object) -> bool:
        return name in self._propagators

    @property
    def names(self) -> list[str]:
        return list(self._propagators)

    def propagator(self, name: str) -> Sgp4Propagator:
        """Propagator of the object called ``name``.

        Raises:
            KeyError: If there is no such object.
        """
        try:
            return self._propagators[name]
        except KeyError:
            raise KeyError(f"No object named {name!r} in the catalog") from None

    def orbital_period(self, name: str) -> float:
        """Orbital period of ``name`` in days, from its mean motion."""
        return 1.0 / self.propagator(name).record.mean_motion

    def _to_efi(self, propagator: Sgp4Propagator, timestamp: TimeStamp, nutation: NutationData) -> OsvFrame:
        osv = propagator.propagate(timestamp)
        return transform(osv, Frame.EFI, nutation=nutation)

    def propagate_all(
        self,
        jt: float,
        scale: TimeScale = TimeScale.UTC,
        nutation: NutationData | None = None,
    ) -> dict[str, OsvFrame]:
        """Earth-fixed states of every object at one instant.

        Nutation is computed once for the instant if not given and shared
        by all objects.  Objects whose propagation fails are logged and
        left out of the result.

        Args:
            jt: Julian date.
            scale: Time scale of ``jt``.
            nutation: Nutation at the instant.

        Returns:
            dict[str, OsvFrame]: States in ``Frame.EFI``, keyed by name.
        """
        timestamp = time_stamp(self.time_correlation, jt, scale)
        if nutation is None:
            nutation = compute_nutation(timestamp)

        states = {}
        for name, propagator in self._propagators.items():
            try:
                states[name] = self._to_efi(propagator, timestamp, nutation)
            except PropagationError as e:
                logger.warning("Dropping %r from batch: %s", name, e)
        return states

    def propagate_one_range(
        self,
        name: str,
        jt_min: float,
        jt_max: float,
        jt_step: float,
        scale: TimeScale = TimeScale.UTC,
        nutation: NutationData | None = None,
    ) -> list[EarthPosition]:
        """Ground track of one object over a time range.

        Nutation changes little over an orbit, so unless given it is
        computed once at ``jt_min`` and used for the whole range.

        Args:
            name: Object name.
            jt_min: First Julian date.
            jt_max: Last Julian date (inclusive).
            jt_step: Step [days], positive.
            scale: Time scale of the Julian dates.
            nutation: Nutation used for every step.

        Returns:
            list[EarthPosition]: WGS84 positions, one per step.

        Raises:
            KeyError: If there is no such object.
            ValueError: If ``jt_step`` is not positive.
            PropagationError: If propagation fails at any step.
        """
        if jt_step <= 0.0:
            raise ValueError(f"jt_step must be positive, got {jt_step}")
        propagator = self.propagator(name)

        if nutation is None:
            nutation = compute_nutation(time_stamp(self.time_correlation, jt_min, scale))

        # Tolerance keeps jt_max when the range is a whole number of steps
        count = int(np.floor((jt_max - jt_min) / jt_step + 1e-6)) + 1
        jts = jt_min + np.arange(max(count, 0)) * jt_step
        positions = []
        for jt in jts:
            timestamp = time_stamp(self.time_correlation, float(jt), scale)
            osv = self._to_efi(propagator, timestamp, nutation)
            positions.append(coord_efi_wgs84(osv.position))
        return positions
