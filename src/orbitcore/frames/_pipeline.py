"""Multi-step frame conversion along the frame chain.

The chain, in order, is::

    ECLHEL <-> ECLGEO <-> J2000 <-> MOD <-> TOD <-> PEF <-> EFI <-> ENU

:func:`transform` walks it one adjacent leg at a time.  Inputs that some
legs need (nutation, Earth's heliocentric state, the observer) are
resolved once before walking and reused for every leg.  ``PERI`` is not
on the chain; use :func:`~orbitcore.frames.osv_peri_to_inertial` and
:func:`~orbitcore.frames.osv_inertial_to_peri` for it.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from orbitcore.coordinates import EarthPosition
from orbitcore.frames._types import Frame, OsvFrame
from orbitcore.frames.earth_fixed import (
    osv_efi_to_pef,
    osv_pef_to_efi,
    osv_pef_to_tod,
    osv_tod_to_pef,
)
from orbitcore.frames.ecliptic import (
    osv_ecl_to_j2000,
    osv_geo_to_hel,
    osv_hel_to_geo,
    osv_j2000_to_ecl,
)
from orbitcore.frames.precession import osv_j2000_to_mod, osv_mod_to_j2000
from orbitcore.frames.topocentric import osv_efi_to_enu, osv_enu_to_efi
from orbitcore.frames.true_of_date import osv_mod_to_tod, osv_tod_to_mod
from orbitcore.nutation import NutationData, nutation as compute_nutation
from orbitcore.timecorr import TimeStamp

logger = logging.getLogger(__name__)

CHAIN: tuple[Frame, ...] = (
    Frame.ECLHEL,
    Frame.ECLGEO,
    Frame.J2000,
    Frame.MOD,
    Frame.TOD,
    Frame.PEF,
    Frame.EFI,
    Frame.ENU,
)
"""Frames reachable by :func:`transform`, in chain order."""

_INDEX = {frame: i for i, frame in enumerate(CHAIN)}


class OsvAllFrames(NamedTuple):
    """One state expressed in every frame of the chain.

    ``enu`` is ``None`` when no observer was given.
    """

    eclhel: OsvFrame
    eclgeo: OsvFrame
    j2000: OsvFrame
    mod: OsvFrame
    tod: OsvFrame
    pef: OsvFrame
    efi: OsvFrame
    enu: OsvFrame | None


class _LegInputs(NamedTuple):
    nutation: NutationData | None
    observer: EarthPosition | None
    earth: OsvFrame | None


def _chain_index(frame: Frame) -> int:
    try:
        return _INDEX[frame]
    except KeyError:
        raise ValueError(
            f"Frame {frame.name} is not on the transform chain; use the perifocal helpers"
        ) from None


def _crosses(lo: int, hi: int, a: Frame, b: Frame) -> bool:
    """True when the span ``[lo, hi]`` contains the leg ``a``-``b``."""
    return lo <= _INDEX[a] and _INDEX[b] <= hi


def _earth_heliocentric(timestamp: TimeStamp) -> OsvFrame:
    from orbitcore.ephemeris import planet_heliocentric

    logger.debug("Computing Earth heliocentric state from the default ephemeris")
    return planet_heliocentric("earth", timestamp)


def _step_up(osv: OsvFrame, inputs: _LegInputs) -> OsvFrame:
    """One leg towards ENU."""
    frame = osv.frame
    if frame == Frame.ECLHEL:
        return osv_hel_to_geo(osv, inputs.earth)
    if frame == Frame.ECLGEO:
        return osv_ecl_to_j2000(osv)
    if frame == Frame.J2000:
        return osv_j2000_to_mod(osv)
    if frame == Frame.MOD:
        return osv_mod_to_tod(osv, inputs.nutation)
    if frame == Frame.TOD:
        return osv_tod_to_pef(osv, inputs.nutation)
    if frame == Frame.PEF:
        return osv_pef_to_efi(osv)
    return osv_efi_to_enu(osv, inputs.observer)


def _step_down(osv: OsvFrame, inputs: _LegInputs) -> OsvFrame:
    """One leg towards ECLHEL."""
    frame = osv.frame
    if frame == Frame.ENU:
        return osv_enu_to_efi(osv, inputs.observer)
    if frame == Frame.EFI:
        return osv_efi_to_pef(osv)
    if frame == Frame.PEF:
        return osv_pef_to_tod(osv, inputs.nutation)
    if frame == Frame.TOD:
        return osv_tod_to_mod(osv, inputs.nutation)
    if frame == Frame.MOD:
        return osv_mod_to_j2000(osv)
    if frame == Frame.J2000:
        return osv_j2000_to_ecl(osv)
    return osv_geo_to_hel(osv, inputs.earth)


def _resolve_inputs(
    lo: int,
    hi: int,
    timestamp: TimeStamp,
    nutation: NutationData | None,
    observer: EarthPosition | None,
    earth: OsvFrame | None,
) -> _LegInputs:
    if nutation is None and (
        _crosses(lo, hi, Frame.MOD, Frame.TOD) or _crosses(lo, hi, Frame.TOD, Frame.PEF)
    ):
        nutation = compute_nutation(timestamp)
    if earth is None and _crosses(lo, hi, Frame.ECLHEL, Frame.ECLGEO):
        earth = _earth_heliocentric(timestamp)
    if observer is None and _crosses(lo, hi, Frame.EFI, Frame.ENU):
        raise ValueError("An observer position is required to convert to or from ENU")
    return _LegInputs(nutation=nutation, observer=observer, earth=earth)


def transform(
    osv: OsvFrame,
    target: Frame,
    timestamp: TimeStamp | None = None,
    nutation: NutationData | None = None,
    *,
    observer: EarthPosition | None = None,
    earth: OsvFrame | None = None,
) -> OsvFrame:
    """Convert a state to another frame of the chain.

    Args:
        osv: State to convert.
        target: Frame to convert to.
        timestamp: Instant used for nutation and the Earth ephemeris.
            Defaults to ``osv.timestamp``.
        nutation: Nutation at the instant. Computed once if needed and
            not given.
        observer: Observer position, required when the path includes ENU.
        earth: Earth's heliocentric state at the instant. Computed from the
            default ephemeris if needed and not given.

    Returns:
        OsvFrame: State in ``target``. Returns ``osv`` itself when it is
            already in ``target``.

    Raises:
        ValueError: If either frame is not on the chain, or an observer is
            needed and missing.

    Examples:
        ```python
        from orbitcore.frames import Frame, transform
        osv_efi = transform(osv_j2000, Frame.EFI)
        ```
    """
    start = _chain_index(osv.frame)
    end = _chain_index(target)
    if start == end:
        return osv

    if timestamp is None:
        timestamp = osv.timestamp
    lo, hi = min(start, end), max(start, end)
    inputs = _resolve_inputs(lo, hi, timestamp, nutation, observer, earth)

    step = _step_up if end > start else _step_down
    for _ in range(hi - lo):
        osv = step(osv, inputs)
    return osv


def compute_all(
    osv: OsvFrame,
    nutation: NutationData | None = None,
    *,
    observer: EarthPosition | None = None,
    earth: OsvFrame | None = None,
) -> OsvAllFrames:
    """Express a state in every frame of the chain.

    Args:
        osv: State in any chain frame.
        nutation: Nutation at ``osv.timestamp``; computed once if absent.
        observer: Observer position. Without it ``enu`` is ``None``.
        earth: Earth's heliocentric state; computed once if absent.

    Returns:
        OsvAllFrames: The state in each frame.
    """
    start = _chain_index(osv.frame)
    last = len(CHAIN) - 1 if observer is not None else _INDEX[Frame.EFI]
    if start > last:
        raise ValueError("An observer position is required to convert from ENU")
    inputs = _resolve_inputs(0, last, osv.timestamp, nutation, observer, earth)

    states: dict[Frame, OsvFrame] = {osv.frame: osv}
    current = osv
    for _ in range(start, last):
        current = _step_up(current, inputs)
        states[current.frame] = current
    current = osv
    for _ in range(start):
        current = _step_down(current, inputs)
        states[current.frame] = current

    return OsvAllFrames(
        eclhel=states[Frame.ECLHEL],
        eclgeo=states[Frame.ECLGEO],
        j2000=states[Frame.J2000],
        mod=states[Frame.MOD],
        tod=states[Frame.TOD],
        pef=states[Frame.PEF],
        efi=states[Frame.EFI],
        enu=states.get(Frame.ENU),
    )
