"""Position of the Sun as seen from the Earth.

The Sun's geocentric state is the negated heliocentric state of the
Earth, carried from the ecliptic through J2000, mean-of-date and
true-of-date into the Earth-fixed frame.
"""

from __future__ import annotations

from orbitcore.coordinates import EarthPosition, coord_efi_wgs84
from orbitcore.ephemeris import Vsop87AData, planet_heliocentric
from orbitcore.frames import Frame, OsvFrame, transform
from orbitcore.nutation import NutationData
from orbitcore.timecorr import TimeStamp


def sun_osv_efi(
    timestamp: TimeStamp,
    nutation: NutationData | None = None,
    ephemeris: Vsop87AData | None = None,
) -> OsvFrame:
    """Earth-fixed state of the Sun.

    Args:
        timestamp: Instant.
        nutation: Nutation at the instant; computed if absent.
        ephemeris: Planetary series; the bundled mean-element series if
            absent.

    Returns:
        OsvFrame: State in ``Frame.EFI`` [m, m/s].

    Examples:
        ```python
        from orbitcore.sun import sun_osv_efi
        from orbitcore.timecorr import default_time_correlation, time_stamp
        ts = time_stamp(default_time_correlation(), 2460000.5)
        sun = sun_osv_efi(ts)
        ```
    """
    earth = planet_heliocentric("earth", timestamp, ephemeris)
    sun = OsvFrame(
        frame=Frame.ECLGEO,
        position=-earth.position,
        velocity=-earth.velocity,
        timestamp=timestamp,
    )
    return transform(sun, Frame.EFI, nutation=nutation)


def subsolar_point(
    timestamp: TimeStamp,
    nutation: NutationData | None = None,
    ephemeris: Vsop87AData | None = None,
) -> EarthPosition:
    """Point on the WGS84 ellipsoid with the Sun at the zenith.

    Args:
        timestamp: Instant.
        nutation: Nutation at the instant; computed if absent.
        ephemeris: Planetary series.

    Returns:
        EarthPosition: Latitude and longitude [deg] of the subsolar point;
            ``h`` is the Sun's height above the ellipsoid [m].
    """
    sun = sun_osv_efi(timestamp, nutation, ephemeris)
    return coord_efi_wgs84(sun.position)
