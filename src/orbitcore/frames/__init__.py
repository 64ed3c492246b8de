"""Reference-frame transformations.

State vectors carry a :class:`Frame` tag.  Each adjacent pair of frames has
a pair of leg functions (``osv_<from>_to_<to>``) that check the input tag
and return a new :class:`OsvFrame`:

- **Ecliptic**: heliocentric to geocentric by Earth's heliocentric state,
  geocentric ecliptic to J2000 by the J2000 obliquity.
- **Precession**: J2000 to mean-of-date (IAU 1976).
- **Nutation**: mean-of-date to true-of-date (IAU 1980).
- **Earth rotation**: true-of-date to pseudo-Earth-fixed (GAST), then
  polar motion to Earth-fixed.
- **Topocentric**: Earth-fixed to an observer's east-north-up frame, and
  azimuth/elevation look angles.
- **Perifocal**: orbit plane to an inertial frame by RAAN, inclination
  and argument of perigee.

:func:`transform` and :func:`compute_all` chain the legs.
"""

from ._pipeline import CHAIN, OsvAllFrames, compute_all, transform
from ._types import Frame, OsvFrame, check_frame
from .earth_fixed import (
    osv_efi_to_pef,
    osv_pef_to_efi,
    osv_pef_to_tod,
    osv_tod_to_pef,
    rotation_efi_to_pef,
    rotation_pef_to_efi,
    rotation_tod_to_pef,
)
from .ecliptic import (
    osv_ecl_to_j2000,
    osv_geo_to_hel,
    osv_hel_to_geo,
    osv_j2000_to_ecl,
    rotation_ecliptic_to_j2000,
    rotation_j2000_to_ecliptic,
)
from .perifocal import (
    osv_inertial_to_peri,
    osv_peri_to_inertial,
    rotation_inertial_to_peri,
    rotation_peri_to_inertial,
)
from .precession import (
    osv_j2000_to_mod,
    osv_mod_to_j2000,
    precession_angles,
    rotation_j2000_to_mod,
    rotation_mod_to_j2000,
)
from .topocentric import (
    AzElDist,
    az_el_to_enu,
    enu_to_az_el,
    osv_efi_to_enu,
    osv_enu_to_efi,
    rotation_efi_to_enu,
    rotation_enu_to_efi,
)
from .true_of_date import (
    osv_mod_to_tod,
    osv_tod_to_mod,
    rotation_mod_to_tod,
    rotation_tod_to_mod,
)

__all__ = [
    # Types
    "Frame",
    "OsvFrame",
    "OsvAllFrames",
    "check_frame",
    # Pipeline
    "CHAIN",
    "transform",
    "compute_all",
    # Ecliptic
    "rotation_ecliptic_to_j2000",
    "rotation_j2000_to_ecliptic",
    "osv_hel_to_geo",
    "osv_geo_to_hel",
    "osv_ecl_to_j2000",
    "osv_j2000_to_ecl",
    # Precession
    "precession_angles",
    "rotation_j2000_to_mod",
    "rotation_mod_to_j2000",
    "osv_j2000_to_mod",
    "osv_mod_to_j2000",
    # Nutation
    "rotation_mod_to_tod",
    "rotation_tod_to_mod",
    "osv_mod_to_tod",
    "osv_tod_to_mod",
    # Earth rotation and polar motion
    "rotation_tod_to_pef",
    "osv_tod_to_pef",
    "osv_pef_to_tod",
    "rotation_pef_to_efi",
    "rotation_efi_to_pef",
    "osv_pef_to_efi",
    "osv_efi_to_pef",
    # Topocentric
    "AzElDist",
    "rotation_efi_to_enu",
    "rotation_enu_to_efi",
    "osv_efi_to_enu",
    "osv_enu_to_efi",
    "enu_to_az_el",
    "az_el_to_enu",
    # Perifocal
    "rotation_peri_to_inertial",
    "rotation_inertial_to_peri",
    "osv_peri_to_inertial",
    "osv_inertial_to_peri",
]
