"""Coordinate transformations.

- **Geodetic**: WGS84 ellipsoid ``(lat, lon, h)`` ↔ Earth-fixed Cartesian
"""

from .geodetic import (
    EarthPosition,
    coord_efi_wgs84,
    coord_wgs84_efi,
)

__all__ = [
    "EarthPosition",
    "coord_efi_wgs84",
    "coord_wgs84_efi",
]
