"""Topocentric east-north-up (ENU) frame of a ground observer.

The ENU frame is centred on the observer's WGS84 position, with x to the
east, y to the north and z along the ellipsoid normal.  The observer is
fixed to the Earth, so velocities are rotated without a transport term.

Azimuth is measured from north towards east and elevation from the local
horizontal plane, both in degrees.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from orbitcore.coordinates import EarthPosition, coord_wgs84_efi
from orbitcore.frames._types import Frame, OsvFrame, check_frame
from orbitcore.rotations import Rx, Rz
from orbitcore.timecorr import TimeStamp
from orbitcore.utils import asind, atan2d, cosd, sind


class AzElDist(NamedTuple):
    """Look angles of a target from an observer.

    Attributes:
        az: Azimuth [deg], from north towards east.
        el: Elevation [deg].
        dist: Distance [m].
        az_rate: Azimuth rate [deg/s].
        el_rate: Elevation rate [deg/s].
        range_rate: Range rate [m/s].
    """

    az: Array
    el: Array
    dist: Array
    az_rate: Array
    el_rate: Array
    range_rate: Array


def rotation_efi_to_enu(observer: EarthPosition) -> Array:
    """Rotation ``Rx(90 - lat) Rz(90 + lon)`` from Earth-fixed to ENU axes."""
    return Rx(90.0 - observer.lat, use_degrees=True) @ Rz(90.0 + observer.lon, use_degrees=True)


def rotation_enu_to_efi(observer: EarthPosition) -> Array:
    """Rotation ``Rz(-90 - lon) Rx(lat - 90)`` from ENU to Earth-fixed axes."""
    return Rz(-90.0 - observer.lon, use_degrees=True) @ Rx(observer.lat - 90.0, use_degrees=True)


def osv_efi_to_enu(osv: OsvFrame, observer: EarthPosition) -> OsvFrame:
    """Earth-fixed to the observer's ENU frame.

    Args:
        osv: State in ``Frame.EFI``.
        observer: Observer position on the WGS84 ellipsoid.

    Returns:
        OsvFrame: State relative to the observer in ``Frame.ENU``.
    """
    check_frame(osv, Frame.EFI)
    R = rotation_efi_to_enu(observer)
    r_obs = coord_wgs84_efi(observer)
    return OsvFrame(
        frame=Frame.ENU,
        position=R @ (osv.position - r_obs),
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def osv_enu_to_efi(osv: OsvFrame, observer: EarthPosition) -> OsvFrame:
    """The observer's ENU frame to Earth-fixed.

    Args:
        osv: State in ``Frame.ENU``.
        observer: Observer position on the WGS84 ellipsoid.

    Returns:
        OsvFrame: State in ``Frame.EFI``.
    """
    check_frame(osv, Frame.ENU)
    R = rotation_enu_to_efi(observer)
    r_obs = coord_wgs84_efi(observer)
    return OsvFrame(
        frame=Frame.EFI,
        position=R @ osv.position + r_obs,
        velocity=R @ osv.velocity,
        timestamp=osv.timestamp,
    )


def enu_to_az_el(osv: OsvFrame) -> AzElDist:
    """Azimuth, elevation and distance, with their rates, of an ENU state.

    Directly overhead (zero horizontal distance) the azimuth and
    elevation rates are reported as zero.

    Args:
        osv: State in ``Frame.ENU``.

    Returns:
        AzElDist: Look angles and rates.
    """
    check_frame(osv, Frame.ENU)
    e, n, u = osv.position
    ve, vn, vu = osv.velocity

    rho_h2 = e * e + n * n
    dist = jnp.linalg.norm(osv.position)

    az = jnp.mod(atan2d(e, n), 360.0)
    el = asind(u / dist)

    # Rates are zero directly overhead, where azimuth is undefined
    overhead = rho_h2 <= 0.0
    rho_h2_safe = jnp.where(overhead, 1.0, rho_h2)
    rho_h_safe = jnp.sqrt(rho_h2_safe)
    az_rate = jnp.where(overhead, 0.0, jnp.rad2deg((n * ve - e * vn) / rho_h2_safe))
    el_rate = jnp.where(
        overhead,
        0.0,
        jnp.rad2deg((vu * rho_h2 - u * (e * ve + n * vn)) / (dist * dist * rho_h_safe)),
    )
    range_rate = jnp.dot(osv.position, osv.velocity) / dist

    return AzElDist(az=az, el=el, dist=dist, az_rate=az_rate, el_rate=el_rate, range_rate=range_rate)


def az_el_to_enu(angles: AzElDist, timestamp: TimeStamp) -> OsvFrame:
    """ENU state from look angles and their rates.

    Args:
        angles: Azimuth, elevation, distance and rates.
        timestamp: Instant of the observation.

    Returns:
        OsvFrame: State in ``Frame.ENU``.
    """
    az, el, dist, az_rate, el_rate, range_rate = angles
    unit = jnp.array([sind(az) * cosd(el), cosd(az) * cosd(el), sind(el)])
    d_unit_az = jnp.array([cosd(az) * cosd(el), -sind(az) * cosd(el), jnp.zeros_like(el)])
    d_unit_el = jnp.array([-sind(az) * sind(el), -cosd(az) * sind(el), cosd(el)])

    velocity = range_rate * unit + dist * (
        jnp.deg2rad(az_rate) * d_unit_az + jnp.deg2rad(el_rate) * d_unit_el
    )

    return OsvFrame(frame=Frame.ENU, position=dist * unit, velocity=velocity, timestamp=timestamp)
