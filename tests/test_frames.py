"""Tests for the frame legs, the transform pipeline and look angles."""

import jax.numpy as jnp
import pytest

from orbitcore.constants import OBLIQUITY_J2000, JD2000
from orbitcore.coordinates import EarthPosition, coord_wgs84_efi
from orbitcore.ephemeris import planet_heliocentric
from orbitcore.frames import (
    CHAIN,
    AzElDist,
    Frame,
    OsvFrame,
    az_el_to_enu,
    compute_all,
    enu_to_az_el,
    osv_ecl_to_j2000,
    osv_efi_to_enu,
    osv_efi_to_pef,
    osv_enu_to_efi,
    osv_geo_to_hel,
    osv_hel_to_geo,
    osv_inertial_to_peri,
    osv_j2000_to_ecl,
    osv_j2000_to_mod,
    osv_mod_to_j2000,
    osv_mod_to_tod,
    osv_pef_to_efi,
    osv_pef_to_tod,
    osv_peri_to_inertial,
    osv_tod_to_mod,
    osv_tod_to_pef,
    rotation_ecliptic_to_j2000,
    rotation_j2000_to_mod,
    rotation_mod_to_tod,
    rotation_tod_to_pef,
    transform,
)
from orbitcore.nutation import nutation
from orbitcore.timecorr import static_time_correlation, time_stamp

JT = 2460107.25
OBSERVER = EarthPosition(lat=52.2, lon=0.12, h=25.0)


@pytest.fixture
def ts():
    data = static_time_correlation(ut1_utc=-0.2, tai_utc=37.0, polar_dx=0.1, polar_dy=0.3)
    return time_stamp(data, JT)


@pytest.fixture
def nut(ts):
    return nutation(ts)


def _osv(frame, ts):
    return OsvFrame(
        frame=frame,
        position=jnp.array([6778e3, 1200e3, 300e3]),
        velocity=jnp.array([-1000.0, 6500.0, 3000.0]),
        timestamp=ts,
    )


def _assert_same_state(a, b, atol=1e-6):
    assert a.frame == b.frame
    assert jnp.allclose(a.position, b.position, rtol=1e-9, atol=atol)
    assert jnp.allclose(a.velocity, b.velocity, rtol=1e-9, atol=atol)


class TestOsvFrame:
    def test_state_vector(self, ts):
        osv = _osv(Frame.J2000, ts)
        assert osv.state.shape == (6,)
        assert float(osv.state[4]) == 6500.0

    def test_leg_rejects_wrong_frame(self, ts):
        with pytest.raises(ValueError, match="Expected a state in frame J2000"):
            osv_j2000_to_mod(_osv(Frame.TOD, ts))


class TestLegInverses:
    """Every leg followed by its reverse returns the input state."""

    def test_ecliptic_j2000(self, ts):
        osv = _osv(Frame.ECLGEO, ts)
        _assert_same_state(osv_j2000_to_ecl(osv_ecl_to_j2000(osv)), osv)

    def test_heliocentric_geocentric(self, ts):
        earth = planet_heliocentric("earth", ts)
        osv = _osv(Frame.ECLGEO, ts)
        out = osv_hel_to_geo(osv_geo_to_hel(osv, earth), earth)
        _assert_same_state(out, osv, atol=1e-3)

    def test_precession(self, ts):
        osv = _osv(Frame.J2000, ts)
        _assert_same_state(osv_mod_to_j2000(osv_j2000_to_mod(osv)), osv)

    def test_nutation(self, ts, nut):
        osv = _osv(Frame.MOD, ts)
        _assert_same_state(osv_tod_to_mod(osv_mod_to_tod(osv, nut), nut), osv)

    def test_earth_rotation(self, ts, nut):
        osv = _osv(Frame.TOD, ts)
        _assert_same_state(osv_pef_to_tod(osv_tod_to_pef(osv, nut), nut), osv)

    def test_polar_motion(self, ts):
        osv = _osv(Frame.PEF, ts)
        _assert_same_state(osv_efi_to_pef(osv_pef_to_efi(osv)), osv)

    def test_topocentric(self, ts):
        osv = _osv(Frame.EFI, ts)
        _assert_same_state(osv_enu_to_efi(osv_efi_to_enu(osv, OBSERVER), OBSERVER), osv)

    def test_perifocal(self, ts):
        osv = _osv(Frame.J2000, ts)
        peri = osv_inertial_to_peri(osv, 47.7, 90.19, 26.76)
        assert peri.frame == Frame.PERI
        _assert_same_state(osv_peri_to_inertial(peri, 47.7, 90.19, 26.76), osv)


class TestRotations:
    def test_ecliptic_pole(self):
        pole = rotation_ecliptic_to_j2000() @ jnp.array([0.0, 0.0, 1.0])
        eps = jnp.deg2rad(OBLIQUITY_J2000)
        assert jnp.allclose(pole, jnp.array([0.0, -jnp.sin(eps), jnp.cos(eps)]), atol=1e-12)

    def test_no_precession_at_j2000(self):
        assert jnp.allclose(rotation_j2000_to_mod(JD2000), jnp.eye(3), atol=1e-15)

    def test_precession_one_century(self):
        # The equinox moves about 1.397 deg along the ecliptic per century
        R = rotation_j2000_to_mod(JD2000 + 36525.0)
        angle = jnp.rad2deg(jnp.arccos((jnp.trace(R) - 1.0) / 2.0))
        assert 1.2 < float(angle) < 1.45

    def test_nutation_small(self, nut):
        R = rotation_mod_to_tod(nut)
        assert jnp.allclose(R, jnp.eye(3), atol=1e-4)
        assert jnp.allclose(R @ R.T, jnp.eye(3), atol=1e-14)

    def test_earth_rotation_is_z_rotation(self, ts, nut):
        R = rotation_tod_to_pef(ts, nut)
        assert jnp.allclose(R[2], jnp.array([0.0, 0.0, 1.0]), atol=1e-15)


class TestEarthFixedVelocity:
    def test_ground_point_moves_in_inertial_frame(self, ts, nut):
        r = coord_wgs84_efi(EarthPosition(lat=0.0, lon=0.0, h=0.0))
        ground = OsvFrame(Frame.EFI, r, jnp.zeros(3), ts)
        inertial = transform(ground, Frame.J2000, nutation=nut)
        assert float(jnp.linalg.norm(inertial.velocity)) == pytest.approx(465.1, abs=0.2)

    def test_ground_point_at_rest_after_roundtrip(self, ts, nut):
        r = coord_wgs84_efi(EarthPosition(lat=45.0, lon=10.0, h=0.0))
        ground = OsvFrame(Frame.EFI, r, jnp.zeros(3), ts)
        back = transform(transform(ground, Frame.J2000, nutation=nut), Frame.EFI, nutation=nut)
        assert jnp.allclose(back.velocity, jnp.zeros(3), atol=1e-6)
        assert jnp.allclose(back.position, r, rtol=1e-12, atol=1e-5)


class TestTransform:
    def test_same_frame_returns_input(self, ts):
        osv = _osv(Frame.TOD, ts)
        assert transform(osv, Frame.TOD) is osv

    def test_matches_leg_chain(self, ts, nut):
        osv = _osv(Frame.J2000, ts)
        manual = osv_pef_to_efi(osv_tod_to_pef(osv_mod_to_tod(osv_j2000_to_mod(osv), nut), nut))
        _assert_same_state(transform(osv, Frame.EFI, nutation=nut), manual)

    def test_computes_nutation_when_absent(self, ts, nut):
        osv = _osv(Frame.J2000, ts)
        _assert_same_state(transform(osv, Frame.PEF), transform(osv, Frame.PEF, nutation=nut))

    def test_computes_nutation_from_tod(self, ts, nut):
        osv = _osv(Frame.TOD, ts)
        _assert_same_state(transform(osv, Frame.EFI), transform(osv, Frame.EFI, nutation=nut))

    def test_computes_nutation_to_tod(self, ts, nut):
        osv = _osv(Frame.EFI, ts)
        _assert_same_state(transform(osv, Frame.TOD), transform(osv, Frame.TOD, nutation=nut))

    def test_computes_nutation_from_enu_to_tod(self, ts, nut):
        osv = _osv(Frame.ENU, ts)
        _assert_same_state(
            transform(osv, Frame.TOD, observer=OBSERVER),
            transform(osv, Frame.TOD, nutation=nut, observer=OBSERVER),
        )

    def test_downward(self, ts, nut):
        osv = _osv(Frame.EFI, ts)
        manual = osv_mod_to_j2000(osv_tod_to_mod(osv_pef_to_tod(osv_efi_to_pef(osv), nut), nut))
        _assert_same_state(transform(osv, Frame.J2000, nutation=nut), manual)

    def test_roundtrip_through_heliocentric(self, ts):
        osv = _osv(Frame.EFI, ts)
        hel = transform(osv, Frame.ECLHEL)
        assert hel.frame == Frame.ECLHEL
        assert 1.4e11 < float(jnp.linalg.norm(hel.position)) < 1.6e11
        _assert_same_state(transform(hel, Frame.EFI), osv, atol=1e-2)

    def test_to_enu(self, ts, nut):
        osv = _osv(Frame.J2000, ts)
        enu = transform(osv, Frame.ENU, nutation=nut, observer=OBSERVER)
        expected = osv_efi_to_enu(transform(osv, Frame.EFI, nutation=nut), OBSERVER)
        _assert_same_state(enu, expected)

    def test_enu_requires_observer(self, ts):
        with pytest.raises(ValueError, match="observer"):
            transform(_osv(Frame.J2000, ts), Frame.ENU)

    def test_perifocal_not_on_chain(self, ts):
        with pytest.raises(ValueError):
            transform(_osv(Frame.J2000, ts), Frame.PERI)


class TestComputeAll:
    def test_all_frames_tagged(self, ts, nut):
        out = compute_all(_osv(Frame.TOD, ts), nut, observer=OBSERVER)
        for frame in CHAIN:
            assert getattr(out, frame.value).frame == frame

    def test_consistent_with_transform(self, ts, nut):
        osv = _osv(Frame.J2000, ts)
        out = compute_all(osv, nut, observer=OBSERVER)
        assert out.j2000 is osv
        _assert_same_state(out.efi, transform(osv, Frame.EFI, nutation=nut))
        _assert_same_state(out.mod, osv_j2000_to_mod(osv))

    def test_without_observer(self, ts, nut):
        out = compute_all(_osv(Frame.J2000, ts), nut)
        assert out.enu is None
        assert out.efi.frame == Frame.EFI

    def test_from_enu_requires_observer(self, ts):
        with pytest.raises(ValueError, match="observer"):
            compute_all(_osv(Frame.ENU, ts))


class TestLookAngles:
    OBS = EarthPosition(lat=0.0, lon=0.0, h=0.0)

    def _target(self, ts, offset):
        r = coord_wgs84_efi(self.OBS) + jnp.asarray(offset)
        return OsvFrame(Frame.EFI, r, jnp.zeros(3), ts)

    def test_enu_axes_at_equator(self, ts):
        enu = osv_efi_to_enu(self._target(ts, [10.0, 20.0, 30.0]), self.OBS)
        assert jnp.allclose(enu.position, jnp.array([20.0, 30.0, 10.0]), atol=1e-6)

    def test_north_horizon(self, ts):
        enu = osv_efi_to_enu(self._target(ts, [0.0, 0.0, 1000.0]), self.OBS)
        angles = enu_to_az_el(enu)
        assert float(angles.az) == pytest.approx(0.0, abs=1e-9)
        assert float(angles.el) == pytest.approx(0.0, abs=1e-9)
        assert float(angles.dist) == pytest.approx(1000.0, abs=1e-6)

    def test_west_azimuth_positive(self, ts):
        enu = osv_efi_to_enu(self._target(ts, [0.0, -1000.0, 0.0]), self.OBS)
        assert float(enu_to_az_el(enu).az) == pytest.approx(270.0, abs=1e-9)

    def test_elevation(self, ts):
        enu = OsvFrame(Frame.ENU, jnp.array([0.0, 1000.0, 1000.0]), jnp.zeros(3), ts)
        assert float(enu_to_az_el(enu).el) == pytest.approx(45.0, abs=1e-9)

    def test_rates(self, ts):
        # Moving east at 100 m/s, 1000 m due north
        enu = OsvFrame(Frame.ENU, jnp.array([0.0, 1000.0, 0.0]), jnp.array([100.0, 0.0, 0.0]), ts)
        angles = enu_to_az_el(enu)
        assert float(angles.az_rate) == pytest.approx(float(jnp.rad2deg(0.1)), rel=1e-9)
        assert float(angles.el_rate) == pytest.approx(0.0, abs=1e-12)
        assert float(angles.range_rate) == pytest.approx(0.0, abs=1e-9)

    def test_rates_finite_overhead(self, ts):
        enu = OsvFrame(Frame.ENU, jnp.array([0.0, 0.0, 500e3]), jnp.array([10.0, -20.0, 5.0]), ts)
        angles = enu_to_az_el(enu)
        assert float(angles.el) == pytest.approx(90.0, abs=1e-9)
        assert float(angles.az_rate) == 0.0
        assert float(angles.el_rate) == 0.0
        assert float(angles.range_rate) == pytest.approx(5.0, abs=1e-12)

    def test_roundtrip(self, ts):
        enu = OsvFrame(
            Frame.ENU,
            jnp.array([3000e3, -4000e3, 500e3]),
            jnp.array([100.0, -200.0, 50.0]),
            ts,
        )
        angles = enu_to_az_el(enu)
        assert isinstance(angles, AzElDist)
        _assert_same_state(az_el_to_enu(angles, ts), enu)
