"""Tests for IAU 1980 nutation and sidereal time."""

import jax
import jax.numpy as jnp
import pytest

from orbitcore._nutation_coefficients import NUTATION_1980_TERMS
from orbitcore.constants import JD2000
from orbitcore.nutation import NutationData, mean_obliquity, nutation, nutation_terms
from orbitcore.sidereal import earth_rotation_rate, time_gast, time_gmst
from orbitcore.timecorr import time_stamp, zero_time_correlation


class TestNutation:
    def test_coefficient_table_size(self):
        assert len(NUTATION_1980_TERMS) == 106

    def test_mean_obliquity_j2000(self):
        assert float(mean_obliquity(JD2000)) == pytest.approx(84381.448 / 3600.0, abs=1e-12)

    def test_mean_obliquity_decreases(self):
        assert float(mean_obliquity(JD2000 + 36525.0)) < float(mean_obliquity(JD2000))

    def test_j2000_values(self):
        nut = nutation_terms(JD2000)
        assert -14.5 < float(nut.dpsi) * 3600.0 < -13.5
        assert -6.0 < float(nut.deps) * 3600.0 < -5.5

    def test_amplitude_bounded(self):
        for jt in (2440000.5, 2451545.0, 2460000.5, 2470000.5):
            nut = nutation_terms(jt)
            assert abs(float(nut.dpsi)) * 3600.0 < 20.0
            assert abs(float(nut.deps)) * 3600.0 < 10.0

    def test_from_timestamp_uses_tdb(self):
        ts = time_stamp(zero_time_correlation(), JD2000)
        nut = nutation(ts)
        expected = nutation_terms(ts.jt_tdb)
        assert isinstance(nut, NutationData)
        assert float(nut.dpsi) == pytest.approx(float(expected.dpsi), abs=1e-15)

    def test_jit(self):
        nut = jax.jit(nutation_terms)(JD2000)
        assert float(nut.dpsi) == pytest.approx(float(nutation_terms(JD2000).dpsi), abs=1e-12)


class TestSiderealTime:
    def test_gmst_j2000(self):
        assert float(time_gmst(JD2000, JD2000)) == pytest.approx(280.46061837, abs=1e-5)

    def test_gmst_range(self):
        for jt in (2451545.3, 2455000.9, 2460107.1):
            g = float(time_gmst(jt, jt))
            assert 0.0 <= g < 360.0

    def test_gmst_advances_one_sidereal_day(self):
        g0 = float(time_gmst(JD2000, JD2000))
        g1 = float(time_gmst(JD2000 + 1.0, JD2000 + 1.0))
        advance = (g1 - g0) % 360.0
        assert advance == pytest.approx(0.985647, abs=1e-5)

    def test_gast_equation_of_equinoxes(self):
        nut = nutation_terms(JD2000)
        diff = float(time_gast(JD2000, JD2000, nut) - time_gmst(JD2000, JD2000))
        expected = float(nut.dpsi * jnp.cos(jnp.deg2rad(nut.eps)))
        assert diff == pytest.approx(expected, abs=1e-10)

    def test_earth_rotation_rate(self):
        rate = float(earth_rotation_rate(JD2000))
        assert rate == pytest.approx(360.985647366 / 86400.0, rel=1e-9)
        assert float(jnp.deg2rad(rate)) == pytest.approx(7.2921159e-5, rel=1e-6)
