"""Tests for the propagation entry points and the catalog propagator."""

import logging
from dataclasses import replace

import jax.numpy as jnp
import pytest

from orbitcore.coordinates import coord_wgs84_efi
from orbitcore.errors import PropagationError
from orbitcore.frames import Frame
from orbitcore.nutation import nutation
from orbitcore.propagation import CatalogPropagator, propagate
from orbitcore.sgp4 import Sgp4Propagator, parse_tle
from orbitcore.timecorr import TimeScale, default_time_correlation, time_stamp

CALSPHERE = (
    "CALSPHERE 1             ",
    "1 00900U 64063C   23161.95522785  .00000702  00000+0  73232-3 0  9992",
    "2 00900  90.1903  47.7368 0028440  26.7560 344.5702 13.74340666919893",
)
ISS = (
    "",
    "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927",
    "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537",
)

JT_CALSPHERE = 2460106.45522785


@pytest.fixture
def tcorr():
    return default_time_correlation()


@pytest.fixture
def calsphere():
    return parse_tle(*CALSPHERE)


@pytest.fixture
def iss():
    return parse_tle(*ISS)


def test_propagate_matches_propagator(calsphere, tcorr):
    ts = time_stamp(tcorr, JT_CALSPHERE + 0.25)
    osv = propagate(calsphere, ts)
    assert osv.frame == Frame.J2000
    r, v = Sgp4Propagator(calsphere).compute(0.25 * 1440.0)
    assert jnp.allclose(osv.position, r, atol=1e-2)
    assert jnp.allclose(osv.velocity, v, atol=1e-5)


def test_propagate_raises_for_decayed(iss, tcorr):
    record = replace(iss, bstar=0.5)
    ts = time_stamp(tcorr, record.jt_epoch + 30.0)
    with pytest.raises(PropagationError):
        propagate(record, ts)


class TestCatalogPropagator:
    def test_names(self, calsphere, iss, tcorr):
        catalog = CatalogPropagator([calsphere, iss], tcorr)
        assert len(catalog) == 2
        assert catalog.names == ["CALSPHERE 1", "25544"]
        assert "CALSPHERE 1" in catalog
        assert catalog.propagator("25544").record is iss

    def test_unknown_name(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        with pytest.raises(KeyError, match="No object named"):
            catalog.propagator("ISS")

    def test_skips_bad_record(self, calsphere, iss, tcorr, caplog):
        bad = replace(iss, mean_motion=-1.0)
        with caplog.at_level(logging.WARNING, logger="orbitcore.propagation"):
            catalog = CatalogPropagator([calsphere, bad], tcorr)
        assert catalog.names == ["CALSPHERE 1"]
        assert "Skipping '25544'" in caplog.text

    def test_accepts_checksum_mismatch(self, calsphere, tcorr, caplog):
        record = replace(calsphere, checksum_valid=False)
        with caplog.at_level(logging.WARNING, logger="orbitcore.propagation"):
            catalog = CatalogPropagator([record], tcorr)
        assert "CALSPHERE 1" in catalog
        assert "checksum mismatch" in caplog.text

    def test_orbital_period(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        assert catalog.orbital_period("CALSPHERE 1") == pytest.approx(1.0 / 13.74340666)

    def test_propagate_all(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        jt = JT_CALSPHERE + 0.5
        states = catalog.propagate_all(jt)

        assert set(states) == {"CALSPHERE 1"}
        efi = states["CALSPHERE 1"]
        assert efi.frame == Frame.EFI

        # Frame rotations preserve the radius
        inertial = propagate(calsphere, time_stamp(tcorr, jt))
        assert float(jnp.linalg.norm(efi.position)) == pytest.approx(
            float(jnp.linalg.norm(inertial.position)), abs=1e-3
        )

    def test_propagate_all_uses_given_nutation(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        jt = JT_CALSPHERE + 0.5
        nut = nutation(time_stamp(tcorr, jt))
        a = catalog.propagate_all(jt)["CALSPHERE 1"]
        b = catalog.propagate_all(jt, nutation=nut)["CALSPHERE 1"]
        assert jnp.allclose(a.position, b.position, atol=1e-6)

    def test_propagate_all_drops_failures(self, calsphere, iss, tcorr, caplog):
        decaying = replace(iss, title="DECAYING", jt_epoch=JT_CALSPHERE, bstar=0.5)
        catalog = CatalogPropagator([calsphere, decaying], tcorr)
        assert len(catalog) == 2
        with caplog.at_level(logging.WARNING, logger="orbitcore.propagation"):
            states = catalog.propagate_all(JT_CALSPHERE + 30.0)
        assert set(states) == {"CALSPHERE 1"}
        assert "Dropping 'DECAYING'" in caplog.text

    def test_propagate_one_range(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        step = 1.0 / 1440.0
        track = catalog.propagate_one_range("CALSPHERE 1", JT_CALSPHERE, JT_CALSPHERE + 10 * step, step)

        assert len(track) == 11
        for point in track:
            assert -90.0 <= float(point.lat) <= 90.0
            assert -180.0 < float(point.lon) <= 180.0
            assert 900e3 < float(point.h) < 1100e3

    def test_propagate_one_range_matches_all(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        track = catalog.propagate_one_range("CALSPHERE 1", JT_CALSPHERE, JT_CALSPHERE, 0.01)
        assert len(track) == 1
        efi = catalog.propagate_all(JT_CALSPHERE)["CALSPHERE 1"]
        radius = jnp.linalg.norm(efi.position)
        assert float(jnp.linalg.norm(coord_wgs84_efi(track[0]))) == pytest.approx(float(radius), rel=1e-6)

    def test_propagate_one_range_scale(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        track = catalog.propagate_one_range(
            "CALSPHERE 1", JT_CALSPHERE + 0.1, JT_CALSPHERE + 0.1, 0.01, scale=TimeScale.TAI
        )
        assert len(track) == 1

    def test_propagate_one_range_bad_step(self, calsphere, tcorr):
        catalog = CatalogPropagator([calsphere], tcorr)
        with pytest.raises(ValueError, match="jt_step must be positive"):
            catalog.propagate_one_range("CALSPHERE 1", JT_CALSPHERE, JT_CALSPHERE + 1.0, 0.0)
