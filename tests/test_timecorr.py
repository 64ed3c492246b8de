"""Tests for time correlation tables and time scale conversions."""

import json

import jax
import jax.numpy as jnp
import pytest

from orbitcore.constants import SECONDS_PER_DAY
from orbitcore.time import TT_TAI
from orbitcore.timecorr import (
    TimeScale,
    default_time_correlation,
    interpolate_table,
    load_time_correlation_json,
    lookup_table_left,
    polar_motion,
    static_time_correlation,
    time_correlation_from_rows,
    time_stamp,
    utc_to_ut1,
    zero_time_correlation,
)

JT = 2460107.25


def _seconds(djt):
    return float(djt) * SECONDS_PER_DAY


class TestTables:
    """Interpolation and left-hand lookup on a small table."""

    @pytest.fixture
    def data(self):
        return time_correlation_from_rows(
            [[0.0, 0.0], [5.0, 1.0], [10.0, 3.0]],
            [[0.0, 0.0], [5.0, 1.0], [10.0, 3.0]],
            [[0.0, 0.0, 0.0], [10.0, 1.0, 2.0]],
        )

    def test_interpolate_midpoint(self, data):
        assert float(interpolate_table(data.ut1_tai, 7.5)[0]) == pytest.approx(2.0)

    def test_interpolate_multi_column(self, data):
        row = interpolate_table(data.polar, 2.5)
        assert jnp.allclose(row, jnp.array([0.25, 0.5]))

    def test_interpolate_clamps(self, data):
        assert float(interpolate_table(data.ut1_tai, -3.0)[0]) == pytest.approx(0.0)
        assert float(interpolate_table(data.ut1_tai, 42.0)[0]) == pytest.approx(3.0)

    def test_lookup_left_between_nodes(self, data):
        assert float(lookup_table_left(data.ut1_utc, 7.5)[0]) == pytest.approx(1.0)

    def test_lookup_left_at_node_takes_previous_row(self, data):
        assert float(lookup_table_left(data.ut1_utc, 5.0)[0]) == pytest.approx(0.0)
        assert float(lookup_table_left(data.ut1_utc, 5.001)[0]) == pytest.approx(1.0)

    def test_lookup_clamps(self, data):
        assert float(lookup_table_left(data.ut1_utc, 11.0)[0]) == pytest.approx(3.0)

    def test_jit(self, data):
        out = jax.jit(interpolate_table)(data.ut1_tai, 7.5)
        assert float(out[0]) == pytest.approx(2.0)

    def test_unsorted_rows_raise(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            time_correlation_from_rows(
                [[5.0, 0.0], [0.0, 0.0]],
                [[0.0, 0.0], [5.0, 0.0]],
                [[0.0, 0.0, 0.0], [5.0, 0.0, 0.0]],
            )

    def test_single_row_raises(self):
        with pytest.raises(ValueError, match="at least two rows"):
            time_correlation_from_rows(
                [[0.0, 0.0]],
                [[0.0, 0.0], [5.0, 0.0]],
                [[0.0, 0.0, 0.0], [5.0, 0.0, 0.0]],
            )

    def test_ragged_rows_raise(self):
        with pytest.raises(ValueError):
            time_correlation_from_rows(
                [[0.0, 0.0], [5.0, 0.0]],
                [[0.0, 0.0], [5.0, 0.0]],
                [[0.0, 0.0, 0.0], [5.0, 0.0]],
            )


class TestTimeStamp:
    @pytest.fixture
    def data(self):
        return static_time_correlation(ut1_utc=0.1, tai_utc=37.0, polar_dx=0.36, polar_dy=-0.72)

    def test_from_utc(self, data):
        ts = time_stamp(data, JT, TimeScale.UTC)
        assert float(ts.jt_utc) == JT
        assert _seconds(ts.jt_ut1 - ts.jt_utc) == pytest.approx(0.1, abs=1e-3)
        assert _seconds(ts.jt_tai - ts.jt_utc) == pytest.approx(37.0, abs=1e-3)
        assert _seconds(ts.jt_tdb - ts.jt_tai) == pytest.approx(TT_TAI, abs=1e-3)

    @pytest.mark.parametrize("scale", list(TimeScale))
    def test_scales_consistent(self, data, scale):
        ref = time_stamp(data, JT, TimeScale.UTC)
        jt = {
            TimeScale.UTC: ref.jt_utc,
            TimeScale.UT1: ref.jt_ut1,
            TimeScale.TAI: ref.jt_tai,
            TimeScale.TDB: ref.jt_tdb,
        }[scale]
        ts = time_stamp(data, jt, scale)
        for field in ("jt_utc", "jt_ut1", "jt_tai", "jt_tdb"):
            assert _seconds(getattr(ts, field) - getattr(ref, field)) == pytest.approx(0.0, abs=1e-3)

    def test_polar_motion_in_degrees(self, data):
        ts = time_stamp(data, JT)
        assert float(ts.polar_dx) == pytest.approx(1e-4)
        assert float(ts.polar_dy) == pytest.approx(-2e-4)

    def test_polar_motion_skipped(self, data):
        ts = time_stamp(data, JT, compute_polar=False)
        assert float(ts.polar_dx) == 0.0
        assert float(ts.polar_dy) == 0.0

    def test_polar_motion_function(self, data):
        dx, dy = polar_motion(data, JT)
        assert float(dx) == pytest.approx(1e-4)
        assert float(dy) == pytest.approx(-2e-4)

    def test_add_delta(self, data):
        ts = time_stamp(data, JT)
        shifted = ts.add_delta(0.5)
        assert float(shifted.jt_utc) == pytest.approx(JT + 0.5)
        assert _seconds(shifted.jt_tai - shifted.jt_utc) == pytest.approx(37.0, abs=1e-3)
        assert shifted.polar_dx == ts.polar_dx

    def test_jit(self, data):
        ts = jax.jit(lambda jt: time_stamp(data, jt))(JT)
        assert _seconds(ts.jt_tai - ts.jt_utc) == pytest.approx(37.0, abs=1e-3)

    def test_zero_correlation(self):
        ts = time_stamp(zero_time_correlation(), JT)
        assert float(ts.jt_ut1) == JT
        assert float(ts.jt_tai) == JT
        assert _seconds(ts.jt_tdb - ts.jt_tai) == pytest.approx(TT_TAI, abs=1e-3)


class TestUtcToUt1Step:
    """UTC to UT1 across a one-second step in UT1-UTC."""

    STEP = 2457754.5

    @pytest.fixture
    def data(self):
        s = self.STEP
        return time_correlation_from_rows(
            [[s - 10.0, -36.1], [s + 10.0, -36.1]],
            [[s - 10.0, 0.9], [s, -0.1], [s + 10.0, -0.1]],
            [[s - 10.0, 0.0, 0.0], [s + 10.0, 0.0, 0.0]],
        )

    def test_far_from_step(self, data):
        jt_ut1 = utc_to_ut1(data, self.STEP - 1.0 + 0.25)
        assert _seconds(jt_ut1 - (self.STEP - 0.75)) == pytest.approx(0.9, abs=1e-3)

    def test_retries_one_second_later(self, data):
        # The first estimate lands past the step and does not map back
        jt_utc = self.STEP - 0.5 / SECONDS_PER_DAY
        jt_ut1 = utc_to_ut1(data, jt_utc)
        assert _seconds(jt_ut1 - self.STEP) == pytest.approx(-0.6, abs=1e-3)


class TestDefaultCorrelation:
    def test_tai_utc_2023(self):
        ts = time_stamp(default_time_correlation(), JT)
        assert _seconds(ts.jt_tai - ts.jt_utc) == pytest.approx(37.0, abs=1e-3)

    def test_tai_utc_j2000(self):
        ts = time_stamp(default_time_correlation(), 2451545.0)
        assert _seconds(ts.jt_tai - ts.jt_utc) == pytest.approx(32.0, abs=1e-3)

    def test_ut1_equals_utc(self):
        ts = time_stamp(default_time_correlation(), JT)
        assert float(ts.jt_ut1) == pytest.approx(JT, abs=1e-9)


class TestJsonLoader:
    def _write(self, path, content):
        path.write_text(json.dumps(content))
        return path

    def test_load(self, tmp_path):
        content = {
            "ut1Tai": {"data": [[2460000.5, -36.9], [2460100.5, -36.95]], "minJD": 2460000.5, "maxJD": 2460100.5},
            "ut1Utc": {"data": [[2460000.5, 0.1], [2460100.5, 0.05]]},
            "polar": {"data": [[2460000.5, 0.1, 0.3], [2460100.5, 0.2, 0.4]]},
        }
        data = load_time_correlation_json(self._write(tmp_path / "tc.json", content))
        assert data.ut1_tai.jt.shape == (2,)
        assert data.polar.values.shape == (2, 2)
        assert float(interpolate_table(data.polar, 2460050.5)[0]) == pytest.approx(0.15)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_time_correlation_json(tmp_path / "missing.json")

    def test_missing_table(self, tmp_path):
        content = {"ut1Tai": {"data": [[0.0, 0.0], [1.0, 0.0]]}}
        with pytest.raises(ValueError, match="lacks table"):
            load_time_correlation_json(self._write(tmp_path / "tc.json", content))

    def test_malformed_table(self, tmp_path):
        content = {"ut1Tai": {"rows": []}, "ut1Utc": {"data": []}, "polar": {"data": []}}
        with pytest.raises(ValueError):
            load_time_correlation_json(self._write(tmp_path / "tc.json", content))
