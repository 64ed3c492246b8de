import datetime

import jax
import pytest

from orbitcore.time import (
    GregorianTime,
    date_julian_ymd,
    jd_to_mjd,
    leap_second_table,
    leap_seconds_tai_utc,
    mjd_to_jd,
    parse_epoch,
    time_gregorian,
    time_julian_datetime,
    time_julian_ymdhms,
)


def test_date_julian_ymd_j2000_midnight():
    assert date_julian_ymd(2000, 1, 1) == pytest.approx(2451544.5, abs=1e-9)


def test_date_julian_ymd_fractional_day():
    assert date_julian_ymd(2000, 1, 1.5) == pytest.approx(2451545.0, abs=1e-9)


def test_date_julian_ymd_before_march():
    # February rolls into the previous year's month numbering
    assert date_julian_ymd(2024, 2, 29) == pytest.approx(2460369.5, abs=1e-9)
    assert date_julian_ymd(2024, 3, 1) == pytest.approx(2460370.5, abs=1e-9)


def test_time_julian_ymdhms_noon():
    assert time_julian_ymdhms(2000, 1, 1, 12, 0, 0) == pytest.approx(2451545.0, abs=1e-9)


def test_time_julian_ymdhms_seconds():
    jt = time_julian_ymdhms(2023, 6, 10, 22, 55, 31.2)
    expected = 2460105.5 + (22 + 55 / 60 + 31.2 / 3600) / 24
    assert jt == pytest.approx(expected, abs=1e-9)


def test_time_julian_datetime_naive_is_utc():
    dt = datetime.datetime(2000, 1, 1, 12, 0, 0)
    assert time_julian_datetime(dt) == pytest.approx(2451545.0, abs=1e-9)


def test_time_julian_datetime_aware():
    tz = datetime.timezone(datetime.timedelta(hours=2))
    dt = datetime.datetime(2000, 1, 1, 14, 0, 0, tzinfo=tz)
    assert time_julian_datetime(dt) == pytest.approx(2451545.0, abs=1e-9)


def test_jd_to_mjd():
    assert jd_to_mjd(2451545.0) == pytest.approx(51544.5, abs=1e-9)


def test_mjd_to_jd():
    assert mjd_to_jd(51544.5) == pytest.approx(2451545.0, abs=1e-9)


def test_parse_epoch_day_one_is_january_first():
    assert parse_epoch(2023, 1.0) == pytest.approx(date_julian_ymd(2023, 1, 1), abs=1e-9)


def test_parse_epoch_fractional_day():
    assert parse_epoch(2023, 161.95522785) == pytest.approx(2460106.45522785, abs=1e-8)


class TestGregorian:
    def test_j2000(self):
        g = time_gregorian(2451545.0)
        assert g == GregorianTime(2000, 1, 1, 12, 0, 0.0)

    def test_midnight(self):
        g = time_gregorian(2451544.5)
        assert (g.year, g.month, g.day, g.hour, g.minute) == (2000, 1, 1, 0, 0)
        assert g.second == pytest.approx(0.0, abs=1e-6)

    def test_roundtrip(self):
        jt = time_julian_ymdhms(2023, 6, 10, 22, 55, 31.25)
        g = time_gregorian(jt)
        assert (g.year, g.month, g.day, g.hour, g.minute) == (2023, 6, 10, 22, 55)
        assert g.second == pytest.approx(31.25, abs=1e-4)

    def test_isoformat(self):
        assert time_gregorian(2451545.0).isoformat() == "2000-01-01T12:00:00.000000"


class TestLeapSeconds:
    def test_before_1972(self):
        assert float(leap_seconds_tai_utc(40000.0)) == 10.0

    def test_first_entry(self):
        assert float(leap_seconds_tai_utc(41317.0)) == 10.0

    def test_step_at_2017(self):
        assert float(leap_seconds_tai_utc(57753.9)) == 36.0
        assert float(leap_seconds_tai_utc(57754.0)) == 37.0

    def test_after_last_entry(self):
        assert float(leap_seconds_tai_utc(60000.0)) == 37.0

    def test_j2000(self):
        assert float(leap_seconds_tai_utc(51544.5)) == 32.0

    def test_jit(self):
        assert float(jax.jit(leap_seconds_tai_utc)(51544.5)) == 32.0

    def test_table_is_increasing(self):
        table = leap_second_table()
        mjds = [mjd for mjd, _ in table]
        assert mjds == sorted(mjds)
        assert table[-1] == (57754.0, 37.0)
