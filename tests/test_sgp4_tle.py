"""Tests for element set parsing, serialization and gravity constants."""

from math import sqrt

import pytest

from orbitcore.errors import FormatError, MissingFieldError
from orbitcore.sgp4 import (
    GRAVITY_MODELS,
    WGS72,
    WGS72OLD,
    WGS84,
    OrbitalElementRecord,
    compute_checksum,
    from_key_value,
    parse_tle,
    parse_tle_catalog,
    parse_tle_lines,
    serialize_tle,
    to_key_value,
    validate_tle_line,
)

CALSPHERE_LINE0 = "CALSPHERE 1             "
CALSPHERE_LINE1 = "1 00900U 64063C   23161.95522785  .00000702  00000+0  73232-3 0  9992"
CALSPHERE_LINE2 = "2 00900  90.1903  47.7368 0028440  26.7560 344.5702 13.74340666919893"

# ISS TLE from the sgp4 reference test suite
ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"

# Polar orbit with blank designator fields
POLAR_LINE1 = "1     1U          20  1.00000000  .00000000  00000-0  00000-0 0    07"
POLAR_LINE2 = "2     1  90.0000   0.0000 0010000   0.0000   0.0000 15.21936719    07"

IRNSS_KV = {
    "OBJECT_NAME": "IRNSS-1J",
    "OBJECT_ID": "2023-076A",
    "EPOCH": "2023-05-30T14:16:31.144224",
    "MEAN_MOTION": 1.62870852,
    "ECCENTRICITY": 0.5200823,
    "INCLINATION": 10.1782,
    "RA_OF_ASC_NODE": 270.0597,
    "ARG_OF_PERICENTER": 178.1733,
    "MEAN_ANOMALY": 185.3385,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 56759,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 3,
    "BSTAR": 0.0,
    "MEAN_MOTION_DOT": -1.7e-7,
    "MEAN_MOTION_DDOT": 0.0,
}


@pytest.fixture
def calsphere() -> OrbitalElementRecord:
    return parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1, CALSPHERE_LINE2)


class TestEarthGravityConstants:
    """Gravity constant sets match the reference sgp4 library."""

    def test_wgs72old_values(self) -> None:
        assert WGS72OLD.mu == 398600.79964
        assert WGS72OLD.radiusearthkm == 6378.135
        assert WGS72OLD.xke == pytest.approx(0.0743669161, rel=1e-8)

    def test_wgs72_values(self) -> None:
        assert WGS72.mu == 398600.8
        assert WGS72.radiusearthkm == 6378.135
        assert WGS72.j2 == 0.001082616
        assert WGS72.j3oj2 == pytest.approx(WGS72.j3 / WGS72.j2, rel=1e-12)

    def test_wgs84_values(self) -> None:
        assert WGS84.mu == 398600.5
        assert WGS84.radiusearthkm == 6378.137
        assert WGS84.j2 == 0.00108262998905

    def test_xke_derived(self) -> None:
        for grav in (WGS72, WGS84):
            expected = 60.0 / sqrt(grav.radiusearthkm**3 / grav.mu)
            assert grav.xke == pytest.approx(expected, rel=1e-10)

    def test_tumin_is_inverse_xke(self) -> None:
        for grav in GRAVITY_MODELS.values():
            assert grav.tumin == pytest.approx(1.0 / grav.xke, rel=1e-12)


class TestChecksum:
    def test_iss_checksums(self) -> None:
        assert compute_checksum(ISS_LINE1) == 7
        assert compute_checksum(ISS_LINE2) == 7

    def test_calsphere_checksums(self) -> None:
        assert compute_checksum(CALSPHERE_LINE1) == 2
        assert compute_checksum(CALSPHERE_LINE2) == 3

    def test_minus_contributes_one(self) -> None:
        base = "1" + " " * 67
        assert compute_checksum(base) == 1
        assert compute_checksum("1-" + " " * 66) == 2

    def test_ignores_checksum_column(self) -> None:
        assert compute_checksum(ISS_LINE1[:68] + "0") == 7


class TestValidateTleLine:
    def test_valid_lines(self) -> None:
        validate_tle_line(ISS_LINE1, 1)
        validate_tle_line(ISS_LINE2, 2)

    def test_trailing_newline_accepted(self) -> None:
        validate_tle_line(CALSPHERE_LINE1 + "\r\n", 1)

    def test_too_short_raises(self) -> None:
        with pytest.raises(FormatError, match="too short"):
            validate_tle_line(ISS_LINE1[:60], 1)

    def test_wrong_line_number_raises(self) -> None:
        with pytest.raises(FormatError, match="does not start with '2'"):
            validate_tle_line(ISS_LINE1, 2)

    def test_bad_checksum_raises(self) -> None:
        with pytest.raises(FormatError, match="checksum mismatch"):
            validate_tle_line(ISS_LINE1[:68] + "0", 1)


class TestParseTle:
    def test_title(self, calsphere) -> None:
        assert calsphere.title == CALSPHERE_LINE0
        assert calsphere.name == "CALSPHERE 1"

    def test_line1_fields(self, calsphere) -> None:
        assert calsphere.catalog_number == 900
        assert calsphere.classification == "U"
        assert calsphere.launch_year == "64"
        assert calsphere.launch_number == "063"
        assert calsphere.launch_piece == "C  "
        assert calsphere.international_designator == "64063C"
        assert calsphere.epoch_year == 2023
        assert calsphere.epoch_day == pytest.approx(161.95522785, abs=1e-12)
        assert calsphere.mean_motion_dot == pytest.approx(7.02e-6, rel=1e-12)
        assert calsphere.mean_motion_ddot == 0.0
        assert calsphere.bstar == pytest.approx(7.3232e-4, rel=1e-12)
        assert calsphere.ephemeris_type == 0
        assert calsphere.element_set_number == 999

    def test_line2_fields(self, calsphere) -> None:
        assert calsphere.inclination == pytest.approx(90.1903)
        assert calsphere.raan == pytest.approx(47.7368)
        assert calsphere.eccentricity == pytest.approx(0.002844, rel=1e-12)
        assert calsphere.arg_perigee == pytest.approx(26.7560)
        assert calsphere.mean_anomaly == pytest.approx(344.5702)
        assert calsphere.mean_motion == pytest.approx(13.74340666)
        assert calsphere.rev_number == 91989

    def test_checksums(self, calsphere) -> None:
        assert (calsphere.checksum1, calsphere.checksum2) == (2, 3)
        assert calsphere.checksum_valid is True

    def test_epoch(self, calsphere) -> None:
        assert calsphere.jt_epoch == pytest.approx(2460106.45522785, abs=1e-8)

    def test_negative_exponent_fields(self) -> None:
        record = parse_tle("ISS (ZARYA)", ISS_LINE1, ISS_LINE2)
        assert record.mean_motion_dot == pytest.approx(-2.182e-5, rel=1e-12)
        assert record.bstar == pytest.approx(-1.1606e-5, rel=1e-12)
        assert record.epoch_year == 2008
        assert record.eccentricity == pytest.approx(0.0006703, rel=1e-12)

    def test_blank_fields_read_as_zero(self) -> None:
        record = parse_tle("", POLAR_LINE1, POLAR_LINE2)
        assert record.catalog_number == 1
        assert record.international_designator == ""
        assert record.epoch_year == 2020
        assert record.epoch_day == 1.0
        assert record.mean_motion_dot == 0.0
        assert record.element_set_number == 0
        assert record.rev_number == 0
        assert record.name == ""

    def test_two_digit_year_1900s(self) -> None:
        line1 = "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753"
        line2 = "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"
        assert parse_tle("", line1, line2).epoch_year == 2000
        line1_old = line1[:18] + "98" + line1[20:]
        record = parse_tle("", line1_old, line2)
        assert record.epoch_year == 1998
        assert record.checksum_valid is False

    def test_checksum_mismatch_is_not_an_error(self) -> None:
        record = parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1[:68] + "5", CALSPHERE_LINE2)
        assert record.checksum1 == 5
        assert record.checksum_valid is False

    def test_mismatched_catalog_number_raises(self) -> None:
        line2 = CALSPHERE_LINE2[:2] + "00901" + CALSPHERE_LINE2[7:]
        with pytest.raises(FormatError, match="do not match"):
            parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1, line2)

    def test_short_line_raises(self) -> None:
        with pytest.raises(FormatError, match="too short"):
            parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1[:50], CALSPHERE_LINE2)

    def test_non_numeric_field_raises(self) -> None:
        line2 = CALSPHERE_LINE2[:8] + " 90.1X03" + CALSPHERE_LINE2[16:]
        with pytest.raises(FormatError, match="inclination"):
            parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1, line2)

    def test_eccentricity_out_of_range_raises(self) -> None:
        with pytest.raises(FormatError, match="Eccentricity"):
            from_key_value({**IRNSS_KV, "ECCENTRICITY": 1.2})


class TestParseBlocks:
    def test_parse_lines_three(self) -> None:
        text = "\n".join([CALSPHERE_LINE0, CALSPHERE_LINE1, CALSPHERE_LINE2]) + "\n"
        assert parse_tle_lines(text).name == "CALSPHERE 1"

    def test_parse_lines_two(self) -> None:
        record = parse_tle_lines(f"{ISS_LINE1}\n{ISS_LINE2}")
        assert record.title == ""
        assert record.catalog_number == 25544

    def test_parse_lines_wrong_count(self) -> None:
        with pytest.raises(FormatError, match="got 1 lines"):
            parse_tle_lines(ISS_LINE1)

    def test_catalog_mixed(self) -> None:
        text = "\n".join(
            [CALSPHERE_LINE0, CALSPHERE_LINE1, CALSPHERE_LINE2, "", ISS_LINE1, ISS_LINE2]
        )
        records = parse_tle_catalog(text)
        assert [r.catalog_number for r in records] == [900, 25544]
        assert records[1].name == ""

    def test_catalog_incomplete(self) -> None:
        text = "\n".join([CALSPHERE_LINE0, CALSPHERE_LINE1])
        with pytest.raises(FormatError, match="Incomplete"):
            parse_tle_catalog(text)


class TestSerialize:
    def test_roundtrip_exact(self, calsphere) -> None:
        assert serialize_tle(calsphere) == (CALSPHERE_LINE0, CALSPHERE_LINE1, CALSPHERE_LINE2)

    def test_negative_fields(self) -> None:
        _, line1, line2 = serialize_tle(parse_tle("ISS", ISS_LINE1, ISS_LINE2))
        assert line1[33:43] == "-.00002182"
        assert line1[53:61] == "-11606-4"
        assert line1[44:52] == " 00000+0"
        assert line2 == ISS_LINE2

    def test_fresh_checksums(self, calsphere) -> None:
        bad = parse_tle(CALSPHERE_LINE0, CALSPHERE_LINE1[:68] + "5", CALSPHERE_LINE2)
        _, line1, _ = serialize_tle(bad)
        assert line1 == CALSPHERE_LINE1

    def test_serialized_lines_validate(self) -> None:
        _, line1, line2 = serialize_tle(from_key_value(IRNSS_KV))
        assert len(line1) == 69
        assert len(line2) == 69
        validate_tle_line(line1, 1)
        validate_tle_line(line2, 2)

    def test_mantissa_rounding_carry(self, calsphere) -> None:
        from dataclasses import replace

        _, line1, _ = serialize_tle(replace(calsphere, bstar=9.999996e-4))
        assert line1[53:61] == " 10000-2"


class TestKeyValue:
    def test_from_key_value(self) -> None:
        record = from_key_value(IRNSS_KV)
        assert record.name == "IRNSS-1J"
        assert record.catalog_number == 56759
        assert (record.launch_year, record.launch_number, record.launch_piece) == ("23", "076", "A  ")
        assert record.epoch_year == 2023
        assert record.epoch_day == pytest.approx(150.594804910, abs=1e-9)
        assert record.eccentricity == pytest.approx(0.5200823)
        assert record.checksum_valid is True

    def test_checksums_match_serialized(self) -> None:
        record = from_key_value(IRNSS_KV)
        _, line1, line2 = serialize_tle(record)
        assert record.checksum1 == int(line1[68])
        assert record.checksum2 == int(line2[68])

    def test_string_values(self) -> None:
        fields = {k: str(v) for k, v in IRNSS_KV.items()}
        assert from_key_value(fields) == from_key_value(IRNSS_KV)

    def test_angles_normalized(self) -> None:
        record = from_key_value({**IRNSS_KV, "RA_OF_ASC_NODE": -90.0, "MEAN_ANOMALY": 365.0})
        assert record.raan == pytest.approx(270.0)
        assert record.mean_anomaly == pytest.approx(5.0)

    def test_optional_defaults(self) -> None:
        required = (
            "EPOCH", "MEAN_MOTION", "ECCENTRICITY", "INCLINATION",
            "RA_OF_ASC_NODE", "ARG_OF_PERICENTER", "MEAN_ANOMALY", "NORAD_CAT_ID",
        )
        record = from_key_value({k: IRNSS_KV[k] for k in required})
        assert record.title == ""
        assert record.classification == "U"
        assert record.element_set_number == 999
        assert record.bstar == 0.0
        assert record.international_designator == ""

    def test_epoch_without_fraction(self) -> None:
        record = from_key_value({**IRNSS_KV, "EPOCH": "2023-01-01T12:00:00"})
        assert record.epoch_day == pytest.approx(1.5)

    def test_missing_field(self) -> None:
        fields = dict(IRNSS_KV)
        del fields["MEAN_MOTION"]
        with pytest.raises(MissingFieldError) as excinfo:
            from_key_value(fields)
        assert excinfo.value.key == "MEAN_MOTION"
        assert str(excinfo.value) == "Missing required field: MEAN_MOTION"
        assert isinstance(excinfo.value, KeyError)
        assert isinstance(excinfo.value, FormatError)

    def test_bad_number(self) -> None:
        with pytest.raises(FormatError, match="INCLINATION"):
            from_key_value({**IRNSS_KV, "INCLINATION": "ten"})

    def test_bad_epoch(self) -> None:
        with pytest.raises(FormatError, match="EPOCH"):
            from_key_value({**IRNSS_KV, "EPOCH": "30/05/2023"})

    def test_bad_object_id(self) -> None:
        with pytest.raises(FormatError, match="OBJECT_ID"):
            from_key_value({**IRNSS_KV, "OBJECT_ID": "23076A"})

    def test_roundtrip(self) -> None:
        kv = to_key_value(from_key_value(IRNSS_KV))
        assert kv["OBJECT_ID"] == "2023-076A"
        assert kv["EPOCH"] == "2023-05-30T14:16:31.144224"
        for key in ("MEAN_MOTION", "ECCENTRICITY", "INCLINATION", "NORAD_CAT_ID", "REV_AT_EPOCH"):
            assert kv[key] == pytest.approx(IRNSS_KV[key])

    def test_from_tle(self, calsphere) -> None:
        kv = to_key_value(calsphere)
        assert kv["OBJECT_NAME"] == "CALSPHERE 1"
        assert kv["OBJECT_ID"] == "1964-063C"
        assert kv["EPOCH"].startswith("2023-06-10T22:55:31")
        assert from_key_value(kv).jt_epoch == pytest.approx(calsphere.jt_epoch, abs=1e-9)
