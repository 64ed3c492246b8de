"""
Fixed-column TLE and key-value codecs for orbital element records.

Provides functions to parse three-line element sets (a title line followed
by the two data lines) into :class:`OrbitalElementRecord` values, to write
records back out in the same column layout, and to convert records to and
from the generic key-value form published by catalog services (CelesTrak
``FORMAT=json``).

Writing a record that was itself parsed reproduces the input lines byte
for byte, apart from zero exponent fields, which are always written as
``00000+0``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from orbitcore.errors import FormatError, MissingFieldError
from orbitcore.sgp4._types import OrbitalElementRecord
from orbitcore.time import parse_epoch

logger = logging.getLogger(__name__)

_LINE_LENGTH = 69

_IMPLIED_RE = re.compile(r"^([+-]?)(\d+)(?:([+-])(\d))?$")

_REQUIRED = object()

# Fields of the key-value form
_KV_KEYS = (
    "OBJECT_NAME",
    "OBJECT_ID",
    "EPOCH",
    "MEAN_MOTION",
    "ECCENTRICITY",
    "INCLINATION",
    "RA_OF_ASC_NODE",
    "ARG_OF_PERICENTER",
    "MEAN_ANOMALY",
    "EPHEMERIS_TYPE",
    "CLASSIFICATION_TYPE",
    "NORAD_CAT_ID",
    "ELEMENT_SET_NO",
    "REV_AT_EPOCH",
    "BSTAR",
    "MEAN_MOTION_DOT",
    "MEAN_MOTION_DDOT",
)


def compute_checksum(line: str) -> int:
    """Compute the TLE checksum for a line.

    The checksum is the sum of all digit characters plus 1 for each
    minus sign, modulo 10, computed over the first 68 characters.

    Args:
        line: A TLE data line.

    Returns:
        The checksum digit (0-9).
    """
    return sum((int(c) if c.isdigit() else c == "-") for c in line[:68]) % 10


def _check_line(line: str, line_number: int) -> str:
    """Strip the line ending and check length and leading line number."""
    line = line.rstrip("\r\n")
    if len(line) < _LINE_LENGTH:
        raise FormatError(
            f"TLE line {line_number} is too short ({len(line)} chars, expected {_LINE_LENGTH}): {line!r}"
        )
    if line[0] != str(line_number):
        raise FormatError(f"TLE line {line_number} does not start with '{line_number}': {line!r}")
    return line


def validate_tle_line(line: str, line_number: int) -> None:
    """Validate a TLE data line's format and checksum.

    Args:
        line: A TLE data line.
        line_number: Expected line number (1 or 2).

    Raises:
        FormatError: If the line is too short, starts with the wrong line
            number, or its checksum digit does not match.
    """
    line = _check_line(line, line_number)

    checksum_char = line[68]
    if not checksum_char.isdigit():
        raise FormatError(f"TLE line {line_number} has non-digit checksum: {line!r}")

    expected = compute_checksum(line)
    actual = int(checksum_char)
    if expected != actual:
        raise FormatError(
            f"TLE line {line_number} checksum mismatch: computed {expected}, found {actual}: {line!r}"
        )


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------


def _parse_int(text: str, field: str) -> int:
    s = text.strip()
    if not s:
        return 0
    try:
        return int(s)
    except ValueError:
        raise FormatError(f"TLE field {field} is not an integer: {text!r}") from None


def _parse_float(text: str, field: str) -> float:
    s = text.strip()
    if not s:
        return 0.0
    try:
        return float(s)
    except ValueError:
        raise FormatError(f"TLE field {field} is not a number: {text!r}") from None


def _parse_implied(text: str, field: str) -> float:
    """Parse an implied-decimal field such as ``' 73232-3'`` (0.73232e-3)."""
    s = text.strip()
    if not s:
        return 0.0
    match = _IMPLIED_RE.match(s)
    if match is None:
        raise FormatError(f"TLE field {field} is not in implied-decimal notation: {text!r}")
    sign, digits, exp_sign, exp = match.groups()
    exponent = f"e{exp_sign}{exp}" if exp else ""
    return float(f"{sign}0.{digits}{exponent}")


def _epoch_full_year(two_digit: int) -> int:
    # Element sets start in 1957; two-digit years roll over in 2057
    return 1900 + two_digit if two_digit > 56 else 2000 + two_digit


def parse_tle(line0: str, line1: str, line2: str) -> OrbitalElementRecord:
    """Parse a three-line element set.

    The checksum digits are read but a mismatch is not an error: it is
    reported through ``checksum_valid`` so callers can decide whether to
    accept the record.  Blank numeric fields read as zero.

    Args:
        line0: Title line (object name).
        line1: First data line (69 characters).
        line2: Second data line (69 characters).

    Returns:
        OrbitalElementRecord: The parsed record.

    Raises:
        FormatError: If a data line is short or starts with the wrong line
            number, a field does not parse as its declared type, or the
            catalog numbers of the two lines differ.

    Examples:
        ```python
        from orbitcore.sgp4 import parse_tle
        record = parse_tle(
            "CALSPHERE 1             ",
            "1 00900U 64063C   23161.95522785  .00000702  00000+0  73232-3 0  9992",
            "2 00900  90.1903  47.7368 0028440  26.7560 344.5702 13.74340666919893",
        )
        record.name          # 'CALSPHERE 1'
        record.eccentricity  # 0.002844
        ```
    """
    title = line0.rstrip("\r\n")[:24]
    l1 = _check_line(line1, 1)
    l2 = _check_line(line2, 2)

    catalog_number = _parse_int(l1[2:7], "catalog number")
    catalog_number2 = _parse_int(l2[2:7], "catalog number (line 2)")
    if catalog_number != catalog_number2:
        raise FormatError(
            f"Catalog numbers in lines 1 and 2 do not match: {catalog_number} != {catalog_number2}"
        )

    epoch_year = _epoch_full_year(_parse_int(l1[18:20], "epoch year"))
    epoch_day = _parse_float(l1[20:32], "epoch day")

    checksum1 = _parse_int(l1[68], "checksum (line 1)")
    checksum2 = _parse_int(l2[68], "checksum (line 2)")
    checksum_valid = compute_checksum(l1) == checksum1 and compute_checksum(l2) == checksum2
    if not checksum_valid:
        logger.debug("Checksum mismatch for catalog number %d", catalog_number)

    return OrbitalElementRecord(
        title=title,
        catalog_number=catalog_number,
        classification=l1[7],
        launch_year=l1[9:11],
        launch_number=l1[11:14],
        launch_piece=l1[14:17],
        epoch_year=epoch_year,
        epoch_day=epoch_day,
        mean_motion_dot=_parse_float(l1[33:43], "mean motion derivative"),
        mean_motion_ddot=_parse_implied(l1[44:52], "mean motion second derivative"),
        bstar=_parse_implied(l1[53:61], "bstar"),
        ephemeris_type=_parse_int(l1[62], "ephemeris type"),
        element_set_number=_parse_int(l1[64:68], "element set number"),
        inclination=_parse_float(l2[8:16], "inclination"),
        raan=_parse_float(l2[17:25], "right ascension of node"),
        eccentricity=_parse_implied(l2[26:33], "eccentricity"),
        arg_perigee=_parse_float(l2[34:42], "argument of perigee"),
        mean_anomaly=_parse_float(l2[43:51], "mean anomaly"),
        mean_motion=_parse_float(l2[52:63], "mean motion"),
        rev_number=_parse_int(l2[63:68], "revolution number"),
        checksum1=checksum1,
        checksum2=checksum2,
        checksum_valid=checksum_valid,
        jt_epoch=parse_epoch(epoch_year, epoch_day),
    )


def parse_tle_lines(text: str) -> OrbitalElementRecord:
    """Parse one element set given as a single block of text.

    The block holds a title line and two data lines; a block of only the
    two data lines gets an empty title.

    Args:
        text: Element set text.

    Returns:
        OrbitalElementRecord: The parsed record.

    Raises:
        FormatError: If the block does not hold two or three lines, or
            :func:`parse_tle` rejects them.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) == 2:
        lines.insert(0, "")
    if len(lines) != 3:
        raise FormatError(f"Expected a title line and two data lines, got {len(lines)} lines")
    return parse_tle(*lines)


def parse_tle_catalog(text: str) -> list[OrbitalElementRecord]:
    """Parse a catalog file of consecutive element sets.

    Element sets may be three-line (with title) or two-line; blank lines
    are ignored.

    Args:
        text: Catalog file content.

    Returns:
        list[OrbitalElementRecord]: Records in file order.

    Raises:
        FormatError: If an element set is incomplete or malformed.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    records = []
    i = 0
    while i < len(lines):
        if lines[i].startswith("1 ") and i + 1 < len(lines) and lines[i + 1].startswith("2 "):
            title, data = "", lines[i : i + 2]
            i += 2
        else:
            if i + 2 >= len(lines):
                raise FormatError(f"Incomplete element set at the end of the catalog: {lines[i]!r}")
            title, data = lines[i], lines[i + 1 : i + 3]
            i += 3
        records.append(parse_tle(title, *data))

    logger.debug("Parsed %d element sets", len(records))
    return records


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _format_implied(value: float) -> str:
    """Write an implied-decimal exponent field, e.g. 7.3232e-4 -> ' 73232-3'."""
    if value == 0.0:
        return " 00000+0"
    sign = "-" if value < 0 else " "
    magnitude = abs(value)
    exponent = math.floor(math.log10(magnitude)) + 1
    mantissa = round(magnitude / 10.0**exponent * 1e5)
    if mantissa >= 100000:
        # Rounding carried into a sixth digit
        mantissa //= 10
        exponent += 1
    return f"{sign}{mantissa:05d}{exponent:+d}"


def _format_derivative(value: float) -> str:
    """Write the mean motion derivative field, e.g. ' .00000702'."""
    sign = "-" if value < 0 else " "
    return sign + f"{abs(value):.8f}"[1:]


def serialize_tle(record: OrbitalElementRecord) -> tuple[str, str, str]:
    """Write a record as three fixed-column lines.

    Checksum digits are computed fresh from the written lines, not copied
    from the record.

    Args:
        record: Record to write.

    Returns:
        tuple[str, str, str]: Title line and the two data lines.
    """
    line1 = (
        f"1 {record.catalog_number:05d}{record.classification:1.1s} "
        f"{record.launch_year:<2.2s}{record.launch_number:<3.3s}{record.launch_piece:<3.3s} "
        f"{record.epoch_year % 100:02d}{record.epoch_day:012.8f} "
        f"{_format_derivative(record.mean_motion_dot)} "
        f"{_format_implied(record.mean_motion_ddot)} "
        f"{_format_implied(record.bstar)} "
        f"{record.ephemeris_type:1d} "
        f"{record.element_set_number:4d}"
    )
    eccentricity = f"{record.eccentricity:.7f}"[2:]
    line2 = (
        f"2 {record.catalog_number:05d} "
        f"{record.inclination:8.4f} "
        f"{record.raan:8.4f} "
        f"{eccentricity} "
        f"{record.arg_perigee:8.4f} "
        f"{record.mean_anomaly:8.4f} "
        f"{record.mean_motion:11.8f}"
        f"{record.rev_number % 100000:5d}"
    )
    line1 += str(compute_checksum(line1))
    line2 += str(compute_checksum(line2))
    return record.title, line1, line2


# ---------------------------------------------------------------------------
# Key-value form
# ---------------------------------------------------------------------------


def _kv_get(fields: Mapping[str, Any], key: str, default: Any = _REQUIRED) -> Any:
    if key not in fields or fields[key] is None:
        if default is _REQUIRED:
            raise MissingFieldError(key)
        return default
    return fields[key]


def _kv_float(fields: Mapping[str, Any], key: str, default: Any = _REQUIRED) -> float:
    value = _kv_get(fields, key, default)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise FormatError(f"Field {key} is not a number: {value!r}") from None


def _kv_int(fields: Mapping[str, Any], key: str, default: Any = _REQUIRED) -> int:
    value = _kv_get(fields, key, default)
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise FormatError(f"Field {key} is not an integer: {value!r}") from None


def _parse_kv_epoch(text: str) -> datetime:
    # Handle both with and without microseconds
    for fmt in ("%Y-%m-%dT%H:%M:%S.%f", "%Y-%m-%dT%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise FormatError(f"Cannot parse EPOCH: {text!r}")


def _split_object_id(object_id: str) -> tuple[str, str, str]:
    """Split ``'2023-076A'`` into ``('23', '076', 'A  ')``."""
    if not object_id:
        return "  ", "   ", "   "
    if len(object_id) < 9 or object_id[4] != "-":
        raise FormatError(f"OBJECT_ID is not of the form YYYY-NNNP: {object_id!r}")
    return object_id[2:4], object_id[5:8], object_id[8:].ljust(3)


def from_key_value(fields: Mapping[str, Any]) -> OrbitalElementRecord:
    """Build a record from the generic key-value form.

    Values may be numbers or numeric strings. Angles are normalized to
    ``[0, 360)``.  Checksums are computed from the serialized lines, so
    ``checksum_valid`` is always true.

    Args:
        fields: Mapping with the keys ``EPOCH``, ``MEAN_MOTION``,
            ``ECCENTRICITY``, ``INCLINATION``, ``RA_OF_ASC_NODE``,
            ``ARG_OF_PERICENTER``, ``MEAN_ANOMALY`` and ``NORAD_CAT_ID``.
            ``OBJECT_NAME``, ``OBJECT_ID``, ``EPHEMERIS_TYPE``,
            ``CLASSIFICATION_TYPE``, ``ELEMENT_SET_NO``, ``REV_AT_EPOCH``,
            ``BSTAR``, ``MEAN_MOTION_DOT`` and ``MEAN_MOTION_DDOT`` are
            optional.

    Returns:
        OrbitalElementRecord: The record.

    Raises:
        MissingFieldError: If a required key is absent.
        FormatError: If a value does not parse.

    Examples:
        ```python
        from orbitcore.sgp4 import from_key_value
        record = from_key_value({
            "OBJECT_NAME": "IRNSS-1J", "OBJECT_ID": "2023-076A",
            "EPOCH": "2023-05-30T14:16:31.144224", "MEAN_MOTION": 1.62870852,
            "ECCENTRICITY": 0.5200823, "INCLINATION": 10.1782,
            "RA_OF_ASC_NODE": 270.0597, "ARG_OF_PERICENTER": 178.1733,
            "MEAN_ANOMALY": 185.3385, "NORAD_CAT_ID": 56759,
        })
        ```
    """
    epoch = _parse_kv_epoch(str(_kv_get(fields, "EPOCH")))
    epoch_day = (epoch - datetime(epoch.year, 1, 1)).total_seconds() / 86400.0 + 1.0
    launch_year, launch_number, launch_piece = _split_object_id(
        str(_kv_get(fields, "OBJECT_ID", ""))
    )

    partial = OrbitalElementRecord(
        title=str(_kv_get(fields, "OBJECT_NAME", "")),
        catalog_number=_kv_int(fields, "NORAD_CAT_ID"),
        classification=str(_kv_get(fields, "CLASSIFICATION_TYPE", "U")),
        launch_year=launch_year,
        launch_number=launch_number,
        launch_piece=launch_piece,
        epoch_year=epoch.year,
        epoch_day=epoch_day,
        mean_motion_dot=_kv_float(fields, "MEAN_MOTION_DOT", 0.0),
        mean_motion_ddot=_kv_float(fields, "MEAN_MOTION_DDOT", 0.0),
        bstar=_kv_float(fields, "BSTAR", 0.0),
        ephemeris_type=_kv_int(fields, "EPHEMERIS_TYPE", 0),
        element_set_number=_kv_int(fields, "ELEMENT_SET_NO", 999),
        inclination=_kv_float(fields, "INCLINATION") % 360.0,
        raan=_kv_float(fields, "RA_OF_ASC_NODE") % 360.0,
        eccentricity=_kv_float(fields, "ECCENTRICITY"),
        arg_perigee=_kv_float(fields, "ARG_OF_PERICENTER") % 360.0,
        mean_anomaly=_kv_float(fields, "MEAN_ANOMALY") % 360.0,
        mean_motion=_kv_float(fields, "MEAN_MOTION"),
        rev_number=_kv_int(fields, "REV_AT_EPOCH", 0),
        checksum1=0,
        checksum2=0,
        checksum_valid=True,
        jt_epoch=parse_epoch(epoch.year, epoch_day),
    )

    _, line1, line2 = serialize_tle(partial)
    return replace(partial, checksum1=int(line1[68]), checksum2=int(line2[68]))


def to_key_value(record: OrbitalElementRecord) -> dict[str, Any]:
    """Convert a record to the generic key-value form.

    The epoch is written to the microsecond; every other value is carried
    over unchanged.

    Args:
        record: Record to convert.

    Returns:
        dict[str, Any]: Mapping with the keys accepted by
            :func:`from_key_value`.
    """
    epoch = datetime(record.epoch_year, 1, 1) + timedelta(days=record.epoch_day - 1.0)
    if record.launch_year.strip():
        launch_year = _epoch_full_year(int(record.launch_year))
        object_id = f"{launch_year:04d}-{record.launch_number}{record.launch_piece.strip()}"
    else:
        object_id = ""

    values = (
        record.name,
        object_id,
        epoch.strftime("%Y-%m-%dT%H:%M:%S.%f"),
        record.mean_motion,
        record.eccentricity,
        record.inclination,
        record.raan,
        record.arg_perigee,
        record.mean_anomaly,
        record.ephemeris_type,
        record.classification,
        record.catalog_number,
        record.element_set_number,
        record.rev_number,
        record.bstar,
        record.mean_motion_dot,
        record.mean_motion_ddot,
    )
    return dict(zip(_KV_KEYS, values))
