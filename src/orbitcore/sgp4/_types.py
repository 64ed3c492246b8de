"""
Data types for orbital element records.
"""

from __future__ import annotations

from dataclasses import dataclass

from orbitcore.errors import FormatError


@dataclass(frozen=True)
class OrbitalElementRecord:
    """One catalog object's mean orbital elements, as carried by a TLE.

    Records are produced by :func:`~orbitcore.sgp4.parse_tle` or
    :func:`~orbitcore.sgp4.from_key_value` and never modified afterwards.
    Angles are in degrees and mean motion in revolutions per day, exactly
    as written in the fixed-column format.

    Attributes:
        title: Name line as read (up to 24 characters, padding kept).
        catalog_number: Satellite catalog number.
        classification: Classification character (``'U'``, ``'C'`` or ``'S'``).
        launch_year: International designator, last two digits of the
            launch year.
        launch_number: International designator, launch number of the year.
        launch_piece: International designator, piece of the launch.
        epoch_year: Four-digit epoch year.
        epoch_day: Epoch day of year with fraction; 1.0 is January 1, 0h.
        mean_motion_dot: First derivative of mean motion divided by two
            [rev/day^2].
        mean_motion_ddot: Second derivative of mean motion divided by six
            [rev/day^3].
        bstar: B* drag term [1/Earth radii].
        ephemeris_type: Ephemeris model tag (normally 0).
        element_set_number: Element set number.
        inclination: Inclination [deg].
        raan: Right ascension of the ascending node [deg].
        eccentricity: Eccentricity, in ``[0, 1)``.
        arg_perigee: Argument of perigee [deg].
        mean_anomaly: Mean anomaly [deg].
        mean_motion: Mean motion [rev/day].
        rev_number: Revolution number at epoch.
        checksum1: Checksum digit read from line 1.
        checksum2: Checksum digit read from line 2.
        checksum_valid: Whether both digits matched freshly computed
            checksums. A mismatch is not an error.
        jt_epoch: Epoch as a Julian date (UTC).
    """

    title: str
    catalog_number: int
    classification: str
    launch_year: str
    launch_number: str
    launch_piece: str
    epoch_year: int
    epoch_day: float
    mean_motion_dot: float
    mean_motion_ddot: float
    bstar: float
    ephemeris_type: int
    element_set_number: int
    inclination: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float
    rev_number: int
    checksum1: int
    checksum2: int
    checksum_valid: bool
    jt_epoch: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.eccentricity < 1.0:
            raise FormatError(f"Eccentricity must lie in [0, 1), got {self.eccentricity}")

    @property
    def name(self) -> str:
        """Object name with the title padding removed."""
        return self.title.strip()

    @property
    def international_designator(self) -> str:
        """Compact designator, e.g. ``'64063C'``."""
        return f"{self.launch_year}{self.launch_number}{self.launch_piece}".strip()
