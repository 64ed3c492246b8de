"""Exception types raised by orbitcore.

All errors are local to the call that raised them.  A checksum mismatch in
a fixed-column element set is not an error: it is reported through
``OrbitalElementRecord.checksum_valid``.
"""

from __future__ import annotations


class FormatError(ValueError):
    """A fixed-column line or a key-value field could not be parsed."""


class MissingFieldError(FormatError, KeyError):
    """A key-value element record lacks a required key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing required field: {key}")

    def __str__(self) -> str:
        return self.args[0]


class PropagationError(ValueError):
    """SGP4 left the domain where the theory is defined.

    Attributes:
        code: SGP4 error code (1 eccentricity, 2 mean motion,
            4 semi-latus rectum, 6 decayed).
        tsince: Minutes since epoch of the failed evaluation.
    """

    MESSAGES = {
        1: "mean eccentricity outside [-0.001, 1.0)",
        2: "mean motion is not positive",
        4: "semi-latus rectum is negative",
        6: "satellite has decayed",
    }

    def __init__(self, code: int, tsince: float | None = None) -> None:
        self.code = int(code)
        self.tsince = tsince
        reason = self.MESSAGES.get(self.code, "unknown error")
        where = "" if tsince is None else f" at {tsince:.6f} min since epoch"
        super().__init__(f"SGP4 error {self.code}: {reason}{where}")
