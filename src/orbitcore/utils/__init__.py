"""Shared utility functions for orbitcore.

Provides degree-based trigonometry, angle reduction and sexagesimal
conversion helpers.
"""

from orbitcore.utils._angle import (
    angle_arc_deg,
    angle_deg_arc,
    angle_deg_hms,
    angle_diff,
    angle_hms_deg,
    from_radians,
    limit_angle_deg,
    limit_angle_deg180,
    to_radians,
)
from orbitcore.utils._trig import acosd, asind, atan2d, atand, cosd, sind, tand

__all__ = [
    "acosd",
    "angle_arc_deg",
    "angle_deg_arc",
    "angle_deg_hms",
    "angle_diff",
    "angle_hms_deg",
    "asind",
    "atan2d",
    "atand",
    "cosd",
    "from_radians",
    "limit_angle_deg",
    "limit_angle_deg180",
    "sind",
    "tand",
    "to_radians",
]
