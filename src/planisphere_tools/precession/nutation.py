"""Nutation in longitude and obliquity from its two largest terms (Meeus ch. 22)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from planisphere_tools.angle_utils import arcsec_to_rads
from planisphere_tools.constants import NUTATION_YEARS
from planisphere_tools.errors import check_validity_window
from planisphere_tools.time_utils import julian_centuries_since_j2000, julian_years_since_j2000

# Longitude of the Moon's ascending node and the Sun's mean longitude, degrees
_NODE = (125.04452, -1934.136261, 0.0020708)
_SUN_MEAN_LONGITUDE = (280.4665, 36000.7698)


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude (d_psi) and in obliquity (d_eps), radians."""

    d_psi: float
    d_eps: float


def nutation(jd: float) -> Nutation:
    """Nutation at ``jd``; accurate to about 0.5 arcsec.

    Beyond +/-5,000 years from J2000 the result is still computed, with a
    LowAccuracyWarning.
    """
    check_validity_window('nutation', julian_years_since_j2000(jd), NUTATION_YEARS, True)
    t = julian_centuries_since_j2000(jd)
    node = math.radians(_NODE[0] + _NODE[1] * t + _NODE[2] * t * t)
    sun = math.radians(_SUN_MEAN_LONGITUDE[0] + _SUN_MEAN_LONGITUDE[1] * t)
    d_psi = -17.20 * math.sin(node) - 1.32 * math.sin(2.0 * sun)
    d_eps = 9.20 * math.cos(node) + 0.57 * math.cos(2.0 * sun)
    return Nutation(arcsec_to_rads(d_psi), arcsec_to_rads(d_eps))
