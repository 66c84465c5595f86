"""Proper motion of stars between two dates.

Stars with a positive parallax and a radial velocity move along a straight line
in space (3D); the rest drift linearly in right ascension and declination (2D).
Catalog proper motions in right ascension already include the cos(dec) factor.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from planisphere_tools.angle_utils import arcsec_to_rads, in2pi, rads_to_arcsec
from planisphere_tools.constants import DAYS_PER_JULIAN_YEAR, HALF_PI, KM_PER_AU, SECONDS_PER_DAY
from planisphere_tools.coordinates import (
    Position,
    angular_separation,
    position_from_xyz,
    xyz,
)
from planisphere_tools.vectors import matrix_from_rows, rotate, vector

if TYPE_CHECKING:
    from planisphere_tools.stars import Star

logger = logging.getLogger(__name__)

# Beyond this declination 1/cos(dec) is held at its value here.
POLE_GUARD_DEC = math.radians(89.9)
_MIN_COS_DEC = math.cos(POLE_GUARD_DEC)


def uses_space_motion(star: Star) -> bool:
    """True if ``star`` has the parallax and radial velocity needed for 3D motion."""
    return (
        star.parallax is not None
        and star.parallax > 0
        and star.radial_velocity is not None
    )


def apply_proper_motion(star: Star, jd_from: float, jd_to: float) -> tuple[Star, float]:
    """Move ``star`` from ``jd_from`` to ``jd_to``.

    Returns:
        The star at its new position, and the angle it moved, in arcseconds.
    """
    if uses_space_motion(star):
        position, arcsec = space_motion(star, jd_from, jd_to)
    else:
        position, arcsec = linear_motion(star, jd_from, jd_to)
    return dataclasses.replace(star, ra=position.ra, dec=position.dec), arcsec


def linear_motion(star: Star, jd_from: float, jd_to: float) -> tuple[Position, float]:
    """Move linearly in RA and Dec; the moved angle is hypot(d_ra cos dec, d_dec)."""
    years = (jd_to - jd_from) / DAYS_PER_JULIAN_YEAR
    ra_arcsec = star.pm_ra * years
    dec_arcsec = star.pm_dec * years
    cos_dec = math.cos(star.dec)
    if abs(star.dec) > POLE_GUARD_DEC:
        logger.debug(
            'Star %s at dec %.4f rad: cos(dec) held at %.3e for proper motion in RA',
            star.index,
            star.dec,
            _MIN_COS_DEC,
        )
        cos_dec = _MIN_COS_DEC
    ra = star.ra + arcsec_to_rads(ra_arcsec) / cos_dec
    dec = star.dec + arcsec_to_rads(dec_arcsec)
    return _over_the_pole(ra, dec), math.hypot(ra_arcsec, dec_arcsec)


def _over_the_pole(ra: float, dec: float) -> Position:
    """Fold a declination carried past a pole back into [-pi/2, pi/2]."""
    dec = math.remainder(dec, 2.0 * math.pi)
    if abs(dec) <= HALF_PI:
        return Position(ra, dec)
    return Position(in2pi(ra + math.pi), math.copysign(math.pi, dec) - dec)


def space_motion(star: Star, jd_from: float, jd_to: float) -> tuple[Position, float]:
    """Move along a straight line in space, using parallax and radial velocity.

    Returns:
        New position, and the angle between the old and new positions in arcsec.
    """
    parallax = arcsec_to_rads(star.parallax)
    start = Position(star.ra, star.dec)
    u0 = xyz(start, 1.0 / parallax)

    # AU per day along the RA, Dec, and radial directions.
    ra_rate = arcsec_to_rads(star.pm_ra) / (DAYS_PER_JULIAN_YEAR * parallax)
    dec_rate = arcsec_to_rads(star.pm_dec) / (DAYS_PER_JULIAN_YEAR * parallax)
    radial_rate = SECONDS_PER_DAY * star.radial_velocity / KM_PER_AU

    sin_a, cos_a = math.sin(star.ra), math.cos(star.ra)
    sin_d, cos_d = math.sin(star.dec), math.cos(star.dec)
    basis = matrix_from_rows(
        vector(-sin_a, -cos_a * sin_d, cos_a * cos_d),
        vector(cos_a, -sin_a * sin_d, sin_a * cos_d),
        vector(0.0, cos_d, sin_d),
    )
    velocity = rotate(basis, vector(ra_rate, dec_rate, radial_rate))
    u2 = u0 + velocity * (jd_to - jd_from)
    if not np.any(u2):
        raise ValueError(f'star {star.index} passes through the Sun at JD {jd_to}')
    end = position_from_xyz(u2)
    return end, rads_to_arcsec(angular_separation(start, end))
