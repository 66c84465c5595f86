"""Paths of the precessing poles, and how close a star comes to the celestial pole."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from planisphere_tools.constants import (
    DAYS_PER_JULIAN_YEAR,
    J1991_25,
    J2000,
    LONG_TERM_PRECESSION_YEARS,
    POLE_PATH_STEP_YEARS,
)
from planisphere_tools.coordinates import Position, angular_separation, position_from_xyz
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.proper_motion import apply_proper_motion
from planisphere_tools.stars import Star

logger = logging.getLogger(__name__)

J2000_YEAR = 2000.0
MAX_YEAR = J2000_YEAR + LONG_TERM_PRECESSION_YEARS


def jd_for_year(year: float) -> float:
    """Julian date of a Julian-epoch year (J2000 is 2000.0)."""
    return J2000 + (year - J2000_YEAR) * DAYS_PER_JULIAN_YEAR


@dataclass(frozen=True)
class PolePosition:
    """Mean poles of one year, as positions on the J2000 sky."""

    year: float
    equatorial: Position
    ecliptic: Position


def pole_path(
    start_year: float,
    end_year: float,
    step: float = POLE_PATH_STEP_YEARS,
    model: LongTermPrecession | None = None,
) -> Iterator[PolePosition]:
    """Yield the equatorial and ecliptic poles from ``start_year`` to ``end_year`` inclusive.

    Raises:
        ValueError: If ``step`` is not positive.
    """
    if step <= 0:
        raise ValueError(f'step must be positive, got {step!r}')
    if model is None:
        model = LongTermPrecession()
    year = start_year
    while year <= end_year:
        jd = jd_for_year(year)
        yield PolePosition(
            year,
            position_from_xyz(model.equatorial_pole(jd)),
            position_from_xyz(model.ecliptic_pole(jd)),
        )
        year += step


@dataclass(frozen=True)
class ClosestApproach:
    year: float
    separation: float  # radians


def _approach(star: Star, pole: PolePosition) -> ClosestApproach:
    moved, _arcsec = apply_proper_motion(star, J1991_25, jd_for_year(pole.year))
    return ClosestApproach(pole.year, angular_separation(moved.position, pole.equatorial))


def closest_approach_to_pole(
    star: Star,
    min_year: float,
    max_year: float,
    step: float = 1.0,
    model: LongTermPrecession | None = None,
) -> ClosestApproach:
    """Year in [min_year, max_year] when ``star`` lies closest to the celestial pole.

    The star carries its proper motion from the catalog epoch; both it and the
    pole are compared on the J2000 sky.

    Raises:
        ValueError: ``max_year`` is past the long-term precession window, or
            the range is empty.
    """
    if max_year > MAX_YEAR:
        raise ValueError(f'max_year must be at most {MAX_YEAR:.0f}, got {max_year!r}')
    if min_year > max_year:
        raise ValueError(f'empty year range {min_year!r}..{max_year!r}')
    best = min(
        (_approach(star, pole) for pole in pole_path(min_year, max_year, step, model)),
        key=lambda approach: approach.separation,
    )
    logger.info(
        'Star %s closest to the pole in %.0f at %.4f rad',
        star.name or star.index,
        best.year,
        best.separation,
    )
    return best
