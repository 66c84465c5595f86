"""Greenwich and local sidereal time (Meeus ch. 12), mean and apparent."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from planisphere_tools.angle_utils import in2pi
from planisphere_tools.constants import J2000, SIDEREAL_CLOCK_HOUR
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.precession.nutation import nutation
from planisphere_tools.settings import ChartSettings
from planisphere_tools.time_utils import (
    LocalTime,
    days_of_year,
    jd_for_local,
    jd_gregorian,
    julian_centuries_since_j2000,
)

logger = logging.getLogger(__name__)

# GMST in degrees: constant, rate per day from J2000, T**2 and T**3 coefficients
_GMST = (280.46061837, 360.98564736629, 0.000387933, -1.0 / 38710000.0)


def greenwich_mean_sidereal_time(jd: float) -> float:
    """Mean sidereal time at Greenwich for any instant ``jd`` (UT), radians."""
    t = julian_centuries_since_j2000(jd)
    degrees = _GMST[0] + _GMST[1] * (jd - J2000) + _GMST[2] * t * t + _GMST[3] * t**3
    return in2pi(math.radians(degrees))


def local_sidereal_time(jd: float, longitude: float) -> float:
    """Local mean sidereal time, radians; ``longitude`` in radians, east positive."""
    return in2pi(greenwich_mean_sidereal_time(jd) + longitude)


def local_sidereal_time_for(local: LocalTime, settings: ChartSettings) -> float:
    """Local mean sidereal time at a local civil time kept on the chart's time zone."""
    jd = jd_for_local(local, settings.hours_offset_from_ut, settings.minutes_offset_from_ut)
    return local_sidereal_time(jd, settings.longitude_rad)


def apparent_sidereal_time(jd: float, longitude: float, obliquity: float) -> float:
    """Local apparent sidereal time: the mean value plus the equation of the equinoxes."""
    correction = nutation(jd).d_psi * math.cos(obliquity)
    return in2pi(local_sidereal_time(jd, longitude) + correction)


@dataclass(frozen=True)
class DailySiderealTime:
    """Apparent local sidereal time (radians) at the date-scale hour of one day."""

    ra: float
    month: int
    day: int


def every_day_of_year(
    settings: ChartSettings,
    model: LongTermPrecession | None = None,
) -> list[DailySiderealTime]:
    """Apparent sidereal time at 20h local standard time for each day, in day order.

    The obliquity is taken once, at July 1 of the chart year.
    """
    if model is None:
        model = LongTermPrecession()
    obliquity = model.obliquity(jd_gregorian(settings.year, 7, 1.0))
    result = []
    for day in days_of_year(settings.year):
        lst = sidereal_time_on(day, settings, obliquity)
        result.append(DailySiderealTime(lst, day.month, day.day))
    logger.debug('Computed %d daily sidereal times for %d', len(result), settings.year)
    return result


def sidereal_time_on(day: LocalTime, settings: ChartSettings, obliquity: float) -> float:
    """Apparent local sidereal time at 20h local standard time on ``day``."""
    local = day.at(SIDEREAL_CLOCK_HOUR)
    jd = jd_for_local(local, settings.hours_offset_from_ut, settings.minutes_offset_from_ut)
    return apparent_sidereal_time(jd, settings.longitude_rad, obliquity)
