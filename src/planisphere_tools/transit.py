"""Local time at which an object crosses the observer's meridian on a given day.

The hour angle is sampled every hour from 0h to 24h local time. A transit lies
between two samples where the hour angle drops (wraps through 2pi to 0); the
crossing minute is found by linear interpolation. Some days have no transit,
e.g. once a month for the Moon, which moves about 13 degrees a day.
"""

from __future__ import annotations

import functools
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from planisphere_tools.bodies.planets import geocentric_position
from planisphere_tools.constants import MINUTES_PER_HOUR, TWO_PI
from planisphere_tools.coordinates import Position, hour_angle
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.series.context import Planet, SeriesContext, default_context
from planisphere_tools.settings import ChartSettings
from planisphere_tools.sidereal import local_sidereal_time
from planisphere_tools.time_utils import LocalTime, days_of_year, jd_for_local, mid_month_dates

logger = logging.getLogger(__name__)

PositionFn = Callable[[float], Position]

HOURS_SAMPLED = 24  # samples at 0h, 1h, ... 24h inclusive


@dataclass(frozen=True)
class HourAngle:
    time: LocalTime
    ha: float  # radians, [0, 2pi)


def hour_angles(
    local_date: LocalTime,
    position_fn: PositionFn,
    settings: ChartSettings,
) -> list[HourAngle]:
    """Hour angle of the object at every whole hour 0h..24h of ``local_date``."""
    midnight = local_date.at(0)
    result = []
    for hour in range(HOURS_SAMPLED + 1):
        local = midnight.add_minutes(hour * int(MINUTES_PER_HOUR))
        jd = jd_for_local(local, settings.hours_offset_from_ut, settings.minutes_offset_from_ut)
        lst = local_sidereal_time(jd, settings.longitude_rad)
        result.append(HourAngle(local, hour_angle(lst, position_fn(jd).ra)))
    return result


def find_bracket(samples: Sequence[HourAngle]) -> tuple[HourAngle, HourAngle] | None:
    """First adjacent pair of samples where the hour angle decreases, if any."""
    for start, end in zip(samples, samples[1:]):
        if start.ha > end.ha:
            return start, end
    return None


def interpolate(start: HourAngle, end: HourAngle) -> LocalTime:
    """Time within the bracketing hour at which the hour angle reaches 2pi."""
    fraction = (TWO_PI - start.ha) / (TWO_PI + end.ha - start.ha)
    minutes = math.floor(fraction * MINUTES_PER_HOUR + 0.5)
    return start.time.add_minutes(minutes)


def transit(
    local_date: LocalTime,
    position_fn: PositionFn,
    settings: ChartSettings,
) -> LocalTime | None:
    """Local time of the object's transit on ``local_date``, or None if there is none.

    Parameters:
        local_date: Day in the observer's time zone (the clock fields are ignored).
        position_fn: Equatorial position of the object at a Julian date.
        settings: Observer longitude and UTC offset.

    Returns:
        Local date and time rounded to the minute, or None.
    """
    bracket = find_bracket(hour_angles(local_date, position_fn, settings))
    if bracket is None:
        logger.debug('No transit on %s', local_date)
        return None
    return interpolate(*bracket)


def transits_for_every_day_of_year(
    position_fn: PositionFn, settings: ChartSettings
) -> list[LocalTime | None]:
    """Transit for each day of the chart year, None where there is none."""
    return [transit(day, position_fn, settings) for day in days_of_year(settings.year)]


def transits_for_mid_month(
    position_fn: PositionFn, settings: ChartSettings
) -> list[LocalTime | None]:
    """Transit on the 15th of each month of the chart year."""
    return [transit(day, position_fn, settings) for day in mid_month_dates(settings.year)]


def planetary_transits_for_mid_month(
    settings: ChartSettings,
    context: SeriesContext | None = None,
    model: LongTermPrecession | None = None,
    planets: Sequence[Planet] | None = None,
) -> dict[Planet, list[LocalTime | None]]:
    """Transits on the 15th of each month, keyed by planet.

    By default every planet other than the Earth whose series ``context`` holds.

    Raises:
        MissingSeriesError: A planet asked for in ``planets`` has no series.
    """
    if context is None:
        context = default_context()
    if model is None:
        model = LongTermPrecession(context)
    if planets is None:
        planets = [p for p in Planet if p is not Planet.EARTH and context.has_planet(p)]
    result = {}
    for planet in planets:
        logger.info('Mid-month transits of %s', planet.name.title())
        position_fn = functools.partial(geocentric_position, planet, context=context, model=model)
        result[planet] = transits_for_mid_month(position_fn, settings)
    return result
