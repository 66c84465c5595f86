"""Projected geometry for the star chart and its horizon transparency.

Sun marks, orbit circles, the date scale, pole paths and meteor shower radiants
for the chart; altitude circles for the transparency.

Everything here only computes positions and chart-plane shapes; drawing is left
to the renderer.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from planisphere_tools.bodies.moon import LunarOrbit
from planisphere_tools.bodies.sun import apparent_position
from planisphere_tools.constants import (
    DEGREES_PER_HOUR_RA,
    HALF_PI,
    LUNAR_ORBIT_MONTH,
    MERIDIAN_RA_HOURS,
    POLE_PATH_STEP_YEARS,
    SHOWER_RADIANT_MONTH,
    SUN_MARK_HOUR,
    TRANSPARENCY_ALTITUDES,
)
from planisphere_tools.coordinates import EclipticCoords, Position, equatorial_from_alt_az
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.precession.poles import pole_path
from planisphere_tools.projection import (
    Circle,
    Point,
    StereographicProjection,
    circle_through,
    distance,
)
from planisphere_tools.series.context import SeriesContext
from planisphere_tools.settings import ChartSettings
from planisphere_tools.sidereal import every_day_of_year
from planisphere_tools.time_utils import LocalTime, days_of_year, jd_for_local, jd_gregorian

logger = logging.getLogger(__name__)

POLE_PATH_START_YEAR = 2000
POLE_PATH_MARKS = 260  # 52,000 years back from the start year
DATE_TICK_UNIT = 3.0


def mid_year_obliquity(year: int, model: LongTermPrecession) -> float:
    """Obliquity on July 1 of ``year``; it barely changes within a year."""
    return model.obliquity(jd_gregorian(year, 7, 1.0))


def project_position(projection: StereographicProjection, position: Position) -> Point:
    return projection.project(position.dec, position.ra)


@dataclass(frozen=True)
class SunMark:
    day: LocalTime
    position: Position
    point: Point
    size: float


def sun_mark_size(day_of_month: int) -> float:
    """Radius of a daily Sun mark: largest on the 1st, medium every 5th day."""
    if day_of_month == 1:
        return 1.0
    if day_of_month % 5 == 0:
        return 0.75
    return 0.5


def sun_marks(
    settings: ChartSettings,
    projection: StereographicProjection,
    model: LongTermPrecession | None = None,
    context: SeriesContext | None = None,
) -> list[SunMark]:
    """Apparent Sun at 18h local standard time for every day of the chart year.

    The marks trace out the ecliptic. In leap years the marks for Jan 1 and
    Dec 31 usually overlap.
    """
    if model is None:
        model = LongTermPrecession(context)
    obliquity = mid_year_obliquity(settings.year, model)
    marks = []
    for day in days_of_year(settings.year):
        local = day.at(SUN_MARK_HOUR)
        jd = jd_for_local(local, settings.hours_offset_from_ut, settings.minutes_offset_from_ut)
        position = apparent_position(jd, obliquity, context)
        logger.debug('Sun at %s: %s', local, position)
        marks.append(
            SunMark(local, position, project_position(projection, position), sun_mark_size(day.day))
        )
    return marks


def lunar_orbit_circle(
    settings: ChartSettings,
    projection: StereographicProjection,
    model: LongTermPrecession | None = None,
) -> Circle:
    """Chart circle of the Moon's mean orbit on July 1 of the chart year."""
    if model is None:
        model = LongTermPrecession()
    jd = jd_gregorian(settings.year, LUNAR_ORBIT_MONTH, 1.0)
    obliquity = model.obliquity(jd)
    orbit = LunarOrbit(jd)
    points = []
    for place, coords in orbit.places().items():
        position = coords.to_ra_dec(obliquity)
        logger.debug("Moon's %s: %s", place.value, position)
        points.append(project_position(projection, position))
    return circle_through(*points)


def celestial_equator_circle(projection: StereographicProjection) -> Circle:
    """Chart circle of the celestial equator."""
    points = [projection.project(0.0, ra) for ra in (0.0, HALF_PI, math.pi)]
    return circle_through(*points)


def ecliptic_circle(
    settings: ChartSettings,
    projection: StereographicProjection,
    model: LongTermPrecession | None = None,
) -> Circle:
    """Chart circle of the ecliptic, with the obliquity of mid-year."""
    if model is None:
        model = LongTermPrecession()
    obliquity = mid_year_obliquity(settings.year, model)
    points = [
        project_position(projection, EclipticCoords(lon, 0.0).to_ra_dec(obliquity))
        for lon in (0.0, HALF_PI, math.pi)
    ]
    return circle_through(*points)


@dataclass(frozen=True)
class DateTick:
    """Tick on the date scale: the sidereal time at 20h of one day, as an angle."""

    angle: float
    month: int
    day: int
    length: float
    start: Point
    end: Point


def date_tick_multiplier(day_of_month: int) -> float:
    if day_of_month == 1:
        return 4.0
    if day_of_month % 10 == 0 and day_of_month < 30:
        return 2.75
    if day_of_month % 5 == 0:
        return 2.0
    return 1.0


def date_scale(
    settings: ChartSettings,
    center: Point,
    outer_radius: float,
    model: LongTermPrecession | None = None,
) -> list[DateTick]:
    """Ticks of the date scale on a rim of ``outer_radius`` around ``center``.

    Most years show a small gap or overlap at the year's end.
    """
    sign = settings.hemisphere_sign
    ticks = []
    for daily in every_day_of_year(settings, model):
        length = date_tick_multiplier(daily.day) * DATE_TICK_UNIT
        cos_t, sin_t = math.cos(daily.ra), math.sin(daily.ra)
        start = Point(center.x + sign * outer_radius * cos_t, center.y + outer_radius * sin_t)
        inner = outer_radius - length
        end = Point(center.x + sign * inner * cos_t, center.y + inner * sin_t)
        ticks.append(DateTick(daily.ra, daily.month, daily.day, length, start, end))
    return ticks


def pole_marks(
    settings: ChartSettings,
    projection: StereographicProjection,
    model: LongTermPrecession | None = None,
    start_year: int = POLE_PATH_START_YEAR,
    count: int = POLE_PATH_MARKS,
    step: int = POLE_PATH_STEP_YEARS,
) -> list[Point]:
    """Marks of the equatorial and ecliptic poles going back ``count`` steps from ``start_year``.

    Southern charts show the south poles. Positions are on the J2000 sky.
    """
    first_year = start_year - (count - 1) * step
    points = []
    for pole in pole_path(first_year, start_year, step, model):
        for position in (pole.equatorial, pole.ecliptic):
            if not settings.is_northern:
                position = Position(position.ra + math.pi, -position.dec)
            points.append(project_position(projection, position))
    return points


@dataclass(frozen=True)
class Radiant:
    """Meteor shower radiant at the shower's peak, J2000."""

    name: str
    position: Position


def parse_radiants(text: str) -> list[Radiant]:
    """Parse ``name:ra,dec | name:ra,dec`` with RA and Dec in degrees.

    Raises:
        ValueError: An entry is malformed or its declination is outside [-90, 90].
    """
    radiants = []
    for entry in text.split('|'):
        entry = entry.strip()
        if not entry:
            continue
        name, colon, numbers = entry.partition(':')
        fields = numbers.split(',')
        if not colon or len(fields) != 2:
            raise ValueError(f'radiant must look like name:ra,dec, got {entry!r}')
        try:
            ra, dec = float(fields[0]), float(fields[1])
        except ValueError as e:
            raise ValueError(
                f'radiant {name.strip()!r} needs ra,dec in degrees, got {numbers!r}'
            ) from e
        if not -90.0 <= dec <= 90.0:
            raise ValueError(f'radiant {name.strip()!r} has declination {dec!r} outside [-90, 90]')
        radiants.append(Radiant(name.strip(), Position(math.radians(ra), math.radians(dec))))
    return radiants


def shower_radiants(
    settings: ChartSettings,
    model: LongTermPrecession | None = None,
) -> list[tuple[Position, str]]:
    """Radiants of ``settings.shower_radiants`` precessed to July 1 of the chart year.

    A radiant drifts from night to night; the position at the peak stands for
    the whole shower.
    """
    if model is None:
        model = LongTermPrecession()
    jd = jd_gregorian(settings.year, SHOWER_RADIANT_MONTH, 1.0)
    result = []
    for radiant in parse_radiants(settings.shower_radiants):
        position = model.apply(radiant.position, jd)
        logger.debug('Radiant of the %s: %s', radiant.name, position)
        result.append((position, radiant.name))
    return result


def project_labelled(
    projection: StereographicProjection, labelled: Sequence[tuple[Position, str]]
) -> list[tuple[Point, str]]:
    return [(project_position(projection, position), text) for position, text in labelled]


def altitude_circle(
    settings: ChartSettings,
    projection: StereographicProjection,
    altitude: float,
) -> Circle:
    """Transparency circle of the points ``altitude`` degrees above the horizon.

    The circle is symmetric about the meridian, so its crossings due north and
    due south are the ends of a diameter.
    """
    lst = math.radians(MERIDIAN_RA_HOURS * DEGREES_PER_HOUR_RA)
    alt = math.radians(altitude)
    north, south = (
        project_position(
            projection, equatorial_from_alt_az(alt, azimuth, settings.latitude_rad, lst)
        )
        for azimuth in (0.0, math.pi)
    )
    center = Point((north.x + south.x) / 2.0, (north.y + south.y) / 2.0)
    return Circle(center, distance(north, south) / 2.0)


def altitude_circles(
    settings: ChartSettings,
    projection: StereographicProjection,
    altitudes: Sequence[float] = TRANSPARENCY_ALTITUDES,
) -> dict[float, Circle]:
    """Altitude circles keyed by altitude in degrees."""
    return {altitude: altitude_circle(settings, projection, altitude) for altitude in altitudes}
