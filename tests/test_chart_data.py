"""Tests for the projected chart geometry."""

from __future__ import annotations

import math

import pytest

from planisphere_tools.chart_data import (
    DATE_TICK_UNIT,
    Radiant,
    altitude_circle,
    altitude_circles,
    celestial_equator_circle,
    date_scale,
    date_tick_multiplier,
    ecliptic_circle,
    lunar_orbit_circle,
    parse_radiants,
    pole_marks,
    project_labelled,
    shower_radiants,
    sun_mark_size,
    sun_marks,
)
from planisphere_tools.constants import TRANSPARENCY_ALTITUDES
from planisphere_tools.coordinates import Position, angular_separation, equatorial_from_alt_az
from planisphere_tools.precession import LongTermPrecession
from planisphere_tools.projection import Point, StereographicProjection, distance
from planisphere_tools.settings import ChartSettings

_CENTER = Point(306.0, 396.0)
_RADIUS = 250.0


@pytest.fixture(scope='module')
def model() -> LongTermPrecession:
    return LongTermPrecession()


def _chart(latitude: float) -> tuple[ChartSettings, StereographicProjection]:
    settings = ChartSettings(year=2023, latitude=latitude, longitude=-75.0, hours_offset_from_ut=-5)
    return settings, StereographicProjection(settings.star_chart_bounds(), _RADIUS, _CENTER)


@pytest.mark.parametrize(
    ('day', 'size'), [(1, 1.0), (5, 0.75), (10, 0.75), (30, 0.75), (2, 0.5), (31, 0.5)]
)
def test_sun_mark_size(day: int, size: float) -> None:
    """Sun marks are largest on the 1st and medium every fifth day."""
    assert sun_mark_size(day) == size


@pytest.mark.parametrize(
    ('day', 'multiplier'),
    [(1, 4.0), (10, 2.75), (20, 2.75), (30, 2.0), (5, 2.0), (15, 2.0), (7, 1.0)],
)
def test_date_tick_multiplier(day: int, multiplier: float) -> None:
    """Date ticks are longest on the 1st; the 10th and 20th beat other multiples of five."""
    assert date_tick_multiplier(day) == multiplier


def test_equator_circle_is_centered() -> None:
    """The celestial equator is a circle around the chart center."""
    _settings, projection = _chart(45.0)
    circle = celestial_equator_circle(projection)
    assert distance(circle.center, _CENTER) == pytest.approx(0.0, abs=1e-9)
    assert circle.radius == pytest.approx(projection.distance_from_center(0.0))


def test_sun_marks_lie_on_ecliptic(model: LongTermPrecession) -> None:
    """Every daily Sun mark is on the projected ecliptic."""
    settings, projection = _chart(45.0)
    marks = sun_marks(settings, projection, model)
    assert len(marks) == 365
    assert marks[0].day.hour == 18
    assert marks[0].size == 1.0
    circle = ecliptic_circle(settings, projection, model)
    for mark in marks[::15]:
        assert distance(circle.center, mark.point) == pytest.approx(circle.radius, rel=1e-9)


def test_lunar_orbit_meets_ecliptic_at_nodes(model: LongTermPrecession) -> None:
    """The lunar orbit circle crosses the ecliptic circle at the two nodes."""
    settings, projection = _chart(45.0)
    orbit = lunar_orbit_circle(settings, projection, model)
    ecliptic = ecliptic_circle(settings, projection, model)
    assert orbit.radius != pytest.approx(ecliptic.radius, rel=1e-6)
    gap = distance(orbit.center, ecliptic.center)
    assert abs(orbit.radius - ecliptic.radius) < gap < orbit.radius + ecliptic.radius


def test_date_scale_ticks(model: LongTermPrecession) -> None:
    """Ticks run inward from the rim by their length; southern charts are mirrored."""
    settings, _projection = _chart(45.0)
    ticks = date_scale(settings, _CENTER, 280.0, model)
    assert len(ticks) == 365
    first_of_month = [t for t in ticks if t.day == 1]
    assert len(first_of_month) == 12
    for tick in ticks[:20]:
        assert distance(_CENTER, tick.start) == pytest.approx(280.0)
        assert distance(_CENTER, tick.end) == pytest.approx(280.0 - tick.length)
    assert first_of_month[0].length == 4.0 * DATE_TICK_UNIT

    south, _ = _chart(-33.9)
    mirrored = date_scale(south, _CENTER, 280.0, model)
    tick = ticks[0]
    match = next(t for t in mirrored if (t.month, t.day) == (tick.month, tick.day))
    assert match.start.x - _CENTER.x == pytest.approx(
        -(280.0 * math.cos(match.angle)), abs=1e-9
    )


def test_pole_marks(model: LongTermPrecession) -> None:
    """Pole marks pair the equatorial and ecliptic poles; the start year's pole is at the center."""
    settings, projection = _chart(45.0)
    points = pole_marks(settings, projection, model, start_year=2000, count=3, step=200)
    assert len(points) == 6
    assert distance(points[4], _CENTER) == pytest.approx(0.0, abs=0.01)
    ecliptic_pole = projection.distance_from_center(math.radians(90.0 - 23.4393))
    assert distance(points[5], _CENTER) == pytest.approx(ecliptic_pole, rel=1e-3)

    south, south_projection = _chart(-33.9)
    south_points = pole_marks(south, south_projection, model, start_year=2000, count=1)
    assert distance(south_points[0], _CENTER) == pytest.approx(0.0, abs=0.01)


def test_parse_radiants() -> None:
    """Entries are name:ra,dec in degrees separated by bars; blanks are skipped."""
    radiants = parse_radiants(' Lyrids: 271.4, 33.6 | | Orionids:95.4,15.9 ')
    assert [r.name for r in radiants] == ['Lyrids', 'Orionids']
    assert radiants[0] == Radiant('Lyrids', Position(math.radians(271.4), math.radians(33.6)))
    assert parse_radiants('') == []


@pytest.mark.parametrize(
    ('text', 'match'),
    [
        ('Lyrids 271.4,33.6', 'name:ra,dec'),
        ('Lyrids:271.4', 'name:ra,dec'),
        ('Lyrids:north,33.6', 'Lyrids'),
        ('Lyrids:271.4,95.0', 'outside'),
    ],
)
def test_parse_radiants_rejects_bad_entries(text: str, match: str) -> None:
    """Malformed entries and impossible declinations raise ValueError."""
    with pytest.raises(ValueError, match=match):
        parse_radiants(text)


def test_shower_radiants_are_precessed(model: LongTermPrecession) -> None:
    """Default radiants come back labelled, moved a fraction of a degree from J2000."""
    settings, projection = _chart(45.0)
    labelled = shower_radiants(settings, model)
    assert [text for _position, text in labelled] == [
        'Quadrantids',
        'Eta Aquariids',
        'Perseids',
        'Geminids',
    ]
    for (position, _text), radiant in zip(labelled, parse_radiants(settings.shower_radiants)):
        moved = math.degrees(angular_separation(position, radiant.position))
        assert 0.05 < moved < 0.5

    points = project_labelled(projection, labelled)
    assert [text for _point, text in points] == [text for _position, text in labelled]
    assert points[2][0] == projection.project(labelled[2][0].dec, labelled[2][0].ra)


@pytest.mark.parametrize('latitude', [45.0, -35.0])
@pytest.mark.parametrize('altitude', [-18.0, 0.0, 30.0, 70.0])
def test_altitude_circle_holds_every_azimuth(latitude: float, altitude: float) -> None:
    """Points at the circle's altitude project onto it whatever their azimuth."""
    settings, projection = _chart(latitude)
    circle = altitude_circle(settings, projection, altitude)
    lst = math.pi / 2
    for azimuth in (0.4, 1.9, 3.5, 5.2):
        position = equatorial_from_alt_az(
            math.radians(altitude), azimuth, settings.latitude_rad, lst
        )
        point = projection.project(position.dec, position.ra)
        assert distance(circle.center, point) == pytest.approx(circle.radius, rel=1e-9)


def test_altitude_circles_shrink_upwards() -> None:
    """One circle per transparency altitude; higher altitudes give smaller circles."""
    settings, projection = _chart(45.0)
    circles = altitude_circles(settings, projection)
    assert tuple(circles) == TRANSPARENCY_ALTITUDES
    radii = [circles[altitude].radius for altitude in TRANSPARENCY_ALTITUDES]
    assert radii == sorted(radii, reverse=True)
