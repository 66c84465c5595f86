"""Tests for ChartSettings validation, derived values, and the environment loader."""

from __future__ import annotations

import logging
import math

import pytest

from planisphere_tools.constants import DEFAULT_SHOWER_RADIANTS
from planisphere_tools.projection import Bounds
from planisphere_tools.settings import ChartSettings, chart_settings_from_env


def _settings(**kwargs: object) -> ChartSettings:
    values: dict[str, object] = {'year': 2023, 'latitude': 45.0, 'longitude': -75.0}
    values.update(kwargs)
    return ChartSettings(**values)  # type: ignore[arg-type]


def test_defaults_and_radians() -> None:
    """Degrees are kept as given; radians are derived."""
    settings = _settings()
    assert settings.smallest_time_division == 2
    assert settings.latitude_rad == pytest.approx(math.radians(45.0))
    assert settings.longitude_rad == pytest.approx(math.radians(-75.0))


def test_declination_limit_northern() -> None:
    """The chart edge is the horizon's lowest declination pulled in by the gap."""
    settings = _settings(declination_gap=5.0)
    assert settings.is_northern
    assert settings.hemisphere_sign == 1
    assert settings.declination_limit == pytest.approx(-40.0)
    assert settings.star_chart_bounds() == Bounds(-40.0, 90.0, 0.0, 24.0)


def test_declination_limit_southern() -> None:
    """Southern charts mirror the limit toward positive declinations."""
    settings = _settings(latitude=-30.0, declination_gap=5.0)
    assert not settings.is_northern
    assert settings.hemisphere_sign == -1
    assert settings.declination_limit == pytest.approx(55.0)
    bounds = settings.star_chart_bounds()
    assert bounds == Bounds(-90.0, 55.0, 0.0, 24.0)
    assert not bounds.is_northern


def test_rads_west_of_central_meridian() -> None:
    """Ottawa lies 0.7 degrees west of the UTC-5 central meridian."""
    settings = _settings(longitude=-75.7, hours_offset_from_ut=-5)
    assert settings.rads_west_of_central_meridian == pytest.approx(math.radians(0.7))


@pytest.mark.parametrize(
    'kwargs',
    [
        {'smallest_time_division': 3},
        {'smallest_time_division': 0},
        {'declination_gap': 31.0},
        {'declination_gap': -30.5},
        {'minutes_offset_from_ut': 60},
        {'minutes_offset_from_ut': -1},
        {'hours_offset_from_ut': 15},
        {'latitude': 91.0},
        {'longitude': -181.0},
        {'width': 0.0},
    ],
)
def test_invalid_settings_rejected(kwargs: dict[str, object]) -> None:
    """Out-of-domain values fail at construction."""
    with pytest.raises(ValueError):
        _settings(**kwargs)


def test_negative_gap_warns(caplog: pytest.LogCaptureFixture) -> None:
    """A chart edge below the horizon is allowed but logged."""
    with caplog.at_level(logging.WARNING, logger='planisphere_tools.settings'):
        _settings(declination_gap=-5.0)
    assert 'below the real horizon' in caplog.text


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """PLANISPHERE_* variables build a ChartSettings."""
    monkeypatch.setenv('PLANISPHERE_YEAR', '2024')
    monkeypatch.setenv('PLANISPHERE_LATITUDE', '45 30')
    monkeypatch.setenv('PLANISPHERE_LONGITUDE', '-75 42')
    monkeypatch.setenv('PLANISPHERE_HOURS_OFFSET', '-5')
    monkeypatch.setenv('PLANISPHERE_LOCATION', 'Ottawa')
    monkeypatch.setenv('PLANISPHERE_TIME_DIVISION', '1')
    monkeypatch.setenv('PLANISPHERE_DISCARD_POLARIS', 'yes')
    settings = chart_settings_from_env()
    assert settings.year == 2024
    assert settings.latitude == pytest.approx(45.5)
    assert settings.longitude == pytest.approx(-75.7)
    assert settings.hours_offset_from_ut == -5
    assert settings.location == 'Ottawa'
    assert settings.smallest_time_division == 1
    assert settings.discard_polaris


def test_settings_from_env_radiants(monkeypatch: pytest.MonkeyPatch) -> None:
    """PLANISPHERE_RADIANTS replaces the default shower list."""
    monkeypatch.setenv('PLANISPHERE_YEAR', '2024')
    monkeypatch.setenv('PLANISPHERE_LATITUDE', '45')
    monkeypatch.setenv('PLANISPHERE_LONGITUDE', '-75')
    monkeypatch.delenv('PLANISPHERE_RADIANTS', raising=False)
    assert chart_settings_from_env().shower_radiants == DEFAULT_SHOWER_RADIANTS
    monkeypatch.setenv('PLANISPHERE_RADIANTS', ' Lyrids:271.4,33.6 ')
    assert chart_settings_from_env().shower_radiants == 'Lyrids:271.4,33.6'


def test_settings_from_env_requires_year(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing year is a configuration error."""
    monkeypatch.delenv('PLANISPHERE_YEAR', raising=False)
    with pytest.raises(ValueError, match='PLANISPHERE_YEAR'):
        chart_settings_from_env()


def test_settings_from_env_rejects_bad_angle(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unparseable latitude names the variable."""
    monkeypatch.setenv('PLANISPHERE_YEAR', '2024')
    monkeypatch.setenv('PLANISPHERE_LATITUDE', 'north')
    monkeypatch.setenv('PLANISPHERE_LONGITUDE', '0')
    with pytest.raises(ValueError, match='PLANISPHERE_LATITUDE'):
        chart_settings_from_env()


def test_settings_from_env_rejects_bad_time_division(monkeypatch: pytest.MonkeyPatch) -> None:
    """An invalid time division fails before any computation."""
    monkeypatch.setenv('PLANISPHERE_YEAR', '2024')
    monkeypatch.setenv('PLANISPHERE_LATITUDE', '45')
    monkeypatch.setenv('PLANISPHERE_LONGITUDE', '-75')
    monkeypatch.setenv('PLANISPHERE_TIME_DIVISION', '5')
    with pytest.raises(ValueError, match='smallest_time_division'):
        chart_settings_from_env()
