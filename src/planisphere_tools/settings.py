"""Chart settings: the scalar inputs of a planisphere run, validated eagerly."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from planisphere_tools.angle_utils import parse_sexagesimal
from planisphere_tools.constants import (
    DEFAULT_CHART_HEIGHT,
    DEFAULT_CHART_WIDTH,
    DEFAULT_DECLINATION_GAP,
    DEFAULT_MAGNITUDE_LIMIT,
    DEFAULT_SHOWER_RADIANTS,
    DEGREES_PER_HOUR_RA,
    MINUTES_PER_HOUR,
)
from planisphere_tools.projection import Bounds

logger = logging.getLogger(__name__)

POLE_DEGREES = 90.0
MAX_DECLINATION_GAP = 30.0
TIME_DIVISIONS = (1, 2)


@dataclass(frozen=True)
class ChartSettings:
    """Settings for one chart.

    Angles are stored in degrees as configured; the ``*_rad`` properties give
    radians. Longitudes and UTC offsets are negative west of Greenwich.
    ``shower_radiants`` lists ``name:ra,dec`` entries (J2000 degrees) separated by ``|``.

    Raises:
        ValueError: On construction, for any out-of-domain value.
    """

    year: int
    latitude: float
    longitude: float
    hours_offset_from_ut: int = 0
    minutes_offset_from_ut: int = 0
    location: str = ''
    declination_gap: float = DEFAULT_DECLINATION_GAP
    smallest_time_division: int = 2
    discard_polaris: bool = False
    width: float = DEFAULT_CHART_WIDTH
    height: float = DEFAULT_CHART_HEIGHT
    magnitude_limit: float = DEFAULT_MAGNITUDE_LIMIT
    shower_radiants: str = DEFAULT_SHOWER_RADIANTS

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f'latitude must be in [-90, 90] degrees, got {self.latitude!r}')
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f'longitude must be in [-180, 180] degrees, got {self.longitude!r}')
        if not -14 <= self.hours_offset_from_ut <= 14:
            raise ValueError(
                f'hours_offset_from_ut must be in [-14, 14], got {self.hours_offset_from_ut!r}'
            )
        if not 0 <= self.minutes_offset_from_ut <= 59:
            raise ValueError(
                f'minutes_offset_from_ut must be in [0, 59], got {self.minutes_offset_from_ut!r}'
            )
        if abs(self.declination_gap) > MAX_DECLINATION_GAP:
            raise ValueError(
                f'declination_gap must be in [-30, 30] degrees, got {self.declination_gap!r}'
            )
        if self.smallest_time_division not in TIME_DIVISIONS:
            raise ValueError(
                'smallest_time_division can only be 1 or 2, '
                f'got {self.smallest_time_division!r}'
            )
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f'chart size must be positive, got {self.width!r} x {self.height!r}')
        # A negative gap pushes the chart edge past the horizon.
        if self.declination_gap < 0:
            logger.warning(
                'Declination limit %.2f is below the real horizon for latitude %.2f',
                self.declination_limit,
                self.latitude,
            )

    @property
    def latitude_rad(self) -> float:
        return math.radians(self.latitude)

    @property
    def longitude_rad(self) -> float:
        return math.radians(self.longitude)

    @property
    def is_northern(self) -> bool:
        return self.latitude >= 0

    @property
    def hemisphere_sign(self) -> int:
        return 1 if self.is_northern else -1

    @property
    def declination_limit(self) -> float:
        """Declination (degrees) of the chart's outer edge: the horizon pulled in by the gap."""
        sign = self.hemisphere_sign
        return self.latitude - sign * POLE_DEGREES + sign * self.declination_gap

    def star_chart_bounds(self) -> Bounds:
        """Declination window of the star chart, from the limit to the visible pole."""
        if self.is_northern:
            return Bounds(self.declination_limit, POLE_DEGREES, 0.0, 24.0)
        return Bounds(-POLE_DEGREES, self.declination_limit, 0.0, 24.0)

    @property
    def rads_west_of_central_meridian(self) -> float:
        """Angle by which the observer lies west of the time zone's central meridian."""
        hours = self.hours_offset_from_ut + self.minutes_offset_from_ut / MINUTES_PER_HOUR
        central_longitude = math.radians(hours * DEGREES_PER_HOUR_RA)
        return central_longitude - self.longitude_rad


def _get_env(name: str, default: str = '') -> str:
    return os.environ.get(name, default).strip()


def _env_angle(name: str) -> float:
    text = _get_env(name)
    value = parse_sexagesimal(text)
    if value is None:
        raise ValueError(f'{name} must be an angle in degrees (d, d m, or d m s), got {text!r}')
    return value


def _env_number(name: str, default: str, kind: type[int] | type[float]) -> int | float:
    text = _get_env(name, default)
    try:
        return kind(text)
    except ValueError as e:
        raise ValueError(f'{name} must be a number, got {text!r}') from e


def chart_settings_from_env() -> ChartSettings:
    """Build ChartSettings from PLANISPHERE_* environment variables.

    PLANISPHERE_YEAR, PLANISPHERE_LATITUDE and PLANISPHERE_LONGITUDE are
    required; other settings fall back to the ChartSettings defaults.

    Raises:
        ValueError: A required variable is missing or any value is invalid.
    """
    if not _get_env('PLANISPHERE_YEAR'):
        raise ValueError('PLANISPHERE_YEAR is required')
    settings = ChartSettings(
        year=int(_env_number('PLANISPHERE_YEAR', '', int)),
        latitude=_env_angle('PLANISPHERE_LATITUDE'),
        longitude=_env_angle('PLANISPHERE_LONGITUDE'),
        hours_offset_from_ut=int(_env_number('PLANISPHERE_HOURS_OFFSET', '0', int)),
        minutes_offset_from_ut=int(_env_number('PLANISPHERE_MINUTES_OFFSET', '0', int)),
        location=_get_env('PLANISPHERE_LOCATION'),
        declination_gap=float(
            _env_number('PLANISPHERE_DECLINATION_GAP', str(DEFAULT_DECLINATION_GAP), float)
        ),
        smallest_time_division=int(_env_number('PLANISPHERE_TIME_DIVISION', '2', int)),
        discard_polaris=_get_env('PLANISPHERE_DISCARD_POLARIS', 'false').lower()
        in ('1', 'true', 'yes'),
        width=float(_env_number('PLANISPHERE_WIDTH', str(DEFAULT_CHART_WIDTH), float)),
        height=float(_env_number('PLANISPHERE_HEIGHT', str(DEFAULT_CHART_HEIGHT), float)),
        magnitude_limit=float(
            _env_number('PLANISPHERE_MAGNITUDE_LIMIT', str(DEFAULT_MAGNITUDE_LIMIT), float)
        ),
        shower_radiants=_get_env('PLANISPHERE_RADIANTS', DEFAULT_SHOWER_RADIANTS),
    )
    logger.info('Chart settings from environment: %s', settings)
    return settings
