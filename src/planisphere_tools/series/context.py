"""Immutable container of every periodic-series table the models evaluate.

A SeriesContext is built once and passed explicitly to the precession, Moon
and planet code, so tests can substitute synthetic tables.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from planisphere_tools.config import get_vsop87_path
from planisphere_tools.errors import MissingSeriesError
from planisphere_tools.series import earth_data, moon_data, precession_data
from planisphere_tools.series.terms import TermTable, term_table
from planisphere_tools.series.vsop87_files import (
    NUM_COORDS,
    NUM_POWERS,
    SeriesGrid,
    read_vsop87,
)

logger = logging.getLogger(__name__)


class Planet(Enum):
    """Bodies with VSOP87D series; the value is the file-name suffix."""

    MERCURY = 'mer'
    VENUS = 'ven'
    EARTH = 'ear'
    MARS = 'mar'
    JUPITER = 'jup'
    SATURN = 'sat'


class Coord(Enum):
    """Heliocentric spherical coordinate of a VSOP87D series."""

    L = 0
    B = 1
    R = 2


# (coord, power) -> table identifier, e.g. (Coord.B, 2) -> 'B2'
TABLE_IDS = {
    (coord, power): f'{coord.name}{power}' for coord in Coord for power in range(NUM_POWERS)
}


class PrecessionParam(Enum):
    """Quantities of the long-term precession model with periodic terms."""

    P = 'P_A'
    Q = 'Q_A'
    X = 'X_A'
    Y = 'Y_A'
    GENERAL_PRECESSION = 'p_A'
    OBLIQUITY = 'epsilon_A'


# Parameter -> (table attribute, cosine column, sine column); column 0 is the period.
PRECESSION_COLUMNS = {
    PrecessionParam.P: ('pq_terms', 1, 3),
    PrecessionParam.Q: ('pq_terms', 2, 4),
    PrecessionParam.X: ('xy_terms', 1, 3),
    PrecessionParam.Y: ('xy_terms', 2, 4),
    PrecessionParam.GENERAL_PRECESSION: ('p_epsilon_terms', 1, 2),
    PrecessionParam.OBLIQUITY: ('p_epsilon_terms', 3, 4),
}


def vsop87_file_name(planet: Planet) -> str:
    """Published file name of a planet's VSOP87D series, e.g. ``VSOP87D.mar``."""
    return f'VSOP87D.{planet.value}'


def empty_grid() -> SeriesGrid:
    return tuple((None,) * NUM_POWERS for _ in range(NUM_COORDS))


@dataclass(frozen=True)
class SeriesContext:
    """Periodic-series tables.

    Attributes:
        pq_terms, xy_terms, p_epsilon_terms: Five-column precession tables
            (period in centuries, then cosine and sine amplitudes, arcsec).
        moon_longitude, moon_latitude: Lunar rows (D, M, M', F, amplitude in
            1e-6 degree).
        planets: VSOP87D grids by planet, amplitudes in radians or AU.
    """

    pq_terms: TermTable
    xy_terms: TermTable
    p_epsilon_terms: TermTable
    moon_longitude: TermTable
    moon_latitude: TermTable
    planets: Mapping[Planet, SeriesGrid] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for planet, grid in self.planets.items():
            if len(grid) != NUM_COORDS or any(len(row) != NUM_POWERS for row in grid):
                raise ValueError(f'{planet.name}: series grid must be 3 x 6')
        object.__setattr__(self, 'planets', MappingProxyType(dict(self.planets)))

    def precession_terms(self, param: PrecessionParam) -> TermTable:
        """Rows (period, cosine, sine) for one precession quantity."""
        attribute, cos_col, sin_col = PRECESSION_COLUMNS[param]
        table = getattr(self, attribute)
        return term_table(table[:, [0, cos_col, sin_col]])

    def has_planet(self, planet: Planet) -> bool:
        return planet in self.planets

    def planet_series(self, planet: Planet) -> SeriesGrid:
        """The (coord, power) grid of a planet.

        Raises:
            MissingSeriesError: The context has no series for ``planet``.
        """
        try:
            return self.planets[planet]
        except KeyError:
            raise MissingSeriesError(
                f'no VSOP87D series loaded for {planet.name.title()}; '
                f'put {vsop87_file_name(planet)} in the VSOP87 directory'
            ) from None

    def planet_table(self, planet: Planet, coord: Coord, power: int) -> TermTable | None:
        return self.planet_series(planet)[coord.value][power]

    def with_planets(self, planets: Mapping[Planet, SeriesGrid]) -> SeriesContext:
        """A new context with ``planets`` added to (or replacing) the current grids."""
        merged = dict(self.planets)
        merged.update(planets)
        return SeriesContext(
            self.pq_terms,
            self.xy_terms,
            self.p_epsilon_terms,
            self.moon_longitude,
            self.moon_latitude,
            merged,
        )


def _scaled(rows: tuple[tuple[float, float, float], ...], unit: float) -> TermTable:
    return term_table((a * unit, b, c) for a, b, c in rows)


def bundled_earth_series() -> SeriesGrid:
    """The abridged Earth series shipped with the package, amplitudes in radians/AU."""
    unit = earth_data.AMPLITUDE_UNIT
    grid = []
    for tables in (earth_data.LONGITUDE, earth_data.LATITUDE, earth_data.RADIUS):
        row: list[TermTable | None] = [_scaled(t, unit) for t in tables]
        row.extend([None] * (NUM_POWERS - len(row)))
        grid.append(tuple(row))
    return tuple(grid)


def load_vsop87_directory(directory: str | Path) -> dict[Planet, SeriesGrid]:
    """Read every ``VSOP87D.<abbr>`` file present in ``directory``."""
    directory = Path(directory)
    planets: dict[Planet, SeriesGrid] = {}
    if not directory.is_dir():
        logger.debug('VSOP87 directory %s not found; using bundled series only', directory)
        return planets
    for planet in Planet:
        path = directory / vsop87_file_name(planet)
        if path.is_file():
            planets[planet] = read_vsop87(path)
    return planets


def bundled_context() -> SeriesContext:
    """Context holding only the tables shipped with the package."""
    return SeriesContext(
        pq_terms=term_table(precession_data.PQ_TERMS, width=5),
        xy_terms=term_table(precession_data.XY_TERMS, width=5),
        p_epsilon_terms=term_table(precession_data.P_EPSILON_TERMS, width=5),
        moon_longitude=term_table(moon_data.LONGITUDE_TERMS, width=5),
        moon_latitude=term_table(moon_data.LATITUDE_TERMS, width=5),
        planets={Planet.EARTH: bundled_earth_series()},
    )


@functools.lru_cache(maxsize=1)
def default_context() -> SeriesContext:
    """Bundled tables plus any VSOP87D files in the configured directory (built once)."""
    context = bundled_context()
    loaded = load_vsop87_directory(get_vsop87_path())
    if loaded:
        logger.info(
            'Loaded VSOP87D series for %s',
            ', '.join(p.name.title() for p in loaded),
        )
        context = context.with_planets(loaded)
    return context
