"""Tests for periodic-series evaluation and the SeriesContext container."""

from __future__ import annotations

import math

import numpy as np
import pytest

from planisphere_tools.errors import MissingSeriesError
from planisphere_tools.series import Coord, Planet, PrecessionParam, SeriesContext
from planisphere_tools.series.context import (
    TABLE_IDS,
    bundled_context,
    bundled_earth_series,
    empty_grid,
    vsop87_file_name,
)
from planisphere_tools.series.terms import (
    periodic_correction,
    power_series,
    sum_lunar_terms,
    sum_terms,
    term_table,
)


def test_term_table_is_read_only() -> None:
    """Tables are immutable float arrays."""
    table = term_table([(1, 0, 0), (2, 0.5, 3)])
    assert table.dtype == np.float64
    with pytest.raises(ValueError):
        table[0, 0] = 5.0


def test_term_table_shape_checks() -> None:
    """Rows of the wrong width are rejected; empty input yields an empty table."""
    assert term_table([], width=5).shape == (0, 5)
    with pytest.raises(ValueError, match='fields'):
        term_table([(1.0, 2.0)])


def test_sum_terms() -> None:
    """A cos(B + C tau) is summed over rows."""
    table = term_table([(2.0, 0.0, 0.0), (1.0, math.pi / 2, 1.0)])
    assert sum_terms(table, 0.0) == pytest.approx(2.0)
    assert sum_terms(table, math.pi / 2) == pytest.approx(1.0)
    assert sum_terms(term_table([]), 3.0) == 0.0


def test_power_series_skips_absent_powers() -> None:
    """Missing powers contribute nothing; others are multiplied by tau**p."""
    constant = term_table([(1.0, 0.0, 0.0)])
    tables = [constant, None, constant]
    assert power_series(tables, 2.0) == pytest.approx(1.0 + 4.0)


def test_periodic_correction() -> None:
    """C cos(2 pi T / P) + S sin(2 pi T / P) at a quarter period picks the sine term."""
    table = term_table([(4.0, 3.0, 5.0)])
    assert periodic_correction(table, 0.0) == pytest.approx(3.0)
    assert periodic_correction(table, 1.0) == pytest.approx(5.0)


def test_sum_lunar_terms_eccentricity_factor() -> None:
    """Terms in M are scaled by E per unit of |M|."""
    table = term_table([(0, 1, 0, 0, 10.0), (0, -2, 0, 0, 10.0), (0, 0, 0, 1, 1.0)], width=5)
    m = math.pi / 2
    e = 0.5
    value = sum_lunar_terms(table, 0.0, m, 0.0, 0.0, e, trig=np.cos)
    assert value == pytest.approx(10.0 * e**2 * math.cos(-2 * m) + 1.0)


def test_bundled_context_tables() -> None:
    """The bundled context holds the precession, lunar and Earth tables."""
    context = bundled_context()
    assert context.pq_terms.shape == (8, 5)
    assert context.xy_terms.shape == (14, 5)
    assert context.p_epsilon_terms.shape == (10, 5)
    assert context.moon_longitude.shape[1] == 5
    assert context.moon_latitude.shape[1] == 5
    assert context.has_planet(Planet.EARTH)
    assert not context.has_planet(Planet.MARS)


def test_precession_terms_select_columns() -> None:
    """Each parameter reads the period plus its own cosine and sine columns."""
    context = bundled_context()
    p_terms = context.precession_terms(PrecessionParam.P)
    q_terms = context.precession_terms(PrecessionParam.Q)
    eps_terms = context.precession_terms(PrecessionParam.OBLIQUITY)
    assert tuple(p_terms[0]) == pytest.approx((708.15, -5486.751211, 667.666730))
    assert tuple(q_terms[0]) == pytest.approx((708.15, -684.661560, -5523.863691))
    assert tuple(eps_terms[0]) == pytest.approx((409.90, 753.872780, -1704.720302))


def test_bundled_earth_series_scaled_to_radians() -> None:
    """Earth amplitudes are stored in radians; L0 starts with 1.75347046 rad."""
    grid = bundled_earth_series()
    l0 = grid[Coord.L.value][0]
    assert l0 is not None
    assert l0[0, 0] == pytest.approx(1.75347046)
    assert grid[Coord.B.value][2] is None
    assert grid[Coord.R.value][0] is not None
    assert grid[Coord.R.value][0][0, 0] == pytest.approx(1.00013989)


def test_missing_planet_raises() -> None:
    """Asking for an unloaded planet names the file to supply."""
    with pytest.raises(MissingSeriesError, match='VSOP87D.jup'):
        bundled_context().planet_series(Planet.JUPITER)


def test_with_planets_returns_new_context() -> None:
    """Adding a grid leaves the original context untouched."""
    context = bundled_context()
    extended = context.with_planets({Planet.MARS: empty_grid()})
    assert extended.has_planet(Planet.MARS)
    assert extended.has_planet(Planet.EARTH)
    assert not context.has_planet(Planet.MARS)
    assert extended.planet_table(Planet.MARS, Coord.R, 0) is None


def test_context_rejects_bad_grid() -> None:
    """Planet grids must be three coordinates by six powers."""
    context = bundled_context()
    with pytest.raises(ValueError, match='3 x 6'):
        SeriesContext(
            context.pq_terms,
            context.xy_terms,
            context.p_epsilon_terms,
            context.moon_longitude,
            context.moon_latitude,
            {Planet.MARS: ((None,) * 6,)},
        )


def test_planets_mapping_is_read_only() -> None:
    """The planets mapping cannot be modified in place."""
    context = bundled_context()
    with pytest.raises(TypeError):
        context.planets[Planet.MARS] = empty_grid()  # type: ignore[index]


def test_names() -> None:
    """Table identifiers and file names follow the published conventions."""
    assert TABLE_IDS[(Coord.B, 2)] == 'B2'
    assert vsop87_file_name(Planet.SATURN) == 'VSOP87D.sat'
