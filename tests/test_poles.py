"""Tests for pole paths and closest approach of a star to the celestial pole."""

from __future__ import annotations

import math

import pytest

from planisphere_tools.constants import J2000
from planisphere_tools.precession.poles import (
    closest_approach_to_pole,
    jd_for_year,
    pole_path,
)
from planisphere_tools.stars import Star

# Polaris on the J2000 sky, proper motion in arcsec per year
_POLARIS = Star(
    index=11767,
    name='α UMi',
    magnitude=1.97,
    ra=math.radians(37.95),
    dec=math.radians(89.264),
    pm_ra=0.044,
    pm_dec=-0.012,
)


def test_jd_for_year() -> None:
    """Julian-epoch years are 365.25 days long, counted from J2000."""
    assert jd_for_year(2000.0) == J2000
    assert jd_for_year(2100.0) == J2000 + 36525.0


def test_pole_path_steps() -> None:
    """The path includes both ends and starts at the J2000 poles."""
    path = list(pole_path(2000.0, 2400.0, 200.0))
    assert [p.year for p in path] == [2000.0, 2200.0, 2400.0]
    first = path[0]
    assert math.degrees(first.equatorial.dec) == pytest.approx(90.0, abs=1e-4)
    assert math.degrees(first.ecliptic.ra) == pytest.approx(270.0, abs=1e-3)
    assert math.degrees(first.ecliptic.dec) == pytest.approx(90.0 - 23.4392794, abs=1e-4)


def test_pole_path_moves_toward_equinox() -> None:
    """Over a century the pole moves about 2004 arcsec toward RA 0h."""
    path = list(pole_path(2000.0, 2100.0, 100.0))
    moved = path[1].equatorial
    assert 90.0 - math.degrees(moved.dec) == pytest.approx(2004.19 / 3600.0, abs=5.0 / 3600.0)
    assert math.cos(moved.ra) > 0.99


def test_pole_path_rejects_bad_step() -> None:
    """A non-positive step is refused."""
    with pytest.raises(ValueError, match='step'):
        list(pole_path(2000.0, 2400.0, 0.0))


def test_polaris_closest_approach() -> None:
    """Polaris comes within about 0.45 degrees of the pole around 2100."""
    result = closest_approach_to_pole(_POLARIS, 2000.0, 2200.0)
    assert 2080.0 <= result.year <= 2120.0
    assert math.degrees(result.separation) == pytest.approx(0.45, abs=0.05)


def test_closest_approach_rejects_bad_ranges() -> None:
    """Ranges past the precession window or reversed are refused."""
    with pytest.raises(ValueError, match='max_year'):
        closest_approach_to_pole(_POLARIS, 2000.0, 205000.0)
    with pytest.raises(ValueError, match='empty'):
        closest_approach_to_pole(_POLARIS, 2100.0, 2000.0)


def test_closest_approach_over_a_single_year() -> None:
    """A one-year range gives that year and the star's polar distance then."""
    result = closest_approach_to_pole(_POLARIS, 2000.0, 2000.0)
    assert result.year == 2000.0
    assert math.degrees(result.separation) == pytest.approx(90.0 - 89.264, abs=0.01)
