"""Tests for the Sun's apparent position."""

from __future__ import annotations

import math

import pytest

from planisphere_tools.bodies.sun import apparent_longitude, apparent_position, geometric_longitude
from planisphere_tools.constants import J2000
from planisphere_tools.precession import LongTermPrecession
from planisphere_tools.time_utils import jd_gregorian

# Meeus example 25.b, 1992 October 13.0 TD
_JD = 2448908.5


def test_geometric_longitude() -> None:
    """The Sun is opposite the Earth's heliocentric longitude."""
    assert math.degrees(geometric_longitude(_JD)) == pytest.approx(199.907372, abs=1e-5)


def test_apparent_longitude() -> None:
    """Nutation and aberration shift the longitude by a few arcseconds."""
    assert math.degrees(apparent_longitude(_JD)) == pytest.approx(199.906060, abs=5e-4)


def test_apparent_position() -> None:
    """Right ascension and declination match the worked example."""
    obliquity = LongTermPrecession().obliquity(_JD)
    position = apparent_position(_JD, obliquity)
    assert math.degrees(position.ra) == pytest.approx(198.378121, abs=5e-3)
    assert math.degrees(position.dec) == pytest.approx(-7.783817, abs=5e-3)


def test_solstice_declination() -> None:
    """Near the June solstice the declination equals the obliquity."""
    jd = jd_gregorian(2024, 6, 20.87)
    obliquity = LongTermPrecession().obliquity(jd)
    assert apparent_position(jd, obliquity).dec == pytest.approx(obliquity, abs=math.radians(0.01))


def test_longitude_advances_about_a_degree_a_day() -> None:
    """The Sun moves eastward by roughly 360/365.25 degrees per day."""
    step = geometric_longitude(J2000 + 1.0) - geometric_longitude(J2000)
    assert math.degrees(step) == pytest.approx(1.0, abs=0.05)
