"""Apparent position of the Sun from the Earth's VSOP87D longitude.

The Sun's latitude is taken as zero and its distance is not needed. Good to
about an arcsecond within a few thousand years of J2000.
"""

from __future__ import annotations

import math

from planisphere_tools.angle_utils import arcsec_to_rads, atan3, in2pi
from planisphere_tools.bodies.planets import heliocentric
from planisphere_tools.coordinates import Position
from planisphere_tools.precession.nutation import nutation
from planisphere_tools.series.context import Planet, SeriesContext

# Annual aberration of the Sun, nearly constant (Meeus p. 155)
ABERRATION = arcsec_to_rads(-20.4898)


def geometric_longitude(jd: float, context: SeriesContext | None = None) -> float:
    """Geocentric ecliptic longitude of the Sun, equinox of date, radians."""
    return in2pi(heliocentric(Planet.EARTH, jd, context).lon + math.pi)


def apparent_longitude(jd: float, context: SeriesContext | None = None) -> float:
    """Geometric longitude corrected for nutation in longitude and aberration."""
    return in2pi(geometric_longitude(jd, context) + nutation(jd).d_psi + ABERRATION)


def apparent_position(
    jd: float, obliquity: float, context: SeriesContext | None = None
) -> Position:
    """Apparent right ascension and declination of the Sun for the given obliquity."""
    lon = apparent_longitude(jd, context)
    ra = atan3(math.sin(lon) * math.cos(obliquity), math.cos(lon))
    dec = math.asin(math.sin(obliquity) * math.sin(lon))
    return Position(ra, dec)
