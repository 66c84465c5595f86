"""Planet positions from VSOP87D series (heliocentric ecliptic of date).

Heliocentric L, B, R come from summing the series of each coordinate over the
powers of tau (Julian millennia from J2000). The geocentric direction is the
difference of the planet's and the Earth's rectangular coordinates, converted
to ecliptic longitude and latitude and then to the equator with the obliquity
of date. Light time and aberration are ignored at chart precision.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from planisphere_tools.angle_utils import atan3, in2pi
from planisphere_tools.coordinates import EclipticCoords, Position
from planisphere_tools.errors import UndefinedPositionError
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.series.context import Coord, Planet, SeriesContext, default_context
from planisphere_tools.series.terms import power_series
from planisphere_tools.time_utils import julian_millennia_since_j2000
from planisphere_tools.vectors import Vector3, vector

__all__ = [
    'LBR',
    'Planet',
    'geocentric_ecliptic',
    'geocentric_position',
    'heliocentric',
    'rectangular',
]


@dataclass(frozen=True)
class LBR:
    """Heliocentric ecliptic longitude in [0, 2pi), latitude (radians), and radius (AU)."""

    lon: float
    lat: float
    radius: float


def heliocentric(planet: Planet, jd: float, context: SeriesContext | None = None) -> LBR:
    """Heliocentric coordinates of ``planet`` at ``jd``, ecliptic and equinox of date.

    Raises:
        MissingSeriesError: ``context`` holds no series for ``planet``.
    """
    if context is None:
        context = default_context()
    grid = context.planet_series(planet)
    tau = julian_millennia_since_j2000(jd)
    return LBR(
        in2pi(power_series(grid[Coord.L.value], tau)),
        power_series(grid[Coord.B.value], tau),
        power_series(grid[Coord.R.value], tau),
    )


def rectangular(lbr: LBR) -> Vector3:
    """Ecliptic rectangular coordinates (AU) of heliocentric L, B, R."""
    cos_b = math.cos(lbr.lat)
    return vector(
        lbr.radius * cos_b * math.cos(lbr.lon),
        lbr.radius * cos_b * math.sin(lbr.lon),
        lbr.radius * math.sin(lbr.lat),
    )


def geocentric_ecliptic(
    planet: Planet, jd: float, context: SeriesContext | None = None
) -> EclipticCoords:
    """Geocentric ecliptic longitude and latitude of ``planet``.

    Raises:
        UndefinedPositionError: ``planet`` is the Earth.
        MissingSeriesError: No series for ``planet`` or the Earth.
    """
    if planet is Planet.EARTH:
        raise UndefinedPositionError('the geocentric position of the Earth is undefined')
    if context is None:
        context = default_context()
    x, y, z = rectangular(heliocentric(planet, jd, context)) - rectangular(
        heliocentric(Planet.EARTH, jd, context)
    )
    return EclipticCoords(atan3(y, x), math.atan2(z, math.hypot(x, y)))


def geocentric_position(
    planet: Planet,
    jd: float,
    context: SeriesContext | None = None,
    model: LongTermPrecession | None = None,
) -> Position:
    """Geocentric right ascension and declination of ``planet``, equinox of date."""
    if context is None:
        context = default_context()
    if model is None:
        model = LongTermPrecession(context)
    coords = geocentric_ecliptic(planet, jd, context)
    return coords.to_ra_dec(model.obliquity(jd))
