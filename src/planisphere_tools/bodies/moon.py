"""The Moon: position from the abridged ELP2000-82 series, orbit outline, phase.

Longitude and latitude follow Meeus, Astronomical Algorithms ch. 47, including
the additive terms for the action of Venus (A1), Jupiter (A2) and the flattening
of the Earth (A3). The distance series is not used.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from planisphere_tools.angle_utils import in2pi
from planisphere_tools.bodies.sun import apparent_longitude
from planisphere_tools.constants import DEGREES_PER_CIRCLE, HALF_PI
from planisphere_tools.coordinates import EclipticCoords, Position
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.series import moon_data
from planisphere_tools.series.context import SeriesContext, default_context
from planisphere_tools.series.terms import sum_lunar_terms
from planisphere_tools.time_utils import julian_centuries_since_j2000

# Mean inclination of the lunar orbit on the ecliptic (Explanatory Supplement 1961)
INCLINATION = math.radians(5.1454)

# Mean ascending node, degrees (Meeus 1991 p. 313): T**0 .. T**4
_NODE = (125.044555, -1934.1361849, 0.0020762, 1.0 / 467410, -1.0 / 60616000)


def _degrees(coefficients: Sequence[float], t: float) -> float:
    """Polynomial in ``t`` reduced to [0, 360) degrees."""
    return sum(c * t**power for power, c in enumerate(coefficients)) % DEGREES_PER_CIRCLE


def _linear(coefficients: tuple[float, float], t: float) -> float:
    return math.radians((coefficients[0] + coefficients[1] * t) % DEGREES_PER_CIRCLE)


def moon_ecliptic(jd: float, context: SeriesContext | None = None) -> EclipticCoords:
    """Geocentric ecliptic longitude and latitude of the Moon, mean equinox of date."""
    if context is None:
        context = default_context()
    t = julian_centuries_since_j2000(jd)
    lp = math.radians(_degrees(moon_data.MEAN_LONGITUDE, t))
    d = math.radians(_degrees(moon_data.MEAN_ELONGATION, t))
    m = math.radians(_degrees(moon_data.SUN_MEAN_ANOMALY, t))
    mp = math.radians(_degrees(moon_data.MOON_MEAN_ANOMALY, t))
    f = math.radians(_degrees(moon_data.ARGUMENT_OF_LATITUDE, t))
    a1 = _linear(moon_data.A1, t)
    a2 = _linear(moon_data.A2, t)
    a3 = _linear(moon_data.A3, t)
    e = 1.0 + moon_data.ECCENTRICITY[0] * t + moon_data.ECCENTRICITY[1] * t * t

    sum_l = sum_lunar_terms(context.moon_longitude, d, m, mp, f, e)
    sum_l += 3958 * math.sin(a1) + 1962 * math.sin(lp - f) + 318 * math.sin(a2)

    sum_b = sum_lunar_terms(context.moon_latitude, d, m, mp, f, e)
    sum_b += (
        -2235 * math.sin(lp)
        + 382 * math.sin(a3)
        + 175 * math.sin(a1 - f)
        + 175 * math.sin(a1 + f)
        + 127 * math.sin(lp - mp)
        - 115 * math.sin(lp + mp)
    )

    unit = moon_data.AMPLITUDE_UNIT_DEGREES
    lon = lp + math.radians(sum_l * unit)
    lat = math.radians(sum_b * unit)
    return EclipticCoords(in2pi(lon), lat)


def moon_position(
    jd: float,
    context: SeriesContext | None = None,
    model: LongTermPrecession | None = None,
) -> Position:
    """Geocentric right ascension and declination of the Moon, mean equinox of date."""
    if context is None:
        context = default_context()
    if model is None:
        model = LongTermPrecession(context)
    return moon_ecliptic(jd, context).to_ra_dec(model.obliquity(jd))


class Place(Enum):
    """Points of the lunar orbit that fix its circle on the sky."""

    ASCENDING_NODE = 'ascending node'
    DESCENDING_NODE = 'descending node'
    HIGHEST_POINT = 'highest point'  # 90 degrees past the ascending node


class LunarOrbit:
    """Mean plane of the Moon's orbit at ``jd``.

    The node regresses by about 20 degrees a year, so a chart can only show the
    orbit for one date.
    """

    def __init__(self, jd: float) -> None:
        t = julian_centuries_since_j2000(jd)
        self.jd = jd
        self.node = in2pi(math.radians(_degrees(_NODE, t)))
        self.inclination = INCLINATION

    def ecliptic_coords(self, place: Place) -> EclipticCoords:
        if place is Place.ASCENDING_NODE:
            return EclipticCoords(self.node, 0.0)
        if place is Place.DESCENDING_NODE:
            return EclipticCoords(self.node + math.pi, 0.0)
        return EclipticCoords(self.node + HALF_PI, self.inclination)

    def places(self) -> dict[Place, EclipticCoords]:
        return {place: self.ecliptic_coords(place) for place in Place}


def fraction_illuminated(jd: float, context: SeriesContext | None = None) -> float:
    """Illuminated fraction of the Moon's disk in [0, 1], rounded to 2 decimals.

    The Sun is taken at infinite distance; the error stays below 0.0014.
    """
    moon = moon_ecliptic(jd, context)
    sun_lon = apparent_longitude(jd, context)
    elongation = math.acos(math.cos(moon.lat) * math.cos(moon.lon - sun_lon))
    phase_angle = math.pi - elongation
    fraction = min((1.0 + math.cos(phase_angle)) / 2.0, 1.0)
    return math.floor(fraction * 100.0 + 0.5) / 100.0
