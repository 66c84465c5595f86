"""Equatorial and ecliptic coordinates, spherical/rectangular conversion, separations."""

from __future__ import annotations

import math
from dataclasses import dataclass

import cspyce
import numpy as np

from planisphere_tools.angle_utils import (
    atan3,
    in2pi,
    rads_to_degree_string,
    rads_to_time_string,
)
from planisphere_tools.constants import TWO_PI
from planisphere_tools.vectors import Vector3


@dataclass(frozen=True)
class Position:
    """Equatorial position: right ascension in [0, 2pi) and declination, radians.

    The right ascension is normalized on construction.
    """

    ra: float
    dec: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'ra', in2pi(self.ra))

    def __str__(self) -> str:
        return f'RA {rads_to_time_string(self.ra)} Dec {rads_to_degree_string(self.dec)}'


@dataclass(frozen=True)
class EclipticCoords:
    """Ecliptic longitude in [0, 2pi) and latitude, radians, referred to some date."""

    lon: float
    lat: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'lon', in2pi(self.lon))

    def to_ra_dec(self, obliquity: float) -> Position:
        """Equatorial position for the given obliquity of the ecliptic (radians)."""
        return ecliptic_to_equatorial(self, obliquity)


def xyz(position: Position, distance: float = 1.0) -> Vector3:
    """Rectangular coordinates of ``position`` at ``distance``."""
    return np.array(cspyce.radrec(distance, position.ra, position.dec), dtype=float)


def position_from_xyz(v: Vector3) -> Position:
    """Direction of a rectangular vector as an equatorial position."""
    _rng, ra, dec = cspyce.recrad(np.asarray(v, dtype=float))
    return Position(ra, dec)


def ecliptic_to_equatorial(coords: EclipticCoords, obliquity: float) -> Position:
    """Rotate ecliptic longitude/latitude into right ascension/declination."""
    lon, lat = coords.lon, coords.lat
    sin_eps, cos_eps = math.sin(obliquity), math.cos(obliquity)
    dec = math.asin(math.sin(lat) * cos_eps + math.cos(lat) * sin_eps * math.sin(lon))
    ra = atan3(math.sin(lon) * cos_eps - math.tan(lat) * sin_eps, math.cos(lon))
    return Position(ra, dec)


def equatorial_to_ecliptic(position: Position, obliquity: float) -> EclipticCoords:
    """Rotate right ascension/declination into ecliptic longitude/latitude."""
    ra, dec = position.ra, position.dec
    sin_eps, cos_eps = math.sin(obliquity), math.cos(obliquity)
    lat = math.asin(math.sin(dec) * cos_eps - math.cos(dec) * sin_eps * math.sin(ra))
    lon = atan3(math.sin(ra) * cos_eps + math.tan(dec) * sin_eps, math.cos(ra))
    return EclipticCoords(lon, lat)


def _hav(theta: float) -> float:
    return math.sin(theta / 2.0) ** 2


def angular_separation(a: Position, b: Position) -> float:
    """Angle between two positions in [0, pi], radians.

    Uses the haversine form, which keeps precision for small separations.
    """
    havd = _hav(b.dec - a.dec) + math.cos(a.dec) * math.cos(b.dec) * _hav(b.ra - a.ra)
    havd = min(max(havd, 0.0), 1.0)
    return 2.0 * math.asin(math.sqrt(havd))


def hour_angle(local_sidereal_time: float, ra: float) -> float:
    """Local hour angle in [0, 2pi)."""
    return in2pi(local_sidereal_time - ra)


def equatorial_from_alt_az(
    altitude: float,
    azimuth: float,
    latitude: float,
    local_sidereal_time: float,
) -> Position:
    """Equatorial position of a point given by altitude and azimuth (radians).

    Azimuth is measured from the north through the east.
    """
    sin_dec = math.sin(altitude) * math.sin(latitude) + math.cos(altitude) * math.cos(
        azimuth
    ) * math.cos(latitude)
    dec = math.asin(min(max(sin_dec, -1.0), 1.0))
    denom = math.cos(latitude) * math.cos(dec)
    if denom == 0.0:
        # At a pole of the sphere or of the observer every hour angle is equivalent.
        return Position(local_sidereal_time, dec)
    cos_h = (math.sin(altitude) - math.sin(latitude) * math.sin(dec)) / denom
    h = math.acos(min(max(cos_h, -1.0), 1.0))
    if math.sin(azimuth) >= 0:
        # Eastern half of the sky: negative hour angle.
        h = TWO_PI - h
    return Position(local_sidereal_time - h, dec)
