"""Hemisphere-aware stereographic projection of the sky onto the chart plane.

The visible pole projects to the chart center; declination circles become
concentric circles. Southern charts are mirrored in x so that right ascension
increases the same way on the sky as seen by the observer. Every circle on the
sphere projects to a circle, so three projected points fix the image of the
equator, the ecliptic, or the Moon's orbit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from planisphere_tools.constants import NORTHERN_CHART_MIN_DEC


@dataclass(frozen=True)
class Bounds:
    """Declination (degrees) and right ascension (hours) window of a chart."""

    min_dec: float
    max_dec: float
    min_ra: float = 0.0
    max_ra: float = 24.0

    def __post_init__(self) -> None:
        if self.min_dec > self.max_dec:
            raise ValueError(
                f'min_dec {self.min_dec!r} is greater than max_dec {self.max_dec!r}'
            )

    @property
    def is_northern(self) -> bool:
        return self.max_dec >= NORTHERN_CHART_MIN_DEC

    @property
    def hemisphere_sign(self) -> int:
        return 1 if self.is_northern else -1

    @property
    def declination_limit(self) -> float:
        """Declination (degrees) of the chart edge farthest from the pole."""
        return self.min_dec if self.is_northern else self.max_dec


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


class StereographicProjection:
    """Projection of a hemisphere chart of the given radius around ``center``.

    The declination limit of ``bounds`` lands on the outer circle of radius
    ``radius``.
    """

    def __init__(self, bounds: Bounds, radius: float, center: Point) -> None:
        if radius <= 0:
            raise ValueError(f'radius must be positive, got {radius!r}')
        self.bounds = bounds
        self.radius = radius
        self.center = center
        self.sign = bounds.hemisphere_sign
        self.scale = radius / self._polar_factor(math.radians(bounds.declination_limit))

    def _polar_factor(self, dec: float) -> float:
        return math.tan(math.pi / 4.0 - self.sign * dec / 2.0)

    def distance_from_center(self, dec: float) -> float:
        """Radius on the chart of the declination circle ``dec`` (radians)."""
        return self.scale * self._polar_factor(dec)

    def project(self, dec: float, ra: float) -> Point:
        """Chart point of a sky position given in radians."""
        r = self.distance_from_center(dec)
        return Point(
            self.center.x + self.sign * r * math.cos(ra),
            self.center.y + r * math.sin(ra),
        )

    def inner_boundary(self) -> Circle:
        """Outer edge of the sky disc: the declination-limit circle."""
        return Circle(self.center, self.radius)


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def center_for(a: Point, b: Point, c: Point) -> Point:
    """Center of the circle through three points.

    Raises:
        ValueError: If the points are collinear.
    """
    d = 2.0 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if d == 0.0:
        raise ValueError(f'points {a}, {b}, {c} are collinear')
    a2 = a.x * a.x + a.y * a.y
    b2 = b.x * b.x + b.y * b.y
    c2 = c.x * c.x + c.y * c.y
    x = (a2 * (b.y - c.y) + b2 * (c.y - a.y) + c2 * (a.y - b.y)) / d
    y = (a2 * (c.x - b.x) + b2 * (a.x - c.x) + c2 * (b.x - a.x)) / d
    return Point(x, y)


def circle_through(a: Point, b: Point, c: Point) -> Circle:
    """Circle through three non-collinear points."""
    center = center_for(a, b, c)
    return Circle(center, distance(center, a))
