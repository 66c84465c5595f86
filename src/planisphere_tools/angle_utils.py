"""Angle normalization, unit conversion, and sexagesimal parsing/formatting."""

from __future__ import annotations

import math
import re

from planisphere_tools.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_HOUR_RA,
    TWO_PI,
)


def in2pi(angle: float) -> float:
    """Return ``angle`` (radians) normalized into [0, 2pi).

    Python's modulo can return exactly 2pi for tiny negative inputs; that case
    is folded back to 0 so the result is always strictly below 2pi.
    """
    result = angle % TWO_PI
    if result >= TWO_PI:
        result = 0.0
    return result


def in_pm_pi(angle: float) -> float:
    """Return ``angle`` (radians) normalized into [-pi, pi)."""
    return in2pi(angle + math.pi) - math.pi


def atan3(y: float, x: float) -> float:
    """Arctangent of y/x with the quadrant of (x, y), in [0, 2pi)."""
    return in2pi(math.atan2(y, x))


def arcsec_to_rads(arcsec: float) -> float:
    """Convert arcseconds to radians."""
    return math.radians(arcsec / ARCSEC_PER_DEGREE)


def rads_to_arcsec(rads: float) -> float:
    """Convert radians to arcseconds."""
    return math.degrees(rads) * ARCSEC_PER_DEGREE


def hours_to_rads(hours: float) -> float:
    """Convert hours of right ascension to radians."""
    return math.radians(hours * DEGREES_PER_HOUR_RA)


def rads_to_hours(rads: float) -> float:
    """Convert radians to hours of right ascension."""
    return math.degrees(rads) / DEGREES_PER_HOUR_RA


def right_ascension_to_rads(hours: int, minutes: int, seconds: float) -> float:
    """Right ascension given as h, m, s, in radians."""
    return hours_to_rads(hours + minutes / ARCMIN_PER_DEGREE + seconds / ARCSEC_PER_DEGREE)


def declination_to_rads(sign: int, degrees: int, arcmin: int, arcsec: float) -> float:
    """Declination given as sign and unsigned d, m, s, in radians."""
    value = degrees + arcmin / ARCMIN_PER_DEGREE + arcsec / ARCSEC_PER_DEGREE
    return math.radians(math.copysign(value, sign))


def parse_sexagesimal(string: str) -> float | None:
    """Parse an angle given as one to three numbers (deg/h, min, sec).

    Minutes and seconds must be non-negative; a leading minus sign applies to
    the whole angle, so ``"-0 30"`` is -0.5.

    Parameters:
        string: Whitespace- or colon-separated numbers (e.g. "12 30 45", "-5:30").

    Returns:
        Angle in the units of the first number, or None on parse failure.
    """
    text = string.strip()
    if not text:
        return None
    parts = re.split(r'[\s:]+', text)
    if len(parts) > 3:
        return None
    try:
        values = [float(part) for part in parts]
    except ValueError:
        return None
    if any(v < 0 for v in values[1:]):
        return None
    angle = 0.0
    for i, value in enumerate(values):
        angle += abs(value) / (60.0**i)
    if text.startswith('-'):
        angle = -angle
    return angle


def _sexagesimal_parts(value: float, ndecimal: int) -> tuple[str, int, int, float]:
    """Split |value| into whole units, minutes, and seconds rounded to ``ndecimal``."""
    sign = '-' if value < 0 else '+'
    ntens = 10**ndecimal
    total = round(abs(value) * 3600.0 * ntens)
    whole_secs, frac = divmod(total, ntens)
    minutes, secs = divmod(whole_secs, 60)
    units, minutes = divmod(minutes, 60)
    return sign, units, minutes, secs + frac / ntens


def rads_to_degree_string(rads: float, ndecimal: int = 3) -> str:
    """Format an angle as e.g. ``+2°16'22.200''``."""
    sign, deg, arcmin, arcsec = _sexagesimal_parts(math.degrees(rads), ndecimal)
    return f"{sign}{deg}°{arcmin:02d}'{arcsec:0{ndecimal + 3}.{ndecimal}f}''"


def rads_to_time_string(rads: float, ndecimal: int = 3) -> str:
    """Format an angle as hours of time, e.g. ``+2h16m22.200s``."""
    sign, hours, minutes, seconds = _sexagesimal_parts(rads_to_hours(rads), ndecimal)
    return f'{sign}{hours}h{minutes:02d}m{seconds:0{ndecimal + 3}.{ndecimal}f}s'
