"""Short-term precession and obliquity models, kept for comparison with the long-term model.

All are polynomials in time from J2000 and are valid for about +/-10,000 years.
"""

from __future__ import annotations

import math

from planisphere_tools.angle_utils import arcsec_to_rads, in2pi
from planisphere_tools.constants import SHORT_TERM_PRECESSION_YEARS
from planisphere_tools.coordinates import Position
from planisphere_tools.errors import check_validity_window
from planisphere_tools.time_utils import julian_centuries_since_j2000, julian_years_since_j2000

# Laskar's series is in units of 10,000 years and holds slightly past its nominal range.
LASKAR_LIMIT_YEARS = 1.01 * SHORT_TERM_PRECESSION_YEARS

_LASKAR_OBLIQUITY = (
    84381.448, -4680.93, -1.55, 1999.25, -51.38, -249.67, -39.05, 7.12, 27.87, 5.79, 2.45,
)
_LIESKE_OBLIQUITY = (84381.448, -46.815, -0.00059, 0.001813)
_CAPITAINE_OBLIQUITY = (84381.406, -46.836769, -0.0001831, 0.00200340, -0.000000576, -0.0000000434)
_CAPITAINE_ZETA = (2.650545, 2306.083227, 0.2988499, 0.01801828, -0.000005971, -0.0000003173)
_CAPITAINE_Z = (-2.650545, 2306.077181, 1.0927348, 0.01826837, -0.000028596, -0.0000002904)
_CAPITAINE_THETA = (0.0, 2004.191903, -0.4294934, -0.04182264, -0.000007089, -0.0000001274)

# Below this |dec| the precessed declination comes from asin; above, from acos.
_NEAR_POLE_DEC = math.radians(85.0)


def _arcsec_polynomial(coefficients: tuple[float, ...], t: float) -> float:
    return arcsec_to_rads(sum(c * t**power for power, c in enumerate(coefficients)))


def _centuries(model: str, jd: float, limit_years: float, allow_extended: bool) -> float:
    check_validity_window(model, julian_years_since_j2000(jd), limit_years, allow_extended)
    return julian_centuries_since_j2000(jd)


def laskar_obliquity(jd: float, allow_extended: bool = False) -> float:
    """Mean obliquity of Laskar (1986), radians."""
    t = _centuries('Laskar obliquity', jd, LASKAR_LIMIT_YEARS, allow_extended)
    return _arcsec_polynomial(_LASKAR_OBLIQUITY, t / 100.0)


def lieske_obliquity(jd: float, allow_extended: bool = False) -> float:
    """Mean obliquity of Lieske et al. (1977), radians."""
    t = _centuries('Lieske obliquity', jd, SHORT_TERM_PRECESSION_YEARS, allow_extended)
    return _arcsec_polynomial(_LIESKE_OBLIQUITY, t)


def capitaine_obliquity(jd: float, allow_extended: bool = False) -> float:
    """Mean obliquity of Capitaine et al. (2003), radians."""
    t = _centuries('Capitaine obliquity', jd, SHORT_TERM_PRECESSION_YEARS, allow_extended)
    return _arcsec_polynomial(_CAPITAINE_OBLIQUITY, t)


def capitaine_angles(jd: float, allow_extended: bool = False) -> tuple[float, float, float]:
    """Precession angles (zeta, z, theta) from J2000 to ``jd``, radians (Capitaine 2003)."""
    t = _centuries('Capitaine precession', jd, SHORT_TERM_PRECESSION_YEARS, allow_extended)
    return (
        _arcsec_polynomial(_CAPITAINE_ZETA, t),
        _arcsec_polynomial(_CAPITAINE_Z, t),
        _arcsec_polynomial(_CAPITAINE_THETA, t),
    )


def apply_capitaine_precession(
    position: Position, jd: float, allow_extended: bool = False
) -> Position:
    """Precess a J2000 position to the mean equator and equinox of ``jd``.

    Near the pole the declination comes from the arccosine of the projected
    length, clamped to 1.
    """
    zeta, z, theta = capitaine_angles(jd, allow_extended)
    ra, dec = position.ra, position.dec
    a = math.cos(dec) * math.sin(ra + zeta)
    b = math.cos(theta) * math.cos(dec) * math.cos(ra + zeta) - math.sin(theta) * math.sin(dec)
    c = math.sin(theta) * math.cos(dec) * math.cos(ra + zeta) + math.cos(theta) * math.sin(dec)
    new_ra = in2pi(math.atan2(a, b) + z)
    if abs(dec) < _NEAR_POLE_DEC:
        new_dec = math.asin(max(-1.0, min(1.0, c)))
    else:
        new_dec = math.copysign(math.acos(min(1.0, math.hypot(a, b))), c)
    return Position(new_ra, new_dec)
