"""Long-term precession of Vondrak, Capitaine & Wallace (2011).

Valid for +/-200,000 years around J2000. Each quantity is a cubic polynomial in
T (Julian centuries from J2000) plus periodic terms; the ecliptic and
equatorial poles built from them give the rotation from the J2000 mean equator
and equinox to the mean equator and equinox of date.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from planisphere_tools.angle_utils import arcsec_to_rads
from planisphere_tools.constants import LONG_TERM_PRECESSION_YEARS
from planisphere_tools.coordinates import Position, position_from_xyz, xyz
from planisphere_tools.errors import check_validity_window
from planisphere_tools.series import precession_data
from planisphere_tools.series.context import PrecessionParam, SeriesContext, default_context
from planisphere_tools.series.terms import periodic_correction
from planisphere_tools.time_utils import julian_centuries_since_j2000, julian_years_since_j2000
from planisphere_tools.vectors import (
    RotationMatrix,
    Vector3,
    cross,
    matrix_from_rows,
    rotate,
    unit,
    vector,
)

MODEL_NAME = 'long-term precession'

_POLYNOMIALS = {
    PrecessionParam.P: precession_data.P_POLYNOMIAL,
    PrecessionParam.Q: precession_data.Q_POLYNOMIAL,
    PrecessionParam.X: precession_data.X_POLYNOMIAL,
    PrecessionParam.Y: precession_data.Y_POLYNOMIAL,
    PrecessionParam.GENERAL_PRECESSION: precession_data.GENERAL_PRECESSION_POLYNOMIAL,
    PrecessionParam.OBLIQUITY: precession_data.OBLIQUITY_POLYNOMIAL,
}

OBLIQUITY_J2000 = arcsec_to_rads(precession_data.OBLIQUITY_J2000_ARCSEC)


def _polynomial(coefficients: Sequence[float], t: float) -> float:
    return sum(c * t**power for power, c in enumerate(coefficients))


class LongTermPrecession:
    """Precession model evaluated against the tables of a SeriesContext.

    Parameters:
        context: Series tables; the bundled default when omitted.
        allow_extended: Compute outside +/-200,000 years (with a
            LowAccuracyWarning) instead of raising ValidityWindowError.
    """

    def __init__(self, context: SeriesContext | None = None, allow_extended: bool = False):
        self.context = context if context is not None else default_context()
        self.allow_extended = allow_extended
        self._terms = {
            param: self.context.precession_terms(param) for param in PrecessionParam
        }

    def _centuries(self, jd: float) -> float:
        check_validity_window(
            MODEL_NAME,
            julian_years_since_j2000(jd),
            LONG_TERM_PRECESSION_YEARS,
            self.allow_extended,
        )
        return julian_centuries_since_j2000(jd)

    def _arcsec(self, param: PrecessionParam, t: float) -> float:
        return _polynomial(_POLYNOMIALS[param], t) + periodic_correction(self._terms[param], t)

    def parameter(self, param: PrecessionParam, jd: float) -> float:
        """Value of one precession quantity at ``jd``, radians."""
        return arcsec_to_rads(self._arcsec(param, self._centuries(jd)))

    def obliquity(self, jd: float) -> float:
        """Mean obliquity of the ecliptic of date, radians."""
        return self.parameter(PrecessionParam.OBLIQUITY, jd)

    def general_precession(self, jd: float) -> float:
        """General precession in longitude from J2000, radians."""
        return self.parameter(PrecessionParam.GENERAL_PRECESSION, jd)

    def ecliptic_pole(self, jd: float) -> Vector3:
        """Unit vector of the ecliptic pole of date in the J2000 equatorial frame."""
        t = self._centuries(jd)
        p = arcsec_to_rads(self._arcsec(PrecessionParam.P, t))
        q = arcsec_to_rads(self._arcsec(PrecessionParam.Q, t))
        z = math.sqrt(max(1.0 - p * p - q * q, 0.0))
        s, c = math.sin(OBLIQUITY_J2000), math.cos(OBLIQUITY_J2000)
        return vector(p, -q * c - z * s, -q * s + z * c)

    def equatorial_pole(self, jd: float) -> Vector3:
        """Unit vector of the mean celestial pole of date in the J2000 equatorial frame."""
        t = self._centuries(jd)
        x = arcsec_to_rads(self._arcsec(PrecessionParam.X, t))
        y = arcsec_to_rads(self._arcsec(PrecessionParam.Y, t))
        w = x * x + y * y
        return vector(x, y, math.sqrt(max(1.0 - w, 0.0)))

    def rotation_matrix(self, jd: float) -> RotationMatrix:
        """Rotation from J2000 mean equator/equinox to the mean equator/equinox of ``jd``.

        The rows are the equinox of date, the vector completing the frame, and
        the equatorial pole of date.
        """
        n = self.equatorial_pole(jd)
        k = self.ecliptic_pole(jd)
        equinox = unit(cross(n, k))
        return matrix_from_rows(equinox, cross(n, equinox), n)

    def apply(self, position: Position, jd: float) -> Position:
        """Precess a J2000 position to the mean equator and equinox of ``jd``."""
        return position_from_xyz(rotate(self.rotation_matrix(jd), xyz(position)))

    def apply_many(self, positions: Sequence[Position], jd: float) -> list[Position]:
        """Precess several J2000 positions with one rotation matrix."""
        matrix = self.rotation_matrix(jd)
        if not positions:
            return []
        vectors = np.vstack([xyz(p) for p in positions]) @ matrix.T
        return [position_from_xyz(v) for v in vectors]
