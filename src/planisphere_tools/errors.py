"""Exception and warning types raised by the computation core.

Two failure kinds are kept apart: a refusal to compute (the answer is undefined)
and a computed but low-confidence result (outside a model's validity window).
"""

from __future__ import annotations

import logging
import warnings

logger = logging.getLogger(__name__)


class UndefinedPositionError(ValueError):
    """Raised when a requested position is undefined, e.g. the Earth seen from the Earth."""


class ValidityWindowError(ValueError):
    """Raised for a query outside a model's validity window that was not acknowledged."""

    def __init__(self, model: str, years: float, limit_years: float) -> None:
        super().__init__(
            f'{model}: {years:+.1f} years from J2000 is outside the validity window '
            f'of +/-{limit_years:,.0f} years'
        )
        self.model = model
        self.years = years
        self.limit_years = limit_years


class LowAccuracyWarning(UserWarning):
    """Issued when a result was computed outside the window where its model is reliable."""


class MissingSeriesError(KeyError):
    """Raised when a series context holds no periodic terms for the requested body."""


def check_validity_window(
    model: str,
    years: float,
    limit_years: float,
    allow_extended: bool,
) -> None:
    """Refuse, or flag as low-confidence, a query outside a model's validity window.

    Parameters:
        model: Model name used in messages.
        years: Julian years from J2000 of the query.
        limit_years: Half-width of the validity window, in years.
        allow_extended: True if the caller accepts reduced accuracy.

    Raises:
        ValidityWindowError: Outside the window and ``allow_extended`` is False.
    """
    if abs(years) <= limit_years:
        return
    if not allow_extended:
        raise ValidityWindowError(model, years, limit_years)
    logger.warning(
        '%s: %+.1f years from J2000 is outside +/-%.0f years; accuracy is reduced',
        model,
        years,
        limit_years,
    )
    warnings.warn(
        f'{model} evaluated {years:+.1f} years from J2000, outside its validity window',
        LowAccuracyWarning,
        stacklevel=3,
    )
