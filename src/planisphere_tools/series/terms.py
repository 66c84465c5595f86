"""Periodic-series evaluation shared by precession, the Moon, and the planets.

Three term families are summed here:

- VSOP87 terms ``A * cos(B + C * tau)`` in radians (or AU), tau in Julian
  millennia, grouped by power of tau;
- precession terms ``C * cos(2 pi T / P) + S * sin(2 pi T / P)`` in
  arcseconds, T in Julian centuries, P the period in centuries;
- lunar terms: integer multipliers of four fundamental angles with an
  amplitude, corrected for the secular decrease of the Earth's eccentricity.

Tables are read-only float ndarrays, one row per term. Every function is pure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from planisphere_tools.constants import TWO_PI

TermTable = NDArray[np.float64]


def term_table(rows: Iterable[Sequence[float]], width: int = 3) -> TermTable:
    """Build a read-only table of ``width`` columns from rows of numbers.

    Raises:
        ValueError: If a row has the wrong number of fields.
    """
    table = np.array([tuple(row) for row in rows], dtype=float)
    if table.size == 0:
        table = np.zeros((0, width), dtype=float)
    if table.ndim != 2 or table.shape[1] != width:
        raise ValueError(f'term rows must have {width} fields, got shape {table.shape}')
    table.setflags(write=False)
    return table


def sum_terms(table: TermTable, tau: float) -> float:
    """Sum ``A * cos(B + C * tau)`` over the rows (A, B, C) of ``table``."""
    if len(table) == 0:
        return 0.0
    amplitude, phase, frequency = table[:, 0], table[:, 1], table[:, 2]
    return float(np.sum(amplitude * np.cos(phase + frequency * tau)))


def power_series(tables: Sequence[TermTable | None], tau: float) -> float:
    """Sum ``sum_terms(tables[p], tau) * tau**p`` over the powers present.

    Parameters:
        tables: Tables indexed by power of tau; ``None`` marks an absent power.
        tau: Independent variable (Julian millennia for VSOP87).
    """
    result = 0.0
    for power, table in enumerate(tables):
        if table is None:
            continue
        result += sum_terms(table, tau) * tau**power
    return result


def periodic_correction(table: TermTable, t: float) -> float:
    """Sum ``C * cos(2 pi t / P) + S * sin(2 pi t / P)`` over rows (P, C, S)."""
    if len(table) == 0:
        return 0.0
    period, cos_amp, sin_amp = table[:, 0], table[:, 1], table[:, 2]
    angle = TWO_PI * t / period
    return float(np.sum(cos_amp * np.cos(angle) + sin_amp * np.sin(angle)))


def sum_lunar_terms(
    table: TermTable,
    d: float,
    m: float,
    mp: float,
    f: float,
    e: float,
    trig: Callable[[NDArray[np.float64]], NDArray[np.float64]] = np.sin,
) -> float:
    """Sum lunar terms over rows (D, M, M', F, amplitude).

    Parameters:
        table: Multipliers of the four fundamental angles, then the amplitude.
        d, m, mp, f: Mean elongation, Sun's mean anomaly, Moon's mean anomaly,
            and the Moon's argument of latitude, radians.
        e: Eccentricity factor; terms with |M| = 1 are scaled by ``e`` and
            terms with |M| = 2 by ``e**2``.
        trig: ``np.sin`` (longitude, latitude) or ``np.cos`` (distance).
    """
    if len(table) == 0:
        return 0.0
    mult_d, mult_m, mult_mp, mult_f, amplitude = table.T
    argument = mult_d * d + mult_m * m + mult_mp * mp + mult_f * f
    correction = np.power(e, np.abs(mult_m))
    return float(np.sum(amplitude * correction * trig(argument)))
