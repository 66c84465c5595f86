"""Precession and nutation models."""

from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.precession.nutation import Nutation, nutation

__all__ = ['LongTermPrecession', 'Nutation', 'nutation']
