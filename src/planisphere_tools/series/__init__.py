"""Periodic-series tables and their evaluators."""

from planisphere_tools.series.context import (
    Coord,
    Planet,
    PrecessionParam,
    SeriesContext,
    default_context,
)

__all__ = ['Coord', 'Planet', 'PrecessionParam', 'SeriesContext', 'default_context']
