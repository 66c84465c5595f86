"""Celestial computations for printing planispheres.

This package computes the positions of stars, Sun, Moon and planets over spans
of millennia and projects them onto a chart:
- Calendar: Julian dates for proleptic Gregorian and Julian dates of any year
- Precession: long-term model (Vondrak et al. 2011), nutation, short-term models
- Stars: Hipparcos-derived catalog with 2D/3D proper motion
- Bodies: VSOP87D planets and Sun, ELP2000-82 Moon
- Charts: meridian transits, sidereal date scale, stereographic projection

Spherical conversions use cspyce; civil-day iteration uses rms-julian.
"""

__all__: list[str] = []
