"""Bright-star catalog (Hipparcos-derived): reading, propagation to a date, lookups.

Catalog positions are at the J1991.25 epoch and on the J2000 mean equator and
equinox. Deriving a star for a chart date applies proper motion first (from
J1991.25) and precession second (from J2000).
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from planisphere_tools.angle_utils import arcsec_to_rads, rads_to_degree_string
from planisphere_tools.config import get_star_catalog_path, get_star_names_path
from planisphere_tools.constants import FAST_STAR_ARCSEC, J1991_25, POLARIS_INDEX
from planisphere_tools.coordinates import Position
from planisphere_tools.precession.long_term import LongTermPrecession
from planisphere_tools.proper_motion import apply_proper_motion

logger = logging.getLogger(__name__)

MILLIARCSEC_PER_ARCSEC = 1000.0
BRIGHTEST_MAGNITUDE = -5.0
TOP_MOVERS_LOGGED = 25


@dataclass(frozen=True)
class Star:
    """One catalog star.

    Attributes:
        index: Catalog index (Hipparcos number).
        name: Bayer designation if any, else Flamsteed (e.g. 'α Lyr', '61 Cyg');
            may be empty.
        magnitude: Visual magnitude.
        ra, dec: Position, radians.
        pm_ra: Proper motion in RA times cos(dec), arcsec per year.
        pm_dec: Proper motion in Dec, arcsec per year.
        parallax: Arcseconds, or None when missing or not positive.
        radial_velocity: km/s, or None when missing.
        hd: Henry Draper number as text; may be empty.
        proper_name: e.g. 'Vega'; may be empty.
    """

    index: int
    name: str
    magnitude: float
    ra: float
    dec: float
    pm_ra: float = 0.0
    pm_dec: float = 0.0
    parallax: float | None = None
    radial_velocity: float | None = None
    hd: str = ''
    proper_name: str = ''

    @property
    def position(self) -> Position:
        return Position(self.ra, self.dec)

    @property
    def bayer(self) -> str:
        """Greek letter part of the designation (with any digit), '' for Flamsteed numbers."""
        name = self.name.strip()
        if not name or name[0].isdigit():
            return ''
        return name.split(' ')[0]

    @property
    def constellation_abbr(self) -> str:
        """Constellation abbreviation, e.g. 'Peg'; '' if unknown."""
        parts = self.name.strip().split(' ', 1)
        return parts[1].strip() if len(parts) == 2 else ''


def _slice(line: str, start: int, length: int) -> str:
    """Field of ``line`` by 1-based start column and width, stripped."""
    return line[start - 1 : start - 1 + length].strip()


def _float_field(line: str, start: int, length: int, line_number: int, label: str) -> float:
    text = _slice(line, start, length)
    try:
        return float(text)
    except ValueError as e:
        raise ValueError(f'line {line_number}: bad {label} {text!r}') from e


def _optional_float(
    line: str, start: int, length: int, line_number: int, label: str
) -> float | None:
    if not _slice(line, start, length):
        return None
    return _float_field(line, start, length, line_number, label)


def parse_catalog_line(line: str, line_number: int = 0) -> Star:
    """Build a Star from one fixed-width catalog line.

    Raises:
        ValueError: A required numeric field is missing or malformed.
    """
    index_text = _slice(line, 1, 6)
    try:
        index = int(index_text)
    except ValueError as e:
        raise ValueError(f'line {line_number}: bad index {index_text!r}') from e
    name = _slice(line, 201, 7) or _slice(line, 209, 7)
    parallax_mas = _optional_float(line, 73, 7, line_number, 'parallax')
    parallax = None
    if parallax_mas is not None and parallax_mas > 0:
        parallax = parallax_mas / MILLIARCSEC_PER_ARCSEC
    return Star(
        index=index,
        name=name,
        magnitude=_float_field(line, 148, 5, line_number, 'magnitude'),
        ra=_float_field(line, 45, 12, line_number, 'right ascension'),
        dec=_float_field(line, 59, 13, line_number, 'declination'),
        pm_ra=_float_field(line, 81, 8, line_number, 'proper motion in RA')
        / MILLIARCSEC_PER_ARCSEC,
        pm_dec=_float_field(line, 90, 8, line_number, 'proper motion in Dec')
        / MILLIARCSEC_PER_ARCSEC,
        parallax=parallax,
        radial_velocity=_optional_float(line, 99, 7, line_number, 'radial velocity'),
        hd=_slice(line, 189, 6),
    )


def read_catalog(path: str | Path) -> list[Star]:
    """Read the fixed-width star catalog at ``path`` (blank lines ignored)."""
    path = Path(path)
    stars = []
    with path.open(encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            stars.append(parse_catalog_line(line.rstrip('\n'), line_number))
    logger.info('Read %d stars from %s', len(stars), path)
    return stars


def read_proper_names(path: str | Path) -> dict[str, str]:
    """Read ``designation,proper name`` lines, e.g. ``α Lyr,Vega``.

    Lines that are blank or start with '#' are skipped.

    Raises:
        ValueError: A line has no comma.
    """
    path = Path(path)
    names: dict[str, str] = {}
    with path.open(encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith('#'):
                continue
            designation, sep, proper = text.partition(',')
            if not sep:
                raise ValueError(f'{path}:{line_number}: expected "designation,name"')
            names[' '.join(designation.split())] = proper.strip()
    return names


def add_proper_names(stars: Iterable[Star], names: dict[str, str]) -> list[Star]:
    """Attach proper names to stars whose designation is in ``names``."""
    result = []
    count = 0
    for star in stars:
        proper = names.get(' '.join(star.name.split()), '') if star.name else ''
        if proper:
            count += 1
            star = dataclasses.replace(star, proper_name=proper)
        result.append(star)
    logger.info('Added %d proper names to stars', count)
    return result


def apply_precession(star: Star, jd: float, model: LongTermPrecession) -> Star:
    """Precess ``star`` from J2000 to the mean equator and equinox of ``jd``."""
    position = model.apply(star.position, jd)
    return dataclasses.replace(star, ra=position.ra, dec=position.dec)


def derive(
    star: Star,
    jd: float,
    model: LongTermPrecession,
    catalog_epoch: float = J1991_25,
) -> tuple[Star, float]:
    """Star at ``jd``: proper motion from the catalog epoch, then precession.

    Returns:
        The derived star, and its proper motion over the interval in arcsec.
    """
    moved, arcsec = apply_proper_motion(star, catalog_epoch, jd)
    return apply_precession(moved, jd, model), arcsec


class StarCatalog:
    """Immutable collection of stars with lookups.

    Parameters:
        stars: Catalog stars.
        discard_polaris: Drop the Polaris record (for charts that draw the pole
            separately).
    """

    def __init__(self, stars: Iterable[Star], discard_polaris: bool = False) -> None:
        kept = []
        for star in stars:
            if discard_polaris and star.index == POLARIS_INDEX:
                logger.info('Discarding Polaris (index %d) from the star catalog', POLARIS_INDEX)
                continue
            kept.append(star)
        self._stars = tuple(kept)

    def __len__(self) -> int:
        return len(self._stars)

    def __iter__(self) -> Iterator[Star]:
        return iter(self._stars)

    @property
    def stars(self) -> tuple[Star, ...]:
        return self._stars

    def for_date(self, jd: float, model: LongTermPrecession | None = None) -> StarCatalog:
        """Catalog of stars derived for ``jd`` (proper motion, then precession)."""
        if model is None:
            model = LongTermPrecession()
        logger.info('Applying proper motion from JD %.4f and precession to JD %.4f', J1991_25, jd)
        derived = []
        motions = []
        for star in self._stars:
            new_star, arcsec = derive(star, jd, model)
            derived.append(new_star)
            motions.append((arcsec, star))
        self._log_motion_stats(motions)
        return StarCatalog(derived)

    @staticmethod
    def _log_motion_stats(motions: list[tuple[float, Star]]) -> None:
        if not motions:
            return
        motions.sort(key=lambda item: item[0], reverse=True)
        max_arcsec, fastest = motions[0]
        fast = sum(1 for arcsec, _star in motions if arcsec > FAST_STAR_ARCSEC)
        logger.info(
            'Max proper motion %s: %s mag %.2f HD %s',
            rads_to_degree_string(arcsec_to_rads(max_arcsec)),
            fastest.name or fastest.index,
            fastest.magnitude,
            fastest.hd,
        )
        logger.info('Stars whose proper motion exceeded 1 degree: %d', fast)
        for arcsec, star in motions[:TOP_MOVERS_LOGGED]:
            logger.debug(
                '  %s %s mag %.2f HD %s',
                rads_to_degree_string(arcsec_to_rads(arcsec)),
                star.name or star.index,
                star.magnitude,
                star.hd,
            )

    def filter_by_mag(self, limit: float) -> list[Star]:
        """Stars with magnitude in [-5, limit]."""
        return [s for s in self._stars if BRIGHTEST_MAGNITUDE <= s.magnitude <= limit]

    def find_by_name(self, designation: str) -> Star | None:
        """Star with the given Bayer/Flamsteed designation (case-insensitive)."""
        wanted = designation.strip().casefold()
        return next((s for s in self._stars if s.name.casefold() == wanted), None)

    def find_by_proper_name(self, name: str) -> Star | None:
        wanted = name.strip().casefold()
        return next((s for s in self._stars if s.proper_name.casefold() == wanted), None)

    def find_by_index(self, index: int) -> Star | None:
        return next((s for s in self._stars if s.index == index), None)

    def missing_counts(self) -> dict[str, int]:
        """Number of stars missing parallax, radial velocity and HD number."""
        counts = {
            'parallax': sum(1 for s in self._stars if s.parallax is None),
            'radial_velocity': sum(1 for s in self._stars if s.radial_velocity is None),
            'hd': sum(1 for s in self._stars if not s.hd),
        }
        logger.info(
            'Stars missing parallax: %d, radial velocity: %d, HD: %d',
            counts['parallax'],
            counts['radial_velocity'],
            counts['hd'],
        )
        return counts


def load_catalog(
    catalog_path: str | Path | None = None,
    names_path: str | Path | None = None,
    discard_polaris: bool = False,
) -> StarCatalog:
    """Read the catalog and, when the file exists, its proper names.

    Paths default to the configured catalog and proper-name files.
    """
    if catalog_path is None:
        catalog_path = get_star_catalog_path()
    if names_path is None:
        names_path = get_star_names_path()
    stars = read_catalog(catalog_path)
    if Path(names_path).is_file():
        stars = add_proper_names(stars, read_proper_names(names_path))
    return StarCatalog(stars, discard_polaris=discard_polaris)
