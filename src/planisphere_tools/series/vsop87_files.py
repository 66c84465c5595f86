"""Reader for the published VSOP87D planet files (``VSOP87D.mer`` ... ``VSOP87D.sat``).

Each file holds up to 18 blocks, one per coordinate (L, B, R) and power of tau
(0-5). A block starts with a header line such as::

     VSOP87 VERSION D4    EARTH     VARIABLE 1 (LBR)       *T**0    559 TERMS ...

followed by one line per term whose last three fields are A (radians or AU),
B (radians) and C (radians per Julian millennium).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from planisphere_tools.series.terms import TermTable, term_table

logger = logging.getLogger(__name__)

NUM_COORDS = 3
NUM_POWERS = 6

# Indexed [coord][power]; coord 0 = L, 1 = B, 2 = R. None marks an absent table.
SeriesGrid = tuple[tuple[TermTable | None, ...], ...]

_HEADER_MARK = ' VSOP87'
_VARIABLE_RE = re.compile(r'VARIABLE\s+(\d)')
_POWER_RE = re.compile(r'\*T\*\*(\d)')


def _parse_header(line: str, line_number: int) -> tuple[int, int]:
    variable = _VARIABLE_RE.search(line)
    power = _POWER_RE.search(line)
    if variable is None or power is None:
        raise ValueError(f'line {line_number}: malformed VSOP87 header {line.strip()!r}')
    coord = int(variable.group(1)) - 1
    p = int(power.group(1))
    if not 0 <= coord < NUM_COORDS or not 0 <= p < NUM_POWERS:
        raise ValueError(
            f'line {line_number}: coordinate {coord + 1} or power {p} out of range'
        )
    return coord, p


def _parse_term(line: str, line_number: int) -> tuple[float, float, float]:
    fields = line.split()
    if len(fields) < 3:
        raise ValueError(f'line {line_number}: expected A, B, C fields, got {line.strip()!r}')
    try:
        a, b, c = (float(field) for field in fields[-3:])
    except ValueError as e:
        raise ValueError(f'line {line_number}: bad numeric field in {line.strip()!r}') from e
    return a, b, c


def parse_vsop87(lines: list[str]) -> SeriesGrid:
    """Parse the lines of a VSOP87D file into a coordinate x power grid.

    Raises:
        ValueError: A header or numeric field is malformed, or a term line
            precedes every header.
    """
    rows: list[list[list[tuple[float, float, float]] | None]] = [
        [None] * NUM_POWERS for _ in range(NUM_COORDS)
    ]
    current: list[tuple[float, float, float]] | None = None
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        if _HEADER_MARK in line:
            coord, power = _parse_header(line, line_number)
            current = []
            rows[coord][power] = current
            continue
        if current is None:
            raise ValueError(f'line {line_number}: term line before any VSOP87 header')
        current.append(_parse_term(line, line_number))
    return tuple(
        tuple(None if block is None else term_table(block) for block in by_power)
        for by_power in rows
    )


def read_vsop87(path: str | Path) -> SeriesGrid:
    """Read one VSOP87D file.

    Parameters:
        path: File path, e.g. ``.../VSOP87D.mar``.

    Returns:
        Grid of term tables indexed [coord][power].
    """
    path = Path(path)
    with path.open(encoding='ascii') as f:
        grid = parse_vsop87(f.readlines())
    count = sum(len(t) for by_power in grid for t in by_power if t is not None)
    logger.info('Read %d VSOP87 terms from %s', count, path)
    return grid
