"""Tests for the VSOP87D file reader and directory loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from planisphere_tools.series import Coord, Planet
from planisphere_tools.series.context import default_context, load_vsop87_directory
from planisphere_tools.series.vsop87_files import parse_vsop87, read_vsop87

_HEADER = (
    ' VSOP87 VERSION D4    MARS      VARIABLE {var} (LBR)       *T**{power}      {n} TERMS'
    '    HELIOCENTRIC DYNAMICAL ECLIPTIC AND EQUINOX OF THE DATE\n'
)
_TERM = '    4    1    1  0  0  0  0  0  0  0  0  0  0  0  0  0  0     {a}  {b}  {c}\n'

_MARS_LINES = [
    _HEADER.format(var=1, power=0, n=2),
    _TERM.format(a='6.20347711581', b='0.00000000000', c='0.00000000000'),
    _TERM.format(a='0.18656368093', b='5.05037100270', c='3340.61242669980'),
    _HEADER.format(var=1, power=1, n=1),
    _TERM.format(a='3340.61242700512', b='0.00000000000', c='0.00000000000'),
    _HEADER.format(var=3, power=0, n=1),
    _TERM.format(a='1.53033488271', b='0.00000000000', c='0.00000000000'),
]


def test_parse_vsop87_blocks() -> None:
    """Headers select the coordinate and power; the last three fields are A, B, C."""
    grid = parse_vsop87(_MARS_LINES)
    l0 = grid[Coord.L.value][0]
    l1 = grid[Coord.L.value][1]
    r0 = grid[Coord.R.value][0]
    assert l0 is not None and l0.shape == (2, 3)
    assert tuple(l0[1]) == pytest.approx((0.18656368093, 5.05037100270, 3340.61242669980))
    assert l1 is not None and l1[0, 0] == pytest.approx(3340.61242700512)
    assert r0 is not None and r0[0, 0] == pytest.approx(1.53033488271)
    assert grid[Coord.B.value][0] is None
    assert grid[Coord.L.value][5] is None


def test_parse_vsop87_ignores_blank_lines() -> None:
    """Blank lines between blocks are skipped."""
    grid = parse_vsop87(['\n', *_MARS_LINES[:2], '   \n'])
    l0 = grid[Coord.L.value][0]
    assert l0 is not None and len(l0) == 1


def test_parse_vsop87_term_before_header() -> None:
    """A term line with no preceding header is an error naming the line."""
    with pytest.raises(ValueError, match='line 1'):
        parse_vsop87(_MARS_LINES[1:])


def test_parse_vsop87_bad_number() -> None:
    """A non-numeric amplitude is reported with its line number."""
    lines = [_MARS_LINES[0], _TERM.format(a='x.y', b='0.0', c='0.0')]
    with pytest.raises(ValueError, match='line 2'):
        parse_vsop87(lines)


def test_parse_vsop87_bad_header() -> None:
    """Headers must carry a variable and a power in range."""
    with pytest.raises(ValueError, match='malformed'):
        parse_vsop87([' VSOP87 VERSION D4    MARS\n'])
    with pytest.raises(ValueError, match='out of range'):
        parse_vsop87([_HEADER.format(var=4, power=0, n=0)])


def test_read_vsop87_logs(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Reading a file logs the number of terms."""
    path = tmp_path / 'VSOP87D.mar'
    path.write_text(''.join(_MARS_LINES), encoding='ascii')
    with caplog.at_level(logging.INFO, logger='planisphere_tools.series.vsop87_files'):
        grid = read_vsop87(path)
    assert grid[Coord.R.value][0] is not None
    assert 'Read 4 VSOP87 terms' in caplog.text


def test_load_directory(tmp_path: Path) -> None:
    """Only the files present are loaded; a missing directory loads nothing."""
    (tmp_path / 'VSOP87D.mar').write_text(''.join(_MARS_LINES), encoding='ascii')
    planets = load_vsop87_directory(tmp_path)
    assert list(planets) == [Planet.MARS]
    assert load_vsop87_directory(tmp_path / 'absent') == {}


def test_default_context_reads_configured_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """default_context adds the planets found under PLANISPHERE_VSOP87_PATH."""
    (tmp_path / 'VSOP87D.mar').write_text(''.join(_MARS_LINES), encoding='ascii')
    monkeypatch.setenv('PLANISPHERE_VSOP87_PATH', str(tmp_path))
    default_context.cache_clear()
    try:
        context = default_context()
        assert context.has_planet(Planet.MARS)
        assert context.has_planet(Planet.EARTH)
    finally:
        default_context.cache_clear()
