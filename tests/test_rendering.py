"""Tests for the matplotlib chart preview."""

from __future__ import annotations

from pathlib import Path

import pytest

from planisphere_tools.projection import Circle, Point
from planisphere_tools.rendering.matplotlib_chart import (
    BRIGHT_STAR_SIZE,
    FAINT_STAR_SIZE,
    draw_star_chart_mpl,
    star_dot_size,
)


def test_star_dot_size() -> None:
    """Bright stars get the largest dots; stars at the limit the smallest."""
    assert star_dot_size(-1.0, 5.0) == BRIGHT_STAR_SIZE
    assert star_dot_size(5.0, 5.0) == FAINT_STAR_SIZE
    assert FAINT_STAR_SIZE < star_dot_size(2.5, 5.0) < BRIGHT_STAR_SIZE
    assert star_dot_size(3.0, 0.0) == BRIGHT_STAR_SIZE


def test_draw_star_chart_writes_file(tmp_path: Path) -> None:
    """A preview with every kind of element is saved to disk."""
    center = Point(300.0, 400.0)
    output = tmp_path / 'chart.png'
    draw_star_chart_mpl(
        Circle(center, 250.0),
        [(Point(310.0, 380.0), 0.03), (Point(200.0, 450.0), 4.5)],
        5.0,
        circles=[Circle(center, 120.0)],
        labels=[(Point(310.0, 380.0), 'Vega')],
        output_path=str(output),
        title='Test chart',
    )
    assert output.is_file()
    assert output.stat().st_size > 0


def test_draw_star_chart_without_output() -> None:
    """Without an output path nothing is written and no error is raised."""
    draw_star_chart_mpl(Circle(Point(0.0, 0.0), 1.0), [], 5.0)


@pytest.mark.parametrize('magnitude', [0.0, 2.0, 6.0])
def test_star_dot_size_is_bounded(magnitude: float) -> None:
    """Dot sizes stay within the bright and faint limits."""
    assert FAINT_STAR_SIZE <= star_dot_size(magnitude, 5.0) <= BRIGHT_STAR_SIZE
