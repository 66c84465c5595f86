"""Matplotlib preview of a projected star chart (alternative to the printed layout)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from planisphere_tools.chart_data import DateTick, SunMark
from planisphere_tools.projection import Circle, Point

logger = logging.getLogger(__name__)

# Dot radius in points for magnitude 0; fainter stars shrink linearly.
BRIGHT_STAR_SIZE = 4.0
FAINT_STAR_SIZE = 0.5


def star_dot_size(magnitude: float, magnitude_limit: float) -> float:
    """Marker radius for a star of ``magnitude`` on a chart limited at ``magnitude_limit``."""
    if magnitude_limit <= 0:
        return BRIGHT_STAR_SIZE
    fraction = min(max(magnitude / magnitude_limit, 0.0), 1.0)
    return BRIGHT_STAR_SIZE - fraction * (BRIGHT_STAR_SIZE - FAINT_STAR_SIZE)


def draw_star_chart_mpl(
    boundary: Circle,
    stars: Sequence[tuple[Point, float]],
    magnitude_limit: float,
    circles: Sequence[Circle] = (),
    sun_marks: Sequence[SunMark] = (),
    date_ticks: Sequence[DateTick] = (),
    labels: Sequence[tuple[Point, str]] = (),
    output_path: str | None = None,
    title: str = '',
) -> None:
    """Render projected chart data with matplotlib.

    Parameters:
        boundary: Outer edge of the sky disc.
        stars: (chart point, magnitude) of each star.
        magnitude_limit: Faintest magnitude shown, for dot sizes.
        circles: Equator, ecliptic and lunar orbit circles (dashed).
        sun_marks: Daily Sun marks.
        date_ticks: Date-scale ticks.
        labels: (chart point, text) pairs.
        output_path: File to save; nothing is saved if None.
        title: Figure title.

    Raises:
        ImportError: matplotlib is not installed.
    """
    try:
        import matplotlib

        matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from matplotlib.patches import Circle as CirclePatch
    except ImportError:
        raise ImportError('matplotlib is required for draw_star_chart_mpl') from None

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.set_aspect('equal')
    ax.axis('off')
    if title:
        ax.set_title(title)

    ax.add_patch(
        CirclePatch((boundary.center.x, boundary.center.y), boundary.radius, fill=False, lw=0.8)
    )
    for circle in circles:
        ax.add_patch(
            CirclePatch(
                (circle.center.x, circle.center.y),
                circle.radius,
                fill=False,
                lw=0.5,
                ls='--',
                color='grey',
            )
        )
    if stars:
        ax.scatter(
            [p.x for p, _mag in stars],
            [p.y for p, _mag in stars],
            s=[star_dot_size(mag, magnitude_limit) ** 2 for _p, mag in stars],
            c='black',
            linewidths=0,
        )
    for mark in sun_marks:
        ax.add_patch(
            CirclePatch((mark.point.x, mark.point.y), mark.size, fill=False, lw=0.3)
        )
    for tick in date_ticks:
        ax.plot([tick.start.x, tick.end.x], [tick.start.y, tick.end.y], color='black', lw=0.3)
    for point, text in labels:
        ax.annotate(text, (point.x, point.y), fontsize=5, xytext=(2, 2), textcoords='offset points')

    extent = boundary.radius * 1.05
    ax.set_xlim(boundary.center.x - extent, boundary.center.x + extent)
    # Chart coordinates grow downward, as on the printed page.
    ax.set_ylim(boundary.center.y + extent, boundary.center.y - extent)
    if output_path:
        fig.savefig(output_path)
        logger.info('Wrote chart preview to %s', output_path)
    plt.close(fig)
