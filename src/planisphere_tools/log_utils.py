"""Logging setup for programs that drive the chart computations."""

from __future__ import annotations

import logging
import sys

from planisphere_tools.config import get_log_level_name


def configure_logging(verbose: bool = False) -> None:
    """Configure logging (stderr, level from ``verbose`` or PLANISPHERE_TOOLS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level_name()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
    # Font and backend chatter from the optional preview renderer.
    for name in ('matplotlib', 'matplotlib.font_manager', 'PIL'):
        logging.getLogger(name).setLevel(logging.WARNING)
