"""Configuration: data directories and log level from environment."""

import os
from pathlib import Path

# Paths; env var overrides with sensible defaults.
DEFAULT_DATA_PATH = '/usr/local/share/planisphere/'
DEFAULT_STAR_CATALOG_NAME = 'os-bright-star-catalog-hip.utf8'
DEFAULT_STAR_NAMES_NAME = 'star-names.utf8'
LOG_LEVEL_ENV = 'PLANISPHERE_TOOLS_LOG'


def get_data_path() -> str:
    """Return the root directory of catalog and series data (PLANISPHERE_DATA_PATH or default).

    Returns:
        Path string.
    """
    return os.environ.get('PLANISPHERE_DATA_PATH', DEFAULT_DATA_PATH)


def get_vsop87_path() -> str:
    """Return the directory holding VSOP87D.* planet files.

    Prefers PLANISPHERE_VSOP87_PATH, then the ``vsop87`` subdirectory of the
    data path.

    Returns:
        Path string (the directory may not exist).
    """
    path = os.environ.get('PLANISPHERE_VSOP87_PATH', '').strip()
    if path:
        return path
    return str(Path(get_data_path()) / 'vsop87')


def get_star_catalog_path() -> str:
    """Return path of the fixed-width star catalog (PLANISPHERE_STAR_CATALOG or default)."""
    path = os.environ.get('PLANISPHERE_STAR_CATALOG', '').strip()
    if path:
        return path
    return str(Path(get_data_path()) / DEFAULT_STAR_CATALOG_NAME)


def get_star_names_path() -> str:
    """Return path of the proper-name file that accompanies the star catalog."""
    path = os.environ.get('PLANISPHERE_STAR_NAMES', '').strip()
    if path:
        return path
    return str(Path(get_data_path()) / DEFAULT_STAR_NAMES_NAME)


def get_log_level_name() -> str:
    """Return the upper-cased log level requested through PLANISPHERE_TOOLS_LOG ('' if unset)."""
    return os.environ.get(LOG_LEVEL_ENV, '').strip().upper()
