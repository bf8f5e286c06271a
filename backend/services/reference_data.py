"""
Reference Data Location and Parsing Helpers
Shared by the ASHRAE space-type and climate lookups
"""

import os
import logging
from typing import List, Optional

from core.environment import get_env_path
from services.error_types import ConfigurationError

logger = logging.getLogger(__name__)

# Bundled tables
DEFAULT_DATA_DIR = os.path.join(os.path.dirname(__file__), '..', 'data')
SPACE_TYPES_FILE = 'ashrae62_space_types.csv'
ASHRAE170_FILE = 'ashrae170_spaces.csv'
LOCATIONS_FILE = 'ashrae_locations.csv'

REFERENCE_FILES = [SPACE_TYPES_FILE, ASHRAE170_FILE, LOCATIONS_FILE]


def get_data_dir() -> str:
    """Directory holding the reference CSVs; ASHRAE_DATA_DIR overrides the bundled copy"""
    override = get_env_path("ASHRAE_DATA_DIR")
    if override is None:
        return DEFAULT_DATA_DIR
    if not override.is_dir():
        logger.warning(f"ASHRAE_DATA_DIR={override} is not a directory, using bundled reference data")
        return DEFAULT_DATA_DIR
    return str(override)


def data_file(filename: str) -> str:
    return os.path.join(get_data_dir(), filename)


def check_reference_data() -> List[str]:
    """
    Verify every reference table is readable.

    Returns:
        List of table paths that were found

    Raises:
        ConfigurationError: if any table is missing
    """
    found = []
    missing = []
    for filename in REFERENCE_FILES:
        path = data_file(filename)
        if os.path.isfile(path):
            found.append(path)
        else:
            missing.append(path)

    if missing:
        raise ConfigurationError(
            "Reference data tables missing",
            details={"data_dir": get_data_dir(), "missing": missing}
        )
    return found


def optional_float(value: Optional[str]) -> Optional[float]:
    """CSV cell to float, blank cells become None"""
    if value is None or value.strip() == '':
        return None
    return float(value)


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in ('true', '1', 'yes')
