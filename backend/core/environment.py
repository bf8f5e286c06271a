"""Environment configuration for the ventilation service.

Loads variables from .env files, then exposes typed accessors.

File Priority (highest to lowest):
1. .env.local (local overrides, gitignored)
2. .env (base configuration, committed)
3. Environment variables set by the host

Recognised variables:
    DEBUG            - verbose logging and uvicorn reload
    LOG_LEVEL        - explicit root log level, wins over DEBUG
    ASHRAE_DATA_DIR  - directory holding replacement reference CSVs
    CORS_ORIGINS     - comma separated list of allowed origins
    HOST / PORT      - bind address for the HTTP server
"""

import os
import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_environment(env_dir: Optional[Union[str, Path]] = None) -> None:
    """Load environment variables from .env files.

    Args:
        env_dir: Directory containing .env files. Defaults to current directory.
    """
    if env_dir is None:
        env_dir = Path.cwd()
    else:
        env_dir = Path(env_dir)

    # Load files in reverse priority order (last loaded wins)
    env_files = [
        env_dir / ".env",
        env_dir / ".env.local",
    ]

    loaded_files = []
    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=True)
            loaded_files.append(env_file.name)
            logger.debug(f"Loaded environment from {env_file}")

    if loaded_files:
        logger.info(f"Environment loaded from: {', '.join(loaded_files)}")
    else:
        logger.debug("No .env files found")


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable.

    Args:
        key: Environment variable name
        default: Default value if not set or invalid

    Returns:
        Boolean value
    """
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    else:
        return default


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable, falling back on junk values."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        logger.warning(f"Invalid integer value for {key}, using default: {default}")
        return default


def get_env_list(key: str, separator: str = ",", default: Optional[list] = None) -> list:
    """Get list from environment variable.

    Args:
        key: Environment variable name
        separator: List item separator
        default: Default value if not set

    Returns:
        List of strings
    """
    if default is None:
        default = []

    value = os.getenv(key, "")
    if not value.strip():
        return default

    return [item.strip() for item in value.split(separator) if item.strip()]


def get_env_path(key: str) -> Optional[Path]:
    """Get a filesystem path from the environment, None when unset or blank."""
    value = os.getenv(key, "").strip()
    if not value:
        return None
    return Path(value).expanduser()


# Load environment on import
load_environment()
