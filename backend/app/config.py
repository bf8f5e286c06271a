import os
import logging
import sys

from core.environment import get_env_bool, get_env_int, get_env_list

DEBUG = get_env_bool("DEBUG", False)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = get_env_int("PORT", 8000)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]
CORS_ORIGINS = get_env_list("CORS_ORIGINS", default=DEFAULT_CORS_ORIGINS)


def resolve_log_level() -> int:
    """LOG_LEVEL wins over DEBUG; unknown names fall back with a warning"""
    default = logging.DEBUG if DEBUG else logging.INFO
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logging.getLogger(__name__).warning(f"Unknown LOG_LEVEL '{name}', using {logging.getLevelName(default)}")
        return default
    return level


# Logging configuration
def setup_logging():
    """Configure application logging"""
    log_level = resolve_log_level()

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    logger = logging.getLogger('ventilation')
    logger.setLevel(log_level)

    # Suppress noisy third-party loggers
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)

    return logger


# Initialize logging
setup_logging()
