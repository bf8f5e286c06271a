#!/usr/bin/env python3
"""
Main entry point for the ventilation backend
Checks the reference tables, then starts the server
"""
import logging
import sys

from app.config import DEBUG, HOST, PORT, setup_logging
from services.error_types import ConfigurationError
from services.reference_data import check_reference_data

logger = logging.getLogger(__name__)


def start_server():
    """Start the uvicorn server"""
    import uvicorn

    logger.info(f"Starting ventilation API on {HOST}:{PORT}")
    uvicorn.run(
        "app.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )


def main():
    """Main entry point"""
    setup_logging()
    try:
        check_reference_data()
    except ConfigurationError as e:
        logger.error(f"Cannot start server: {e}")
        sys.exit(1)
    start_server()


if __name__ == "__main__":
    main()
