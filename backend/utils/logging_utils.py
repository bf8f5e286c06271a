"""
Logging Utilities for Consistent Structured Logging

Provides helpers for structured logging with context and performance tracking.
"""

import time
import logging
from typing import Dict, Any, Optional
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def log_operation(operation_name: str, context: Dict[str, Any],
                  logger: Optional[logging.Logger] = None, level: int = logging.INFO):
    """
    Context manager for logging operation start, end, and duration with context.
    Failures are always logged at ERROR and re-raised.

    Usage:
        with log_operation("project_ventilation", {"spaces": 12}):
            # Do operation
            pass
    """
    logger = logger or logging.getLogger(__name__)
    start_time = time.perf_counter()

    logger.log(level, f"Starting {operation_name}", extra={
        'operation': operation_name,
        'context': context,
        'status': 'started'
    })

    try:
        yield
        duration = time.perf_counter() - start_time
        logger.log(level, f"Completed {operation_name} in {duration * 1000:.1f}ms", extra={
            'operation': operation_name,
            'context': context,
            'status': 'completed',
            'duration_seconds': duration
        })
    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error(f"Failed {operation_name} after {duration * 1000:.1f}ms: {str(e)}", extra={
            'operation': operation_name,
            'context': context,
            'status': 'failed',
            'duration_seconds': duration,
            'error_type': type(e).__name__,
            'error_message': str(e)
        })
        raise
