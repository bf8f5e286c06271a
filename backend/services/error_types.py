"""
Error Types for the Ventilation Calculation Service

Critical errors stop a calculation and surface to the caller. Non-critical
errors describe questionable input that is logged while the calculation
carries on with fallback values.
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class HVACCalculationError(Exception):
    """Base exception for all ventilation calculation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class CriticalError(HVACCalculationError):
    """Stops the request: nothing is calculated from the snapshot."""
    pass


class NonCriticalError(HVACCalculationError):
    """Logged against the snapshot; the calculation runs on fallback values."""
    pass


class DataQualityError(NonCriticalError):
    """
    Data quality issues that should be logged but not stop processing.

    Examples:
    - Space type missing from the reference table (fallback rates used)
    - Space assigned to a zone that does not exist
    - Unknown location id (fallback design temperatures used)
    """
    pass


class ConfigurationError(CriticalError):
    """
    Configuration errors that prevent proper operation.

    Examples:
    - ASHRAE_DATA_DIR points at a directory missing the reference tables
    """
    pass


class ValidationError(CriticalError):
    """
    Input validation errors.

    Examples:
    - Negative floor area
    - Ez of zero
    - Efficiency outside 0..1
    """
    pass


def log_error_with_context(error: HVACCalculationError, context: Dict[str, Any]):
    """
    Log error with additional context information.

    Args:
        error: Error to log
        context: Additional context (space_id, zone_id, stage, etc.)
    """
    log_data = {
        'error_type': type(error).__name__,
        'error_message': error.message,
        'details': error.details,
        'context': context
    }

    if isinstance(error, CriticalError):
        logger.error(f"CRITICAL ERROR: {error.message}", extra=log_data)
    else:
        logger.warning(f"Non-critical error: {error.message}", extra=log_data)
