"""Centralized API schemas for GTFS endpoints."""

import logging

logger = logging.getLogger(__name__)

from .diagram_schemas import (
    StopTimeSchema,
    TripContinuationSchema,
    TripSchema,
    StationSchema,
    DiagramResponse,
)

# Required schemas that must exist for the API to function
REQUIRED_SCHEMAS = [
    "StopTimeSchema",
    "TripContinuationSchema",
    "TripSchema",
    "StationSchema",
    "DiagramResponse",
]

__all__ = REQUIRED_SCHEMAS


def validate_schemas() -> bool:
    """Check that every schema in REQUIRED_SCHEMAS is importable.

    Raises:
        ImportError: If any required schema is missing
    """
    import sys
    current_module = sys.modules[__name__]

    missing = [name for name in REQUIRED_SCHEMAS if not hasattr(current_module, name)]

    if missing:
        error_msg = f"Missing required schemas: {', '.join(missing)}"
        logger.error(error_msg)
        raise ImportError(error_msg)

    logger.debug(f"Schema validation passed: {len(REQUIRED_SCHEMAS)} schemas loaded")
    return True


validate_schemas()
