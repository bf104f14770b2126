"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    ChairsideError,
    InvalidRecordError,
    PatientNotFoundError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ChairsideError",
    "InvalidRecordError",
    "PatientNotFoundError",
]
