"""
Shared utilities for Salon Booking API.
"""

from .validators import (
    validate_date_string,
    validate_datetime_string,
    validate_docname,
    validate_positive_int,
    validate_time_string,
)

__all__ = [
    "validate_date_string",
    "validate_datetime_string",
    "validate_docname",
    "validate_positive_int",
    "validate_time_string",
]
