"""
Shared utilities for Provider Availability API.

Input validators used by every endpoint before the engine or the
repository are touched.
"""

from .validators import (
    WRITABLE_DOCTYPES,
    validate_date_string,
    validate_day_of_week,
    validate_days_of_week,
    validate_docname,
    validate_doctype,
    validate_resolution,
    validate_time_string,
)

__all__ = [
    "WRITABLE_DOCTYPES",
    "validate_date_string",
    "validate_day_of_week",
    "validate_days_of_week",
    "validate_docname",
    "validate_doctype",
    "validate_resolution",
    "validate_time_string",
]
