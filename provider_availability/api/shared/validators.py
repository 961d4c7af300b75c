"""
Availability-specific Validators

Validation utilities for string inputs coming from the presentation layer.
All of them raise before any repository call is made.
"""

import re
from typing import Any, List

from provider_availability.exceptions import InvalidInterval, MissingScope, ValidationError
from provider_availability.provider_availability.doctype.scope import DAYS_OF_WEEK
from provider_availability.provider_availability.scheduling.overlap import RESOLUTIONS
from provider_availability.utils import getdate, throw

WRITABLE_DOCTYPES = ("Availability Slot", "Calendar Exception")


def validate_date_string(date_str: str, field_name: str = "date") -> str:
    """
    Validate date string format (YYYY-MM-DD).

    Args:
        date_str: Date string to validate
        field_name: Name of field for error messages

    Returns:
        str: Validated date string

    Raises:
        ValidationError: If date format is invalid
    """
    if not date_str:
        throw(f"{field_name} is required", ValidationError)

    date_str = str(date_str).strip()

    # Basic format check
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        throw(f"Invalid {field_name} format. Use YYYY-MM-DD", ValidationError)

    # Calendar check (2026-02-30 passes the regex)
    getdate(date_str)

    return date_str


def validate_time_string(time_str: str, field_name: str = "time") -> str:
    """
    Validate time string format (HH:MM or HH:MM:SS, 24:00 allowed).

    Raises:
        InvalidInterval: If time format is invalid
    """
    if time_str is None or time_str == "":
        throw(f"{field_name} is required", InvalidInterval)

    time_str = str(time_str).strip()

    match = re.match(r"^(\d{2}):(\d{2})(?::(\d{2}))?$", time_str)
    if not match:
        throw(f"Invalid {field_name} format. Use HH:MM", InvalidInterval)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes > 0):
        throw(f"Invalid {field_name}: {time_str}", InvalidInterval)

    return time_str


def validate_day_of_week(day: Any, field_name: str = "day_of_week") -> int:
    """
    Validate a day of week (0-6, 0 = Sunday, or its English name).

    Raises:
        MissingScope: If the day is not valid
    """
    if isinstance(day, str):
        day = day.strip()
        if day in DAYS_OF_WEEK:
            return DAYS_OF_WEEK.index(day)
        if day.isdigit():
            day = int(day)

    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        throw(f"Invalid {field_name}: {day!r}. Use 0-6 (0 = Sunday)", MissingScope)

    return day


def validate_days_of_week(days: Any, field_name: str = "days_of_week") -> List[int]:
    """Validate a non-empty list of days of week, dropping duplicates."""
    if not days or not isinstance(days, (list, tuple)):
        throw(f"{field_name} must be a non-empty list", MissingScope)

    result = []
    for day in days:
        day = validate_day_of_week(day, field_name)
        if day not in result:
            result.append(day)
    return result


def validate_doctype(doctype: str) -> str:
    """Validate that records of this doctype can be written through the API."""
    if doctype not in WRITABLE_DOCTYPES:
        throw(f"Invalid doctype: {doctype!r}. Use {', '.join(WRITABLE_DOCTYPES)}", ValidationError)
    return doctype


def validate_resolution(resolution: str) -> str:
    """Validate an overlap resolution (cancel, replace, merge)."""
    resolution = str(resolution or "").strip().lower()
    if resolution not in RESOLUTIONS:
        throw(f"Invalid resolution: {resolution!r}. Use {', '.join(RESOLUTIONS)}", ValidationError)
    return resolution


def validate_docname(name: str, field_name: str = "name") -> str:
    """
    Validate a record or provider name (ID).

    Ensures the name is not too long and doesn't contain HTML/JS injection patterns.

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        throw(f"{field_name} is required", ValidationError)

    name = str(name).strip()

    # Length check
    if len(name) > 140:
        throw(f"{field_name} is too long", ValidationError)

    # Block obvious injection attempts
    dangerous_patterns = [
        r"<script",
        r"javascript:",
        r"onclick",
        r"onerror",
    ]

    for pattern in dangerous_patterns:
        if re.search(pattern, name, re.IGNORECASE):
            throw(f"Invalid {field_name}", ValidationError)

    return name
