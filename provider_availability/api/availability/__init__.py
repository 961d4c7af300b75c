"""
Availability API Domain

Handles timelines, bookable slots, overlap checks and availability writes.
"""

# Re-export endpoints from availability_api
from provider_availability.api.availability_api import (
    # Timeline
    get_timeline,
    get_effective_timeline,
    get_available_slots,
    # Validation
    validate_entry,
    check_availability_overlap,
    check_time_off_overlap,
    # CRUD
    create_availability,
    create_time_off,
    resolve_overlap,
    delete_entry,
    # Settings
    get_provider_settings,
    save_provider_settings,
)

__all__ = [
    # Timeline
    "get_timeline",
    "get_effective_timeline",
    "get_available_slots",
    # Validation
    "validate_entry",
    "check_availability_overlap",
    "check_time_off_overlap",
    # CRUD
    "create_availability",
    "create_time_off",
    "resolve_overlap",
    "delete_entry",
    # Settings
    "get_provider_settings",
    "save_provider_settings",
]
