"""
Provider Availability API

This module provides a modular API structure for availability management.

Structure:
    api/
    ├── __init__.py              # This file
    ├── availability/            # Availability domain
    │   └── __init__.py          # Re-exports from availability_api
    ├── shared/                  # Shared utilities
    │   ├── __init__.py          # Re-exports from validators
    │   └── validators.py        # Input validators
    └── availability_api.py      # All endpoints

Usage:
    from provider_availability.api import availability

    availability.get_timeline("Dr. Perez", "2026-01-20")
    availability.create_availability("Dr. Perez", {"days_of_week": [1, 3], "start_time": "09:00", "end_time": "12:00"})

Note:
    Every endpoint accepts an optional repository argument; without it the
    backend configured in hooks.repository_backend is used.
"""

# Re-export domains for convenient access
from . import availability
from . import shared

__all__ = [
    "availability",
    "shared",
]
