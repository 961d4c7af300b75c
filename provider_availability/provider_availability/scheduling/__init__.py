"""
Scheduling Services Module

This module provides core business logic for provider availability:
- Interval arithmetic (intervals.py)
- Availability resolution (availability.py)
- Time-off resolution (time_off.py)
- Timeline composition per date (timeline.py)
- Overlap detection and Replace/Merge plans (overlap.py)
- Write execution against a repository (writes.py)
- Slot generation for UI (slots.py)
"""
