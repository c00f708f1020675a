"""
HTTP routers of the time tracking service.
"""

from . import time_categories, time_entries, time_tracking, timesheets, time_reports

__all__ = [
    "time_categories",
    "time_entries",
    "time_tracking",
    "timesheets",
    "time_reports",
]
