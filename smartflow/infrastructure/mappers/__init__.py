"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .time_category_mapper import TimeCategoryMapper
from .time_entry_mapper import TimeEntryMapper
from .tracking_session_mapper import TrackingSessionMapper
from .timesheet_mapper import TimesheetMapper

__all__ = [
    "TimeCategoryMapper",
    "TimeEntryMapper",
    "TrackingSessionMapper",
    "TimesheetMapper",
]
