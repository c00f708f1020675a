"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .time_category_repository import TimeCategoryRepository
from .time_entry_repository import TimeEntryRepository
from .tracking_session_repository import TrackingSessionRepository
from .timesheet_repository import TimesheetRepository
from .directory_repository import UserDirectory, ProjectDirectory
from .unit_of_work import UnitOfWork

__all__ = [
    "TimeCategoryRepository",
    "TimeEntryRepository",
    "TrackingSessionRepository",
    "TimesheetRepository",
    "UserDirectory",
    "ProjectDirectory",
    "UnitOfWork",
]
