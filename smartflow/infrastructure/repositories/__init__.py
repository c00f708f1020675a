"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .time_category_repository import SQLAlchemyTimeCategoryRepository
from .time_entry_repository import SQLAlchemyTimeEntryRepository
from .tracking_session_repository import SQLAlchemyTrackingSessionRepository
from .timesheet_repository import SQLAlchemyTimesheetRepository
from .directory_repository import SQLAlchemyUserDirectory, SQLAlchemyProjectDirectory

__all__ = [
    "SQLAlchemyTimeCategoryRepository",
    "SQLAlchemyTimeEntryRepository",
    "SQLAlchemyTrackingSessionRepository",
    "SQLAlchemyTimesheetRepository",
    "SQLAlchemyUserDirectory",
    "SQLAlchemyProjectDirectory",
]
