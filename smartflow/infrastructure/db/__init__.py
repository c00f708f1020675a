"""
Database infrastructure for the time tracking service.
"""

from .database import engine, SessionLocal, get_db, Base, build_engine, create_tables
from .models import (
    UserModel,
    ProjectModel,
    TimeCategoryModel,
    TimeEntryModel,
    ActiveTrackingSessionModel,
    TimesheetModel,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "Base",
    "build_engine",
    "create_tables",
    "UserModel",
    "ProjectModel",
    "TimeCategoryModel",
    "TimeEntryModel",
    "ActiveTrackingSessionModel",
    "TimesheetModel",
]
