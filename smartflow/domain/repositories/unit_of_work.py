"""
Unit of work interface.
Groups the repositories of one request behind a single commit.
"""

from abc import ABC, abstractmethod

from smartflow.domain.repositories.time_category_repository import TimeCategoryRepository
from smartflow.domain.repositories.time_entry_repository import TimeEntryRepository
from smartflow.domain.repositories.tracking_session_repository import TrackingSessionRepository
from smartflow.domain.repositories.timesheet_repository import TimesheetRepository
from smartflow.domain.repositories.directory_repository import UserDirectory, ProjectDirectory


class UnitOfWork(ABC):
    """
    Transaction boundary shared by all repositories of a request.
    Changes become durable only on ``commit``.
    """

    time_categories: TimeCategoryRepository
    time_entries: TimeEntryRepository
    tracking_sessions: TrackingSessionRepository
    timesheets: TimesheetRepository
    users: UserDirectory
    projects: ProjectDirectory

    @abstractmethod
    def commit(self) -> None:
        """Persist every pending change atomically."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard every pending change."""
        pass
