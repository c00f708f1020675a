"""Time Entry repository interface.
Defines the contract for time entry data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from datetime import date
import uuid

from smartflow.domain.models.time_entry import TimeEntry


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entity.
    Soft-deleted entries are never returned.
    """

    @abstractmethod
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Save a time entry entity.
        Returns the saved time entry.
        """
        pass

    @abstractmethod
    def get_by_id(self, entry_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[TimeEntry]:
        """
        Find a time entry by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        """
        Find all time entries for a specific user.
        """
        pass

    @abstractmethod
    def get_by_project(self, project_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        """
        Find all time entries for a specific project.
        """
        pass

    @abstractmethod
    def get_by_task(self, task_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        """
        Find all time entries for a specific task.
        """
        pass

    @abstractmethod
    def get_by_timesheet(self, timesheet_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        """
        Find all time entries linked to a timesheet.
        """
        pass

    @abstractmethod
    def get_by_date_range(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID
    ) -> List[TimeEntry]:
        """
        Find a user's time entries whose start time falls within the range.
        Both dates are inclusive.
        """
        pass

    @abstractmethod
    def get_tenant_entries_in_range(
        self,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID,
        project_id: Optional[uuid.UUID] = None
    ) -> List[TimeEntry]:
        """
        Find every entry of the tenant within the range.
        Optionally filter by project.
        """
        pass

    @abstractmethod
    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        sort_by: str = "start_time",
        sort_desc: bool = True
    ) -> Tuple[List[TimeEntry], int]:
        """
        List entries a page at a time.
        Search matches the description or the category name.
        """
        pass
