"""Timesheet repository interface.
Defines the contract for timesheet persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple
import uuid

from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus


class TimesheetRepository(ABC):
    """
    Repository interface for Timesheet entity.
    Soft-deleted timesheets are never returned.
    """

    @abstractmethod
    def save(self, timesheet: Timesheet) -> Timesheet:
        """
        Save a timesheet entity.
        """
        pass

    @abstractmethod
    def get_by_id(self, timesheet_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[Timesheet]:
        """
        Find a timesheet by ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[Timesheet]:
        """
        Find all timesheets of a user, most recent period first.
        """
        pass

    @abstractmethod
    def get_by_status(self, status: TimesheetStatus, tenant_id: uuid.UUID) -> List[Timesheet]:
        """
        Find all timesheets in a given workflow state.
        """
        pass

    @abstractmethod
    def get_by_user_and_date_range(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID
    ) -> Optional[Timesheet]:
        """
        Find the timesheet covering exactly this period for the user.
        """
        pass

    @abstractmethod
    def get_pending_approval(self, tenant_id: uuid.UUID) -> List[Timesheet]:
        """
        Find submitted timesheets, oldest submission first.
        """
        pass

    @abstractmethod
    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int
    ) -> Tuple[List[Timesheet], int]:
        """
        List timesheets a page at a time, newest first.
        """
        pass
