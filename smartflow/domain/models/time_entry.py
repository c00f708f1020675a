"""
TimeEntry domain model.
Represents completed blocks of tracked time, entered manually or produced by stopping a session.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
import uuid

from smartflow.domain.models.base import (
    TenantEntity,
    TimeRange,
    ValidationError,
)
from smartflow.domain.models.value_objects import BillableStatus


class TimeEntryType(str, Enum):
    """Time entry type."""
    PROJECT = "project"
    TASK = "task"
    MEETING = "meeting"
    TRAINING = "training"
    BREAK = "break"
    OTHER = "other"


@dataclass(eq=False)
class TimeEntry(TenantEntity):
    """
    TimeEntry entity.
    Duration is kept in whole minutes and derived from the time range when not given.
    """

    user_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    time_category_id: Optional[uuid.UUID] = None
    timesheet_id: Optional[uuid.UUID] = None

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int = 0

    description: Optional[str] = None
    entry_type: TimeEntryType = TimeEntryType.OTHER
    billable_status: BillableStatus = BillableStatus.NON_BILLABLE
    hourly_rate: Optional[Decimal] = None
    is_manual_entry: bool = True
    is_active: bool = True

    def validate(self) -> None:
        """Validate time entry state."""
        if self.user_id is None:
            raise ValidationError("User ID is required", "user_id")

        if self.time_category_id is None:
            raise ValidationError("Time category ID is required", "time_category_id")

        if self.start_time is None:
            raise ValidationError("Start time is required", "start_time")

        if self.end_time is not None:
            TimeRange(self.start_time, self.end_time)

        if self.duration is None or self.duration < 0:
            raise ValidationError("Duration cannot be negative", "duration")

        if self.hourly_rate is not None and self.hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative", "hourly_rate")

        if self.description and len(self.description) > 500:
            raise ValidationError("Description must not exceed 500 characters", "description")

    def derive_duration(self) -> None:
        """Fill in the duration from the time range when it was left at zero."""
        if not self.duration and self.end_time is not None and self.start_time is not None:
            self.duration = TimeRange(self.start_time, self.end_time).duration_minutes or 0

    @property
    def duration_hours(self) -> float:
        """Get duration in hours."""
        return self.duration / 60.0

    @property
    def is_billable(self) -> bool:
        return self.billable_status == BillableStatus.BILLABLE

    @property
    def work_date(self) -> date:
        """Calendar day the entry is reported under."""
        return self.start_time.date()

    def revise(
        self,
        now: datetime,
        time_category_id: uuid.UUID,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        duration: Optional[int] = None,
        project_id: Optional[uuid.UUID] = None,
        task_id: Optional[uuid.UUID] = None,
        description: Optional[str] = None,
        entry_type: TimeEntryType = TimeEntryType.OTHER,
        billable_status: BillableStatus = BillableStatus.NON_BILLABLE,
        hourly_rate: Optional[Decimal] = None
    ) -> None:
        """Replace the editable fields, re-deriving the duration when it is left at zero."""
        self.time_category_id = time_category_id
        self.start_time = start_time
        self.end_time = end_time
        self.duration = duration or 0
        self.project_id = project_id
        self.task_id = task_id
        self.description = description
        self.entry_type = TimeEntryType(entry_type)
        self.billable_status = BillableStatus(billable_status)
        self.hourly_rate = hourly_rate

        self.derive_duration()
        self.validate()
        self.mark_as_updated(now)

    def attach_to_timesheet(self, timesheet_id: uuid.UUID, now: datetime) -> None:
        self.timesheet_id = timesheet_id
        self.mark_as_updated(now)

    def soft_delete(self, now: datetime) -> None:
        self.is_active = False
        self.mark_as_updated(now)

    @classmethod
    def from_session_stop(
        cls,
        tenant_id: uuid.UUID,
        user_id: uuid.UUID,
        time_category_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        duration: int,
        project_id: Optional[uuid.UUID] = None,
        task_id: Optional[uuid.UUID] = None,
        description: Optional[str] = None
    ) -> "TimeEntry":
        """
        Build the entry recorded when a tracking session is stopped.
        Stopped sessions are classified as Other/NonBillable; callers reclassify later.
        """
        return cls(
            tenant_id=tenant_id,
            user_id=user_id,
            project_id=project_id,
            task_id=task_id,
            time_category_id=time_category_id,
            start_time=start_time,
            end_time=end_time,
            duration=max(duration, 0),
            description=description,
            entry_type=TimeEntryType.OTHER,
            billable_status=BillableStatus.NON_BILLABLE,
            is_manual_entry=False,
            is_active=True
        )
