"""
Time Entry DTOs for the application layer.
Data Transfer Objects for time entry ledger operations.
"""

from typing import Optional
from datetime import datetime, date
from decimal import Decimal
import uuid

from pydantic import Field, model_validator

from smartflow.domain.models.time_entry import TimeEntry, TimeEntryType
from smartflow.domain.models.value_objects import BillableStatus
from .base_dto import RequestDTO, ResponseDTO, ListRequestDTO, DateRangeRequestDTO


TIME_ENTRY_SORT_FIELDS = ("start_time", "duration", "created_at")


class TimeEntryFieldsDTO(RequestDTO):
    """Fields shared by manual entry creation and update."""

    project_id: Optional[uuid.UUID] = Field(default=None, description="Project ID")
    task_id: Optional[uuid.UUID] = Field(default=None, description="Task ID")
    time_category_id: uuid.UUID = Field(description="Time category ID")

    # Time tracking
    start_time: datetime = Field(description="Start timestamp (UTC)")
    end_time: Optional[datetime] = Field(default=None, description="End timestamp (UTC)")
    duration: Optional[int] = Field(
        default=None,
        ge=0,
        description="Duration in minutes, derived from start/end when omitted or zero"
    )

    # Classification
    description: Optional[str] = Field(default=None, max_length=500, description="Work description")
    entry_type: TimeEntryType = Field(default=TimeEntryType.OTHER, description="Entry type")
    billable_status: BillableStatus = Field(default=BillableStatus.NON_BILLABLE, description="Billable status")
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, description="Hourly rate")

    @model_validator(mode="after")
    def validate_end_time(self):
        """Validate end time is after start time."""
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class CreateTimeEntryRequestDTO(TimeEntryFieldsDTO):
    """DTO for manual time entry creation. The owner comes from the identity context."""

    is_manual_entry: bool = Field(default=True, description="Whether the entry was typed in by hand")


class UpdateTimeEntryRequestDTO(TimeEntryFieldsDTO):
    """DTO for time entry update requests; replaces every editable field."""

    id: Optional[uuid.UUID] = Field(default=None, description="Entry ID, taken from the path")


class ListTimeEntriesRequestDTO(ListRequestDTO):
    """DTO for listing time entries."""

    sort_by: Optional[str] = Field(default="start_time", description="start_time, duration or created_at")

    @model_validator(mode="after")
    def validate_sort_by(self):
        if self.sort_by is not None and self.sort_by not in TIME_ENTRY_SORT_FIELDS:
            raise ValueError(f"sort_by must be one of {', '.join(TIME_ENTRY_SORT_FIELDS)}")
        return self


class TimeEntriesByProjectRequestDTO(RequestDTO):
    project_id: uuid.UUID


class TimeEntriesByTaskRequestDTO(RequestDTO):
    task_id: uuid.UUID


class TimeEntriesByTimesheetRequestDTO(RequestDTO):
    timesheet_id: uuid.UUID


class TimeEntriesByDateRangeRequestDTO(DateRangeRequestDTO):
    """A user's entries whose start falls within the range, inclusive."""

    user_id: uuid.UUID


# Response DTOs
class TimeEntryResponseDTO(ResponseDTO):
    """DTO for time entry responses."""

    tenant_id: Optional[uuid.UUID] = None
    user_id: uuid.UUID
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    time_category_id: uuid.UUID
    timesheet_id: Optional[uuid.UUID] = None

    start_time: datetime
    end_time: Optional[datetime] = None
    duration: int = Field(description="Duration in minutes")
    duration_hours: float
    work_date: date

    description: Optional[str] = None
    entry_type: TimeEntryType
    billable_status: BillableStatus
    hourly_rate: Optional[Decimal] = None
    is_manual_entry: bool
    is_active: bool

    @classmethod
    def from_domain(cls, entry: TimeEntry) -> "TimeEntryResponseDTO":
        return cls(
            id=entry.id,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
            tenant_id=entry.tenant_id,
            user_id=entry.user_id,
            project_id=entry.project_id,
            task_id=entry.task_id,
            time_category_id=entry.time_category_id,
            timesheet_id=entry.timesheet_id,
            start_time=entry.start_time,
            end_time=entry.end_time,
            duration=entry.duration,
            duration_hours=round(entry.duration_hours, 2),
            work_date=entry.work_date,
            description=entry.description,
            entry_type=entry.entry_type,
            billable_status=entry.billable_status,
            hourly_rate=entry.hourly_rate,
            is_manual_entry=entry.is_manual_entry,
            is_active=entry.is_active
        )
