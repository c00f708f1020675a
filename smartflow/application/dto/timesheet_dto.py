"""
Timesheet DTOs for the application layer.
Data Transfer Objects for the timesheet approval workflow.
"""

from typing import List, Optional
from datetime import datetime, date
from decimal import Decimal
import uuid

from pydantic import Field

from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus
from .base_dto import RequestDTO, ResponseDTO, ListRequestDTO, DateRangeRequestDTO
from .time_entry_dto import TimeEntryResponseDTO


class CreateTimesheetRequestDTO(DateRangeRequestDTO):
    """DTO for timesheet creation."""

    user_id: uuid.UUID = Field(description="Owner of the timesheet")


class UpdateTimesheetRequestDTO(DateRangeRequestDTO):
    """DTO for changing the period of a draft timesheet."""

    id: Optional[uuid.UUID] = Field(default=None, description="Timesheet ID, taken from the path")


class ReviewTimesheetRequestDTO(RequestDTO):
    """DTO for approving or rejecting a submitted timesheet."""

    id: Optional[uuid.UUID] = Field(default=None, description="Timesheet ID, taken from the path")
    approval_notes: Optional[str] = Field(default=None, max_length=1000, description="Reviewer notes")


class TimesheetsByStatusRequestDTO(RequestDTO):
    status: TimesheetStatus


class TimesheetByUserRangeRequestDTO(DateRangeRequestDTO):
    user_id: uuid.UUID


class ListTimesheetsRequestDTO(ListRequestDTO):
    """Paged listing, newest first."""
    pass


class TimesheetResponseDTO(ResponseDTO):
    """DTO for timesheet responses."""

    tenant_id: Optional[uuid.UUID] = None
    user_id: uuid.UUID
    start_date: date
    end_date: date
    status: TimesheetStatus

    total_hours: Decimal
    billable_hours: Decimal

    submitted_at: Optional[datetime] = None
    submitted_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[uuid.UUID] = None
    rejected_at: Optional[datetime] = None
    rejected_by: Optional[uuid.UUID] = None
    approval_notes: Optional[str] = None

    time_entries: List[TimeEntryResponseDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(
        cls,
        timesheet: Timesheet,
        time_entries: Optional[List[TimeEntryResponseDTO]] = None
    ) -> "TimesheetResponseDTO":
        return cls(
            id=timesheet.id,
            created_at=timesheet.created_at,
            updated_at=timesheet.updated_at,
            tenant_id=timesheet.tenant_id,
            user_id=timesheet.user_id,
            start_date=timesheet.start_date,
            end_date=timesheet.end_date,
            status=timesheet.status,
            total_hours=timesheet.total_hours,
            billable_hours=timesheet.billable_hours,
            submitted_at=timesheet.submitted_at,
            submitted_by=timesheet.submitted_by,
            approved_at=timesheet.approved_at,
            approved_by=timesheet.approved_by,
            rejected_at=timesheet.rejected_at,
            rejected_by=timesheet.rejected_by,
            approval_notes=timesheet.approval_notes,
            time_entries=time_entries or []
        )
