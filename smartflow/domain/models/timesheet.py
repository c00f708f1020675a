"""
Timesheet domain model.
A per-user reporting period that moves through the approval workflow.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional
import uuid

from smartflow.domain.models.base import (
    TenantEntity,
    ValidationError,
    InvalidStateError,
    ForbiddenError,
)
from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.models.value_objects import minutes_to_hours


class TimesheetStatus(str, Enum):
    """Timesheet workflow status."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


# Entries tied to a timesheet in one of these states are locked.
LOCKING_STATUSES = frozenset({TimesheetStatus.SUBMITTED, TimesheetStatus.APPROVED})


@dataclass(eq=False)
class Timesheet(TenantEntity):
    """
    Timesheet entity.

    Totals are derived from the time entries in the period and only
    recomputed while the timesheet is still a draft.
    """

    user_id: Optional[uuid.UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TimesheetStatus = TimesheetStatus.DRAFT

    total_hours: Decimal = Decimal("0.00")
    billable_hours: Decimal = Decimal("0.00")

    submitted_at: Optional[datetime] = None
    submitted_by: Optional[uuid.UUID] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[uuid.UUID] = None
    rejected_at: Optional[datetime] = None
    rejected_by: Optional[uuid.UUID] = None
    approval_notes: Optional[str] = None

    def validate(self) -> None:
        if self.user_id is None:
            raise ValidationError("User ID is required", "user_id")
        if self.start_date is None or self.end_date is None:
            raise ValidationError("Start date and end date are required", "start_date")
        if self.end_date < self.start_date:
            raise ValidationError("End date must be after start date", "end_date")
        if self.approval_notes and len(self.approval_notes) > 1000:
            raise ValidationError("Approval notes must not exceed 1000 characters", "approval_notes")

    @property
    def is_draft(self) -> bool:
        return self.status == TimesheetStatus.DRAFT

    @property
    def locks_entries(self) -> bool:
        return self.status in LOCKING_STATUSES

    def recalculate_totals(self, entries: Iterable[TimeEntry]) -> None:
        """Recompute total and billable hours from the given entries."""
        total = 0
        billable = 0
        for entry in entries:
            total += entry.duration
            if entry.is_billable:
                billable += entry.duration

        self.total_hours = minutes_to_hours(total)
        self.billable_hours = minutes_to_hours(billable)

    def change_period(self, start_date: date, end_date: date, now: datetime) -> None:
        self.ensure_draft("Only draft timesheets can be updated")
        self.start_date = start_date
        self.end_date = end_date
        self.validate()
        self.mark_as_updated(now)

    def ensure_draft(self, message: str) -> None:
        if not self.is_draft:
            raise InvalidStateError(message)

    def submit(self, actor_id: uuid.UUID, now: datetime) -> None:
        """Draft -> Submitted. Only the owner may submit."""
        self.ensure_draft("Only draft timesheets can be submitted")
        if actor_id != self.user_id:
            raise ForbiddenError("You can only submit your own timesheets")

        self.status = TimesheetStatus.SUBMITTED
        self.submitted_at = now
        self.submitted_by = actor_id
        self.mark_as_updated(now)

    def approve(self, actor_id: uuid.UUID, now: datetime, notes: Optional[str] = None) -> None:
        """Submitted -> Approved. The owner may not approve their own timesheet."""
        if self.status != TimesheetStatus.SUBMITTED:
            raise InvalidStateError("Only submitted timesheets can be approved")
        if actor_id == self.user_id:
            raise ForbiddenError("You cannot approve your own timesheet")

        self.status = TimesheetStatus.APPROVED
        self.approved_at = now
        self.approved_by = actor_id
        self.approval_notes = notes
        self.validate()
        self.mark_as_updated(now)

    def reject(self, actor_id: uuid.UUID, now: datetime, notes: Optional[str] = None) -> None:
        """Submitted -> Rejected."""
        if self.status != TimesheetStatus.SUBMITTED:
            raise InvalidStateError("Only submitted timesheets can be rejected")
        if actor_id == self.user_id:
            raise ForbiddenError("You cannot reject your own timesheet")

        self.status = TimesheetStatus.REJECTED
        self.rejected_at = now
        self.rejected_by = actor_id
        self.approval_notes = notes
        self.validate()
        self.mark_as_updated(now)

    def soft_delete(self, now: datetime) -> None:
        self.ensure_draft("Only draft timesheets can be deleted")
        self.is_deleted = True
        self.mark_as_updated(now)
