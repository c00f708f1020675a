"""
Unit tests for the Timesheet workflow.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
import uuid

from smartflow.domain.models.base import ForbiddenError, InvalidStateError, ValidationError
from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus
from smartflow.domain.models.value_objects import BillableStatus


NOW = datetime(2024, 1, 22, 10, 0, 0)


def make_entry(duration: int, billable: bool = False) -> TimeEntry:
    start = datetime(2024, 1, 16, 9, 0, 0)
    return TimeEntry(
        tenant_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        time_category_id=uuid.uuid4(),
        start_time=start,
        end_time=start + timedelta(minutes=duration),
        duration=duration,
        billable_status=BillableStatus.BILLABLE if billable else BillableStatus.NON_BILLABLE
    )


class TestTimesheet:
    """Test cases for Timesheet domain model."""

    def setup_method(self):
        self.owner_id = uuid.uuid4()
        self.manager_id = uuid.uuid4()
        self.timesheet = Timesheet(
            tenant_id=uuid.uuid4(),
            user_id=self.owner_id,
            start_date=date(2024, 1, 15),
            end_date=date(2024, 1, 21)
        )
        self.timesheet.mark_as_created(NOW)

    def test_new_timesheet_is_draft(self):
        assert self.timesheet.status == TimesheetStatus.DRAFT
        assert self.timesheet.is_draft
        assert not self.timesheet.locks_entries
        assert self.timesheet.total_hours == Decimal("0.00")

    def test_end_before_start_is_invalid(self):
        timesheet = Timesheet(
            user_id=self.owner_id,
            start_date=date(2024, 1, 21),
            end_date=date(2024, 1, 15)
        )

        with pytest.raises(ValidationError, match="End date must be after start date"):
            timesheet.validate()

    def test_recalculate_totals(self):
        self.timesheet.recalculate_totals([make_entry(90, billable=True), make_entry(45), make_entry(30, billable=True)])

        assert self.timesheet.total_hours == Decimal("2.75")
        assert self.timesheet.billable_hours == Decimal("2.00")

    def test_submit_by_owner(self):
        self.timesheet.submit(self.owner_id, NOW)

        assert self.timesheet.status == TimesheetStatus.SUBMITTED
        assert self.timesheet.submitted_by == self.owner_id
        assert self.timesheet.submitted_at == NOW
        assert self.timesheet.locks_entries

    def test_submit_by_someone_else_is_forbidden(self):
        with pytest.raises(ForbiddenError, match="You can only submit your own timesheets"):
            self.timesheet.submit(self.manager_id, NOW)

        assert self.timesheet.is_draft

    def test_submit_twice_is_rejected(self):
        self.timesheet.submit(self.owner_id, NOW)

        with pytest.raises(InvalidStateError, match="Only draft timesheets can be submitted"):
            self.timesheet.submit(self.owner_id, NOW)

    def test_approve_by_manager(self):
        self.timesheet.submit(self.owner_id, NOW)
        self.timesheet.approve(self.manager_id, NOW, "Looks good")

        assert self.timesheet.status == TimesheetStatus.APPROVED
        assert self.timesheet.approved_by == self.manager_id
        assert self.timesheet.approval_notes == "Looks good"

    def test_owner_cannot_approve_own_timesheet(self):
        self.timesheet.submit(self.owner_id, NOW)

        with pytest.raises(ForbiddenError, match="You cannot approve your own timesheet"):
            self.timesheet.approve(self.owner_id, NOW)

    def test_state_is_checked_before_actor(self):
        with pytest.raises(InvalidStateError, match="Only submitted timesheets can be approved"):
            self.timesheet.approve(self.owner_id, NOW)

    def test_reject_by_manager(self):
        self.timesheet.submit(self.owner_id, NOW)
        self.timesheet.reject(self.manager_id, NOW, "Missing Friday")

        assert self.timesheet.status == TimesheetStatus.REJECTED
        assert self.timesheet.rejected_by == self.manager_id
        assert self.timesheet.rejected_at == NOW
        assert not self.timesheet.locks_entries

    def test_rejected_is_terminal(self):
        self.timesheet.submit(self.owner_id, NOW)
        self.timesheet.reject(self.manager_id, NOW)

        with pytest.raises(InvalidStateError):
            self.timesheet.submit(self.owner_id, NOW)
        with pytest.raises(InvalidStateError):
            self.timesheet.approve(self.manager_id, NOW)

    def test_approval_notes_length_limit(self):
        self.timesheet.submit(self.owner_id, NOW)

        with pytest.raises(ValidationError, match="Approval notes must not exceed 1000 characters"):
            self.timesheet.approve(self.manager_id, NOW, "x" * 1001)

    def test_change_period_only_while_draft(self):
        self.timesheet.change_period(date(2024, 1, 15), date(2024, 1, 28), NOW)
        assert self.timesheet.end_date == date(2024, 1, 28)

        self.timesheet.submit(self.owner_id, NOW)
        with pytest.raises(InvalidStateError, match="Only draft timesheets can be updated"):
            self.timesheet.change_period(date(2024, 1, 15), date(2024, 1, 21), NOW)

    def test_soft_delete_only_while_draft(self):
        self.timesheet.submit(self.owner_id, NOW)

        with pytest.raises(InvalidStateError, match="Only draft timesheets can be deleted"):
            self.timesheet.soft_delete(NOW)
        assert self.timesheet.is_deleted is False

    def test_soft_delete_draft(self):
        self.timesheet.soft_delete(NOW)

        assert self.timesheet.is_deleted is True
        assert self.timesheet.updated_at == NOW
