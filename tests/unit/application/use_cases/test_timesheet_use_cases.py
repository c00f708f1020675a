"""
Tests for the timesheet approval workflow.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from smartflow.application.dto.base_dto import EntityIdRequestDTO, EmptyRequestDTO, UserIdRequestDTO
from smartflow.application.dto.time_entry_dto import CreateTimeEntryRequestDTO
from smartflow.application.dto.timesheet_dto import (
    CreateTimesheetRequestDTO,
    UpdateTimesheetRequestDTO,
    ReviewTimesheetRequestDTO,
    TimesheetsByStatusRequestDTO,
    TimesheetByUserRangeRequestDTO,
    ListTimesheetsRequestDTO,
)
from smartflow.application.use_cases.base_use_case import ErrorKind
from smartflow.application.use_cases.time_entry_use_cases import CreateTimeEntryUseCase
from smartflow.application.use_cases.timesheet_use_cases import (
    CreateTimesheetUseCase,
    UpdateTimesheetUseCase,
    SubmitTimesheetUseCase,
    ApproveTimesheetUseCase,
    RejectTimesheetUseCase,
    DeleteTimesheetUseCase,
    GetTimesheetUseCase,
    GetTimesheetsByUserUseCase,
    GetTimesheetsByStatusUseCase,
    GetTimesheetByUserRangeUseCase,
    GetPendingApprovalTimesheetsUseCase,
    ListTimesheetsUseCase,
)


WEEK_START = date(2024, 1, 15)
WEEK_END = date(2024, 1, 21)


class TestTimesheetUseCases:
    """Draft, submit, approve and reject."""

    async def log(self, uow, clock, context, category, day, minutes, billable=False):
        start = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
        result = await CreateTimeEntryUseCase(uow, clock).execute(
            CreateTimeEntryRequestDTO(
                time_category_id=category.id,
                start_time=start,
                duration=minutes,
                billable_status="billable" if billable else "non_billable"
            ),
            context
        )
        assert result.success, result.error
        return result.data

    async def create(self, uow, clock, context, user_id, start_date=WEEK_START, end_date=WEEK_END):
        return await CreateTimesheetUseCase(uow, clock).execute(
            CreateTimesheetRequestDTO(user_id=user_id, start_date=start_date, end_date=end_date),
            context
        )

    @pytest.mark.asyncio
    async def test_create_computes_totals(self, uow, clock, context, category, user_id):
        await self.log(uow, clock, context, category, date(2024, 1, 15), 90, billable=True)
        await self.log(uow, clock, context, category, date(2024, 1, 17), 45)
        await self.log(uow, clock, context, category, date(2024, 1, 22), 600)

        result = await self.create(uow, clock, context, user_id)

        assert result.success, result.error
        assert result.data.status == "draft"
        assert result.data.total_hours == Decimal("2.25")
        assert result.data.billable_hours == Decimal("1.50")

    @pytest.mark.asyncio
    async def test_duplicate_period_conflicts(self, uow, clock, context, user_id):
        await self.create(uow, clock, context, user_id)

        duplicate = await self.create(uow, clock, context, user_id)
        overlapping = await self.create(uow, clock, context, user_id, end_date=date(2024, 1, 20))

        assert duplicate.error_kind == ErrorKind.CONFLICT
        assert duplicate.error == "Timesheet already exists for this date range"
        assert overlapping.success

    @pytest.mark.asyncio
    async def test_full_approval_flow(
        self, uow, clock, context, manager_context, category, user_id, manager_id
    ):
        entry = await self.log(uow, clock, context, category, date(2024, 1, 16), 120)
        created = await self.create(uow, clock, context, user_id)
        timesheet_id = created.data.id

        clock.advance(minutes=60)
        submitted = await SubmitTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=timesheet_id), context)
        assert submitted.data.status == "submitted"
        assert submitted.data.submitted_at == clock()
        assert submitted.data.submitted_by == user_id

        pending = await GetPendingApprovalTimesheetsUseCase(uow, clock).execute(EmptyRequestDTO(), manager_context)
        assert [item.id for item in pending.data] == [timesheet_id]

        self_approval = await ApproveTimesheetUseCase(uow, clock).execute(
            ReviewTimesheetRequestDTO(id=timesheet_id), context
        )
        assert self_approval.error_kind == ErrorKind.FORBIDDEN
        assert self_approval.error == "You cannot approve your own timesheet"

        clock.advance(minutes=30)
        approved = await ApproveTimesheetUseCase(uow, clock).execute(
            ReviewTimesheetRequestDTO(id=timesheet_id, approval_notes="Looks good"), manager_context
        )
        assert approved.data.status == "approved"
        assert approved.data.approved_by == manager_id
        assert approved.data.approval_notes == "Looks good"

        detail = await GetTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=timesheet_id), context)
        assert [item.id for item in detail.data.time_entries] == [entry.id]
        assert detail.data.time_entries[0].timesheet_id == timesheet_id

        rejected = await RejectTimesheetUseCase(uow, clock).execute(
            ReviewTimesheetRequestDTO(id=timesheet_id), manager_context
        )
        assert rejected.error_kind == ErrorKind.INVALID_STATE

    @pytest.mark.asyncio
    async def test_only_owner_submits(self, uow, clock, context, manager_context, user_id):
        created = await self.create(uow, clock, context, user_id)

        result = await SubmitTimesheetUseCase(uow, clock).execute(
            EntityIdRequestDTO(id=created.data.id), manager_context
        )

        assert result.error_kind == ErrorKind.FORBIDDEN
        assert result.error == "You can only submit your own timesheets"

    @pytest.mark.asyncio
    async def test_reject_is_terminal(self, uow, clock, context, manager_context, user_id):
        created = await self.create(uow, clock, context, user_id)
        request = EntityIdRequestDTO(id=created.data.id)
        await SubmitTimesheetUseCase(uow, clock).execute(request, context)

        rejected = await RejectTimesheetUseCase(uow, clock).execute(
            ReviewTimesheetRequestDTO(id=created.data.id, approval_notes="Missing Friday"), manager_context
        )
        assert rejected.data.status == "rejected"
        assert rejected.data.approval_notes == "Missing Friday"

        resubmitted = await SubmitTimesheetUseCase(uow, clock).execute(request, context)
        assert resubmitted.error_kind == ErrorKind.INVALID_STATE

    @pytest.mark.asyncio
    async def test_submit_links_only_unlinked_entries(self, uow, clock, context, category, user_id):
        first_entry = await self.log(uow, clock, context, category, date(2024, 1, 15), 30)
        first = await self.create(uow, clock, context, user_id, end_date=date(2024, 1, 16))
        await SubmitTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=first.data.id), context)

        second_entry = await self.log(uow, clock, context, category, date(2024, 1, 16), 30)
        second = await self.create(uow, clock, context, user_id)
        await SubmitTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=second.data.id), context)

        detail = await GetTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=second.data.id), context)
        assert [item.id for item in detail.data.time_entries] == [second_entry.id]
        assert first_entry.id not in [item.id for item in detail.data.time_entries]

    @pytest.mark.asyncio
    async def test_update_period_recalculates(self, uow, clock, context, category, user_id):
        await self.log(uow, clock, context, category, date(2024, 1, 22), 60)
        created = await self.create(uow, clock, context, user_id)
        assert created.data.total_hours == Decimal("0.00")

        result = await UpdateTimesheetUseCase(uow, clock).execute(
            UpdateTimesheetRequestDTO(id=created.data.id, start_date=WEEK_START, end_date=date(2024, 1, 28)),
            context
        )

        assert result.success, result.error
        assert result.data.end_date == date(2024, 1, 28)
        assert result.data.total_hours == Decimal("1.00")

    @pytest.mark.asyncio
    async def test_update_onto_existing_period_conflicts(self, uow, clock, context, user_id):
        await self.create(uow, clock, context, user_id)
        second = await self.create(uow, clock, context, user_id, start_date=date(2024, 1, 22), end_date=date(2024, 1, 28))

        moved = await UpdateTimesheetUseCase(uow, clock).execute(
            UpdateTimesheetRequestDTO(id=second.data.id, start_date=WEEK_START, end_date=WEEK_END),
            context
        )
        unchanged = await UpdateTimesheetUseCase(uow, clock).execute(
            UpdateTimesheetRequestDTO(id=second.data.id, start_date=date(2024, 1, 22), end_date=date(2024, 1, 28)),
            context
        )

        assert moved.error_kind == ErrorKind.CONFLICT
        assert moved.error == "Timesheet already exists for this date range"
        assert unchanged.success, unchanged.error

        timesheets = await GetTimesheetsByUserUseCase(uow, clock).execute(UserIdRequestDTO(user_id=user_id), context)
        assert sorted((item.start_date, item.end_date) for item in timesheets.data) == [
            (WEEK_START, WEEK_END),
            (date(2024, 1, 22), date(2024, 1, 28)),
        ]

    @pytest.mark.asyncio
    async def test_delete_draft_only(self, uow, clock, context, user_id):
        draft = await self.create(uow, clock, context, user_id)
        submitted = await self.create(uow, clock, context, user_id, start_date=date(2024, 1, 22), end_date=date(2024, 1, 28))
        await SubmitTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=submitted.data.id), context)

        locked = await DeleteTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=submitted.data.id), context)
        assert locked.error_kind == ErrorKind.INVALID_STATE

        deleted = await DeleteTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=draft.data.id), context)
        assert deleted.success

        fetched = await GetTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=draft.data.id), context)
        assert fetched.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_see_timesheet(self, uow, clock, context, foreign_context, user_id):
        created = await self.create(uow, clock, context, user_id)

        result = await GetTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=created.data.id), foreign_context)

        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_queries(self, uow, clock, context, user_id):
        older = await self.create(uow, clock, context, user_id, start_date=date(2024, 1, 8), end_date=date(2024, 1, 14))
        newer = await self.create(uow, clock, context, user_id)
        await SubmitTimesheetUseCase(uow, clock).execute(EntityIdRequestDTO(id=newer.data.id), context)

        by_user = await GetTimesheetsByUserUseCase(uow, clock).execute(UserIdRequestDTO(user_id=user_id), context)
        assert [item.id for item in by_user.data] == [newer.data.id, older.data.id]

        drafts = await GetTimesheetsByStatusUseCase(uow, clock).execute(
            TimesheetsByStatusRequestDTO(status="draft"), context
        )
        assert [item.id for item in drafts.data] == [older.data.id]

        exact = await GetTimesheetByUserRangeUseCase(uow, clock).execute(
            TimesheetByUserRangeRequestDTO(user_id=user_id, start_date=WEEK_START, end_date=WEEK_END), context
        )
        assert exact.data.id == newer.data.id

        missing = await GetTimesheetByUserRangeUseCase(uow, clock).execute(
            TimesheetByUserRangeRequestDTO(user_id=user_id, start_date=WEEK_START, end_date=date(2024, 1, 20)),
            context
        )
        assert missing.error_kind == ErrorKind.NOT_FOUND

        listed = await ListTimesheetsUseCase(uow, clock).execute(ListTimesheetsRequestDTO(page_size=1), context)
        assert listed.data.total == 2
        assert listed.data.has_next
