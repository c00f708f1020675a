"""
Timesheet use cases for the application layer.
Implements the Draft -> Submitted -> Approved | Rejected workflow.
"""

import logging
from datetime import date
from typing import List, Optional
import uuid

from smartflow.application.use_cases.base_use_case import (
    CommandUseCase,
    QueryUseCase,
    PaginatedQueryUseCase,
    IdentityContext,
)
from smartflow.application.dto.base_dto import (
    EntityIdRequestDTO,
    EmptyRequestDTO,
    UserIdRequestDTO,
    ListResponseDTO,
)
from smartflow.application.dto.time_entry_dto import TimeEntryResponseDTO
from smartflow.application.dto.timesheet_dto import (
    CreateTimesheetRequestDTO,
    UpdateTimesheetRequestDTO,
    ReviewTimesheetRequestDTO,
    TimesheetsByStatusRequestDTO,
    TimesheetByUserRangeRequestDTO,
    ListTimesheetsRequestDTO,
    TimesheetResponseDTO,
)
from smartflow.domain.models.base import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus


logger = logging.getLogger(__name__)


def _to_responses(timesheets: List[Timesheet]) -> List[TimesheetResponseDTO]:
    return [TimesheetResponseDTO.from_domain(timesheet) for timesheet in timesheets]


class _TimesheetLookupMixin:
    """Tenant-scoped fetch and total recomputation shared by the timesheet use cases."""

    def _get_timesheet(self, timesheet_id: Optional[uuid.UUID], tenant_id: uuid.UUID) -> Timesheet:
        if timesheet_id is None:
            raise ValidationError("Timesheet ID is required", "id")
        timesheet = self.uow.timesheets.get_by_id(timesheet_id, tenant_id)
        if timesheet is None:
            raise EntityNotFoundError("Timesheet", timesheet_id, "Timesheet not found")
        return timesheet

    def _ensure_period_free(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        existing = self.uow.timesheets.get_by_user_and_date_range(user_id, start_date, end_date, tenant_id)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("Timesheet already exists for this date range")

    def _recalculate(self, timesheet: Timesheet) -> None:
        entries = self.uow.time_entries.get_by_date_range(
            timesheet.user_id, timesheet.start_date, timesheet.end_date, timesheet.tenant_id
        )
        timesheet.recalculate_totals(entries)


class CreateTimesheetUseCase(
    _TimesheetLookupMixin,
    CommandUseCase[CreateTimesheetRequestDTO, TimesheetResponseDTO]
):
    """Use case for creating a draft timesheet."""

    operation = "creating timesheet"

    async def _execute_command_logic(
        self, request: CreateTimesheetRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id = context.require_tenant()

        self._ensure_period_free(request.user_id, request.start_date, request.end_date, tenant_id)

        timesheet = Timesheet(
            tenant_id=tenant_id,
            user_id=request.user_id,
            start_date=request.start_date,
            end_date=request.end_date,
            status=TimesheetStatus.DRAFT
        )
        timesheet.validate()
        self._recalculate(timesheet)
        timesheet.mark_as_created(self.now())

        saved = self.uow.timesheets.save(timesheet)
        logger.info(
            f"Timesheet {saved.id} created for user {saved.user_id} "
            f"({saved.start_date} - {saved.end_date}, {saved.total_hours} h)"
        )
        return TimesheetResponseDTO.from_domain(saved)


class UpdateTimesheetUseCase(
    _TimesheetLookupMixin,
    CommandUseCase[UpdateTimesheetRequestDTO, TimesheetResponseDTO]
):
    """Use case for changing the period of a draft timesheet."""

    operation = "updating timesheet"

    async def _execute_command_logic(
        self, request: UpdateTimesheetRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id = context.require_tenant()
        timesheet = self._get_timesheet(request.id, tenant_id)

        timesheet.ensure_draft("Only draft timesheets can be updated")
        self._ensure_period_free(
            timesheet.user_id, request.start_date, request.end_date, tenant_id, exclude_id=timesheet.id
        )
        timesheet.change_period(request.start_date, request.end_date, self.now())
        self._recalculate(timesheet)

        saved = self.uow.timesheets.save(timesheet)
        return TimesheetResponseDTO.from_domain(saved)


class SubmitTimesheetUseCase(
    _TimesheetLookupMixin,
    CommandUseCase[EntityIdRequestDTO, TimesheetResponseDTO]
):
    """
    Use case for submitting a timesheet.
    Only the owner may submit; the owner's unlinked entries in the period are attached to it.
    """

    operation = "submitting timesheet"

    async def _execute_command_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        timesheet = self._get_timesheet(request.id, tenant_id)
        now = self.now()

        timesheet.submit(user_id, now)

        entries = self.uow.time_entries.get_by_date_range(
            timesheet.user_id, timesheet.start_date, timesheet.end_date, tenant_id
        )
        linked = []
        for entry in entries:
            if entry.timesheet_id is None:
                entry.attach_to_timesheet(timesheet.id, now)
                self.uow.time_entries.save(entry)
                linked.append(entry)

        saved = self.uow.timesheets.save(timesheet)
        logger.info(f"Timesheet {saved.id} submitted by {user_id}, {len(linked)} entries linked")
        return TimesheetResponseDTO.from_domain(saved)


class ApproveTimesheetUseCase(
    _TimesheetLookupMixin,
    CommandUseCase[ReviewTimesheetRequestDTO, TimesheetResponseDTO]
):
    """Use case for approving a submitted timesheet. Owners cannot approve their own."""

    operation = "approving timesheet"

    async def _execute_command_logic(
        self, request: ReviewTimesheetRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        timesheet = self._get_timesheet(request.id, tenant_id)

        timesheet.approve(user_id, self.now(), request.approval_notes)

        saved = self.uow.timesheets.save(timesheet)
        logger.info(f"Timesheet {saved.id} approved by {user_id}")
        return TimesheetResponseDTO.from_domain(saved)


class RejectTimesheetUseCase(
    _TimesheetLookupMixin,
    CommandUseCase[ReviewTimesheetRequestDTO, TimesheetResponseDTO]
):
    """Use case for rejecting a submitted timesheet."""

    operation = "rejecting timesheet"

    async def _execute_command_logic(
        self, request: ReviewTimesheetRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        timesheet = self._get_timesheet(request.id, tenant_id)

        timesheet.reject(user_id, self.now(), request.approval_notes)

        saved = self.uow.timesheets.save(timesheet)
        logger.info(f"Timesheet {saved.id} rejected by {user_id}")
        return TimesheetResponseDTO.from_domain(saved)


class DeleteTimesheetUseCase(_TimesheetLookupMixin, CommandUseCase[EntityIdRequestDTO, bool]):
    """Use case for soft-deleting a draft timesheet."""

    operation = "deleting timesheet"

    async def _execute_command_logic(self, request: EntityIdRequestDTO, context: IdentityContext) -> bool:
        tenant_id = context.require_tenant()
        timesheet = self._get_timesheet(request.id, tenant_id)

        timesheet.soft_delete(self.now())
        self.uow.timesheets.save(timesheet)
        logger.info(f"Timesheet {timesheet.id} deleted")
        return True


class GetTimesheetUseCase(_TimesheetLookupMixin, QueryUseCase[EntityIdRequestDTO, TimesheetResponseDTO]):
    """Use case for getting a timesheet together with its linked entries."""

    operation = "retrieving timesheet"

    async def _execute_business_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id = context.require_tenant()
        timesheet = self._get_timesheet(request.id, tenant_id)
        entries = self.uow.time_entries.get_by_timesheet(timesheet.id, tenant_id)
        return TimesheetResponseDTO.from_domain(
            timesheet,
            [TimeEntryResponseDTO.from_domain(entry) for entry in entries]
        )


class GetTimesheetsByUserUseCase(QueryUseCase[UserIdRequestDTO, List[TimesheetResponseDTO]]):
    operation = "retrieving user timesheets"

    async def _execute_business_logic(
        self, request: UserIdRequestDTO, context: IdentityContext
    ) -> List[TimesheetResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.timesheets.get_by_user(request.user_id, tenant_id))


class GetTimesheetsByStatusUseCase(QueryUseCase[TimesheetsByStatusRequestDTO, List[TimesheetResponseDTO]]):
    operation = "retrieving timesheets by status"

    async def _execute_business_logic(
        self, request: TimesheetsByStatusRequestDTO, context: IdentityContext
    ) -> List[TimesheetResponseDTO]:
        tenant_id = context.require_tenant()
        status = TimesheetStatus(request.status)
        return _to_responses(self.uow.timesheets.get_by_status(status, tenant_id))


class GetTimesheetByUserRangeUseCase(QueryUseCase[TimesheetByUserRangeRequestDTO, TimesheetResponseDTO]):
    """The timesheet covering exactly the given period for a user."""

    operation = "retrieving timesheet"

    async def _execute_business_logic(
        self, request: TimesheetByUserRangeRequestDTO, context: IdentityContext
    ) -> TimesheetResponseDTO:
        tenant_id = context.require_tenant()
        timesheet = self.uow.timesheets.get_by_user_and_date_range(
            request.user_id, request.start_date, request.end_date, tenant_id
        )
        if timesheet is None:
            raise EntityNotFoundError("Timesheet", message="Timesheet not found")
        return TimesheetResponseDTO.from_domain(timesheet)


class GetPendingApprovalTimesheetsUseCase(QueryUseCase[EmptyRequestDTO, List[TimesheetResponseDTO]]):
    """Submitted timesheets of the tenant, oldest submission first."""

    operation = "retrieving pending timesheets"

    async def _execute_business_logic(
        self, request: EmptyRequestDTO, context: IdentityContext
    ) -> List[TimesheetResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.timesheets.get_pending_approval(tenant_id))


class ListTimesheetsUseCase(
    PaginatedQueryUseCase[ListTimesheetsRequestDTO, ListResponseDTO[TimesheetResponseDTO]]
):
    operation = "retrieving timesheets"

    async def _execute_business_logic(
        self, request: ListTimesheetsRequestDTO, context: IdentityContext
    ) -> ListResponseDTO[TimesheetResponseDTO]:
        tenant_id = context.require_tenant()
        timesheets, total = self.uow.timesheets.list_paged(
            tenant_id, page=request.page, page_size=request.page_size
        )
        return ListResponseDTO[TimesheetResponseDTO].create(
            items=_to_responses(timesheets),
            total=total,
            page=request.page,
            page_size=request.page_size
        )
