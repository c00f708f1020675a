"""
Time Entry use cases for the application layer.
Implements the time entry ledger: manual entries, edits, soft deletes and lookups.
"""

import logging
from typing import List
import uuid

from smartflow.application.use_cases.base_use_case import (
    Clock,
    CommandUseCase,
    QueryUseCase,
    PaginatedQueryUseCase,
    IdentityContext,
)
from smartflow.application.dto.base_dto import EntityIdRequestDTO, UserIdRequestDTO, ListResponseDTO
from smartflow.application.dto.time_entry_dto import (
    CreateTimeEntryRequestDTO,
    UpdateTimeEntryRequestDTO,
    ListTimeEntriesRequestDTO,
    TimeEntriesByProjectRequestDTO,
    TimeEntriesByTaskRequestDTO,
    TimeEntriesByTimesheetRequestDTO,
    TimeEntriesByDateRangeRequestDTO,
    TimeEntryResponseDTO,
)
from smartflow.domain.models.base import (
    EntityNotFoundError,
    InvalidStateError,
    ValidationError,
    utcnow,
)
from smartflow.domain.models.time_entry import TimeEntry, TimeEntryType
from smartflow.domain.models.value_objects import BillableStatus
from smartflow.domain.repositories.unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)


def ensure_category_exists(uow: UnitOfWork, category_id: uuid.UUID, tenant_id: uuid.UUID) -> None:
    """Reject references to categories outside the caller's tenant."""
    if uow.time_categories.get_by_id(category_id, tenant_id) is None:
        raise EntityNotFoundError("Time category", category_id, "Time category not found")


def _to_responses(entries: List[TimeEntry]) -> List[TimeEntryResponseDTO]:
    return [TimeEntryResponseDTO.from_domain(entry) for entry in entries]


class _LockAwareEntryUseCase(CommandUseCase):
    """
    Base for entry mutations.
    Entries linked to a submitted or approved timesheet are locked unless locking is off.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow, lock_submitted_entries: bool = True):
        super().__init__(uow, clock)
        self.lock_submitted_entries = lock_submitted_entries

    def _get_entry(self, entry_id: uuid.UUID, tenant_id: uuid.UUID) -> TimeEntry:
        entry = self.uow.time_entries.get_by_id(entry_id, tenant_id)
        if entry is None:
            raise EntityNotFoundError("Time entry", entry_id, "Time entry not found")
        return entry

    def _ensure_unlocked(self, entry: TimeEntry) -> None:
        if not self.lock_submitted_entries or entry.timesheet_id is None:
            return
        timesheet = self.uow.timesheets.get_by_id(entry.timesheet_id, entry.tenant_id)
        if timesheet is not None and timesheet.locks_entries:
            raise InvalidStateError("Time entry belongs to a submitted timesheet")


class CreateTimeEntryUseCase(CommandUseCase[CreateTimeEntryRequestDTO, TimeEntryResponseDTO]):
    """Use case for creating a manual time entry."""

    operation = "creating time entry"

    async def _execute_command_logic(
        self, request: CreateTimeEntryRequestDTO, context: IdentityContext
    ) -> TimeEntryResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        ensure_category_exists(self.uow, request.time_category_id, tenant_id)

        entry = TimeEntry(
            tenant_id=tenant_id,
            user_id=user_id,
            project_id=request.project_id,
            task_id=request.task_id,
            time_category_id=request.time_category_id,
            start_time=request.start_time,
            end_time=request.end_time,
            duration=request.duration or 0,
            description=request.description,
            entry_type=TimeEntryType(request.entry_type),
            billable_status=BillableStatus(request.billable_status),
            hourly_rate=request.hourly_rate,
            is_manual_entry=request.is_manual_entry
        )
        entry.derive_duration()
        entry.validate()
        entry.mark_as_created(self.now())

        saved = self.uow.time_entries.save(entry)
        logger.info(f"Time entry {saved.id} created for user {user_id} ({saved.duration} min)")
        return TimeEntryResponseDTO.from_domain(saved)


class UpdateTimeEntryUseCase(_LockAwareEntryUseCase):
    """Use case for updating a time entry."""

    operation = "updating time entry"

    async def _execute_command_logic(
        self, request: UpdateTimeEntryRequestDTO, context: IdentityContext
    ) -> TimeEntryResponseDTO:
        tenant_id = context.require_tenant()
        if request.id is None:
            raise ValidationError("Time entry ID is required", "id")

        entry = self._get_entry(request.id, tenant_id)
        self._ensure_unlocked(entry)
        if request.time_category_id != entry.time_category_id:
            ensure_category_exists(self.uow, request.time_category_id, tenant_id)

        entry.revise(
            self.now(),
            time_category_id=request.time_category_id,
            start_time=request.start_time,
            end_time=request.end_time,
            duration=request.duration,
            project_id=request.project_id,
            task_id=request.task_id,
            description=request.description,
            entry_type=request.entry_type,
            billable_status=request.billable_status,
            hourly_rate=request.hourly_rate
        )

        saved = self.uow.time_entries.save(entry)
        return TimeEntryResponseDTO.from_domain(saved)


class DeleteTimeEntryUseCase(_LockAwareEntryUseCase):
    """Use case for soft-deleting a time entry. Only the owner may delete."""

    operation = "deleting time entry"

    async def _execute_command_logic(self, request: EntityIdRequestDTO, context: IdentityContext) -> bool:
        tenant_id, user_id = context.require_tenant_and_user()

        entry = self._get_entry(request.id, tenant_id)
        if entry.user_id != user_id:
            raise EntityNotFoundError("Time entry", request.id, "Time entry not found")
        self._ensure_unlocked(entry)

        entry.soft_delete(self.now())
        self.uow.time_entries.save(entry)
        logger.info(f"Time entry {entry.id} deleted")
        return True


class GetTimeEntryUseCase(QueryUseCase[EntityIdRequestDTO, TimeEntryResponseDTO]):
    """Use case for getting a time entry by ID."""

    operation = "retrieving time entry"

    async def _execute_business_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TimeEntryResponseDTO:
        tenant_id = context.require_tenant()
        entry = self.uow.time_entries.get_by_id(request.id, tenant_id)
        if entry is None:
            raise EntityNotFoundError("Time entry", request.id, "Time entry not found")
        return TimeEntryResponseDTO.from_domain(entry)


class GetTimeEntriesByUserUseCase(QueryUseCase[UserIdRequestDTO, List[TimeEntryResponseDTO]]):
    operation = "retrieving time entries"

    async def _execute_business_logic(
        self, request: UserIdRequestDTO, context: IdentityContext
    ) -> List[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.time_entries.get_by_user(request.user_id, tenant_id))


class GetTimeEntriesByProjectUseCase(QueryUseCase[TimeEntriesByProjectRequestDTO, List[TimeEntryResponseDTO]]):
    operation = "retrieving project time entries"

    async def _execute_business_logic(
        self, request: TimeEntriesByProjectRequestDTO, context: IdentityContext
    ) -> List[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.time_entries.get_by_project(request.project_id, tenant_id))


class GetTimeEntriesByTaskUseCase(QueryUseCase[TimeEntriesByTaskRequestDTO, List[TimeEntryResponseDTO]]):
    operation = "retrieving task time entries"

    async def _execute_business_logic(
        self, request: TimeEntriesByTaskRequestDTO, context: IdentityContext
    ) -> List[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.time_entries.get_by_task(request.task_id, tenant_id))


class GetTimeEntriesByTimesheetUseCase(
    QueryUseCase[TimeEntriesByTimesheetRequestDTO, List[TimeEntryResponseDTO]]
):
    operation = "retrieving timesheet time entries"

    async def _execute_business_logic(
        self, request: TimeEntriesByTimesheetRequestDTO, context: IdentityContext
    ) -> List[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        return _to_responses(self.uow.time_entries.get_by_timesheet(request.timesheet_id, tenant_id))


class GetTimeEntriesByDateRangeUseCase(
    QueryUseCase[TimeEntriesByDateRangeRequestDTO, List[TimeEntryResponseDTO]]
):
    """A user's entries between two dates, inclusive on the start time's date."""

    operation = "retrieving time entries by date range"

    async def _execute_business_logic(
        self, request: TimeEntriesByDateRangeRequestDTO, context: IdentityContext
    ) -> List[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        entries = self.uow.time_entries.get_by_date_range(
            request.user_id, request.start_date, request.end_date, tenant_id
        )
        return _to_responses(entries)


class ListTimeEntriesUseCase(
    PaginatedQueryUseCase[ListTimeEntriesRequestDTO, ListResponseDTO[TimeEntryResponseDTO]]
):
    """Use case for the paged entry listing."""

    operation = "retrieving time entries"

    async def _execute_business_logic(
        self, request: ListTimeEntriesRequestDTO, context: IdentityContext
    ) -> ListResponseDTO[TimeEntryResponseDTO]:
        tenant_id = context.require_tenant()
        entries, total = self.uow.time_entries.list_paged(
            tenant_id,
            page=request.page,
            page_size=request.page_size,
            search=request.search,
            sort_by=request.sort_by or "start_time",
            sort_desc=request.is_descending
        )
        return ListResponseDTO[TimeEntryResponseDTO].create(
            items=_to_responses(entries),
            total=total,
            page=request.page,
            page_size=request.page_size
        )
