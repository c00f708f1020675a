"""
Time entry router.
Handles manual entries and the ledger queries.
"""

from datetime import date
from typing import Annotated, List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status

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
from smartflow.application.use_cases.base_use_case import IdentityContext
from smartflow.application.use_cases.time_entry_use_cases import (
    CreateTimeEntryUseCase,
    UpdateTimeEntryUseCase,
    DeleteTimeEntryUseCase,
    GetTimeEntryUseCase,
    GetTimeEntriesByUserUseCase,
    GetTimeEntriesByProjectUseCase,
    GetTimeEntriesByTaskUseCase,
    GetTimeEntriesByTimesheetUseCase,
    GetTimeEntriesByDateRangeUseCase,
    ListTimeEntriesUseCase,
)
from smartflow.config import Settings, get_settings
from smartflow.infrastructure.auth import get_identity_context
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.dependencies import get_unit_of_work, build_request
from smartflow.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()

Identity = Annotated[IdentityContext, Depends(get_identity_context)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
async def create_time_entry(request: CreateTimeEntryRequestDTO, context: Identity, uow: UnitOfWorkDep):
    """
    Record a block of time for the caller.

    - **time_category_id**: Category the time is classified under (required)
    - **start_time** / **end_time**: UTC timestamps; end must be after start
    - **duration**: Minutes; derived from the time range when omitted or zero
    """
    result = await CreateTimeEntryUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.get("", response_model=ListResponseDTO[TimeEntryResponseDTO])
async def list_time_entries(
    context: Identity,
    uow: UnitOfWorkDep,
    settings: SettingsDep,
    page: int = Query(1, description="Page number (1-based)"),
    page_size: Optional[int] = Query(None, description="Items per page"),
    search: Optional[str] = Query(None, description="Search description or category name"),
    sort_by: str = Query("start_time", description="start_time, duration or created_at"),
    sort_order: str = Query("desc", description="Sort order (asc/desc)")
):
    request = build_request(
        ListTimeEntriesRequestDTO,
        page=page,
        page_size=page_size or settings.default_page_size,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order
    )
    use_case = ListTimeEntriesUseCase(uow, max_page_size=settings.max_page_size)
    return raise_for_result(await use_case.execute(request, context))


@router.get("/date-range", response_model=List[TimeEntryResponseDTO])
async def get_time_entries_by_date_range(
    context: Identity,
    uow: UnitOfWorkDep,
    user_id: uuid.UUID = Query(..., description="User whose entries to return"),
    start_date: date = Query(..., description="First day, inclusive"),
    end_date: date = Query(..., description="Last day, inclusive")
):
    request = build_request(
        TimeEntriesByDateRangeRequestDTO, user_id=user_id, start_date=start_date, end_date=end_date
    )
    return raise_for_result(await GetTimeEntriesByDateRangeUseCase(uow).execute(request, context))


@router.get("/user/{user_id}", response_model=List[TimeEntryResponseDTO])
async def get_time_entries_by_user(user_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTimeEntriesByUserUseCase(uow).execute(UserIdRequestDTO(user_id=user_id), context)
    return raise_for_result(result)


@router.get("/project/{project_id}", response_model=List[TimeEntryResponseDTO])
async def get_time_entries_by_project(project_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    request = TimeEntriesByProjectRequestDTO(project_id=project_id)
    return raise_for_result(await GetTimeEntriesByProjectUseCase(uow).execute(request, context))


@router.get("/task/{task_id}", response_model=List[TimeEntryResponseDTO])
async def get_time_entries_by_task(task_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    request = TimeEntriesByTaskRequestDTO(task_id=task_id)
    return raise_for_result(await GetTimeEntriesByTaskUseCase(uow).execute(request, context))


@router.get("/timesheet/{timesheet_id}", response_model=List[TimeEntryResponseDTO])
async def get_time_entries_by_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    request = TimeEntriesByTimesheetRequestDTO(timesheet_id=timesheet_id)
    return raise_for_result(await GetTimeEntriesByTimesheetUseCase(uow).execute(request, context))


@router.get("/{entry_id}", response_model=TimeEntryResponseDTO)
async def get_time_entry(entry_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTimeEntryUseCase(uow).execute(EntityIdRequestDTO(id=entry_id), context)
    return raise_for_result(result)


@router.put("/{entry_id}", response_model=TimeEntryResponseDTO)
async def update_time_entry(
    entry_id: uuid.UUID,
    request: UpdateTimeEntryRequestDTO,
    context: Identity,
    uow: UnitOfWorkDep,
    settings: SettingsDep
):
    """Replace the editable fields of an entry."""
    request.id = entry_id
    use_case = UpdateTimeEntryUseCase(uow, lock_submitted_entries=settings.lock_submitted_time_entries)
    return raise_for_result(await use_case.execute(request, context))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_entry(entry_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep, settings: SettingsDep):
    """Soft-delete one of the caller's entries."""
    use_case = DeleteTimeEntryUseCase(uow, lock_submitted_entries=settings.lock_submitted_time_entries)
    raise_for_result(await use_case.execute(EntityIdRequestDTO(id=entry_id), context))
