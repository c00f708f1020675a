"""
Timesheet router.
Handles the draft, submit and review workflow.
"""

from datetime import date
from typing import Annotated, List, Optional
import uuid

from fastapi import APIRouter, Body, Depends, Query, status

from smartflow.application.dto.base_dto import (
    EmptyRequestDTO,
    EntityIdRequestDTO,
    UserIdRequestDTO,
    ListResponseDTO,
)
from smartflow.application.dto.timesheet_dto import (
    CreateTimesheetRequestDTO,
    UpdateTimesheetRequestDTO,
    ReviewTimesheetRequestDTO,
    TimesheetsByStatusRequestDTO,
    TimesheetByUserRangeRequestDTO,
    ListTimesheetsRequestDTO,
    TimesheetResponseDTO,
)
from smartflow.application.use_cases.base_use_case import IdentityContext
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
from smartflow.config import Settings, get_settings
from smartflow.domain.models.timesheet import TimesheetStatus
from smartflow.infrastructure.auth import get_identity_context
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.dependencies import get_unit_of_work, build_request
from smartflow.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()

Identity = Annotated[IdentityContext, Depends(get_identity_context)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]
ReviewBody = Annotated[Optional[ReviewTimesheetRequestDTO], Body()]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimesheetResponseDTO)
async def create_timesheet(request: CreateTimesheetRequestDTO, context: Identity, uow: UnitOfWorkDep):
    """
    Create a draft timesheet for a user and period.
    Totals are computed from the user's entries in the period.
    """
    result = await CreateTimesheetUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.get("", response_model=ListResponseDTO[TimesheetResponseDTO])
async def list_timesheets(
    context: Identity,
    uow: UnitOfWorkDep,
    settings: Annotated[Settings, Depends(get_settings)],
    page: int = Query(1, description="Page number (1-based)"),
    page_size: Optional[int] = Query(None, description="Items per page")
):
    request = build_request(
        ListTimesheetsRequestDTO, page=page, page_size=page_size or settings.default_page_size
    )
    use_case = ListTimesheetsUseCase(uow, max_page_size=settings.max_page_size)
    return raise_for_result(await use_case.execute(request, context))


@router.get("/pending-approval", response_model=List[TimesheetResponseDTO])
async def get_pending_approval_timesheets(context: Identity, uow: UnitOfWorkDep):
    """Submitted timesheets awaiting review, oldest submission first."""
    result = await GetPendingApprovalTimesheetsUseCase(uow).execute(EmptyRequestDTO(), context)
    return raise_for_result(result)


@router.get("/status/{timesheet_status}", response_model=List[TimesheetResponseDTO])
async def get_timesheets_by_status(timesheet_status: TimesheetStatus, context: Identity, uow: UnitOfWorkDep):
    request = TimesheetsByStatusRequestDTO(status=timesheet_status)
    return raise_for_result(await GetTimesheetsByStatusUseCase(uow).execute(request, context))


@router.get("/user/{user_id}", response_model=List[TimesheetResponseDTO])
async def get_timesheets_by_user(user_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTimesheetsByUserUseCase(uow).execute(UserIdRequestDTO(user_id=user_id), context)
    return raise_for_result(result)


@router.get("/user/{user_id}/range", response_model=TimesheetResponseDTO)
async def get_timesheet_by_user_range(
    user_id: uuid.UUID,
    context: Identity,
    uow: UnitOfWorkDep,
    start_date: date = Query(..., description="First day of the period"),
    end_date: date = Query(..., description="Last day of the period")
):
    request = build_request(
        TimesheetByUserRangeRequestDTO, user_id=user_id, start_date=start_date, end_date=end_date
    )
    return raise_for_result(await GetTimesheetByUserRangeUseCase(uow).execute(request, context))


@router.get("/{timesheet_id}", response_model=TimesheetResponseDTO)
async def get_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    """Get a timesheet together with its linked entries."""
    result = await GetTimesheetUseCase(uow).execute(EntityIdRequestDTO(id=timesheet_id), context)
    return raise_for_result(result)


@router.put("/{timesheet_id}", response_model=TimesheetResponseDTO)
async def update_timesheet(
    timesheet_id: uuid.UUID,
    request: UpdateTimesheetRequestDTO,
    context: Identity,
    uow: UnitOfWorkDep
):
    """Change the period of a draft timesheet and recompute its totals."""
    request.id = timesheet_id
    result = await UpdateTimesheetUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.post("/{timesheet_id}/submit", response_model=TimesheetResponseDTO)
async def submit_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    """Submit one of the caller's own draft timesheets for review."""
    result = await SubmitTimesheetUseCase(uow).execute(EntityIdRequestDTO(id=timesheet_id), context)
    return raise_for_result(result)


@router.post("/{timesheet_id}/approve", response_model=TimesheetResponseDTO)
async def approve_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep, request: ReviewBody = None):
    """Approve a submitted timesheet. Reviewers cannot approve their own."""
    request = request or ReviewTimesheetRequestDTO()
    request.id = timesheet_id
    result = await ApproveTimesheetUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.post("/{timesheet_id}/reject", response_model=TimesheetResponseDTO)
async def reject_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep, request: ReviewBody = None):
    request = request or ReviewTimesheetRequestDTO()
    request.id = timesheet_id
    result = await RejectTimesheetUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.delete("/{timesheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timesheet(timesheet_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    """Delete a draft timesheet."""
    result = await DeleteTimesheetUseCase(uow).execute(EntityIdRequestDTO(id=timesheet_id), context)
    raise_for_result(result)
