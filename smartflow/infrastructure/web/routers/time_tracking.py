"""
Time tracking router.
Live timer: start, pause, resume, update and stop.
"""

from typing import Annotated, List, Optional
import uuid

from fastapi import APIRouter, Body, Depends, status

from smartflow.application.dto.base_dto import EmptyRequestDTO, EntityIdRequestDTO, UserIdRequestDTO
from smartflow.application.dto.time_entry_dto import TimeEntryResponseDTO
from smartflow.application.dto.tracking_dto import (
    StartTrackingRequestDTO,
    StopTrackingRequestDTO,
    UpdateTrackingRequestDTO,
    TrackingSessionResponseDTO,
)
from smartflow.application.use_cases.base_use_case import IdentityContext
from smartflow.application.use_cases.tracking_use_cases import (
    StartTrackingUseCase,
    StopTrackingUseCase,
    PauseTrackingUseCase,
    ResumeTrackingUseCase,
    UpdateTrackingUseCase,
    GetActiveTrackingUseCase,
    GetTrackingSessionUseCase,
    GetTrackingSessionsByUserUseCase,
)
from smartflow.infrastructure.auth import get_identity_context
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.dependencies import get_unit_of_work
from smartflow.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()

Identity = Annotated[IdentityContext, Depends(get_identity_context)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]


@router.post("/start", status_code=status.HTTP_201_CREATED, response_model=TrackingSessionResponseDTO)
async def start_tracking(request: StartTrackingRequestDTO, context: Identity, uow: UnitOfWorkDep):
    """
    Start a tracking session for the caller.
    Any session the caller still has running or paused is stopped without recording time.
    """
    result = await StartTrackingUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.get("/active", response_model=TrackingSessionResponseDTO)
async def get_active_tracking(context: Identity, uow: UnitOfWorkDep):
    result = await GetActiveTrackingUseCase(uow).execute(EmptyRequestDTO(), context)
    return raise_for_result(result)


@router.get("/user/{user_id}", response_model=List[TrackingSessionResponseDTO])
async def get_tracking_sessions_by_user(user_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTrackingSessionsByUserUseCase(uow).execute(UserIdRequestDTO(user_id=user_id), context)
    return raise_for_result(result)


@router.post("/{session_id}/stop", response_model=Optional[TimeEntryResponseDTO])
async def stop_tracking(
    session_id: uuid.UUID,
    context: Identity,
    uow: UnitOfWorkDep,
    request: Annotated[Optional[StopTrackingRequestDTO], Body()] = None
):
    """
    Stop a session.
    Returns the recorded time entry, or null when `create_time_entry` is false.
    """
    request = request or StopTrackingRequestDTO()
    request.id = session_id
    result = await StopTrackingUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.post("/{session_id}/pause", response_model=TrackingSessionResponseDTO)
async def pause_tracking(session_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await PauseTrackingUseCase(uow).execute(EntityIdRequestDTO(id=session_id), context)
    return raise_for_result(result)


@router.post("/{session_id}/resume", response_model=TrackingSessionResponseDTO)
async def resume_tracking(session_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await ResumeTrackingUseCase(uow).execute(EntityIdRequestDTO(id=session_id), context)
    return raise_for_result(result)


@router.put("/{session_id}", response_model=TrackingSessionResponseDTO)
async def update_tracking(
    session_id: uuid.UUID,
    request: UpdateTrackingRequestDTO,
    context: Identity,
    uow: UnitOfWorkDep
):
    """Change the category, project, task or description of a session."""
    request.id = session_id
    result = await UpdateTrackingUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.get("/{session_id}", response_model=TrackingSessionResponseDTO)
async def get_tracking_session(session_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTrackingSessionUseCase(uow).execute(EntityIdRequestDTO(id=session_id), context)
    return raise_for_result(result)
