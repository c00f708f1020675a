"""
Active tracking use cases for the application layer.
Start, pause, resume, update and stop the live timer of a user.
"""

import logging
from typing import List, Optional
import uuid

from smartflow.application.use_cases.base_use_case import (
    Clock,
    CommandUseCase,
    QueryUseCase,
    IdentityContext,
)
from smartflow.application.use_cases.time_entry_use_cases import ensure_category_exists
from smartflow.application.dto.base_dto import EntityIdRequestDTO, EmptyRequestDTO, UserIdRequestDTO
from smartflow.application.dto.time_entry_dto import TimeEntryResponseDTO
from smartflow.application.dto.tracking_dto import (
    StartTrackingRequestDTO,
    StopTrackingRequestDTO,
    UpdateTrackingRequestDTO,
    TrackingSessionResponseDTO,
)
from smartflow.domain.models.base import EntityNotFoundError, ValidationError, utcnow
from smartflow.domain.models.tracking_session import ActiveTrackingSession
from smartflow.domain.repositories.unit_of_work import UnitOfWork
from smartflow.domain.services.timer_service import TimerService


logger = logging.getLogger(__name__)


class _OwnedSessionMixin:
    """Loads a session that must belong to the caller."""

    def _get_owned_session(
        self, session_id: Optional[uuid.UUID], tenant_id: uuid.UUID, user_id: uuid.UUID
    ) -> ActiveTrackingSession:
        if session_id is None:
            raise ValidationError("Session ID is required", "id")
        session = self.uow.tracking_sessions.get_by_id(session_id, tenant_id)
        if session is None or session.user_id != user_id:
            raise EntityNotFoundError("Active tracking session", session_id, "Active tracking session not found")
        return session


class StartTrackingUseCase(CommandUseCase[StartTrackingRequestDTO, TrackingSessionResponseDTO]):
    """
    Use case for starting a tracking session.
    Any session the user still has open is stopped first, without recording an entry.
    """

    operation = "starting tracking session"

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow, timer_service: Optional[TimerService] = None):
        super().__init__(uow, clock)
        self.timer_service = timer_service or TimerService()

    async def _execute_command_logic(
        self, request: StartTrackingRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        ensure_category_exists(self.uow, request.time_category_id, tenant_id)
        now = self.now()

        stopped = self.uow.tracking_sessions.stop_all_active(user_id, tenant_id, now)
        if stopped:
            logger.info(f"Force-stopped {stopped} open session(s) for user {user_id}")

        session = self.timer_service.start_session(
            tenant_id=tenant_id,
            user_id=user_id,
            time_category_id=request.time_category_id,
            now=now,
            project_id=request.project_id,
            task_id=request.task_id,
            description=request.description
        )
        saved = self.uow.tracking_sessions.save(session)

        logger.info(f"Tracking session {saved.id} started for user {user_id}")
        return TrackingSessionResponseDTO.from_domain(saved, now)


class StopTrackingUseCase(
    _OwnedSessionMixin,
    CommandUseCase[StopTrackingRequestDTO, Optional[TimeEntryResponseDTO]]
):
    """Use case for stopping a session; returns the recorded entry, if one was requested."""

    operation = "stopping tracking session"

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow, timer_service: Optional[TimerService] = None):
        super().__init__(uow, clock)
        self.timer_service = timer_service or TimerService()

    async def _execute_command_logic(
        self, request: StopTrackingRequestDTO, context: IdentityContext
    ) -> Optional[TimeEntryResponseDTO]:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self._get_owned_session(request.id, tenant_id, user_id)
        now = self.now()

        entry = self.timer_service.stop_session(
            session,
            now,
            create_time_entry=request.create_time_entry,
            description=request.description
        )
        self.uow.tracking_sessions.save(session)

        if entry is None:
            logger.info(f"Tracking session {session.id} stopped without a time entry")
            return None

        saved = self.uow.time_entries.save(entry)
        logger.info(f"Tracking session {session.id} stopped, time entry {saved.id} ({saved.duration} min)")
        return TimeEntryResponseDTO.from_domain(saved)


class PauseTrackingUseCase(_OwnedSessionMixin, CommandUseCase[EntityIdRequestDTO, TrackingSessionResponseDTO]):
    """Use case for pausing a running session."""

    operation = "pausing tracking session"

    async def _execute_command_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self._get_owned_session(request.id, tenant_id, user_id)
        now = self.now()

        session.pause(now)
        saved = self.uow.tracking_sessions.save(session)
        logger.info(f"Tracking session {saved.id} paused")
        return TrackingSessionResponseDTO.from_domain(saved, now)


class ResumeTrackingUseCase(_OwnedSessionMixin, CommandUseCase[EntityIdRequestDTO, TrackingSessionResponseDTO]):
    """Use case for resuming a paused session."""

    operation = "resuming tracking session"

    async def _execute_command_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self._get_owned_session(request.id, tenant_id, user_id)
        now = self.now()

        session.resume(now)
        saved = self.uow.tracking_sessions.save(session)
        logger.info(f"Tracking session {saved.id} resumed ({saved.paused_minutes} min paused in total)")
        return TrackingSessionResponseDTO.from_domain(saved, now)


class UpdateTrackingUseCase(
    _OwnedSessionMixin,
    CommandUseCase[UpdateTrackingRequestDTO, TrackingSessionResponseDTO]
):
    """Use case for changing what a session is tracked against."""

    operation = "updating tracking session"

    async def _execute_command_logic(
        self, request: UpdateTrackingRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self._get_owned_session(request.id, tenant_id, user_id)
        if request.time_category_id is not None and request.time_category_id != session.time_category_id:
            ensure_category_exists(self.uow, request.time_category_id, tenant_id)
        now = self.now()

        session.update_details(
            now,
            time_category_id=request.time_category_id,
            project_id=request.project_id,
            task_id=request.task_id,
            description=request.description
        )
        saved = self.uow.tracking_sessions.save(session)
        return TrackingSessionResponseDTO.from_domain(saved, now)


class GetActiveTrackingUseCase(QueryUseCase[EmptyRequestDTO, TrackingSessionResponseDTO]):
    """Use case for the caller's running or paused session."""

    operation = "retrieving active tracking session"

    async def _execute_business_logic(
        self, request: EmptyRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self.uow.tracking_sessions.get_active_by_user(user_id, tenant_id)
        if session is None:
            raise EntityNotFoundError("Active tracking session", message="No active tracking session")
        return TrackingSessionResponseDTO.from_domain(session, self.now())


class GetTrackingSessionUseCase(_OwnedSessionMixin, QueryUseCase[EntityIdRequestDTO, TrackingSessionResponseDTO]):
    operation = "retrieving tracking session"

    async def _execute_business_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TrackingSessionResponseDTO:
        tenant_id, user_id = context.require_tenant_and_user()
        session = self._get_owned_session(request.id, tenant_id, user_id)
        return TrackingSessionResponseDTO.from_domain(session, self.now())


class GetTrackingSessionsByUserUseCase(QueryUseCase[UserIdRequestDTO, List[TrackingSessionResponseDTO]]):
    """A user's sessions, newest first."""

    operation = "retrieving tracking sessions"

    async def _execute_business_logic(
        self, request: UserIdRequestDTO, context: IdentityContext
    ) -> List[TrackingSessionResponseDTO]:
        tenant_id = context.require_tenant()
        now = self.now()
        sessions = self.uow.tracking_sessions.get_by_user(request.user_id, tenant_id)
        return [TrackingSessionResponseDTO.from_domain(session, now) for session in sessions]
