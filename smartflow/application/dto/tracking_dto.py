"""
Active tracking DTOs for the application layer.
"""

from typing import Optional
from datetime import datetime
import uuid

from pydantic import Field

from smartflow.domain.models.tracking_session import ActiveTrackingSession, TrackingStatus
from .base_dto import RequestDTO, ResponseDTO


class StartTrackingRequestDTO(RequestDTO):
    """DTO for starting a tracking session."""

    time_category_id: uuid.UUID = Field(description="Time category ID")
    project_id: Optional[uuid.UUID] = Field(default=None, description="Project ID (optional)")
    task_id: Optional[uuid.UUID] = Field(default=None, description="Task ID (optional)")
    description: Optional[str] = Field(default=None, max_length=500, description="Work description")


class StopTrackingRequestDTO(RequestDTO):
    """DTO for stopping a tracking session."""

    id: Optional[uuid.UUID] = Field(default=None, description="Session ID, taken from the path")
    description: Optional[str] = Field(default=None, max_length=500, description="Final work description")
    create_time_entry: bool = Field(default=True, description="Record the tracked time as an entry")


class UpdateTrackingRequestDTO(RequestDTO):
    """DTO for changing the details of a running or paused session."""

    id: Optional[uuid.UUID] = Field(default=None, description="Session ID, taken from the path")
    time_category_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(default=None, max_length=500)


class TrackingSessionResponseDTO(ResponseDTO):
    """DTO for tracking session responses."""

    tenant_id: Optional[uuid.UUID] = None
    user_id: uuid.UUID
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    time_category_id: uuid.UUID
    description: Optional[str] = None

    start_time: datetime
    last_activity_time: datetime
    paused_minutes: int = Field(description="Total paused minutes")
    elapsed_minutes: int = Field(description="Working minutes at the time of the request")

    status: TrackingStatus
    is_active: bool

    @classmethod
    def from_domain(cls, session: ActiveTrackingSession, now: datetime) -> "TrackingSessionResponseDTO":
        return cls(
            id=session.id,
            created_at=session.created_at,
            updated_at=session.updated_at,
            tenant_id=session.tenant_id,
            user_id=session.user_id,
            project_id=session.project_id,
            task_id=session.task_id,
            time_category_id=session.time_category_id,
            description=session.description,
            start_time=session.start_time,
            last_activity_time=session.last_activity_time,
            paused_minutes=session.paused_minutes,
            elapsed_minutes=session.elapsed_minutes(now),
            status=session.status,
            is_active=session.is_active
        )
