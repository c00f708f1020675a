"""
ActiveTrackingSession domain model.
The live timer of a user: Running <-> Paused, then Stopped for good.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from smartflow.domain.models.base import (
    TenantEntity,
    InvalidStateError,
    ValidationError,
    minutes_between,
)


class TrackingStatus(str, Enum):
    """Tracking session status."""
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(eq=False)
class ActiveTrackingSession(TenantEntity):
    """
    A user's in-progress timer.

    ``paused_minutes`` accumulates the length of every completed pause;
    ``last_activity_time`` marks when the current pause began while paused.
    """

    user_id: Optional[uuid.UUID] = None
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    time_category_id: Optional[uuid.UUID] = None
    description: Optional[str] = None

    start_time: Optional[datetime] = None
    last_activity_time: Optional[datetime] = None
    paused_minutes: int = 0

    status: TrackingStatus = TrackingStatus.RUNNING
    is_active: bool = True

    def validate(self) -> None:
        if self.user_id is None:
            raise ValidationError("User ID is required", "user_id")
        if self.time_category_id is None:
            raise ValidationError("Time category ID is required", "time_category_id")
        if self.description and len(self.description) > 500:
            raise ValidationError("Description must not exceed 500 characters", "description")
        if self.paused_minutes < 0:
            raise ValidationError("Paused minutes cannot be negative", "paused_minutes")

    @property
    def is_running(self) -> bool:
        return self.status == TrackingStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.status == TrackingStatus.PAUSED

    @classmethod
    def start(
        cls,
        tenant_id: uuid.UUID,
        user_id: uuid.UUID,
        time_category_id: uuid.UUID,
        now: datetime,
        project_id: Optional[uuid.UUID] = None,
        task_id: Optional[uuid.UUID] = None,
        description: Optional[str] = None
    ) -> "ActiveTrackingSession":
        """Create a running session starting at ``now``."""
        session = cls(
            tenant_id=tenant_id,
            user_id=user_id,
            project_id=project_id,
            task_id=task_id,
            time_category_id=time_category_id,
            description=description,
            start_time=now,
            last_activity_time=now,
            paused_minutes=0,
            status=TrackingStatus.RUNNING,
            is_active=True
        )
        session.validate()
        session.mark_as_created(now)
        return session

    def pause(self, now: datetime) -> None:
        if not self.is_running:
            raise InvalidStateError("Session is not currently running")

        self.status = TrackingStatus.PAUSED
        self.last_activity_time = now
        self.mark_as_updated(now)

    def resume(self, now: datetime) -> None:
        if not self.is_paused:
            raise InvalidStateError("Session is not currently paused")

        self.paused_minutes += max(minutes_between(self.last_activity_time, now), 0)
        self.status = TrackingStatus.RUNNING
        self.last_activity_time = now
        self.mark_as_updated(now)

    def stop(self, now: datetime) -> None:
        """Terminate the session. Stopping twice is rejected."""
        if not self.is_active:
            raise InvalidStateError("Session is already stopped")

        self.status = TrackingStatus.STOPPED
        self.is_active = False
        self.mark_as_updated(now)

    def update_details(
        self,
        now: datetime,
        time_category_id: Optional[uuid.UUID] = None,
        project_id: Optional[uuid.UUID] = None,
        task_id: Optional[uuid.UUID] = None,
        description: Optional[str] = None
    ) -> None:
        """Merge the provided fields into the session."""
        if time_category_id is not None:
            self.time_category_id = time_category_id
        if project_id is not None:
            self.project_id = project_id
        if task_id is not None:
            self.task_id = task_id
        if description is not None:
            self.description = description

        self.validate()
        self.last_activity_time = now
        self.mark_as_updated(now)

    def tracked_minutes(self, now: datetime) -> int:
        """Wall-clock minutes since start minus accumulated pauses, as recorded on stop."""
        return max(minutes_between(self.start_time, now) - self.paused_minutes, 0)

    def elapsed_minutes(self, now: datetime) -> int:
        """Working minutes so far; a paused session is frozen at the moment it paused."""
        if not self.is_active:
            return 0
        reference = self.last_activity_time if self.is_paused else now
        return max(minutes_between(self.start_time, reference) - self.paused_minutes, 0)
