"""Timer service for managing time tracking logic.
Handles the session lifecycle and turns stopped sessions into time entries.
"""

from datetime import datetime
from typing import Optional
import uuid

from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.models.tracking_session import ActiveTrackingSession


class TimerService:
    """
    Domain service for tracking sessions.
    Holds no state; the current instant is always passed in.
    """

    def start_session(
        self,
        tenant_id: uuid.UUID,
        user_id: uuid.UUID,
        time_category_id: uuid.UUID,
        now: datetime,
        project_id: Optional[uuid.UUID] = None,
        task_id: Optional[uuid.UUID] = None,
        description: Optional[str] = None
    ) -> ActiveTrackingSession:
        """
        Create a new running session.
        Stopping the user's previous session is the caller's job, inside the same transaction.
        """
        return ActiveTrackingSession.start(
            tenant_id=tenant_id,
            user_id=user_id,
            time_category_id=time_category_id,
            now=now,
            project_id=project_id,
            task_id=task_id,
            description=description
        )

    def stop_session(
        self,
        session: ActiveTrackingSession,
        now: datetime,
        create_time_entry: bool = True,
        description: Optional[str] = None
    ) -> Optional[TimeEntry]:
        """
        Stop a session and optionally materialize the tracked time.
        The entry spans start..now and its duration excludes paused minutes.
        """
        duration = session.tracked_minutes(now)
        session.stop(now)

        if not create_time_entry:
            return None

        entry = TimeEntry.from_session_stop(
            tenant_id=session.tenant_id,
            user_id=session.user_id,
            time_category_id=session.time_category_id,
            start_time=session.start_time,
            end_time=now,
            duration=duration,
            project_id=session.project_id,
            task_id=session.task_id,
            description=description or session.description
        )
        entry.validate()
        entry.mark_as_created(now)
        return entry
