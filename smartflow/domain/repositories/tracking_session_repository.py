"""Active tracking session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from smartflow.domain.models.tracking_session import ActiveTrackingSession


class TrackingSessionRepository(ABC):
    """Repository interface for ActiveTrackingSession entity."""

    @abstractmethod
    def save(self, session: ActiveTrackingSession) -> ActiveTrackingSession:
        pass

    @abstractmethod
    def get_by_id(self, session_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[ActiveTrackingSession]:
        pass

    @abstractmethod
    def get_active_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[ActiveTrackingSession]:
        """Return the user's running or paused session, if any."""
        pass

    @abstractmethod
    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[ActiveTrackingSession]:
        """All sessions of a user, newest first."""
        pass

    @abstractmethod
    def stop_all_active(self, user_id: uuid.UUID, tenant_id: uuid.UUID, now: datetime) -> int:
        """
        Force-stop every active session of a user without creating entries.
        Returns the number of sessions stopped.
        """
        pass
