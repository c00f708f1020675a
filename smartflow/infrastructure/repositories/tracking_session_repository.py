"""
Tracking session repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import List, Optional
import uuid

from sqlalchemy import desc, update
from sqlalchemy.orm import Session

from smartflow.domain.models.tracking_session import ActiveTrackingSession, TrackingStatus
from smartflow.domain.repositories.tracking_session_repository import (
    TrackingSessionRepository as TrackingSessionRepositoryInterface
)
from smartflow.infrastructure.db.models import ActiveTrackingSessionModel
from smartflow.infrastructure.mappers.tracking_session_mapper import TrackingSessionMapper
from smartflow.infrastructure.repositories.persistence import save_entity


class SQLAlchemyTrackingSessionRepository(TrackingSessionRepositoryInterface):
    """SQLAlchemy implementation of tracking session repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TrackingSessionMapper()
        self.model = ActiveTrackingSessionModel

    def _user_query(self, user_id: uuid.UUID, tenant_id: uuid.UUID):
        return self.session.query(ActiveTrackingSessionModel).filter(
            ActiveTrackingSessionModel.tenant_id == tenant_id,
            ActiveTrackingSessionModel.user_id == user_id,
            ActiveTrackingSessionModel.is_deleted.is_(False)
        )

    def save(self, session: ActiveTrackingSession) -> ActiveTrackingSession:
        save_entity(self.session, self.mapper, self.model, session)
        return session

    def get_by_id(self, session_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[ActiveTrackingSession]:
        model = self.session.query(ActiveTrackingSessionModel).filter(
            ActiveTrackingSessionModel.id == session_id,
            ActiveTrackingSessionModel.tenant_id == tenant_id,
            ActiveTrackingSessionModel.is_deleted.is_(False)
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_active_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[ActiveTrackingSession]:
        model = self._user_query(user_id, tenant_id).filter(
            ActiveTrackingSessionModel.is_active.is_(True)
        ).order_by(desc(ActiveTrackingSessionModel.start_time)).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[ActiveTrackingSession]:
        models = self._user_query(user_id, tenant_id).order_by(
            desc(ActiveTrackingSessionModel.start_time)
        ).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def stop_all_active(self, user_id: uuid.UUID, tenant_id: uuid.UUID, now: datetime) -> int:
        """Single UPDATE so the stop and the following insert share one transaction."""
        result = self.session.execute(
            update(ActiveTrackingSessionModel)
            .where(
                ActiveTrackingSessionModel.tenant_id == tenant_id,
                ActiveTrackingSessionModel.user_id == user_id,
                ActiveTrackingSessionModel.is_active.is_(True)
            )
            .values(is_active=False, status=TrackingStatus.STOPPED, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        self.session.flush()
        return result.rowcount or 0
