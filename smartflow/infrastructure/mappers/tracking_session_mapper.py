"""
Tracking session mapper for converting between domain entities and database models.
"""

from smartflow.domain.models.tracking_session import ActiveTrackingSession, TrackingStatus
from smartflow.infrastructure.db.models import ActiveTrackingSessionModel


class TrackingSessionMapper:
    """Maps between ActiveTrackingSession and ActiveTrackingSessionModel."""

    def domain_to_model(self, session: ActiveTrackingSession) -> ActiveTrackingSessionModel:
        return ActiveTrackingSessionModel(
            id=session.id,
            tenant_id=session.tenant_id,
            user_id=session.user_id,
            project_id=session.project_id,
            task_id=session.task_id,
            time_category_id=session.time_category_id,
            description=session.description,
            start_time=session.start_time,
            last_activity_time=session.last_activity_time,
            paused_minutes=session.paused_minutes,
            status=TrackingStatus(session.status),
            is_active=session.is_active,
            is_deleted=session.is_deleted,
            created_at=session.created_at,
            updated_at=session.updated_at
        )

    def model_to_domain(self, model: ActiveTrackingSessionModel) -> ActiveTrackingSession:
        return ActiveTrackingSession(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            project_id=model.project_id,
            task_id=model.task_id,
            time_category_id=model.time_category_id,
            description=model.description,
            start_time=model.start_time,
            last_activity_time=model.last_activity_time,
            paused_minutes=model.paused_minutes or 0,
            status=TrackingStatus(model.status),
            is_active=bool(model.is_active),
            is_deleted=bool(model.is_deleted),
            created_at=model.created_at,
            updated_at=model.updated_at
        )
