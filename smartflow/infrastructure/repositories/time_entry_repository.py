"""
Time entry repository implementation using SQLAlchemy.
"""

from typing import List, Optional, Tuple
from datetime import datetime, date
import uuid

from sqlalchemy import asc, desc, or_
from sqlalchemy.orm import Session

from smartflow.domain.models.time_entry import TimeEntry
from smartflow.domain.repositories.time_entry_repository import TimeEntryRepository as TimeEntryRepositoryInterface
from smartflow.infrastructure.db.models import TimeEntryModel, TimeCategoryModel
from smartflow.infrastructure.mappers.time_entry_mapper import TimeEntryMapper
from smartflow.infrastructure.repositories.persistence import save_entity


SORTABLE_COLUMNS = {
    "start_time": TimeEntryModel.start_time,
    "duration": TimeEntryModel.duration,
    "created_at": TimeEntryModel.created_at,
}


def _day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    return (
        datetime.combine(start_date, datetime.min.time()),
        datetime.combine(end_date, datetime.max.time())
    )


class SQLAlchemyTimeEntryRepository(TimeEntryRepositoryInterface):
    """SQLAlchemy implementation of time entry repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeEntryMapper()
        self.model = TimeEntryModel

    def _tenant_query(self, tenant_id: uuid.UUID):
        """Live entries of a tenant."""
        return self.session.query(TimeEntryModel).filter(
            TimeEntryModel.tenant_id == tenant_id,
            TimeEntryModel.is_active.is_(True),
            TimeEntryModel.is_deleted.is_(False)
        )

    def _to_domain_list(self, models) -> List[TimeEntry]:
        return [self.mapper.model_to_domain(model) for model in models]

    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """Save a time entry entity."""
        save_entity(self.session, self.mapper, self.model, time_entry)
        return time_entry

    def get_by_id(self, entry_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[TimeEntry]:
        """Get time entry by ID."""
        model = self._tenant_query(tenant_id).filter(TimeEntryModel.id == entry_id).first()

        if not model:
            return None

        return self.mapper.model_to_domain(model)

    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        models = self._tenant_query(tenant_id).filter(
            TimeEntryModel.user_id == user_id
        ).order_by(desc(TimeEntryModel.start_time)).all()
        return self._to_domain_list(models)

    def get_by_project(self, project_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        models = self._tenant_query(tenant_id).filter(
            TimeEntryModel.project_id == project_id
        ).order_by(desc(TimeEntryModel.start_time)).all()
        return self._to_domain_list(models)

    def get_by_task(self, task_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        models = self._tenant_query(tenant_id).filter(
            TimeEntryModel.task_id == task_id
        ).order_by(desc(TimeEntryModel.start_time)).all()
        return self._to_domain_list(models)

    def get_by_timesheet(self, timesheet_id: uuid.UUID, tenant_id: uuid.UUID) -> List[TimeEntry]:
        models = self._tenant_query(tenant_id).filter(
            TimeEntryModel.timesheet_id == timesheet_id
        ).order_by(asc(TimeEntryModel.start_time)).all()
        return self._to_domain_list(models)

    def get_by_date_range(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID
    ) -> List[TimeEntry]:
        """Get a user's time entries whose start falls within the date range."""
        start_datetime, end_datetime = _day_bounds(start_date, end_date)

        models = self._tenant_query(tenant_id).filter(
            TimeEntryModel.user_id == user_id,
            TimeEntryModel.start_time >= start_datetime,
            TimeEntryModel.start_time <= end_datetime
        ).order_by(asc(TimeEntryModel.start_time)).all()

        return self._to_domain_list(models)

    def get_tenant_entries_in_range(
        self,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID,
        project_id: Optional[uuid.UUID] = None
    ) -> List[TimeEntry]:
        start_datetime, end_datetime = _day_bounds(start_date, end_date)

        query = self._tenant_query(tenant_id).filter(
            TimeEntryModel.start_time >= start_datetime,
            TimeEntryModel.start_time <= end_datetime
        )
        if project_id is not None:
            query = query.filter(TimeEntryModel.project_id == project_id)

        return self._to_domain_list(query.order_by(asc(TimeEntryModel.start_time)).all())

    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        sort_by: str = "start_time",
        sort_desc: bool = True
    ) -> Tuple[List[TimeEntry], int]:
        query = self._tenant_query(tenant_id)

        if search:
            search_term = f"%{search}%"
            query = query.outerjoin(
                TimeCategoryModel, TimeEntryModel.time_category_id == TimeCategoryModel.id
            ).filter(
                or_(
                    TimeEntryModel.description.ilike(search_term),
                    TimeCategoryModel.name.ilike(search_term)
                )
            )

        total = query.count()

        column = SORTABLE_COLUMNS.get(sort_by, TimeEntryModel.start_time)
        query = query.order_by(desc(column) if sort_desc else asc(column), TimeEntryModel.id)
        models = query.offset((page - 1) * page_size).limit(page_size).all()

        return self._to_domain_list(models), total
