"""
Timesheet repository implementation using SQLAlchemy.
"""

from datetime import date
from typing import List, Optional, Tuple
import uuid

from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus
from smartflow.domain.repositories.timesheet_repository import TimesheetRepository as TimesheetRepositoryInterface
from smartflow.infrastructure.db.models import TimesheetModel
from smartflow.infrastructure.mappers.timesheet_mapper import TimesheetMapper
from smartflow.infrastructure.repositories.persistence import save_entity


class SQLAlchemyTimesheetRepository(TimesheetRepositoryInterface):
    """SQLAlchemy implementation of timesheet repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimesheetMapper()
        self.model = TimesheetModel

    def _tenant_query(self, tenant_id: uuid.UUID):
        return self.session.query(TimesheetModel).filter(
            TimesheetModel.tenant_id == tenant_id,
            TimesheetModel.is_deleted.is_(False)
        )

    def _to_domain_list(self, models) -> List[Timesheet]:
        return [self.mapper.model_to_domain(model) for model in models]

    def save(self, timesheet: Timesheet) -> Timesheet:
        save_entity(self.session, self.mapper, self.model, timesheet)
        return timesheet

    def get_by_id(self, timesheet_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[Timesheet]:
        model = self._tenant_query(tenant_id).filter(TimesheetModel.id == timesheet_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_by_user(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> List[Timesheet]:
        models = self._tenant_query(tenant_id).filter(
            TimesheetModel.user_id == user_id
        ).order_by(desc(TimesheetModel.start_date)).all()
        return self._to_domain_list(models)

    def get_by_status(self, status: TimesheetStatus, tenant_id: uuid.UUID) -> List[Timesheet]:
        models = self._tenant_query(tenant_id).filter(
            TimesheetModel.status == TimesheetStatus(status)
        ).order_by(desc(TimesheetModel.start_date)).all()
        return self._to_domain_list(models)

    def get_by_user_and_date_range(
        self,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date,
        tenant_id: uuid.UUID
    ) -> Optional[Timesheet]:
        model = self._tenant_query(tenant_id).filter(
            TimesheetModel.user_id == user_id,
            TimesheetModel.start_date == start_date,
            TimesheetModel.end_date == end_date
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_pending_approval(self, tenant_id: uuid.UUID) -> List[Timesheet]:
        models = self._tenant_query(tenant_id).filter(
            TimesheetModel.status == TimesheetStatus.SUBMITTED
        ).order_by(asc(TimesheetModel.submitted_at)).all()
        return self._to_domain_list(models)

    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int
    ) -> Tuple[List[Timesheet], int]:
        query = self._tenant_query(tenant_id)
        total = query.count()
        models = query.order_by(
            desc(TimesheetModel.created_at)
        ).offset((page - 1) * page_size).limit(page_size).all()
        return self._to_domain_list(models), total
