"""
Time category repository implementation using SQLAlchemy.
"""

from typing import Iterable, List, Optional, Tuple
import uuid

from sqlalchemy import or_
from sqlalchemy.orm import Session

from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.repositories.time_category_repository import (
    TimeCategoryRepository as TimeCategoryRepositoryInterface
)
from smartflow.infrastructure.db.models import TimeCategoryModel
from smartflow.infrastructure.mappers.time_category_mapper import TimeCategoryMapper
from smartflow.infrastructure.repositories.persistence import save_entity


class SQLAlchemyTimeCategoryRepository(TimeCategoryRepositoryInterface):
    """SQLAlchemy implementation of time category repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = TimeCategoryMapper()
        self.model = TimeCategoryModel

    def _tenant_query(self, tenant_id: uuid.UUID):
        return self.session.query(TimeCategoryModel).filter(
            TimeCategoryModel.tenant_id == tenant_id,
            TimeCategoryModel.is_deleted.is_(False)
        )

    def save(self, category: TimeCategory) -> TimeCategory:
        save_entity(self.session, self.mapper, self.model, category)
        return category

    def get_by_id(self, category_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[TimeCategory]:
        model = self._tenant_query(tenant_id).filter(TimeCategoryModel.id == category_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def get_many(self, category_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> List[TimeCategory]:
        ids = list(category_ids)
        if not ids:
            return []
        models = self._tenant_query(tenant_id).filter(TimeCategoryModel.id.in_(ids)).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def get_active_by_name(
        self,
        name: str,
        tenant_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None
    ) -> Optional[TimeCategory]:
        query = self._tenant_query(tenant_id).filter(
            TimeCategoryModel.name == name,
            TimeCategoryModel.is_active.is_(True)
        )
        if exclude_id is not None:
            query = query.filter(TimeCategoryModel.id != exclude_id)

        model = query.first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def list_active(self, tenant_id: uuid.UUID) -> List[TimeCategory]:
        models = self._tenant_query(tenant_id).filter(
            TimeCategoryModel.is_active.is_(True)
        ).order_by(TimeCategoryModel.name).all()
        return [self.mapper.model_to_domain(model) for model in models]

    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None
    ) -> Tuple[List[TimeCategory], int]:
        """List active categories by name, optionally filtered on name or description."""
        query = self._tenant_query(tenant_id).filter(TimeCategoryModel.is_active.is_(True))

        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(
                    TimeCategoryModel.name.ilike(search_term),
                    TimeCategoryModel.description.ilike(search_term)
                )
            )

        total = query.count()
        models = query.order_by(TimeCategoryModel.name).offset((page - 1) * page_size).limit(page_size).all()
        return [self.mapper.model_to_domain(model) for model in models], total
