"""
Time category mapper for converting between domain entities and database models.
"""

from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.models.value_objects import BillableStatus
from smartflow.infrastructure.db.models import TimeCategoryModel


class TimeCategoryMapper:
    """Maps between TimeCategory domain entity and TimeCategoryModel database model."""

    def domain_to_model(self, category: TimeCategory) -> TimeCategoryModel:
        return TimeCategoryModel(
            id=category.id,
            tenant_id=category.tenant_id,
            name=category.name,
            description=category.description,
            color=category.color,
            default_billable_status=BillableStatus(category.default_billable_status),
            is_active=category.is_active,
            is_deleted=category.is_deleted,
            created_at=category.created_at,
            updated_at=category.updated_at
        )

    def model_to_domain(self, model: TimeCategoryModel) -> TimeCategory:
        return TimeCategory(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            description=model.description,
            color=model.color,
            default_billable_status=BillableStatus(model.default_billable_status),
            is_active=bool(model.is_active),
            is_deleted=bool(model.is_deleted),
            created_at=model.created_at,
            updated_at=model.updated_at
        )
