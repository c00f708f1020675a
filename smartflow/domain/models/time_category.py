"""
TimeCategory domain model.
Reference data used to classify time entries and tracking sessions.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from smartflow.domain.models.base import TenantEntity, ValidationError
from smartflow.domain.models.value_objects import BillableStatus, HexColor


@dataclass(eq=False)
class TimeCategory(TenantEntity):
    """A named, coloured bucket for time with a default billable status."""

    name: str = ""
    description: Optional[str] = None
    color: Optional[str] = None
    default_billable_status: BillableStatus = BillableStatus.BILLABLE
    is_active: bool = True

    def validate(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Category name is required", "name")
        if len(self.name) > 100:
            raise ValidationError("Category name must not exceed 100 characters", "name")
        if self.description and len(self.description) > 500:
            raise ValidationError("Description must not exceed 500 characters", "description")
        if self.color:
            HexColor(self.color)

    def update_info(
        self,
        now: datetime,
        name: Optional[str] = None,
        description: Optional[str] = None,
        color: Optional[str] = None,
        default_billable_status: Optional[BillableStatus] = None,
        is_active: Optional[bool] = None
    ) -> None:
        """Apply the provided fields and re-validate."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if color is not None:
            self.color = color
        if default_billable_status is not None:
            self.default_billable_status = default_billable_status
        if is_active is not None:
            self.is_active = is_active

        self.validate()
        self.mark_as_updated(now)

    def deactivate(self, now: datetime) -> None:
        """Soft delete: the row stays, but the category is no longer offered."""
        self.is_active = False
        self.mark_as_updated(now)
