"""
Time Category DTOs for the application layer.
"""

from typing import Optional
import uuid

from pydantic import Field, field_validator

from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.models.value_objects import BillableStatus, HEX_COLOR_PATTERN
from .base_dto import RequestDTO, ResponseDTO, ListRequestDTO


def _validate_color(value: Optional[str]) -> Optional[str]:
    if value is not None and not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Color must be a valid hex color code")
    return value


class CreateTimeCategoryRequestDTO(RequestDTO):
    """DTO for time category creation."""

    name: str = Field(min_length=1, max_length=100, description="Category name")
    description: Optional[str] = Field(default=None, max_length=500, description="Category description")
    color: Optional[str] = Field(default=None, description="Display colour, #RGB or #RRGGBB")
    default_billable_status: BillableStatus = Field(
        default=BillableStatus.BILLABLE,
        description="Billable status suggested for time in this category"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Category name is required")
        return v

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        return _validate_color(v)


class UpdateTimeCategoryRequestDTO(RequestDTO):
    """DTO for time category updates. Omitted fields are left unchanged."""

    id: Optional[uuid.UUID] = Field(default=None, description="Category ID, taken from the path")
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = None
    default_billable_status: Optional[BillableStatus] = None
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Category name is required")
        return v

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        return _validate_color(v)


class ListTimeCategoriesRequestDTO(ListRequestDTO):
    """Paged listing; search matches name and description."""
    pass


class TimeCategoryResponseDTO(ResponseDTO):
    """DTO for time category responses."""

    tenant_id: Optional[uuid.UUID] = None
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    default_billable_status: BillableStatus
    is_active: bool

    @classmethod
    def from_domain(cls, category: TimeCategory) -> "TimeCategoryResponseDTO":
        return cls(
            id=category.id,
            created_at=category.created_at,
            updated_at=category.updated_at,
            tenant_id=category.tenant_id,
            name=category.name,
            description=category.description,
            color=category.color,
            default_billable_status=category.default_billable_status,
            is_active=category.is_active
        )
