"""
Shared request and response shapes for the time tracking API.
Enums are serialized as their string values.
"""

from typing import Any, Dict, List, Optional, TypeVar, Generic
from datetime import datetime, date
from enum import Enum
import uuid

from pydantic import BaseModel, Field, ConfigDict, model_validator


class BaseDTO(BaseModel):
    """Root of every DTO: strict on unknown fields, readable from ORM-like objects."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        extra="forbid",
        from_attributes=True,
    )


class RequestDTO(BaseDTO):
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EntityIdRequestDTO(RequestDTO):
    """Request addressing a single entity."""

    id: uuid.UUID = Field(description="Entity ID")


class UserIdRequestDTO(RequestDTO):
    user_id: uuid.UUID = Field(description="User ID")


class EmptyRequestDTO(RequestDTO):
    """Request without parameters; the identity context carries everything."""
    pass


class SortOrder(str, Enum):
    """Sort order options."""
    ASC = "asc"
    DESC = "desc"


class ListRequestDTO(RequestDTO):
    """Paging, free-text search and sorting shared by list endpoints."""

    page: int = Field(default=1, ge=1, description="Page number")
    page_size: int = Field(default=20, ge=1, le=100, description="Items per page")
    search: Optional[str] = Field(default=None, max_length=255, description="Search query")
    sort_by: Optional[str] = Field(default=None, description="Sort field")
    sort_order: SortOrder = Field(default=SortOrder.DESC, description="Sort order")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def is_descending(self) -> bool:
        return self.sort_order == SortOrder.DESC.value


class DateRangeRequestDTO(RequestDTO):
    """Base class for requests bounded by an inclusive date range."""

    start_date: date = Field(description="First day of the range")
    end_date: date = Field(description="Last day of the range")

    @model_validator(mode="after")
    def validate_date_range(self):
        """Validate that end_date is not before start_date."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


T = TypeVar('T')


class ListResponseDTO(BaseDTO, Generic[T]):
    """One page of results plus paging metadata."""

    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Items per page")
    total_pages: int = Field(description="Total number of pages")
    has_next: bool = Field(description="Whether there are more pages")
    has_prev: bool = Field(description="Whether there are previous pages")

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        page: int,
        page_size: int
    ) -> "ListResponseDTO[T]":
        total_pages = -(-total // page_size)
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1
        )


class HealthCheckResponseDTO(BaseDTO):

    status: str = Field(description="Service status")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")


class ErrorResponseDTO(BaseDTO):
    """Body of every non-2xx response."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")
    status_code: int = Field(description="HTTP status code")
    error_code: Optional[str] = Field(default=None, description="Machine-readable failure kind")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")
