"""
Base entity and value objects for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any
from abc import ABC
from dataclasses import dataclass
import uuid


def utcnow() -> datetime:
    """Current UTC instant as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, rounded to the nearest minute."""
    return int(round((end - start).total_seconds() / 60))


@dataclass(eq=False)
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_created(self, now: datetime) -> None:
        """Stamp a new entity with its creation time."""
        if self.id is None:
            self.id = uuid.uuid4()
        self.created_at = now

    def mark_as_updated(self, now: datetime) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = now

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


@dataclass(eq=False)
class TenantEntity(BaseEntity):
    """Entity partitioned by tenant."""

    tenant_id: Optional[uuid.UUID] = None
    is_deleted: bool = False


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class InvalidContextError(DomainException):
    """Raised when the caller's tenant or user cannot be resolved."""

    def __init__(self, message: str = "Invalid user or tenant context"):
        super().__init__(message, "INVALID_CONTEXT")


class EntityNotFoundError(DomainException):
    """
    Exception raised when an entity is not found.
    Also used for tenant or owner mismatches so other tenants' rows stay invisible.
    """

    def __init__(self, entity_type: str, entity_id: Any = None, message: Optional[str] = None):
        if message is None:
            message = f"{entity_type} not found" if entity_id is None \
                else f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_NAME")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class ConflictError(DomainException):
    """Raised when a record already exists for the requested key."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class InvalidStateError(DomainException):
    """Raised when a state machine does not allow the requested transition."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_STATE")


class ForbiddenError(DomainException):
    """Raised when the actor is not allowed to perform the transition."""

    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN")


@dataclass(frozen=True)
class TimeRange:
    """Time range value object."""

    start: datetime
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.end is not None and self.end < self.start:
            raise ValidationError("End time cannot be before start time", "end_time")

    @property
    def duration_minutes(self) -> Optional[int]:
        """Get duration in whole minutes, rounded."""
        if self.end is None:
            return None
        return minutes_between(self.start, self.end)

    @property
    def is_open(self) -> bool:
        """Check if the time range is open (no end time)."""
        return self.end is None
