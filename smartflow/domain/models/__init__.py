"""
Domain models for the time tracking and timesheet engine.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    TenantEntity,
    TimeRange,
    DomainException,
    ValidationError,
    InvalidContextError,
    EntityNotFoundError,
    DuplicateEntityError,
    ConflictError,
    InvalidStateError,
    ForbiddenError,
    utcnow,
    minutes_between
)

# Value Objects
from .value_objects import (
    BillableStatus,
    HexColor,
    minutes_to_hours,
    percentage
)

# Domain entities
from .time_category import TimeCategory

from .time_entry import (
    TimeEntry,
    TimeEntryType
)

from .tracking_session import (
    ActiveTrackingSession,
    TrackingStatus
)

from .timesheet import (
    Timesheet,
    TimesheetStatus,
    LOCKING_STATUSES
)

__all__ = [
    # Base classes
    "BaseEntity",
    "TenantEntity",
    "TimeRange",
    "DomainException",
    "ValidationError",
    "InvalidContextError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ConflictError",
    "InvalidStateError",
    "ForbiddenError",
    "utcnow",
    "minutes_between",

    # Value objects
    "BillableStatus",
    "HexColor",
    "minutes_to_hours",
    "percentage",

    # TimeCategory
    "TimeCategory",

    # TimeEntry
    "TimeEntry",
    "TimeEntryType",

    # ActiveTrackingSession
    "ActiveTrackingSession",
    "TrackingStatus",

    # Timesheet
    "Timesheet",
    "TimesheetStatus",
    "LOCKING_STATUSES",
]
