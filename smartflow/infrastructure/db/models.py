"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, Date, ForeignKey, Enum as SQLEnum, Uuid,
    Index, CheckConstraint, text
)
from sqlalchemy.orm import relationship

from smartflow.domain.models.time_entry import TimeEntryType
from smartflow.domain.models.timesheet import TimesheetStatus
from smartflow.domain.models.tracking_session import TrackingStatus
from smartflow.domain.models.value_objects import BillableStatus
from smartflow.infrastructure.db.database import Base


class UserModel(Base):
    """Users of a tenant. Owned by the identity module; read here for names."""
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255))
    is_active = Column(Boolean, nullable=False, default=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ProjectModel(Base):
    """Projects of a tenant. Owned by the project module; read here for names."""
    __tablename__ = 'projects'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    is_deleted = Column(Boolean, nullable=False, default=False)


class TimeCategoryModel(Base):
    """Time category table"""
    __tablename__ = 'time_categories'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(500))
    color = Column(String(7))
    default_billable_status = Column(
        SQLEnum(BillableStatus, name="billable_status"),
        nullable=False,
        default=BillableStatus.BILLABLE
    )
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    time_entries = relationship("TimeEntryModel", back_populates="time_category")

    __table_args__ = (
        Index('idx_time_categories_tenant_name', 'tenant_id', 'name'),
    )


class TimesheetModel(Base):
    """Timesheet table"""
    __tablename__ = 'timesheets'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False)
    user_id = Column(Uuid, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(SQLEnum(TimesheetStatus, name="timesheet_status"), nullable=False, default=TimesheetStatus.DRAFT)

    total_hours = Column(Numeric(10, 2), nullable=False, default=0)
    billable_hours = Column(Numeric(10, 2), nullable=False, default=0)

    # Approval workflow
    submitted_at = Column(DateTime)
    submitted_by = Column(Uuid)
    approved_at = Column(DateTime)
    approved_by = Column(Uuid)
    rejected_at = Column(DateTime)
    rejected_by = Column(Uuid)
    approval_notes = Column(String(1000))

    is_deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    time_entries = relationship("TimeEntryModel", back_populates="timesheet")

    __table_args__ = (
        Index('idx_timesheets_user_range', 'tenant_id', 'user_id', 'start_date', 'end_date'),
        Index('idx_timesheets_status', 'tenant_id', 'status'),
        CheckConstraint('start_date <= end_date', name='timesheet_valid_range'),
    )


class TimeEntryModel(Base):
    """Time entry table"""
    __tablename__ = 'time_entries'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False)
    user_id = Column(Uuid, nullable=False)
    project_id = Column(Uuid)
    task_id = Column(Uuid)
    time_category_id = Column(Uuid, ForeignKey('time_categories.id'), nullable=False)
    timesheet_id = Column(Uuid, ForeignKey('timesheets.id'))

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime)
    duration = Column(Integer, nullable=False, default=0)

    description = Column(String(500))
    entry_type = Column(SQLEnum(TimeEntryType, name="time_entry_type"), nullable=False, default=TimeEntryType.OTHER)
    billable_status = Column(
        SQLEnum(BillableStatus, name="billable_status"),
        nullable=False,
        default=BillableStatus.NON_BILLABLE
    )
    hourly_rate = Column(Numeric(10, 2))
    is_manual_entry = Column(Boolean, nullable=False, default=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    # Relationships
    time_category = relationship("TimeCategoryModel", back_populates="time_entries")
    timesheet = relationship("TimesheetModel", back_populates="time_entries")

    # Constraints and indexes
    __table_args__ = (
        Index('idx_time_entries_user_start', 'tenant_id', 'user_id', 'start_time'),
        Index('idx_time_entries_project', 'tenant_id', 'project_id'),
        Index('idx_time_entries_timesheet', 'timesheet_id'),
        CheckConstraint('duration >= 0', name='time_entry_non_negative_duration'),
    )


class ActiveTrackingSessionModel(Base):
    """Tracking session table"""
    __tablename__ = 'active_tracking_sessions'

    id = Column(Uuid, primary_key=True)
    tenant_id = Column(Uuid, nullable=False)
    user_id = Column(Uuid, nullable=False)
    project_id = Column(Uuid)
    task_id = Column(Uuid)
    time_category_id = Column(Uuid, ForeignKey('time_categories.id'), nullable=False)
    description = Column(Text)

    start_time = Column(DateTime, nullable=False)
    last_activity_time = Column(DateTime, nullable=False)
    paused_minutes = Column(Integer, nullable=False, default=0)

    status = Column(SQLEnum(TrackingStatus, name="tracking_status"), nullable=False, default=TrackingStatus.RUNNING)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime)

    __table_args__ = (
        Index('idx_tracking_sessions_user', 'tenant_id', 'user_id', 'start_time'),
        # At most one active session per user
        Index('uq_tracking_sessions_active_user', 'tenant_id', 'user_id',
              unique=True,
              postgresql_where=text('is_active'),
              sqlite_where=text('is_active = 1')),
        CheckConstraint('paused_minutes >= 0', name='tracking_session_non_negative_pause'),
    )
