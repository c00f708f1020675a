"""
Time entry mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from smartflow.domain.models.time_entry import TimeEntry, TimeEntryType
from smartflow.domain.models.value_objects import BillableStatus
from smartflow.infrastructure.db.models import TimeEntryModel


class TimeEntryMapper:
    """Maps between TimeEntry domain entity and TimeEntryModel database model."""

    def domain_to_model(self, time_entry: TimeEntry) -> TimeEntryModel:
        """Convert TimeEntry domain entity to TimeEntryModel."""
        return TimeEntryModel(
            id=time_entry.id,
            tenant_id=time_entry.tenant_id,
            user_id=time_entry.user_id,
            project_id=time_entry.project_id,
            task_id=time_entry.task_id,
            time_category_id=time_entry.time_category_id,
            timesheet_id=time_entry.timesheet_id,
            start_time=time_entry.start_time,
            end_time=time_entry.end_time,
            duration=time_entry.duration,
            description=time_entry.description,
            entry_type=TimeEntryType(time_entry.entry_type),
            billable_status=BillableStatus(time_entry.billable_status),
            hourly_rate=time_entry.hourly_rate,
            is_manual_entry=time_entry.is_manual_entry,
            is_active=time_entry.is_active,
            is_deleted=time_entry.is_deleted,
            created_at=time_entry.created_at,
            updated_at=time_entry.updated_at
        )

    def model_to_domain(self, model: TimeEntryModel) -> TimeEntry:
        """Convert TimeEntryModel to TimeEntry domain entity."""
        return TimeEntry(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            project_id=model.project_id,
            task_id=model.task_id,
            time_category_id=model.time_category_id,
            timesheet_id=model.timesheet_id,
            start_time=model.start_time,
            end_time=model.end_time,
            duration=model.duration or 0,
            description=model.description,
            entry_type=TimeEntryType(model.entry_type),
            billable_status=BillableStatus(model.billable_status),
            hourly_rate=Decimal(model.hourly_rate) if model.hourly_rate is not None else None,
            is_manual_entry=bool(model.is_manual_entry),
            is_active=bool(model.is_active),
            is_deleted=bool(model.is_deleted),
            created_at=model.created_at,
            updated_at=model.updated_at
        )
