"""
Timesheet mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from smartflow.domain.models.timesheet import Timesheet, TimesheetStatus
from smartflow.infrastructure.db.models import TimesheetModel


class TimesheetMapper:
    """Maps between Timesheet domain entity and TimesheetModel database model."""

    def domain_to_model(self, timesheet: Timesheet) -> TimesheetModel:
        """Convert Timesheet domain entity to TimesheetModel."""
        return TimesheetModel(
            id=timesheet.id,
            tenant_id=timesheet.tenant_id,
            user_id=timesheet.user_id,
            start_date=timesheet.start_date,
            end_date=timesheet.end_date,
            status=TimesheetStatus(timesheet.status),
            total_hours=timesheet.total_hours,
            billable_hours=timesheet.billable_hours,
            submitted_at=timesheet.submitted_at,
            submitted_by=timesheet.submitted_by,
            approved_at=timesheet.approved_at,
            approved_by=timesheet.approved_by,
            rejected_at=timesheet.rejected_at,
            rejected_by=timesheet.rejected_by,
            approval_notes=timesheet.approval_notes,
            is_deleted=timesheet.is_deleted,
            created_at=timesheet.created_at,
            updated_at=timesheet.updated_at
        )

    def model_to_domain(self, model: TimesheetModel) -> Timesheet:
        """Convert TimesheetModel to Timesheet domain entity."""
        return Timesheet(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            start_date=model.start_date,
            end_date=model.end_date,
            status=TimesheetStatus(model.status),
            total_hours=Decimal(model.total_hours or 0),
            billable_hours=Decimal(model.billable_hours or 0),
            submitted_at=model.submitted_at,
            submitted_by=model.submitted_by,
            approved_at=model.approved_at,
            approved_by=model.approved_by,
            rejected_at=model.rejected_at,
            rejected_by=model.rejected_by,
            approval_notes=model.approval_notes,
            is_deleted=bool(model.is_deleted),
            created_at=model.created_at,
            updated_at=model.updated_at
        )
