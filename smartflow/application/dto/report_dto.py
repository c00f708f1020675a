"""
Time report DTOs for the application layer.
Durations are reported both as raw minutes and as hours with two decimals.
"""

from typing import List, Optional
from datetime import date
from decimal import Decimal
import uuid

from pydantic import Field

from smartflow.domain.models.value_objects import minutes_to_hours
from smartflow.domain.services.time_report_service import (
    BreakdownItem,
    DailyItem,
    TeamMemberSummary,
    TeamReport,
    TimeReport,
    TimeTotals,
)
from .base_dto import BaseDTO, DateRangeRequestDTO


class UserTimeReportRequestDTO(DateRangeRequestDTO):
    user_id: uuid.UUID


class TeamTimeReportRequestDTO(DateRangeRequestDTO):
    pass


class ProjectTimeReportRequestDTO(DateRangeRequestDTO):
    project_id: uuid.UUID


class TotalsDTO(BaseDTO):
    """Minute sums with their hour equivalents."""

    total_minutes: int
    billable_minutes: int
    total_hours: Decimal
    billable_hours: Decimal

    @staticmethod
    def fields_from(totals: TimeTotals) -> dict:
        return {
            "total_minutes": totals.total_minutes,
            "billable_minutes": totals.billable_minutes,
            "total_hours": minutes_to_hours(totals.total_minutes),
            "billable_hours": minutes_to_hours(totals.billable_minutes),
        }


class ProjectTimeDTO(TotalsDTO):
    project_id: Optional[uuid.UUID] = None
    project_name: str
    percentage: Decimal

    @classmethod
    def from_item(cls, item: BreakdownItem) -> "ProjectTimeDTO":
        return cls(
            project_id=item.key,
            project_name=item.label,
            percentage=item.percentage,
            **cls.fields_from(item.totals)
        )


class UserTimeDTO(TotalsDTO):
    """One user's share of a project."""

    user_id: uuid.UUID
    user_name: str
    percentage: Decimal

    @classmethod
    def from_item(cls, item: BreakdownItem) -> "UserTimeDTO":
        return cls(
            user_id=item.key,
            user_name=item.label,
            percentage=item.percentage,
            **cls.fields_from(item.totals)
        )


class CategoryTimeDTO(TotalsDTO):
    category_id: uuid.UUID
    category_name: str
    category_color: Optional[str] = None
    percentage: Decimal

    @classmethod
    def from_item(cls, item: BreakdownItem) -> "CategoryTimeDTO":
        return cls(
            category_id=item.key,
            category_name=item.label,
            category_color=item.color,
            percentage=item.percentage,
            **cls.fields_from(item.totals)
        )


class DailyTimeDTO(TotalsDTO):
    work_date: date
    entry_count: int

    @classmethod
    def from_item(cls, item: DailyItem) -> "DailyTimeDTO":
        return cls(
            work_date=item.day,
            entry_count=item.totals.entry_count,
            **cls.fields_from(item.totals)
        )


class ReportSummaryDTO(TotalsDTO):
    start_date: date
    end_date: date
    non_billable_minutes: int
    non_billable_hours: Decimal
    utilization_rate: Decimal = Field(description="Billable share of total time, in percent")
    category_breakdown: List[CategoryTimeDTO] = Field(default_factory=list)
    daily_breakdown: List[DailyTimeDTO] = Field(default_factory=list)

    @staticmethod
    def report_fields(report: TimeReport) -> dict:
        totals = report.totals
        fields = TotalsDTO.fields_from(totals)
        fields.update(
            start_date=report.start_date,
            end_date=report.end_date,
            non_billable_minutes=totals.non_billable_minutes,
            non_billable_hours=minutes_to_hours(totals.non_billable_minutes),
            utilization_rate=totals.utilization_rate,
            category_breakdown=[CategoryTimeDTO.from_item(item) for item in report.category_breakdown],
            daily_breakdown=[DailyTimeDTO.from_item(item) for item in report.daily_breakdown],
        )
        return fields


class UserTimeReportDTO(ReportSummaryDTO):
    """Report over one user's entries."""

    user_id: uuid.UUID
    user_name: str
    project_breakdown: List[ProjectTimeDTO] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: TimeReport) -> "UserTimeReportDTO":
        return cls(
            user_id=report.subject_id,
            user_name=report.subject_name,
            project_breakdown=[ProjectTimeDTO.from_item(item) for item in report.project_breakdown],
            **cls.report_fields(report)
        )


class ProjectTimeReportDTO(ReportSummaryDTO):
    """Report over one project's entries."""

    project_id: uuid.UUID
    project_name: str
    user_breakdown: List[UserTimeDTO] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: TimeReport) -> "ProjectTimeReportDTO":
        return cls(
            project_id=report.subject_id,
            project_name=report.subject_name,
            user_breakdown=[UserTimeDTO.from_item(item) for item in report.user_breakdown],
            **cls.report_fields(report)
        )


class TeamMemberTimeDTO(TotalsDTO):
    user_id: uuid.UUID
    user_name: str
    utilization_rate: Decimal

    @classmethod
    def from_summary(cls, summary: TeamMemberSummary) -> "TeamMemberTimeDTO":
        return cls(
            user_id=summary.user_id,
            user_name=summary.user_name,
            utilization_rate=summary.totals.utilization_rate,
            **cls.fields_from(summary.totals)
        )


class TeamTimeReportDTO(BaseDTO):
    start_date: date
    end_date: date
    total_team_minutes: int
    total_team_hours: Decimal
    average_utilization: Decimal
    user_reports: List[TeamMemberTimeDTO] = Field(default_factory=list)
    project_breakdown: List[ProjectTimeDTO] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: TeamReport) -> "TeamTimeReportDTO":
        return cls(
            start_date=report.start_date,
            end_date=report.end_date,
            total_team_minutes=report.total_team_minutes,
            total_team_hours=minutes_to_hours(report.total_team_minutes),
            average_utilization=report.average_utilization,
            user_reports=[TeamMemberTimeDTO.from_summary(member) for member in report.members],
            project_breakdown=[ProjectTimeDTO.from_item(item) for item in report.project_breakdown]
        )
