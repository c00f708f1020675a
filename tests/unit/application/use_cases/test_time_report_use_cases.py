"""
Tests for the report use cases over persisted entries and directory names.
"""

import pytest
import pytest_asyncio
from datetime import date, datetime, timedelta
from decimal import Decimal
import uuid

from smartflow.application.dto.report_dto import (
    UserTimeReportRequestDTO,
    TeamTimeReportRequestDTO,
    ProjectTimeReportRequestDTO,
)
from smartflow.application.dto.time_entry_dto import CreateTimeEntryRequestDTO
from smartflow.application.use_cases.base_use_case import ErrorKind, IdentityContext
from smartflow.application.use_cases.time_entry_use_cases import CreateTimeEntryUseCase
from smartflow.application.use_cases.time_report_use_cases import (
    GetUserTimeReportUseCase,
    GetTeamTimeReportUseCase,
    GetProjectTimeReportUseCase,
)


WEEK_START = date(2024, 1, 15)
WEEK_END = date(2024, 1, 21)


class TestTimeReportUseCases:

    @pytest_asyncio.fixture(autouse=True)
    async def ledger(self, uow, clock, context, manager_context, category, people, project_id):
        """Ada: 90 billable on the project plus 30 without one. Grace: 60 billable on the project."""
        async def log(ctx, day, minutes, billable, project=None):
            start = datetime(2024, 1, day, 9, 0, 0)
            result = await CreateTimeEntryUseCase(uow, clock).execute(
                CreateTimeEntryRequestDTO(
                    time_category_id=category.id,
                    project_id=project,
                    start_time=start,
                    end_time=start + timedelta(minutes=minutes),
                    billable_status="billable" if billable else "non_billable"
                ),
                ctx
            )
            assert result.success, result.error

        await log(context, 15, 90, True, project_id)
        await log(context, 15, 30, False)
        await log(manager_context, 16, 60, True, project_id)
        # Outside the reporting week
        await log(context, 22, 240, True, project_id)

    @pytest.mark.asyncio
    async def test_user_report(self, uow, clock, context, user_id, project_id):
        result = await GetUserTimeReportUseCase(uow, clock).execute(
            UserTimeReportRequestDTO(user_id=user_id, start_date=WEEK_START, end_date=WEEK_END), context
        )

        report = result.data
        assert report.user_name == "Ada Lovelace"
        assert report.total_minutes == 120
        assert report.total_hours == Decimal("2.00")
        assert report.billable_minutes == 90
        assert report.non_billable_minutes == 30
        assert report.utilization_rate == Decimal("75.00")

        assert [(item.project_id, item.project_name, item.total_minutes, item.percentage)
                for item in report.project_breakdown] == [
            (project_id, "Website Redesign", 90, Decimal("75.00")),
            (None, "Unknown Project", 30, Decimal("25.00")),
        ]

        assert report.category_breakdown[0].category_name == "Development"
        assert report.category_breakdown[0].category_color == "#3366FF"
        assert [(day.work_date, day.entry_count) for day in report.daily_breakdown] == [(WEEK_START, 2)]

    @pytest.mark.asyncio
    async def test_user_report_for_unknown_user(self, uow, clock, context):
        result = await GetUserTimeReportUseCase(uow, clock).execute(
            UserTimeReportRequestDTO(user_id=uuid.uuid4(), start_date=WEEK_START, end_date=WEEK_END), context
        )

        assert result.data.user_name == "Unknown User"
        assert result.data.total_minutes == 0
        assert result.data.utilization_rate == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_team_report(self, uow, clock, context):
        result = await GetTeamTimeReportUseCase(uow, clock).execute(
            TeamTimeReportRequestDTO(start_date=WEEK_START, end_date=WEEK_END), context
        )

        report = result.data
        assert [member.user_name for member in report.user_reports] == ["Grace Hopper", "Ada Lovelace"]
        assert report.total_team_minutes == 180
        assert report.total_team_hours == Decimal("3.00")
        # Mean of 100% and 75%
        assert report.average_utilization == Decimal("87.50")
        assert [(item.project_name, item.total_minutes) for item in report.project_breakdown] == [
            ("Website Redesign", 150),
            ("Unknown Project", 30),
        ]

    @pytest.mark.asyncio
    async def test_project_report(self, uow, clock, context, project_id):
        result = await GetProjectTimeReportUseCase(uow, clock).execute(
            ProjectTimeReportRequestDTO(project_id=project_id, start_date=WEEK_START, end_date=WEEK_END), context
        )

        report = result.data
        assert report.project_name == "Website Redesign"
        assert report.total_minutes == 150
        assert report.billable_minutes == 150
        assert [(item.user_name, item.total_minutes) for item in report.user_breakdown] == [
            ("Ada Lovelace", 90),
            ("Grace Hopper", 60),
        ]
        assert report.user_breakdown[0].percentage == Decimal("60.00")

    @pytest.mark.asyncio
    async def test_reports_are_tenant_scoped(self, uow, clock, foreign_context, user_id):
        result = await GetUserTimeReportUseCase(uow, clock).execute(
            UserTimeReportRequestDTO(user_id=user_id, start_date=WEEK_START, end_date=WEEK_END), foreign_context
        )

        assert result.data.total_minutes == 0
        assert result.data.user_name == "Unknown User"

    @pytest.mark.asyncio
    async def test_report_requires_tenant(self, uow, clock):
        result = await GetTeamTimeReportUseCase(uow, clock).execute(
            TeamTimeReportRequestDTO(start_date=WEEK_START, end_date=WEEK_END), IdentityContext()
        )

        assert result.error_kind == ErrorKind.INVALID_CONTEXT
