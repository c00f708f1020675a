"""
Time report use cases for the application layer.
Read-only aggregation over the time entry ledger.
"""

from collections import defaultdict
from typing import Iterable, Optional
import uuid

from smartflow.application.use_cases.base_use_case import QueryUseCase, IdentityContext, Clock
from smartflow.application.dto.report_dto import (
    UserTimeReportRequestDTO,
    TeamTimeReportRequestDTO,
    ProjectTimeReportRequestDTO,
    UserTimeReportDTO,
    TeamTimeReportDTO,
    ProjectTimeReportDTO,
)
from smartflow.domain.models.base import utcnow
from smartflow.domain.repositories.unit_of_work import UnitOfWork
from smartflow.domain.services.time_report_service import TimeReportService, index_by_id


class _ReportUseCase(QueryUseCase):
    """Shared wiring for the report queries."""

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow, report_service: Optional[TimeReportService] = None):
        super().__init__(uow, clock)
        self.report_service = report_service or TimeReportService()

    def _categories(self, category_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID):
        return index_by_id(self.uow.time_categories.get_many(set(category_ids), tenant_id))


class GetUserTimeReportUseCase(_ReportUseCase):
    """Totals and breakdowns for one user's entries in a date range."""

    operation = "generating user time report"

    async def _execute_business_logic(
        self, request: UserTimeReportRequestDTO, context: IdentityContext
    ) -> UserTimeReportDTO:
        tenant_id = context.require_tenant()

        entries = self.uow.time_entries.get_by_date_range(
            request.user_id, request.start_date, request.end_date, tenant_id
        )
        user_names = self.uow.users.get_names([request.user_id], tenant_id)
        project_names = self.uow.projects.get_names(
            {entry.project_id for entry in entries if entry.project_id}, tenant_id
        )

        report = self.report_service.user_report(
            user_id=request.user_id,
            start_date=request.start_date,
            end_date=request.end_date,
            entries=entries,
            user_name=user_names.get(request.user_id),
            project_names=project_names,
            categories=self._categories((entry.time_category_id for entry in entries), tenant_id)
        )
        return UserTimeReportDTO.from_report(report)


class GetTeamTimeReportUseCase(_ReportUseCase):
    """Per-user summaries for everyone in the tenant with entries in the range."""

    operation = "generating team time report"

    async def _execute_business_logic(
        self, request: TeamTimeReportRequestDTO, context: IdentityContext
    ) -> TeamTimeReportDTO:
        tenant_id = context.require_tenant()

        user_ids = self.uow.users.list_user_ids(tenant_id)
        grouped = defaultdict(list)
        for entry in self.uow.time_entries.get_tenant_entries_in_range(
            request.start_date, request.end_date, tenant_id
        ):
            grouped[entry.user_id].append(entry)
        entries_by_user = [(user_id, grouped.get(user_id, [])) for user_id in user_ids]

        project_ids = {
            entry.project_id
            for _, entries in entries_by_user
            for entry in entries
            if entry.project_id
        }
        report = self.report_service.team_report(
            start_date=request.start_date,
            end_date=request.end_date,
            entries_by_user=entries_by_user,
            user_names=self.uow.users.get_names(user_ids, tenant_id),
            project_names=self.uow.projects.get_names(project_ids, tenant_id)
        )
        return TeamTimeReportDTO.from_report(report)


class GetProjectTimeReportUseCase(_ReportUseCase):
    """Totals for one project, broken down by user, category and day."""

    operation = "generating project time report"

    async def _execute_business_logic(
        self, request: ProjectTimeReportRequestDTO, context: IdentityContext
    ) -> ProjectTimeReportDTO:
        tenant_id = context.require_tenant()

        in_range = self.uow.time_entries.get_tenant_entries_in_range(
            request.start_date, request.end_date, tenant_id, project_id=request.project_id
        )

        report = self.report_service.project_report(
            project_id=request.project_id,
            start_date=request.start_date,
            end_date=request.end_date,
            entries=in_range,
            project_name=self.uow.projects.get_name(request.project_id, tenant_id),
            user_names=self.uow.users.get_names({entry.user_id for entry in in_range}, tenant_id),
            categories=self._categories((entry.time_category_id for entry in in_range), tenant_id)
        )
        return ProjectTimeReportDTO.from_report(report)
