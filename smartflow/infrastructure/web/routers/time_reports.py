"""
Time report router.
Read-only roll-ups over the time entry ledger.
"""

from datetime import date
from typing import Annotated
import uuid

from fastapi import APIRouter, Depends, Query

from smartflow.application.dto.report_dto import (
    UserTimeReportRequestDTO,
    TeamTimeReportRequestDTO,
    ProjectTimeReportRequestDTO,
    UserTimeReportDTO,
    TeamTimeReportDTO,
    ProjectTimeReportDTO,
)
from smartflow.application.use_cases.base_use_case import IdentityContext
from smartflow.application.use_cases.time_report_use_cases import (
    GetUserTimeReportUseCase,
    GetTeamTimeReportUseCase,
    GetProjectTimeReportUseCase,
)
from smartflow.infrastructure.auth import get_identity_context
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.dependencies import get_unit_of_work, build_request
from smartflow.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()

Identity = Annotated[IdentityContext, Depends(get_identity_context)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]
StartDate = Annotated[date, Query(description="First day, inclusive")]
EndDate = Annotated[date, Query(description="Last day, inclusive")]


@router.get("/user/{user_id}", response_model=UserTimeReportDTO)
async def get_user_time_report(
    user_id: uuid.UUID,
    start_date: StartDate,
    end_date: EndDate,
    context: Identity,
    uow: UnitOfWorkDep
):
    """
    Totals for one user, broken down by project, category and day.
    """
    request = build_request(UserTimeReportRequestDTO, user_id=user_id, start_date=start_date, end_date=end_date)
    return raise_for_result(await GetUserTimeReportUseCase(uow).execute(request, context))


@router.get("/team", response_model=TeamTimeReportDTO)
async def get_team_time_report(start_date: StartDate, end_date: EndDate, context: Identity, uow: UnitOfWorkDep):
    """Per-user summaries for the caller's tenant."""
    request = build_request(TeamTimeReportRequestDTO, start_date=start_date, end_date=end_date)
    return raise_for_result(await GetTeamTimeReportUseCase(uow).execute(request, context))


@router.get("/project/{project_id}", response_model=ProjectTimeReportDTO)
async def get_project_time_report(
    project_id: uuid.UUID,
    start_date: StartDate,
    end_date: EndDate,
    context: Identity,
    uow: UnitOfWorkDep
):
    request = build_request(
        ProjectTimeReportRequestDTO, project_id=project_id, start_date=start_date, end_date=end_date
    )
    return raise_for_result(await GetProjectTimeReportUseCase(uow).execute(request, context))
