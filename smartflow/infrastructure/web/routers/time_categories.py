"""
Time category router.
Handles the category registry used to classify tracked time.
"""

from typing import Annotated, List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status

from smartflow.application.dto.base_dto import EmptyRequestDTO, EntityIdRequestDTO, ListResponseDTO
from smartflow.application.dto.time_category_dto import (
    CreateTimeCategoryRequestDTO,
    UpdateTimeCategoryRequestDTO,
    ListTimeCategoriesRequestDTO,
    TimeCategoryResponseDTO,
)
from smartflow.application.use_cases.base_use_case import IdentityContext
from smartflow.application.use_cases.time_category_use_cases import (
    CreateTimeCategoryUseCase,
    UpdateTimeCategoryUseCase,
    DeleteTimeCategoryUseCase,
    GetTimeCategoryUseCase,
    ListActiveTimeCategoriesUseCase,
    ListTimeCategoriesUseCase,
)
from smartflow.config import Settings, get_settings
from smartflow.infrastructure.auth import get_identity_context
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.dependencies import get_unit_of_work, build_request
from smartflow.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()

Identity = Annotated[IdentityContext, Depends(get_identity_context)]
UnitOfWorkDep = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeCategoryResponseDTO)
async def create_time_category(
    request: CreateTimeCategoryRequestDTO,
    context: Identity,
    uow: UnitOfWorkDep
):
    """
    Create a new time category.

    - **name**: Category name, unique among the tenant's active categories
    - **color**: Optional hex colour (#RGB or #RRGGBB)
    - **default_billable_status**: billable, non_billable or internal
    """
    result = await CreateTimeCategoryUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.get("", response_model=ListResponseDTO[TimeCategoryResponseDTO])
async def list_time_categories(
    context: Identity,
    uow: UnitOfWorkDep,
    settings: Annotated[Settings, Depends(get_settings)],
    page: int = Query(1, description="Page number (1-based)"),
    page_size: Optional[int] = Query(None, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by name or description")
):
    """List active categories, ordered by name."""
    request = build_request(
        ListTimeCategoriesRequestDTO,
        page=page,
        page_size=page_size or settings.default_page_size,
        search=search
    )
    use_case = ListTimeCategoriesUseCase(uow, max_page_size=settings.max_page_size)
    return raise_for_result(await use_case.execute(request, context))


@router.get("/active", response_model=List[TimeCategoryResponseDTO])
async def list_active_time_categories(context: Identity, uow: UnitOfWorkDep):
    """All active categories of the caller's tenant."""
    result = await ListActiveTimeCategoriesUseCase(uow).execute(EmptyRequestDTO(), context)
    return raise_for_result(result)


@router.get("/{category_id}", response_model=TimeCategoryResponseDTO)
async def get_time_category(category_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    result = await GetTimeCategoryUseCase(uow).execute(EntityIdRequestDTO(id=category_id), context)
    return raise_for_result(result)


@router.put("/{category_id}", response_model=TimeCategoryResponseDTO)
async def update_time_category(
    category_id: uuid.UUID,
    request: UpdateTimeCategoryRequestDTO,
    context: Identity,
    uow: UnitOfWorkDep
):
    """Update a category. Omitted fields are left unchanged."""
    request.id = category_id
    result = await UpdateTimeCategoryUseCase(uow).execute(request, context)
    return raise_for_result(result)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_category(category_id: uuid.UUID, context: Identity, uow: UnitOfWorkDep):
    """Deactivate a category. Existing entries keep referring to it."""
    result = await DeleteTimeCategoryUseCase(uow).execute(EntityIdRequestDTO(id=category_id), context)
    raise_for_result(result)
