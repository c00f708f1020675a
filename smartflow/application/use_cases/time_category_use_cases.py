"""
Time Category use cases for the application layer.
Registry of the categories time is classified under.
"""

import logging
from typing import List

from smartflow.application.use_cases.base_use_case import (
    CommandUseCase,
    QueryUseCase,
    PaginatedQueryUseCase,
    IdentityContext,
)
from smartflow.application.dto.base_dto import EntityIdRequestDTO, EmptyRequestDTO, ListResponseDTO
from smartflow.application.dto.time_category_dto import (
    CreateTimeCategoryRequestDTO,
    UpdateTimeCategoryRequestDTO,
    ListTimeCategoriesRequestDTO,
    TimeCategoryResponseDTO,
)
from smartflow.domain.models.base import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from smartflow.domain.models.time_category import TimeCategory
from smartflow.domain.models.value_objects import BillableStatus


logger = logging.getLogger(__name__)


class _CategoryLookupMixin:
    """Tenant-scoped fetch shared by the category use cases."""

    def _get_category(self, category_id, tenant_id) -> TimeCategory:
        category = self.uow.time_categories.get_by_id(category_id, tenant_id)
        if category is None:
            raise EntityNotFoundError("Time category", category_id, "Time category not found")
        return category


class CreateTimeCategoryUseCase(CommandUseCase[CreateTimeCategoryRequestDTO, TimeCategoryResponseDTO]):
    """Use case for creating a time category."""

    operation = "creating time category"

    async def _execute_command_logic(
        self, request: CreateTimeCategoryRequestDTO, context: IdentityContext
    ) -> TimeCategoryResponseDTO:
        tenant_id = context.require_tenant()

        if self.uow.time_categories.get_active_by_name(request.name, tenant_id):
            raise DuplicateEntityError("Time category", "name", request.name)

        category = TimeCategory(
            tenant_id=tenant_id,
            name=request.name,
            description=request.description,
            color=request.color,
            default_billable_status=BillableStatus(request.default_billable_status)
        )
        category.validate()
        category.mark_as_created(self.now())

        saved = self.uow.time_categories.save(category)
        logger.info(f"Time category {saved.id} created in tenant {tenant_id}")
        return TimeCategoryResponseDTO.from_domain(saved)


class UpdateTimeCategoryUseCase(
    _CategoryLookupMixin,
    CommandUseCase[UpdateTimeCategoryRequestDTO, TimeCategoryResponseDTO]
):
    """Use case for updating a time category."""

    operation = "updating time category"

    async def _execute_command_logic(
        self, request: UpdateTimeCategoryRequestDTO, context: IdentityContext
    ) -> TimeCategoryResponseDTO:
        tenant_id = context.require_tenant()
        if request.id is None:
            raise ValidationError("Category ID is required", "id")

        category = self._get_category(request.id, tenant_id)

        # Renames and reactivations must not leave two active categories with one name
        name = request.name if request.name is not None else category.name
        will_be_active = request.is_active if request.is_active is not None else category.is_active
        if will_be_active and self.uow.time_categories.get_active_by_name(name, tenant_id, exclude_id=category.id):
            raise DuplicateEntityError("Time category", "name", name)

        category.update_info(
            self.now(),
            name=request.name,
            description=request.description,
            color=request.color,
            default_billable_status=(
                BillableStatus(request.default_billable_status)
                if request.default_billable_status is not None else None
            ),
            is_active=request.is_active
        )

        saved = self.uow.time_categories.save(category)
        return TimeCategoryResponseDTO.from_domain(saved)


class DeleteTimeCategoryUseCase(_CategoryLookupMixin, CommandUseCase[EntityIdRequestDTO, bool]):
    """Use case for soft-deleting a time category."""

    operation = "deleting time category"

    async def _execute_command_logic(self, request: EntityIdRequestDTO, context: IdentityContext) -> bool:
        tenant_id = context.require_tenant()
        category = self._get_category(request.id, tenant_id)

        category.deactivate(self.now())
        self.uow.time_categories.save(category)
        logger.info(f"Time category {category.id} deactivated")
        return True


class GetTimeCategoryUseCase(_CategoryLookupMixin, QueryUseCase[EntityIdRequestDTO, TimeCategoryResponseDTO]):
    """Use case for getting a time category by ID."""

    operation = "retrieving time category"

    async def _execute_business_logic(
        self, request: EntityIdRequestDTO, context: IdentityContext
    ) -> TimeCategoryResponseDTO:
        tenant_id = context.require_tenant()
        return TimeCategoryResponseDTO.from_domain(self._get_category(request.id, tenant_id))


class ListActiveTimeCategoriesUseCase(QueryUseCase[EmptyRequestDTO, List[TimeCategoryResponseDTO]]):
    """Use case for listing the categories users can pick from."""

    operation = "retrieving active time categories"

    async def _execute_business_logic(
        self, request: EmptyRequestDTO, context: IdentityContext
    ) -> List[TimeCategoryResponseDTO]:
        tenant_id = context.require_tenant()
        categories = self.uow.time_categories.list_active(tenant_id)
        return [TimeCategoryResponseDTO.from_domain(category) for category in categories]


class ListTimeCategoriesUseCase(
    PaginatedQueryUseCase[ListTimeCategoriesRequestDTO, ListResponseDTO[TimeCategoryResponseDTO]]
):
    """Use case for the paged category listing."""

    operation = "retrieving time categories"

    async def _execute_business_logic(
        self, request: ListTimeCategoriesRequestDTO, context: IdentityContext
    ) -> ListResponseDTO[TimeCategoryResponseDTO]:
        tenant_id = context.require_tenant()
        categories, total = self.uow.time_categories.list_paged(
            tenant_id,
            page=request.page,
            page_size=request.page_size,
            search=request.search
        )
        return ListResponseDTO[TimeCategoryResponseDTO].create(
            items=[TimeCategoryResponseDTO.from_domain(category) for category in categories],
            total=total,
            page=request.page,
            page_size=request.page_size
        )
