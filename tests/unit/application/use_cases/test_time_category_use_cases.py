"""
Tests for the time category registry use cases.
"""

import pytest
import uuid

from smartflow.application.dto.base_dto import EntityIdRequestDTO, EmptyRequestDTO
from smartflow.application.dto.time_category_dto import (
    CreateTimeCategoryRequestDTO,
    UpdateTimeCategoryRequestDTO,
    ListTimeCategoriesRequestDTO,
)
from smartflow.application.use_cases.base_use_case import ErrorKind
from smartflow.application.use_cases.time_category_use_cases import (
    CreateTimeCategoryUseCase,
    UpdateTimeCategoryUseCase,
    DeleteTimeCategoryUseCase,
    GetTimeCategoryUseCase,
    ListActiveTimeCategoriesUseCase,
    ListTimeCategoriesUseCase,
)


class TestTimeCategoryUseCases:

    async def create(self, uow, clock, context, name, **fields):
        return await CreateTimeCategoryUseCase(uow, clock).execute(
            CreateTimeCategoryRequestDTO(name=name, **fields), context
        )

    @pytest.mark.asyncio
    async def test_create(self, uow, clock, context, tenant_id):
        result = await self.create(uow, clock, context, "Development", color="#00ff00")

        assert result.success, result.error
        assert result.data.tenant_id == tenant_id
        assert result.data.default_billable_status == "billable"
        assert result.data.is_active is True

    @pytest.mark.asyncio
    async def test_duplicate_name(self, uow, clock, context, foreign_context):
        await self.create(uow, clock, context, "Development")

        duplicate = await self.create(uow, clock, context, "Development")
        other_tenant = await self.create(uow, clock, foreign_context, "Development")

        assert duplicate.error_kind == ErrorKind.DUPLICATE_NAME
        assert other_tenant.success

    @pytest.mark.asyncio
    async def test_name_is_reusable_after_delete(self, uow, clock, context):
        created = await self.create(uow, clock, context, "Support")
        await DeleteTimeCategoryUseCase(uow, clock).execute(EntityIdRequestDTO(id=created.data.id), context)

        result = await self.create(uow, clock, context, "Support")

        assert result.success

    @pytest.mark.asyncio
    async def test_reactivation_clashes_with_active_namesake(self, uow, clock, context):
        original = await self.create(uow, clock, context, "Support")
        await DeleteTimeCategoryUseCase(uow, clock).execute(EntityIdRequestDTO(id=original.data.id), context)
        await self.create(uow, clock, context, "Support")

        reactivated = await UpdateTimeCategoryUseCase(uow, clock).execute(
            UpdateTimeCategoryRequestDTO(id=original.data.id, is_active=True), context
        )
        described = await UpdateTimeCategoryUseCase(uow, clock).execute(
            UpdateTimeCategoryRequestDTO(id=original.data.id, description="Old support queue"), context
        )

        assert reactivated.error_kind == ErrorKind.DUPLICATE_NAME
        assert described.success, described.error
        active = await ListActiveTimeCategoriesUseCase(uow, clock).execute(EmptyRequestDTO(), context)
        assert [category.name for category in active.data] == ["Support"]

    @pytest.mark.asyncio
    async def test_update_and_rename_clash(self, uow, clock, context):
        development = await self.create(uow, clock, context, "Development")
        await self.create(uow, clock, context, "Meetings")

        clash = await UpdateTimeCategoryUseCase(uow, clock).execute(
            UpdateTimeCategoryRequestDTO(id=development.data.id, name="Meetings"), context
        )
        assert clash.error_kind == ErrorKind.DUPLICATE_NAME

        updated = await UpdateTimeCategoryUseCase(uow, clock).execute(
            UpdateTimeCategoryRequestDTO(id=development.data.id, color="#123", default_billable_status="internal"),
            context
        )
        assert updated.data.name == "Development"
        assert updated.data.color == "#123"
        assert updated.data.default_billable_status == "internal"

    @pytest.mark.asyncio
    async def test_delete_deactivates(self, uow, clock, context):
        created = await self.create(uow, clock, context, "Research")
        request = EntityIdRequestDTO(id=created.data.id)

        deleted = await DeleteTimeCategoryUseCase(uow, clock).execute(request, context)
        assert deleted.success

        fetched = await GetTimeCategoryUseCase(uow, clock).execute(request, context)
        assert fetched.data.is_active is False

        active = await ListActiveTimeCategoriesUseCase(uow, clock).execute(EmptyRequestDTO(), context)
        assert active.data == []

    @pytest.mark.asyncio
    async def test_missing_and_foreign(self, uow, clock, context, foreign_context):
        created = await self.create(uow, clock, context, "Development")

        missing = await GetTimeCategoryUseCase(uow, clock).execute(EntityIdRequestDTO(id=uuid.uuid4()), context)
        foreign = await GetTimeCategoryUseCase(uow, clock).execute(
            EntityIdRequestDTO(id=created.data.id), foreign_context
        )

        assert missing.error_kind == ErrorKind.NOT_FOUND
        assert foreign.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_list_active_sorted_by_name(self, uow, clock, context):
        for name in ("Support", "Meetings", "Development"):
            await self.create(uow, clock, context, name)

        result = await ListActiveTimeCategoriesUseCase(uow, clock).execute(EmptyRequestDTO(), context)

        assert [item.name for item in result.data] == ["Development", "Meetings", "Support"]

    @pytest.mark.asyncio
    async def test_list_paged_search(self, uow, clock, context):
        await self.create(uow, clock, context, "Development", description="Writing code")
        await self.create(uow, clock, context, "Code review")
        await self.create(uow, clock, context, "Meetings")

        result = await ListTimeCategoriesUseCase(uow, clock).execute(
            ListTimeCategoriesRequestDTO(search="code"), context
        )

        assert result.data.total == 2
        assert [item.name for item in result.data.items] == ["Code review", "Development"]
