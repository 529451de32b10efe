"""Tests for master data administration and the assistant use cases."""

from unittest.mock import AsyncMock

import pytest

from prostock.application import AppContext
from prostock.application.dto.requests import ItemRequest, SupplierRequest, UserRequest
from prostock.application.use_cases import (
    ChatWithInventoryUseCase,
    InventoryInsightsUseCase,
    ManageMasterDataUseCase,
)
from prostock.core.entities import InventoryItem, MessageRole, User
from prostock.core.exceptions import (
    BackendRejectedError,
    InvalidUnitFactorError,
    MissingFieldError,
    NotAuthenticatedError,
    PermissionDeniedError,
)
from prostock.core.interfaces import ILLMProvider, LLMResponse
from prostock.core.services import InventoryAssistant, RefreshOutcome


class TestItems:
    async def test_staff_cannot_edit_items(self, staff_ctx: AppContext, fake_backend):
        with pytest.raises(PermissionDeniedError):
            await ManageMasterDataUseCase(staff_ctx).save_item(ItemRequest(name="Stapler"))
        fake_backend.update_item.assert_not_awaited()

    async def test_update_keeps_cached_stock(self, admin_ctx: AppContext, fake_backend):
        outcome = await ManageMasterDataUseCase(admin_ctx).save_item(
            ItemRequest(
                id="1",
                name="Copy Paper A4 80gsm",
                default_unit="Pcs",
                initial_stock=0,
                alt_units=[{"name": "Box", "factor": "12"}, {"name": " ", "factor": 3}],
            )
        )

        assert outcome == RefreshOutcome.COMPLETED
        item: InventoryItem = fake_backend.update_item.await_args.args[0]
        assert fake_backend.update_item.await_args.args[1] == "admin"
        assert item.name == "Copy Paper A4 80gsm"
        assert item.stock == 100
        assert [(u.name, u.factor) for u in item.alt_units] == [("Box", 12.0)]

    async def test_bad_factor_is_rejected(self, admin_ctx: AppContext, fake_backend):
        with pytest.raises(InvalidUnitFactorError):
            await ManageMasterDataUseCase(admin_ctx).save_item(
                ItemRequest(name="Bolt", alt_units=[{"name": "Box", "factor": "twelve"}])
            )
        fake_backend.update_item.assert_not_awaited()

    async def test_delete(self, admin_ctx: AppContext, fake_backend):
        await ManageMasterDataUseCase(admin_ctx).delete_item("2")
        fake_backend.delete_item.assert_awaited_once_with("2", "admin")


class TestSuppliers:
    async def test_staff_may_save_suppliers(self, staff_ctx: AppContext, fake_backend):
        await ManageMasterDataUseCase(staff_ctx).save_supplier(SupplierRequest(name="CV Maju"))
        supplier = fake_backend.update_supplier.await_args.args[0]
        assert supplier.name == "CV Maju"

    async def test_requires_login(self, ctx: AppContext):
        with pytest.raises(NotAuthenticatedError):
            await ManageMasterDataUseCase(ctx).list_suppliers()

    async def test_list_comes_from_cache(self, staff_ctx: AppContext):
        suppliers = await ManageMasterDataUseCase(staff_ctx).list_suppliers()
        assert [s.id for s in suppliers] == ["S1"]

    async def test_rejection_notifies(self, staff_ctx: AppContext, fake_backend):
        fake_backend.delete_supplier.side_effect = BackendRejectedError("Supplier in use")
        with pytest.raises(BackendRejectedError):
            await ManageMasterDataUseCase(staff_ctx).delete_supplier("S1")
        assert staff_ctx.notifier.recent(1)[0].message == "Supplier in use"


class TestUsers:
    async def test_new_user_needs_password(self, admin_ctx: AppContext):
        with pytest.raises(MissingFieldError):
            await ManageMasterDataUseCase(admin_ctx).save_user(UserRequest(username="sari"))

    async def test_update_without_password(self, admin_ctx: AppContext, fake_backend):
        await ManageMasterDataUseCase(admin_ctx).save_user(UserRequest(id="3", username="sari", role="ADMIN"))
        user: User = fake_backend.update_user.await_args.args[0]
        assert user.is_admin
        assert user.password is None

    async def test_primary_admin_is_protected(self, admin_ctx: AppContext, fake_backend):
        with pytest.raises(PermissionDeniedError):
            await ManageMasterDataUseCase(admin_ctx).delete_user("1")
        fake_backend.delete_user.assert_not_awaited()

    async def test_cannot_delete_self(self, admin_ctx: AppContext):
        with pytest.raises(PermissionDeniedError):
            await ManageMasterDataUseCase(admin_ctx).delete_user("7")

    async def test_staff_cannot_list_users_or_logs(self, staff_ctx: AppContext):
        use_case = ManageMasterDataUseCase(staff_ctx)
        with pytest.raises(PermissionDeniedError):
            await use_case.list_users()
        with pytest.raises(PermissionDeniedError):
            await use_case.activity_logs()


class TestAssistantUseCases:
    @pytest.fixture
    def assistant(self) -> InventoryAssistant:
        llm = AsyncMock(spec=ILLMProvider)
        llm.chat.return_value = LLMResponse(text="Cement is healthy.", model="m")
        llm.generate.return_value = LLMResponse(text="Three insights.", model="m")
        return InventoryAssistant(llm)

    async def test_conversation_grows(self, staff_ctx: AppContext, assistant):
        reply = await ChatWithInventoryUseCase(staff_ctx, assistant).execute("How is cement?")
        assert reply.content == "Cement is healthy."
        assert [m.role for m in staff_ctx.conversation] == [
            MessageRole.ASSISTANT,
            MessageRole.USER,
            MessageRole.ASSISTANT,
        ]

    async def test_blank_message(self, staff_ctx: AppContext, assistant):
        with pytest.raises(MissingFieldError):
            await ChatWithInventoryUseCase(staff_ctx, assistant).execute("   ")

    async def test_insights(self, staff_ctx: AppContext, assistant):
        assert await InventoryInsightsUseCase(staff_ctx, assistant).execute() == "Three insights."
