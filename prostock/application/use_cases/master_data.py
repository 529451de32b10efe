"""
Master data administration: items, suppliers, users and the audit log.

Item and user changes, plus reading users and logs, require an ADMIN
session. Any signed-in user may maintain suppliers. Every successful
mutation refreshes the stock cache.
"""

from prostock.application.context import AppContext
from prostock.application.dto.requests import ItemRequest, SupplierRequest, UserRequest
from prostock.config import get_logger
from prostock.core.entities import ActivityLog, InventoryItem, Supplier, User
from prostock.core.exceptions import MissingFieldError, PermissionDeniedError, ProStockError
from prostock.core.services import RefreshOutcome
from prostock.core.services.unit_conversion import require_factor

logger = get_logger(__name__)

# The root administrator account created with the backend
PRIMARY_ADMIN_ID = "1"


class ManageMasterDataUseCase:
    """Create, update and delete backend master records."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def _after_mutation(self, message: str) -> RefreshOutcome:
        self._ctx.notifier.success(message)
        await self._ctx.cache.wait_idle()
        return await self._ctx.cache.refresh()

    async def _run(self, operation, message: str, **log_fields) -> RefreshOutcome:
        try:
            await operation
        except ProStockError as e:
            logger.warning("master_data_failed", error=e.message, code=e.code, **log_fields)
            self._ctx.notifier.error(e.message)
            raise
        logger.info("master_data_updated", **log_fields)
        return await self._after_mutation(message)

    # Items

    async def save_item(self, request: ItemRequest) -> RefreshOutcome:
        actor = self._ctx.require_admin("edit inventory items")

        default_unit = request.default_unit.strip()
        if not default_unit:
            raise MissingFieldError("default_unit")

        # Reject bad factors here; ingestion would silently drop them
        alt_units = [
            {"name": u.name.strip(), "factor": require_factor(u.name, u.factor)}
            for u in request.alt_units
            if u.name.strip()
        ]
        existing = self._ctx.cache.get_item(request.id) if request.id else None

        item = InventoryItem(
            id=request.id,
            sku=request.sku.strip(),
            name=request.name.strip(),
            category=request.category.strip(),
            stock=existing.stock if existing else request.initial_stock,
            min_stock=request.min_stock,
            price=request.price,
            default_unit=default_unit,
            initial_stock=request.initial_stock,
            status=request.status,
            alt_units=alt_units,
        )
        return await self._run(
            self._ctx.backend.update_item(item, actor.username),
            f"Saved item {item.name}",
            entity="item",
            entity_id=item.id,
        )

    async def delete_item(self, item_id: str) -> RefreshOutcome:
        actor = self._ctx.require_admin("delete inventory items")
        return await self._run(
            self._ctx.backend.delete_item(item_id, actor.username),
            "Item deleted",
            entity="item",
            entity_id=item_id,
        )

    # Suppliers

    async def list_suppliers(self) -> list[Supplier]:
        self._ctx.require_user()
        return self._ctx.cache.suppliers

    async def save_supplier(self, request: SupplierRequest) -> RefreshOutcome:
        actor = self._ctx.require_user()
        supplier = Supplier(**request.model_dump())
        return await self._run(
            self._ctx.backend.update_supplier(supplier, actor.username),
            f"Saved supplier {supplier.name}",
            entity="supplier",
            entity_id=supplier.id,
        )

    async def delete_supplier(self, supplier_id: str) -> RefreshOutcome:
        actor = self._ctx.require_user()
        return await self._run(
            self._ctx.backend.delete_supplier(supplier_id, actor.username),
            "Supplier deleted",
            entity="supplier",
            entity_id=supplier_id,
        )

    # Users

    async def list_users(self) -> list[User]:
        self._ctx.require_admin("view users")
        return await self._ctx.backend.get_users()

    async def save_user(self, request: UserRequest) -> RefreshOutcome:
        actor = self._ctx.require_admin("edit users")
        if not request.id and not request.password:
            raise MissingFieldError("password")
        user = User(**request.model_dump())
        return await self._run(
            self._ctx.backend.update_user(user, actor.username),
            f"Saved user {user.username}",
            entity="user",
            entity_id=user.id,
        )

    async def delete_user(self, user_id: str) -> RefreshOutcome:
        actor = self._ctx.require_admin("delete users")
        if user_id == PRIMARY_ADMIN_ID:
            raise PermissionDeniedError("delete the primary administrator")
        if user_id == actor.id:
            raise PermissionDeniedError("delete your own account")
        return await self._run(
            self._ctx.backend.delete_user(user_id, actor.username),
            "User deleted",
            entity="user",
            entity_id=user_id,
        )

    async def activity_logs(self) -> list[ActivityLog]:
        self._ctx.require_admin("view activity logs")
        return await self._ctx.backend.get_activity_logs()
