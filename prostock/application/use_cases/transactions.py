"""Ledger listing and manual movement use cases."""

from datetime import datetime

from prostock.application.context import AppContext
from prostock.application.dto.requests import ManualTransactionRequest
from prostock.config import get_logger
from prostock.core.entities import ManualTransaction, TransactionRecord, TransactionType
from prostock.core.exceptions import ProStockError
from prostock.core.services import RefreshOutcome, StockSufficiencyValidator, build_unit_options

logger = get_logger(__name__)


class ListTransactionsUseCase:
    """All ledger rows, newest first. Rows without a timestamp sort last."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(self, limit: int | None = None) -> list[TransactionRecord]:
        self._ctx.require_user()
        records = await self._ctx.backend.get_transactions()
        records.sort(key=lambda r: r.timestamp or datetime.min, reverse=True)
        return records[:limit] if limit is not None else records


class RecordManualTransactionUseCase:
    """
    Record one ad-hoc movement for a cached item, then refresh.

    The quantity is in the item's base unit. An OUT larger than the cached
    stock is refused locally.
    """

    def __init__(self, context: AppContext):
        self._ctx = context
        self._validator = StockSufficiencyValidator()

    async def execute(self, request: ManualTransactionRequest) -> RefreshOutcome:
        user = self._ctx.require_user()
        item = self._ctx.cache.require_item(request.item_id)
        if request.type == TransactionType.OUT:
            self._validator.require(
                item_id=item.id,
                available_base=item.stock,
                quantity=request.quantity,
                unit=build_unit_options(item)[0],
                base_unit=item.default_unit,
            )

        transaction = ManualTransaction(
            item_id=item.id,
            item_name=item.name,
            type=request.type,
            quantity=request.quantity,
            user=user.username,
        )
        logger.info(
            "manual_transaction_started",
            item_id=item.id,
            type=request.type.value,
            quantity=request.quantity,
        )

        try:
            await self._ctx.backend.add_transaction(transaction)
        except ProStockError as e:
            self._ctx.notifier.error(e.message)
            raise

        self._ctx.notifier.success(f"Recorded {request.type.value} for {item.name}")
        await self._ctx.cache.wait_idle()
        return await self._ctx.cache.refresh()
