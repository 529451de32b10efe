"""Tests for history, ledger, export and search use cases."""

import asyncio
from datetime import date, datetime

import openpyxl
import pytest

from prostock.application import AppContext
from prostock.application.dto.requests import ExportRequest, ManualTransactionRequest
from prostock.application.use_cases import (
    ExportTransactionsUseCase,
    HistoryReportUseCase,
    ListTransactionsUseCase,
    RecordManualTransactionUseCase,
    SearchItemsUseCase,
)
from prostock.core.entities import (
    HistoricalStockReport,
    ManualTransaction,
    Transaction,
    TransactionRecord,
    TransactionType,
)
from prostock.core.exceptions import (
    BackendRejectedError,
    InsufficientStockError,
    ItemNotFoundError,
    MissingFieldError,
    NoRecordsToExportError,
    ValidationError,
)
from prostock.core.services import RefreshOutcome
from prostock.core.services.transaction_export import EXPORT_COLUMNS


@pytest.fixture
def ledger() -> list[TransactionRecord]:
    return [
        TransactionRecord(timestamp=datetime(2024, 3, 1, 8), item_code="1", item_name="Copy Paper A4", type="IN"),
        TransactionRecord(timestamp=datetime(2024, 3, 20, 8), item_code="2", item_name="Cement 50kg", type="OUT"),
        TransactionRecord(timestamp=None, item_code="1", type="OUT"),
        TransactionRecord(timestamp=datetime(2024, 3, 10, 8), item_code="1", item_name="Copy Paper A4", type="OUT"),
    ]


class TestHistoryReportUseCase:
    async def test_reconstructs(self, staff_ctx: AppContext, fake_backend):
        fake_backend.get_history_report.return_value = HistoricalStockReport(
            item_id="1",
            opening_stock=10,
            total_in=5,
            closing_stock=15,
            movements=[Transaction(type=TransactionType.IN, quantity=5, timestamp=datetime(2024, 3, 2))],
        )

        result = await HistoryReportUseCase(staff_ctx).execute("1", date(2024, 3, 1), date(2024, 3, 31))

        fake_backend.get_history_report.assert_awaited_once_with("1", date(2024, 3, 1), date(2024, 3, 31))
        assert result.final_balance == 15
        assert result.consistent

    async def test_inconsistent_report_is_flagged_by_default(self, staff_ctx: AppContext, fake_backend):
        fake_backend.get_history_report.return_value = HistoricalStockReport(
            item_id="1", opening_stock=10, closing_stock=12
        )
        result = await HistoryReportUseCase(staff_ctx).execute("1", date(2024, 3, 1), date(2024, 3, 31))
        assert not result.consistent

    async def test_validates_range(self, staff_ctx: AppContext, fake_backend):
        with pytest.raises(ValidationError):
            await HistoryReportUseCase(staff_ctx).execute("1", date(2024, 4, 1), date(2024, 3, 1))
        with pytest.raises(MissingFieldError):
            await HistoryReportUseCase(staff_ctx).execute(" ", date(2024, 3, 1), date(2024, 3, 1))
        fake_backend.get_history_report.assert_not_awaited()


class TestListTransactionsUseCase:
    async def test_newest_first_undated_last(self, staff_ctx: AppContext, fake_backend, ledger):
        fake_backend.get_transactions.return_value = ledger
        records = await ListTransactionsUseCase(staff_ctx).execute()
        assert [r.timestamp for r in records] == [
            datetime(2024, 3, 20, 8),
            datetime(2024, 3, 10, 8),
            datetime(2024, 3, 1, 8),
            None,
        ]

    async def test_limit(self, staff_ctx: AppContext, fake_backend, ledger):
        fake_backend.get_transactions.return_value = ledger
        assert len(await ListTransactionsUseCase(staff_ctx).execute(limit=2)) == 2


class TestRecordManualTransactionUseCase:
    async def test_records_and_refreshes(self, staff_ctx: AppContext, fake_backend):
        outcome = await RecordManualTransactionUseCase(staff_ctx).execute(
            ManualTransactionRequest(item_id="2", type=TransactionType.OUT, quantity=3)
        )

        assert outcome == RefreshOutcome.COMPLETED
        sent: ManualTransaction = fake_backend.add_transaction.await_args.args[0]
        assert (sent.item_name, sent.type, sent.quantity, sent.user) == ("Cement 50kg", TransactionType.OUT, 3, "budi")

    async def test_out_beyond_cached_stock_is_refused(self, staff_ctx: AppContext, fake_backend):
        with pytest.raises(InsufficientStockError) as exc_info:
            await RecordManualTransactionUseCase(staff_ctx).execute(
                ManualTransactionRequest(item_id="2", type=TransactionType.OUT, quantity=51)
            )
        assert exc_info.value.details["available"] == 50
        assert exc_info.value.details["unit"] == "Sak"
        fake_backend.add_transaction.assert_not_awaited()

    async def test_in_is_not_bounded_by_stock(self, staff_ctx: AppContext, fake_backend):
        await RecordManualTransactionUseCase(staff_ctx).execute(
            ManualTransactionRequest(item_id="2", type=TransactionType.IN, quantity=500)
        )
        fake_backend.add_transaction.assert_awaited_once()

    async def test_unknown_item(self, staff_ctx: AppContext, fake_backend):
        with pytest.raises(ItemNotFoundError):
            await RecordManualTransactionUseCase(staff_ctx).execute(ManualTransactionRequest(item_id="99", quantity=1))
        fake_backend.add_transaction.assert_not_awaited()

    async def test_rejection_is_reported(self, staff_ctx: AppContext, fake_backend):
        fake_backend.add_transaction.side_effect = BackendRejectedError("Item inactive")
        with pytest.raises(BackendRejectedError):
            await RecordManualTransactionUseCase(staff_ctx).execute(ManualTransactionRequest(item_id="1", quantity=1))
        assert staff_ctx.notifier.recent(1)[0].message == "Item inactive"


class TestExportTransactionsUseCase:
    async def test_workbook_contents(self, staff_ctx: AppContext, fake_backend, ledger, tmp_path):
        fake_backend.get_transactions.return_value = ledger

        result = await ExportTransactionsUseCase(staff_ctx).execute(
            ExportRequest(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31), item_id="1")
        )

        assert result.row_count == 2
        assert result.filename.startswith("Export_Inventory_")
        assert result.filename.endswith(".xlsx")
        assert result.path is None

        path = tmp_path / result.filename
        path.write_bytes(result.content)
        ws = openpyxl.load_workbook(path).active
        assert ws.title == "Audit_ProStock"
        assert tuple(c.value for c in ws[1]) == EXPORT_COLUMNS
        assert ws.max_row == 3

    async def test_save_writes_file(self, staff_ctx: AppContext, fake_backend, ledger):
        fake_backend.get_transactions.return_value = ledger
        result = await ExportTransactionsUseCase(staff_ctx).execute(
            ExportRequest(start_date=date(2024, 3, 1), end_date=date(2024, 3, 31), save=True)
        )
        assert result.path is not None
        assert result.path.exists()
        assert result.row_count == 3

    async def test_nothing_matches(self, staff_ctx: AppContext, fake_backend, ledger):
        fake_backend.get_transactions.return_value = ledger
        with pytest.raises(NoRecordsToExportError):
            await ExportTransactionsUseCase(staff_ctx).execute(
                ExportRequest(start_date=date(2023, 1, 1), end_date=date(2023, 1, 31))
            )
        assert staff_ctx.notifier.recent(1)[0].message == "No records found for the selected filter"

    async def test_reversed_range(self, staff_ctx: AppContext, fake_backend):
        with pytest.raises(ValidationError):
            await ExportTransactionsUseCase(staff_ctx).execute(
                ExportRequest(start_date=date(2024, 3, 31), end_date=date(2024, 3, 1))
            )
        fake_backend.get_transactions.assert_not_awaited()


class TestSearchItemsUseCase:
    async def test_short_query_skips_backend(self, staff_ctx: AppContext, fake_backend):
        assert await SearchItemsUseCase(staff_ctx).execute(" p ") == []
        fake_backend.search_items.assert_not_awaited()

    async def test_results_are_capped(self, staff_ctx: AppContext, fake_backend, paper):
        fake_backend.search_items.return_value = [paper] * 30
        results = await SearchItemsUseCase(staff_ctx).execute("paper")
        fake_backend.search_items.assert_awaited_once_with("paper")
        assert len(results) == staff_ctx.settings.search.max_results

    async def test_debounced(self, staff_ctx: AppContext, fake_backend):
        search = SearchItemsUseCase(staff_ctx).debounced()
        assert [i.id for i in await search("paper")] == ["1"]

    async def test_debouncer_is_shared_across_requests(self, staff_ctx: AppContext, fake_backend):
        first = SearchItemsUseCase(staff_ctx).debounced()
        assert SearchItemsUseCase(staff_ctx).debounced() is first

        older, newer = await asyncio.gather(first("pap"), SearchItemsUseCase(staff_ctx).debounced()("paper"))

        assert older is None
        assert [i.id for i in newer] == ["1"]
        fake_backend.search_items.assert_awaited_once_with("paper")
