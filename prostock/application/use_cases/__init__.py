"""Application use cases."""

from prostock.application.use_cases.assistant import ChatWithInventoryUseCase, InventoryInsightsUseCase
from prostock.application.use_cases.cart_entry import CartEntryUseCase
from prostock.application.use_cases.export_transactions import (
    XLSX_MEDIA_TYPE,
    ExportResult,
    ExportTransactionsUseCase,
)
from prostock.application.use_cases.history_report import HistoryReportUseCase
from prostock.application.use_cases.master_data import ManageMasterDataUseCase
from prostock.application.use_cases.search_items import SearchItemsUseCase
from prostock.application.use_cases.session import (
    LoginUseCase,
    LogoutUseCase,
    RestoreSessionUseCase,
    SessionResult,
)
from prostock.application.use_cases.submit_cart import (
    SUBMIT_USE_CASES,
    SubmitCartUseCase,
    SubmitOpnameUseCase,
    SubmitResult,
    SubmitStockInUseCase,
    SubmitStockOutUseCase,
)
from prostock.application.use_cases.transactions import (
    ListTransactionsUseCase,
    RecordManualTransactionUseCase,
)

__all__ = [
    # Session
    "LoginUseCase",
    "LogoutUseCase",
    "RestoreSessionUseCase",
    "SessionResult",
    # Carts
    "CartEntryUseCase",
    "SubmitCartUseCase",
    "SubmitStockInUseCase",
    "SubmitStockOutUseCase",
    "SubmitOpnameUseCase",
    "SubmitResult",
    "SUBMIT_USE_CASES",
    # Reporting
    "HistoryReportUseCase",
    "ListTransactionsUseCase",
    "RecordManualTransactionUseCase",
    "ExportTransactionsUseCase",
    "ExportResult",
    "XLSX_MEDIA_TYPE",
    # Search
    "SearchItemsUseCase",
    # Assistant
    "ChatWithInventoryUseCase",
    "InventoryInsightsUseCase",
    # Admin
    "ManageMasterDataUseCase",
]
