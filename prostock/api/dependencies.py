"""
Dependency injection container for FastAPI.

Provides the application root, services and use cases to route handlers.
Tests replace get_context / get_assistant through app.dependency_overrides.
"""

from fastapi import Depends

from prostock.application import AppContext, get_app_context, get_inventory_assistant
from prostock.application.use_cases import (
    SUBMIT_USE_CASES,
    CartEntryUseCase,
    ChatWithInventoryUseCase,
    ExportTransactionsUseCase,
    HistoryReportUseCase,
    InventoryInsightsUseCase,
    ListTransactionsUseCase,
    LoginUseCase,
    LogoutUseCase,
    ManageMasterDataUseCase,
    RecordManualTransactionUseCase,
    SearchItemsUseCase,
    SubmitCartUseCase,
)
from prostock.core.interfaces import ILLMProvider
from prostock.core.services import CartFlow, InventoryAssistant
from prostock.infrastructure.llm import get_llm_provider


async def get_context() -> AppContext:
    """Get the process-wide application root."""
    return await get_app_context()


def get_assistant() -> InventoryAssistant:
    """Get the inventory assistant."""
    return get_inventory_assistant()


# LLM dependency
def get_llm() -> ILLMProvider:
    """Get LLM provider."""
    return get_llm_provider()


# Session
def get_login_use_case(ctx: AppContext = Depends(get_context)) -> LoginUseCase:
    return LoginUseCase(ctx)


def get_logout_use_case(ctx: AppContext = Depends(get_context)) -> LogoutUseCase:
    return LogoutUseCase(ctx)


# Carts
def get_cart_entry_use_case(
    flow: CartFlow,
    ctx: AppContext = Depends(get_context),
) -> CartEntryUseCase:
    """Cart entry use case for the flow named in the path."""
    return CartEntryUseCase(ctx, flow)


def get_submit_use_case(
    flow: CartFlow,
    ctx: AppContext = Depends(get_context),
) -> SubmitCartUseCase:
    """Submission use case for the flow named in the path."""
    return SUBMIT_USE_CASES[flow](ctx)


# Reporting
def get_history_use_case(ctx: AppContext = Depends(get_context)) -> HistoryReportUseCase:
    return HistoryReportUseCase(ctx)


def get_list_transactions_use_case(
    ctx: AppContext = Depends(get_context),
) -> ListTransactionsUseCase:
    return ListTransactionsUseCase(ctx)


def get_manual_transaction_use_case(
    ctx: AppContext = Depends(get_context),
) -> RecordManualTransactionUseCase:
    return RecordManualTransactionUseCase(ctx)


def get_export_use_case(ctx: AppContext = Depends(get_context)) -> ExportTransactionsUseCase:
    return ExportTransactionsUseCase(ctx)


def get_search_use_case(ctx: AppContext = Depends(get_context)) -> SearchItemsUseCase:
    return SearchItemsUseCase(ctx)


# Assistant
def get_chat_use_case(
    ctx: AppContext = Depends(get_context),
    assistant: InventoryAssistant = Depends(get_assistant),
) -> ChatWithInventoryUseCase:
    return ChatWithInventoryUseCase(ctx, assistant)


def get_insights_use_case(
    ctx: AppContext = Depends(get_context),
    assistant: InventoryAssistant = Depends(get_assistant),
) -> InventoryInsightsUseCase:
    return InventoryInsightsUseCase(ctx, assistant)


# Administration
def get_master_data_use_case(ctx: AppContext = Depends(get_context)) -> ManageMasterDataUseCase:
    return ManageMasterDataUseCase(ctx)
