"""
Transaction ledger endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from prostock.api.dependencies import (
    get_context,
    get_list_transactions_use_case,
    get_manual_transaction_use_case,
)
from prostock.application import AppContext
from prostock.application.dto.requests import ManualTransactionRequest
from prostock.application.dto.responses import ErrorResponse, RefreshResponse, TransactionResponse
from prostock.application.use_cases import ListTransactionsUseCase, RecordManualTransactionUseCase

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    limit: int | None = Query(default=None, ge=1),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> list[TransactionResponse]:
    """Ledger rows, newest first."""
    records = await use_case.execute(limit=limit)
    return [TransactionResponse.from_record(r) for r in records]


@router.post(
    "",
    response_model=RefreshResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def record_transaction(
    request: ManualTransactionRequest,
    ctx: AppContext = Depends(get_context),
    use_case: RecordManualTransactionUseCase = Depends(get_manual_transaction_use_case),
) -> RefreshResponse:
    """Record a single movement outside the cart flows."""
    outcome = await use_case.execute(request)
    return RefreshResponse.from_outcome(outcome, ctx.cache)
