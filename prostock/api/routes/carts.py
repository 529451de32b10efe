"""
Cart endpoints for the inbound, outbound and opname flows.

Each flow keeps its own cart: an entry being typed plus committed lines.
"""

from fastapi import APIRouter, Depends, status

from prostock.api.dependencies import get_cart_entry_use_case, get_submit_use_case
from prostock.application.dto.requests import (
    SelectItemRequest,
    SetQuantityRequest,
    SetRemarksRequest,
    SetUnitRequest,
    SubmitCartRequest,
)
from prostock.application.dto.responses import CartResponse, ErrorResponse, SubmitResponse
from prostock.application.use_cases import CartEntryUseCase, SubmitCartUseCase

router = APIRouter(prefix="/api/carts", tags=["carts"])

_entry_errors = {400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}}


@router.get("/{flow}", response_model=CartResponse)
async def get_cart(use_case: CartEntryUseCase = Depends(get_cart_entry_use_case)) -> CartResponse:
    """Current entry, its validation and the committed lines."""
    return CartResponse.from_cart(use_case.cart)


@router.post("/{flow}/select", response_model=CartResponse, responses=_entry_errors)
async def select_item(
    request: SelectItemRequest,
    use_case: CartEntryUseCase = Depends(get_cart_entry_use_case),
) -> CartResponse:
    return CartResponse.from_cart(use_case.select_item(request.item_id))


@router.post("/{flow}/unit", response_model=CartResponse, responses=_entry_errors)
async def set_unit(
    request: SetUnitRequest,
    use_case: CartEntryUseCase = Depends(get_cart_entry_use_case),
) -> CartResponse:
    return CartResponse.from_cart(use_case.set_unit(request.unit))


@router.post("/{flow}/quantity", response_model=CartResponse, responses=_entry_errors)
async def set_quantity(
    request: SetQuantityRequest,
    use_case: CartEntryUseCase = Depends(get_cart_entry_use_case),
) -> CartResponse:
    """Set the quantity; the response carries the stock check result."""
    return CartResponse.from_cart(use_case.set_quantity(request.quantity))


@router.post("/{flow}/remarks", response_model=CartResponse, responses=_entry_errors)
async def set_remarks(
    request: SetRemarksRequest,
    use_case: CartEntryUseCase = Depends(get_cart_entry_use_case),
) -> CartResponse:
    return CartResponse.from_cart(use_case.set_remarks(request.remarks))


@router.post(
    "/{flow}/lines",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_entry_errors,
)
async def commit_line(use_case: CartEntryUseCase = Depends(get_cart_entry_use_case)) -> CartResponse:
    """Move the current entry into the cart."""
    use_case.commit_line()
    return CartResponse.from_cart(use_case.cart)


@router.delete("/{flow}/lines/{index}", response_model=CartResponse, responses=_entry_errors)
async def remove_line(
    index: int,
    use_case: CartEntryUseCase = Depends(get_cart_entry_use_case),
) -> CartResponse:
    use_case.remove_line(index)
    return CartResponse.from_cart(use_case.cart)


@router.delete("/{flow}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_cart(use_case: CartEntryUseCase = Depends(get_cart_entry_use_case)) -> None:
    """Drop every line and the current entry."""
    use_case.discard()


@router.post(
    "/{flow}/submit",
    response_model=SubmitResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing header field or empty cart"},
        409: {"model": ErrorResponse, "description": "Backend rejected the document"},
        502: {"model": ErrorResponse, "description": "Backend unreachable"},
    },
)
async def submit_cart(
    request: SubmitCartRequest,
    use_case: SubmitCartUseCase = Depends(get_submit_use_case),
) -> SubmitResponse:
    """
    Send the whole cart as one document.

    On failure the cart is kept unchanged so it can be resubmitted.
    """
    result = await use_case.execute(request)
    return SubmitResponse(
        flow=result.flow.value,
        lines_submitted=result.lines_submitted,
        refresh=result.refresh.value,
    )
