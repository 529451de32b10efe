"""
Item lookup endpoints.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from prostock.api.dependencies import get_context, get_search_use_case
from prostock.application import AppContext
from prostock.application.dto.responses import ErrorResponse, ItemResponse
from prostock.application.use_cases import SearchItemsUseCase

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get(
    "/search",
    response_model=list[ItemResponse],
    responses={204: {"description": "Superseded by a newer debounced query"}},
)
async def search_items(
    q: str = Query(default="", description="Name or SKU fragment"),
    debounce: bool = Query(default=False, description="Wait for typing to pause before searching"),
    use_case: SearchItemsUseCase = Depends(get_search_use_case),
) -> list[ItemResponse] | Response:
    """
    Backend item search. Short queries return nothing.

    With debounce=true the query waits SEARCH_DEBOUNCE_MS; if another
    debounced query arrives meanwhile, this one answers 204 without
    reaching the backend.
    """
    if debounce:
        items = await use_case.debounced()(q)
        if items is None:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
    else:
        items = await use_case.execute(q)
    return [ItemResponse.from_entity(i) for i in items]


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={400: {"model": ErrorResponse, "description": "Item not in cache"}},
)
async def get_item(item_id: str, ctx: AppContext = Depends(get_context)) -> ItemResponse:
    """A cached item with its unit options."""
    ctx.require_user()
    return ItemResponse.from_entity(ctx.cache.require_item(item_id))
