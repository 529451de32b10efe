"""
Stock cache endpoints.
"""

from fastapi import APIRouter, Depends

from prostock.api.dependencies import get_context
from prostock.application import AppContext
from prostock.application.dto.responses import (
    CacheResponse,
    ItemResponse,
    RefreshResponse,
    SupplierResponse,
)

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.get("", response_model=CacheResponse)
async def get_cache(ctx: AppContext = Depends(get_context)) -> CacheResponse:
    """Current inventory, suppliers and dashboard stats."""
    ctx.require_user()
    snapshot = ctx.cache.snapshot
    return CacheResponse(
        loading=ctx.cache.loading,
        refreshed_at=snapshot.refreshed_at,
        inventory=[ItemResponse.from_entity(i) for i in snapshot.inventory],
        suppliers=[SupplierResponse.from_entity(s) for s in snapshot.suppliers],
        stats=snapshot.stats.model_dump(mode="json"),
    )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_cache(ctx: AppContext = Depends(get_context)) -> RefreshResponse:
    """
    Reload everything from the backend.

    Returns "skipped" when a refresh is already running.
    """
    ctx.require_user()
    outcome = await ctx.cache.refresh()
    return RefreshResponse.from_outcome(outcome, ctx.cache)
