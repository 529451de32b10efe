"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from prostock import __version__
from prostock.api.dependencies import get_context, get_llm
from prostock.application import AppContext
from prostock.application.dto.responses import HealthResponse, ProviderHealthResponse
from prostock.core.interfaces import ILLMProvider

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def _health(ctx: AppContext, status: str, **providers: ProviderHealthResponse) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        backend_configured=ctx.settings.backend.is_configured,
        authenticated=ctx.is_authenticated,
        **providers,
    )


@router.get("", response_model=HealthResponse)
async def health_check(ctx: AppContext = Depends(get_context)) -> HealthResponse:
    """
    Basic health check.

    Reports uptime, whether the backend URL is set and whether a user is
    signed in. Makes no network calls.
    """
    status = "healthy" if ctx.settings.backend.is_configured else "degraded"
    return _health(ctx, status)


@router.get("/backend", response_model=HealthResponse)
async def backend_health(ctx: AppContext = Depends(get_context)) -> HealthResponse:
    """
    Backend round trip.

    Fetches dashboard stats, the cheapest read-only action.
    """
    backend_status = ProviderHealthResponse(name="backend", available=False)

    if not ctx.settings.backend.is_configured:
        backend_status.error = "BACKEND_URL is not set"
        return _health(ctx, "unhealthy", backend=backend_status)

    try:
        start = time.time()
        await ctx.backend.get_dashboard_stats()
        backend_status = ProviderHealthResponse(
            name="backend",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )
    except Exception as e:
        backend_status.error = str(e)

    return _health(
        ctx,
        "healthy" if backend_status.available else "unhealthy",
        backend=backend_status,
    )


@router.get("/llm", response_model=HealthResponse)
async def llm_health(
    ctx: AppContext = Depends(get_context),
    llm: ILLMProvider = Depends(get_llm),
) -> HealthResponse:
    """
    LLM provider health check.

    The assistant degrades to a canned reply when this is down.
    """
    llm_status = ProviderHealthResponse(name="unknown", available=False)

    try:
        start = time.time()
        health_result = await llm.check_health()
        llm_status = ProviderHealthResponse(
            name=llm.__class__.__name__,
            available=health_result.available,
            latency_ms=(time.time() - start) * 1000,
            error=health_result.error,
        )
    except Exception as e:
        llm_status.error = str(e)

    return _health(ctx, "healthy" if llm_status.available else "degraded", llm=llm_status)


@router.get("/db", response_model=HealthResponse)
async def db_health(ctx: AppContext = Depends(get_context)) -> HealthResponse:
    """
    Client state database check.
    """
    from prostock.infrastructure.storage.sqlite import get_pool

    db_status = ProviderHealthResponse(name="sqlite", available=False)

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )
    except Exception as e:
        db_status.error = str(e)

    return _health(ctx, "healthy" if db_status.available else "unhealthy", database=db_status)
