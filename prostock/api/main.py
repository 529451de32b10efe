"""
ProStock API application.

``create_app`` wires the middleware, exception handlers and routers;
``lifespan`` owns the client state database and the stored session.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prostock import __version__
from prostock.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from prostock.api.middleware.error_handler import setup_exception_handlers
from prostock.api.routes import (
    admin_router,
    assistant_router,
    cache_router,
    carts_router,
    export_router,
    health_router,
    history_router,
    items_router,
    notifications_router,
    session_router,
    transactions_router,
)
from prostock.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

ROUTERS: tuple[APIRouter, ...] = (
    health_router,
    session_router,
    cache_router,
    items_router,
    carts_router,
    history_router,
    transactions_router,
    export_router,
    assistant_router,
    admin_router,
    notifications_router,
)


async def _warm_up_llm() -> None:
    from prostock.infrastructure.llm import get_llm_provider

    try:
        status = await get_llm_provider().check_health()
    except Exception as e:
        logger.warning("llm_warmup_failed", error=str(e))
        return
    logger.info("llm_provider_ready", healthy=status.available, model=status.model)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the state database and resume a stored session; close both on exit."""
    from prostock.application import get_app_context
    from prostock.application.use_cases import RestoreSessionUseCase
    from prostock.infrastructure.storage.sqlite import close_pool

    settings = get_settings()
    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        backend_configured=settings.backend.is_configured,
    )
    if not settings.backend.is_configured:
        logger.warning("backend_not_configured", hint="set BACKEND_URL")

    try:
        ctx = await get_app_context()
    except Exception as e:
        logger.error("database_init_failed", path=str(settings.storage.db_path), error=str(e))
        raise

    restored = await RestoreSessionUseCase(ctx).execute()
    logger.info("session_restore_checked", restored=restored.user is not None)

    if settings.llm.warmup_on_start:
        await _warm_up_llm()

    yield

    logger.info("application_stopping")
    # let a pending post-submit refresh finish before the pool goes away
    await ctx.cache.wait_idle()
    await close_pool()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    interactive_docs = settings.api.debug
    app = FastAPI(
        title="ProStock API",
        description="Warehouse stock control client: carts, stock cache, reports and exports",
        version=__version__,
        docs_url="/docs" if interactive_docs else None,
        redoc_url="/redoc" if interactive_docs else None,
        lifespan=lifespan,
    )

    # Starlette runs the last added middleware first.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"name": settings.app_name, "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    from prostock.__main__ import main

    main()
