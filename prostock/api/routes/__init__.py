"""API route modules."""

from prostock.api.routes.admin import router as admin_router
from prostock.api.routes.assistant import router as assistant_router
from prostock.api.routes.cache import router as cache_router
from prostock.api.routes.carts import router as carts_router
from prostock.api.routes.export import router as export_router
from prostock.api.routes.health import router as health_router
from prostock.api.routes.history import router as history_router
from prostock.api.routes.items import router as items_router
from prostock.api.routes.notifications import router as notifications_router
from prostock.api.routes.session import router as session_router
from prostock.api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "session_router",
    "cache_router",
    "items_router",
    "carts_router",
    "history_router",
    "transactions_router",
    "export_router",
    "assistant_router",
    "admin_router",
    "notifications_router",
]
