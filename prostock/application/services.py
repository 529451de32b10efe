"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to the application root
and core services. Use cases and API dependencies import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from prostock.application.context import AppContext
from prostock.config import get_logger, get_settings
from prostock.core.services import InventoryAssistant

if TYPE_CHECKING:
    from prostock.core.interfaces import IClientStateStore, IInventoryBackend, ILLMProvider

logger = get_logger(__name__)

# Singleton service instances
_app_context: AppContext | None = None
_inventory_assistant: InventoryAssistant | None = None


async def get_app_context(
    backend: "IInventoryBackend | None" = None,
    state_store: "IClientStateStore | None" = None,
) -> AppContext:
    """
    Get or create the application root.

    Creates infrastructure dependencies if not provided.

    Args:
        backend: Optional backend override
        state_store: Optional client state store override

    Returns:
        The process-wide AppContext
    """
    global _app_context

    if _app_context is not None and backend is None and state_store is None:
        return _app_context

    # Lazy import infrastructure to avoid circular imports
    if backend is None:
        from prostock.infrastructure.backend import get_backend_gateway

        backend = get_backend_gateway()

    if state_store is None:
        from prostock.infrastructure.storage.sqlite import get_client_state_store

        state_store = await get_client_state_store()

    _app_context = AppContext(backend=backend, state_store=state_store)
    return _app_context


def get_inventory_assistant(llm_provider: "ILLMProvider | None" = None) -> InventoryAssistant:
    """
    Get or create the InventoryAssistant.

    Args:
        llm_provider: Optional LLM provider override

    Returns:
        Configured InventoryAssistant
    """
    global _inventory_assistant

    if _inventory_assistant is not None and llm_provider is None:
        return _inventory_assistant

    from prostock.infrastructure.llm import get_llm_provider

    settings = get_settings()
    assistant = InventoryAssistant(
        llm_provider=llm_provider or get_llm_provider(),
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )

    if llm_provider is None:
        _inventory_assistant = assistant

    return assistant


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _app_context, _inventory_assistant
    _app_context = None
    _inventory_assistant = None
