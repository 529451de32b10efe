"""Core interfaces (ports) for dependency injection."""

from prostock.core.interfaces.backend import (
    BackendAction,
    IInventoryBackend,
    IStockDataSource,
)
from prostock.core.interfaces.client_state import IClientStateStore
from prostock.core.interfaces.llm import ChatTurn, HealthStatus, ILLMProvider, LLMResponse
from prostock.core.interfaces.notifier import INotifier, NotificationLevel

__all__ = [
    # Backend interfaces
    "BackendAction",
    "IInventoryBackend",
    "IStockDataSource",
    # LLM interfaces
    "ILLMProvider",
    "ChatTurn",
    "LLMResponse",
    "HealthStatus",
    # Client state
    "IClientStateStore",
    # Notifications
    "INotifier",
    "NotificationLevel",
]
