"""
Application layer - Use cases, DTOs, the application root and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from prostock.application.context import AppContext
from prostock.application.services import (
    get_app_context,
    get_inventory_assistant,
    reset_services,
)

__all__ = [
    "AppContext",
    "get_app_context",
    "get_inventory_assistant",
    "reset_services",
]
