"""API middleware."""

from prostock.api.middleware.error_handler import ErrorHandlerMiddleware
from prostock.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
