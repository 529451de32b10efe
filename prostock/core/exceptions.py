"""
Domain exceptions for the ProStock client.

Each carries a stable machine code and a details dict; the API maps the
class to an HTTP status and the code to error_code.
"""

from typing import Any


class ProStockError(Exception):
    """Base exception for all ProStock errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Configuration Exceptions
class ConfigurationError(ProStockError):
    """Required configuration is missing or invalid."""

    pass


class BackendNotConfiguredError(ConfigurationError):
    """The backend endpoint URL is missing."""

    def __init__(self, setting: str = "BACKEND_URL"):
        super().__init__(
            f"{setting} is not configured. Set it in the environment and restart the service.",
            code="BACKEND_NOT_CONFIGURED",
            details={"setting": setting},
        )


# Backend Exceptions
class BackendError(ProStockError):
    """Base exception for backend RPC operations."""

    pass


class ConnectivityError(BackendError):
    """Backend could not be reached or answered with a non-2xx status."""

    def __init__(self, reason: str, action: str | None = None, status_code: int | None = None):
        super().__init__(
            reason,
            code="BACKEND_UNREACHABLE",
            details={"action": action, "status_code": status_code},
        )


class RequestTimeoutError(ConnectivityError):
    """Backend request exceeded its deadline."""

    def __init__(self, timeout: float, action: str | None = None):
        super().__init__(
            f"Backend did not respond within {timeout:g} seconds",
            action=action,
        )
        self.code = "BACKEND_TIMEOUT"
        self.details["timeout"] = timeout


class BackendResponseError(BackendError):
    """Backend answered with a body that could not be understood."""

    def __init__(self, reason: str, action: str | None = None):
        super().__init__(
            f"Invalid backend response: {reason}",
            code="BACKEND_RESPONSE_ERROR",
            details={"reason": reason, "action": action},
        )


class BackendRejectedError(BackendError):
    """Backend refused the request (business rule). Message is shown verbatim."""

    def __init__(self, message: str, action: str | None = None):
        super().__init__(
            message,
            code="BACKEND_REJECTED",
            details={"action": action},
        )


# Session Exceptions
class AuthenticationError(ProStockError):
    """Base exception for session problems."""

    pass


class NotAuthenticatedError(AuthenticationError):
    """No active user session."""

    def __init__(self) -> None:
        super().__init__("Login required", code="NOT_AUTHENTICATED")


class InvalidCredentialsError(AuthenticationError):
    """Backend did not accept the username/password pair."""

    def __init__(self, username: str):
        super().__init__(
            "Invalid username or password",
            code="INVALID_CREDENTIALS",
            details={"username": username},
        )


class PermissionDeniedError(AuthenticationError):
    """Current user lacks the required role."""

    def __init__(self, action: str, required_role: str | None = None):
        super().__init__(
            f"Not allowed to {action}",
            code="PERMISSION_DENIED",
            details={"action": action, "required_role": required_role},
        )


# Validation Exceptions
class ValidationError(ProStockError):
    """Client-side validation failed. Never sent to the backend."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid {field}: {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InsufficientStockError(ValidationError):
    """Requested base quantity exceeds the cached available stock."""

    def __init__(self, item_id: str, requested: float, available: float, unit: str):
        super().__init__(
            field="quantity",
            message=f"Insufficient stock: only {available:g} {unit} available.",
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_id": item_id,
                "requested": requested,
                "available": available,
                "unit": unit,
            }
        )


class InvalidUnitFactorError(ValidationError):
    """Conversion factor is missing, non-numeric, non-finite or not positive."""

    def __init__(self, unit: str, factor: Any):
        super().__init__(
            field="factor",
            message=f"Conversion factor for unit '{unit}' must be a positive number",
            value=factor,
        )
        self.code = "INVALID_UNIT_FACTOR"
        self.details["unit"] = unit


class UnitNotFoundError(ValidationError):
    """Unit is not offered for the selected item."""

    def __init__(self, unit: str, available: list[str]):
        super().__init__(
            field="unit",
            message=f"Unit '{unit}' is not available. Choose one of: {', '.join(available)}",
            value=unit,
        )
        self.code = "UNIT_NOT_FOUND"
        self.details["available"] = available


class InvalidQuantityError(ValidationError):
    """Quantity is negative or not a finite number."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Quantity must be a finite number greater than or equal to zero",
            value=quantity,
        )
        self.code = "INVALID_QUANTITY"


class NoItemSelectedError(ValidationError):
    """An entry operation needs a selected item."""

    def __init__(self) -> None:
        super().__init__(field="item", message="Select an item first")
        self.code = "NO_ITEM_SELECTED"


class ItemNotFoundError(ValidationError):
    """Item id is not present in the cached inventory."""

    def __init__(self, item_id: str):
        super().__init__(field="item_id", message=f"Item not found: {item_id}", value=item_id)
        self.code = "ITEM_NOT_FOUND"


class LineNotCommittableError(ValidationError):
    """Current entry cannot be appended to the cart."""

    def __init__(self, reason: str):
        super().__init__(field="line", message=reason)
        self.code = "LINE_NOT_COMMITTABLE"


class CartLineNotFoundError(ValidationError):
    """Cart has no line at the given position."""

    def __init__(self, index: int, size: int):
        super().__init__(
            field="index",
            message=f"Cart has no line {index} (cart holds {size} lines)",
            value=index,
        )
        self.code = "CART_LINE_NOT_FOUND"


class EmptyCartError(ValidationError):
    """Submission attempted with no lines."""

    def __init__(self, flow: str):
        super().__init__(field="items", message=f"The {flow} cart is empty")
        self.code = "EMPTY_CART"


class SubmitInProgressError(ValidationError):
    """The cart already has a batch on its way to the backend."""

    def __init__(self, flow: str):
        super().__init__(field="cart", message=f"The {flow} cart is already being submitted")
        self.code = "SUBMIT_IN_PROGRESS"


class MissingFieldError(ValidationError):
    """Required header or form field is empty."""

    def __init__(self, field: str):
        super().__init__(field=field, message="This field is required")
        self.code = "MISSING_FIELD"


class NoRecordsToExportError(ValidationError):
    """Export filter matched nothing."""

    def __init__(self) -> None:
        super().__init__(field="filter", message="No records found for the selected filter")
        self.code = "NO_RECORDS"


# Report Exceptions
class ReportIntegrityError(ProStockError):
    """Reconstructed running balance disagrees with backend totals."""

    def __init__(self, item_id: str, reason: str, expected: float, actual: float):
        super().__init__(
            f"Stock report for item {item_id} is inconsistent: {reason}",
            code="REPORT_INTEGRITY_ERROR",
            details={
                "item_id": item_id,
                "reason": reason,
                "expected": expected,
                "actual": actual,
            },
        )


# Assistant model exceptions
class LLMError(ProStockError):
    """The inventory assistant's model could not answer."""

    pass


class LLMUnavailableError(LLMError):
    def __init__(self, provider: str, reason: str | None = None):
        message = f"The assistant model ({provider}) cannot be reached"
        super().__init__(
            f"{message}: {reason}" if reason else message,
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"The assistant model gave no {operation} result within {timeout}s",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """The model answered, but with nothing usable."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Unusable assistant reply ({reason})",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "raw": (response or "")[:200]},
        )


class ModelNotFoundError(LLMError):
    def __init__(self, model: str, provider: str):
        super().__init__(
            f"{provider} has no model named {model!r}; pull it or change LLM_MODEL_NAME",
            code="MODEL_NOT_FOUND",
            details={"model": model, "provider": provider},
        )


class CircuitBreakerOpenError(LLMError):
    """Calls are suspended after repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Calls to {provider} are paused for another {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "retry_after": cooldown_remaining},
        )
