"""
Error responses.

Every failure leaves the API as an ErrorResponse body: the exception's code,
its message (backend rejections verbatim), a recovery hint and the path.
Domain errors map to status codes by type; see EXCEPTION_STATUS_MAP.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from prostock.application.dto.responses import ErrorResponse
from prostock.config import get_logger
from prostock.core.exceptions import (
    AuthenticationError,
    BackendError,
    BackendRejectedError,
    ConfigurationError,
    InvalidCredentialsError,
    LLMError,
    NotAuthenticatedError,
    PermissionDeniedError,
    ProStockError,
    ReportIntegrityError,
    RequestTimeoutError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; subclasses before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    BackendRejectedError: status.HTTP_409_CONFLICT,
    RequestTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
    BackendError: status.HTTP_502_BAD_GATEWAY,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ReportIntegrityError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    LLMError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "BACKEND_NOT_CONFIGURED": "Set BACKEND_URL to the deployed web app URL and restart the service.",
    "BACKEND_UNREACHABLE": "Check network access and that the web app allows anonymous access.",
    "BACKEND_TIMEOUT": "The backend is slow to answer. Retry in a moment.",
    "BACKEND_RESPONSE_ERROR": "The backend answered with unexpected data. Check the backend deployment version.",
    "BACKEND_REJECTED": "The backend refused the request. The cart was kept; correct it and submit again.",
    "NOT_AUTHENTICATED": "Log in with POST /api/session/login first.",
    "INVALID_CREDENTIALS": "Check the username and password.",
    "PERMISSION_DENIED": "This action requires an administrator account.",
    "INSUFFICIENT_STOCK": "Lower the quantity or pick a smaller unit.",
    "UNIT_NOT_FOUND": "Use one of the units listed for the selected item.",
    "INVALID_UNIT_FACTOR": "Conversion factors must be numbers greater than zero.",
    "INVALID_QUANTITY": "Enter a quantity of zero or more.",
    "NO_ITEM_SELECTED": "Select an item with POST /api/carts/{flow}/select first.",
    "ITEM_NOT_FOUND": "Refresh the cache with POST /api/cache/refresh and pick an item from it.",
    "LINE_NOT_COMMITTABLE": "Complete the entry (item, unit and a valid quantity) before adding it.",
    "CART_LINE_NOT_FOUND": "List the cart with GET /api/carts/{flow} to see valid line indexes.",
    "EMPTY_CART": "Add at least one line before submitting.",
    "SUBMIT_IN_PROGRESS": "Wait for the current submission to finish; lines added meanwhile stay in the cart.",
    "MISSING_FIELD": "Fill in every required field.",
    "NO_RECORDS": "Widen the date range or clear the item and type filters.",
    "REPORT_INTEGRITY_ERROR": "The backend report does not add up. Retry, or request it with strict=false.",
    "LLM_UNAVAILABLE": "The LLM provider is offline. Retry later.",
    "LLM_TIMEOUT": "The LLM request timed out. Retry with a shorter question.",
    "CIRCUIT_BREAKER_OPEN": "Too many LLM failures. Wait for cooldown before retrying.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "ValueError": "A parameter value is invalid. Check the request.",
    "KeyError": "The requested key was not found.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Log in first.",
    403: "Your account is not allowed to do this.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The backend rejected the request.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    502: "The backend could not be reached.",
    503: "The service is temporarily unavailable. Retry later.",
    504: "The backend did not answer in time.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
def _error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
    hint: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=hint or _get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Map an exception onto its status code and the ErrorResponse body."""
    status_code = _status_for(exc)
    if isinstance(exc, ProStockError):
        error_code, message = exc.code, exc.message
    else:
        error_code, message = type(exc).__name__, str(exc)

    if status_code >= 500:
        logger.error(
            "request_error",
            path=request.url.path,
            error_code=error_code,
            error=message,
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning("request_error", path=request.url.path, error_code=error_code, error=message)

    return _error_json(request, status_code, error_code, message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last resort for exceptions no registered handler claimed."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "NOT_AUTHENTICATED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
}


async def _domain_error(request: Request, exc: Exception) -> JSONResponse:
    return build_error_response(request, exc)


async def _request_validation_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    ]
    return _error_json(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        detail="; ".join(problems),
        hint="Check the request body fields and types.",
    )


async def _http_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return _error_json(request, exc.status_code, error_code, str(exc.detail or "An error occurred"))


def setup_exception_handlers(app: FastAPI) -> None:
    """Render domain, schema and routing errors as ErrorResponse bodies."""
    app.add_exception_handler(ProStockError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
