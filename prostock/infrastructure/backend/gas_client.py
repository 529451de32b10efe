"""
HTTP client for the RPC-style backend endpoint.

Every call is a POST of ``{"action": ..., "payload": ...}`` to a single URL
(a Google Apps Script web app in the reference deployment). The endpoint
answers ``{"success": bool, "data": ..., "error": ...}``.
"""

import time
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from prostock.config import get_logger, get_settings
from prostock.config.settings import BackendSettings
from prostock.core.exceptions import (
    BackendNotConfiguredError,
    BackendRejectedError,
    BackendResponseError,
    ConnectivityError,
    RequestTimeoutError,
)
from prostock.core.interfaces import BackendAction

logger = get_logger(__name__)

UNREACHABLE_MESSAGE = (
    "Could not reach the backend. Check that BACKEND_URL is correct and that "
    "the web app is deployed with access for anyone."
)
DEFAULT_REJECTION = "The server could not process the request."


def _is_transient(exc: BaseException) -> bool:
    """Connectivity failures worth retrying: no response or a 5xx."""
    if not isinstance(exc, ConnectivityError):
        return False
    status = exc.details.get("status_code")
    return status is None or status >= 500


class GASClient:
    """
    Backend RPC client.

    Read-only actions are retried on transient connectivity errors;
    mutating actions are sent exactly once.
    """

    def __init__(
        self,
        settings: BackendSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings().backend
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.settings.is_configured

    async def call(self, action: BackendAction | str, payload: dict[str, Any] | None = None) -> Any:
        """
        Invoke one backend action.

        Returns:
            The `data` member of the response envelope

        Raises:
            BackendNotConfiguredError: URL not set
            ConnectivityError: Transport failure or non-2xx status
            RequestTimeoutError: No answer within the request timeout
            BackendResponseError: Body is not a valid envelope
            BackendRejectedError: Envelope has success=false
        """
        if not self.is_configured:
            raise BackendNotConfiguredError()

        action = BackendAction(action)
        payload = payload or {}

        if not action.is_read_only:
            return await self._send(action, payload)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.max_retries)),
            wait=wait_exponential(
                multiplier=self.settings.retry_delay,
                min=self.settings.retry_delay,
                max=self.settings.retry_delay * (self.settings.retry_multiplier**3),
            ),
            retry=retry_if_exception(_is_transient),
            before_sleep=self._log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._send(action, payload)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "backend_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _send(self, action: BackendAction, payload: dict[str, Any]) -> Any:
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                follow_redirects=self.settings.follow_redirects,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.settings.url,
                    json={"action": action.value, "payload": payload},
                )
        except httpx.TimeoutException:
            logger.warning("backend_timeout", action=action.value, timeout=self.settings.timeout)
            raise RequestTimeoutError(self.settings.timeout, action.value)
        except httpx.TransportError as e:
            logger.warning("backend_unreachable", action=action.value, error=str(e))
            raise ConnectivityError(UNREACHABLE_MESSAGE, action=action.value)

        if not response.is_success:
            logger.warning("backend_http_error", action=action.value, status_code=response.status_code)
            raise ConnectivityError(
                f"Server responded with status {response.status_code}",
                action=action.value,
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            raise BackendResponseError("body is not JSON", action.value)

        if not isinstance(body, dict) or "success" not in body:
            raise BackendResponseError("missing success flag", action.value)

        if not body["success"]:
            error = body.get("error") or DEFAULT_REJECTION
            logger.info("backend_rejected", action=action.value, error=error)
            raise BackendRejectedError(str(error), action.value)

        logger.debug(
            "backend_call_complete",
            action=action.value,
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
        return body.get("data")
