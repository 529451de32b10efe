"""
Shared resilience for LLM providers: bounded retries and a circuit breaker.

The assistant must keep answering when the model host is down, so a
provider that keeps failing is short-circuited for a cooldown period
instead of making every chat turn wait for a timeout.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from prostock.config import get_logger, get_settings
from prostock.config.settings import LLMSettings
from prostock.core.exceptions import (
    CircuitBreakerOpenError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from prostock.core.interfaces import HealthStatus, ILLMProvider

logger = get_logger(__name__)

T = TypeVar("T")

# Raised by providers for transport problems; everything else is not retried
TRANSIENT_ERRORS = (TimeoutError, ConnectionError)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreaker:
    """Consecutive-failure breaker. One trial call is let through after the cooldown."""

    provider: str
    failure_threshold: int = 3
    cooldown_seconds: float = 60.0
    failures: int = 0
    opened_at: float | None = None

    @property
    def state(self) -> CircuitState:
        if self.opened_at is None:
            return CircuitState.CLOSED
        if self.cooldown_remaining > 0:
            return CircuitState.OPEN
        return CircuitState.HALF_OPEN

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    @property
    def cooldown_remaining(self) -> float:
        if self.opened_at is None:
            return 0.0
        return max(0.0, self.cooldown_seconds - (time.monotonic() - self.opened_at))

    def before_call(self) -> None:
        if self.is_open:
            raise CircuitBreakerOpenError(self.provider, int(self.cooldown_remaining) + 1)

    def record_success(self) -> None:
        if self.opened_at is not None:
            logger.info("llm_circuit_closed", provider=self.provider)
        self.failures = 0
        self.opened_at = None

    def record_failure(self) -> None:
        self.failures += 1
        if self.failures >= self.failure_threshold:
            self.opened_at = time.monotonic()
            logger.warning(
                "llm_circuit_opened",
                provider=self.provider,
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )


class BaseLLMProvider(ILLMProvider, ABC):
    """
    Base for providers.

    Subclasses wrap each model call in `_resilient` and raise the builtin
    TimeoutError / ConnectionError for transport failures.
    """

    name = "llm"

    def __init__(self, settings: LLMSettings | None = None) -> None:
        self.llm_settings = settings or get_settings().llm
        self.circuit_breaker = CircuitBreaker(
            provider=self.name,
            failure_threshold=self.llm_settings.failure_threshold,
            cooldown_seconds=self.llm_settings.cooldown_seconds,
        )
        self._last_health: HealthStatus | None = None

    def _retrying(self) -> AsyncRetrying:
        cfg = self.llm_settings
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, cfg.max_retries)),
            wait=wait_exponential(
                multiplier=cfg.retry_delay,
                min=cfg.retry_delay,
                max=cfg.retry_delay * (cfg.retry_multiplier**3),
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=self._log_retry,
            reraise=True,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "llm_retry",
            provider=self.name,
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _resilient(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run one model call through the breaker and the retry policy.

        Raises:
            CircuitBreakerOpenError: Too many recent failures
            LLMTimeoutError: Every attempt timed out
            LLMUnavailableError: Every attempt failed to connect
        """
        self.circuit_breaker.before_call()

        try:
            async for attempt in self._retrying():
                with attempt:
                    result = await operation()
        except TimeoutError:
            self.circuit_breaker.record_failure()
            raise LLMTimeoutError(self.llm_settings.timeout)
        except ConnectionError as e:
            self.circuit_breaker.record_failure()
            raise LLMUnavailableError(self.name, str(e))

        self.circuit_breaker.record_success()
        return result

    def is_available(self) -> bool:
        if self.circuit_breaker.is_open:
            return False
        # Optimistic until a health check says otherwise
        return self._last_health.available if self._last_health else True

    def _remember_health(self, status: HealthStatus) -> HealthStatus:
        self._last_health = status
        return status
