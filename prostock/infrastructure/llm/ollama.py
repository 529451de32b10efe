"""
Ollama provider for the inventory assistant.

Talks to a local `ollama serve` over its REST API (`/api/chat`,
`/api/generate`, `/api/tags`) with streaming disabled.
"""

import time
from typing import Any

import httpx

from prostock.config import get_logger
from prostock.config.settings import LLMSettings
from prostock.core.exceptions import (
    LLMResponseError,
    LLMUnavailableError,
    ModelNotFoundError,
)
from prostock.core.interfaces import ChatTurn, HealthStatus, LLMResponse
from prostock.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)

HEALTH_TIMEOUT = 10.0


class OllamaProvider(BaseLLMProvider):
    """Ollama HTTP API provider."""

    name = "ollama"

    def __init__(
        self,
        settings: LLMSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(settings)
        self.host = self.llm_settings.host.rstrip("/")
        self.model = self.llm_settings.model_name
        self._transport = transport

    def _options(self, temperature: float | None, max_tokens: int | None) -> dict[str, Any]:
        return {
            "temperature": self.llm_settings.temperature if temperature is None else temperature,
            "num_predict": max_tokens or self.llm_settings.max_tokens,
        }

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        timeout = self.llm_settings.timeout
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(f"{self.host}/{endpoint}", json=payload)
        except httpx.TimeoutException as e:
            raise TimeoutError(str(e)) from e
        except httpx.TransportError as e:
            raise ConnectionError(str(e) or type(e).__name__) from e

        if response.status_code == 404:
            raise ModelNotFoundError(self.model, self.name)
        if response.status_code != 200:
            raise LLMUnavailableError(self.name, f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            return response.json()
        except ValueError as e:
            raise LLMResponseError("Response is not JSON", response.text) from e

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": self._options(temperature, max_tokens),
        }
        if system_prompt:
            payload["system"] = system_prompt

        async def call() -> LLMResponse:
            started = time.perf_counter()
            result = await self._post("api/generate", payload)
            text = result.get("response") or ""
            if not text.strip():
                raise LLMResponseError(f"Empty response (done_reason={result.get('done_reason')})", text)

            logger.info(
                "ollama_generate",
                model=self.model,
                prompt_len=len(prompt),
                response_len=len(text),
                elapsed_ms=int((time.perf_counter() - started) * 1000),
            )
            return LLMResponse(
                text=text,
                model=self.model,
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
                prompt_tokens=result.get("prompt_eval_count", 0),
                completion_tokens=result.get("eval_count", 0),
            )

        return await self._resilient(call)

    async def chat(
        self,
        messages: list[ChatTurn],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        payload = {
            "model": self.model,
            "messages": [{"role": m.get("role", "user"), "content": m.get("content", "")} for m in messages],
            "stream": False,
            "options": self._options(temperature, max_tokens),
        }

        async def call() -> LLMResponse:
            started = time.perf_counter()
            result = await self._post("api/chat", payload)
            text = (result.get("message") or {}).get("content") or ""
            if not text.strip():
                raise LLMResponseError("Empty chat response", text)

            logger.info(
                "ollama_chat",
                model=self.model,
                turns=len(messages),
                response_len=len(text),
                elapsed_ms=int((time.perf_counter() - started) * 1000),
            )
            return LLMResponse(
                text=text,
                model=self.model,
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
                prompt_tokens=result.get("prompt_eval_count", 0),
                completion_tokens=result.get("eval_count", 0),
            )

        return await self._resilient(call)

    async def check_health(self) -> HealthStatus:
        """Ollama must answer /api/tags and list the configured model."""
        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=HEALTH_TIMEOUT, transport=self._transport) as client:
                response = await client.get(f"{self.host}/api/tags")
        except httpx.HTTPError:
            return self._remember_health(
                HealthStatus(
                    available=False,
                    provider=self.name,
                    error=f"Cannot connect to Ollama at {self.host}. Is 'ollama serve' running?",
                )
            )

        if response.status_code != 200:
            return self._remember_health(
                HealthStatus(available=False, provider=self.name, error=f"HTTP {response.status_code}")
            )

        installed = [m.get("name", "") for m in response.json().get("models", [])]
        # "llama3.1" matches "llama3.1:latest"
        if not any(name == self.model or name.startswith(f"{self.model}:") for name in installed):
            return self._remember_health(
                HealthStatus(
                    available=False,
                    provider=self.name,
                    model=self.model,
                    error=f"Model '{self.model}' not installed. Run: ollama pull {self.model}",
                )
            )

        return self._remember_health(
            HealthStatus(
                available=True,
                provider=self.name,
                model=self.model,
                response_time_ms=(time.perf_counter() - started) * 1000,
            )
        )


_ollama_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    """Get or create the Ollama provider singleton."""
    global _ollama_provider
    if _ollama_provider is None:
        _ollama_provider = OllamaProvider()
    return _ollama_provider


def reset_ollama_provider() -> None:
    global _ollama_provider
    _ollama_provider = None
