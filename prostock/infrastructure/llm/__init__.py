"""LLM providers for the inventory assistant."""

from prostock.infrastructure.llm.base import BaseLLMProvider, CircuitBreaker, CircuitState
from prostock.infrastructure.llm.factory import get_llm_provider
from prostock.infrastructure.llm.ollama import (
    OllamaProvider,
    get_ollama_provider,
    reset_ollama_provider,
)

__all__ = [
    "BaseLLMProvider",
    "CircuitBreaker",
    "CircuitState",
    "OllamaProvider",
    "get_ollama_provider",
    "reset_ollama_provider",
    "get_llm_provider",
]
