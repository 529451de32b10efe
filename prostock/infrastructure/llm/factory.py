"""Selects the configured LLM provider."""

from prostock.config import get_settings
from prostock.core.interfaces import ILLMProvider


def get_llm_provider(provider_type: str | None = None) -> ILLMProvider:
    """
    Provider named by `provider_type`, or by LLM_PROVIDER when omitted.

    Raises:
        ValueError: Unknown provider name
    """
    provider_type = provider_type or get_settings().llm.provider

    if provider_type == "ollama":
        from prostock.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    raise ValueError(f"Unknown LLM provider: {provider_type}")
