"""
Port for the language model behind the inventory assistant.

The assistant only needs two calls: a grounded chat turn and a one-shot
prompt for insights. Providers translate transport failures into LLMError
subclasses; the assistant turns those into a canned reply.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

# {"role": "system" | "user" | "assistant", "content": "..."}
ChatTurn = dict[str, str]


@dataclass
class LLMResponse:
    """Text produced by one model call."""

    text: str
    model: str
    done: bool = True
    done_reason: str | None = None
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class HealthStatus:
    """Result of probing a provider."""

    available: bool
    provider: str
    model: str | None = None
    error: str | None = None
    response_time_ms: float | None = None


class ILLMProvider(ABC):
    """Language model used by InventoryAssistant."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Single prompt completion (inventory insights)."""

    @abstractmethod
    async def chat(
        self,
        messages: list[ChatTurn],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """
        Next assistant turn.

        Args:
            messages: System prompt first, then the conversation oldest first
            temperature: Sampling temperature, provider default when None
            max_tokens: Completion cap, provider default when None
        """

    @abstractmethod
    async def check_health(self) -> HealthStatus:
        """Probe the provider and report whether the model can be used."""

    @abstractmethod
    def is_available(self) -> bool:
        """Last known availability, without a network call."""
