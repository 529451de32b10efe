"""
Inventory assistant.

Answers operator questions with an LLM, grounding every prompt in the
currently cached inventory. The assistant is advisory only: it never
mutates stock, and an LLM failure yields a fixed apology so the
conversation can continue.
"""

import json

from prostock.config import get_logger
from prostock.core.entities import ChatMessage, InventoryItem, MessageRole
from prostock.core.exceptions import LLMError
from prostock.core.interfaces.llm import ILLMProvider

logger = get_logger(__name__)

GREETING = (
    "Hello! I am the ProStock inventory assistant. "
    "How can I help you optimize your inventory today?"
)
UNAVAILABLE_REPLY = "The AI assistant is currently unavailable. Please try again in a moment."
EMPTY_REPLY = "Sorry, I ran into a technical problem while processing the data."
INSIGHTS_UNAVAILABLE = "Unable to generate insights at this moment."

SYSTEM_PROMPT = """You are a world-class supply chain consultant.
You have access to the current inventory status of the ProStock system.

Rules:
1. Be professional, concise and data-driven.
2. When asked about stock, refer specifically to the provided data.
3. Offer actionable advice (for example: "restock X soon, only Y left").
4. Answer in the language the user writes in.
5. Use markdown formatting when it helps clarity.

Current inventory data:
{inventory}"""

INSIGHTS_PROMPT = """Analyze the following inventory data and provide 3 key business insights or warnings.
Focus on low stock, high-value items and restock priorities.
Keep it concise.
Data: {inventory}"""


def inventory_context(items: list[InventoryItem]) -> str:
    """Compact JSON view of the inventory for prompts."""
    rows = [
        {
            "sku": item.sku,
            "name": item.name,
            "category": item.category,
            "stock": item.stock,
            "unit": item.default_unit,
            "minStock": item.min_stock,
            "price": item.price,
            "status": item.status.value,
        }
        for item in items
    ]
    return json.dumps(rows, ensure_ascii=False)


class InventoryAssistant:
    """LLM consultant over the cached inventory."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        max_history: int = 10,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        self._llm = llm_provider
        self._max_history = max_history
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def chat(
        self,
        history: list[ChatMessage],
        message: str,
        inventory: list[InventoryItem],
    ) -> ChatMessage:
        """
        Answer one user message.

        Args:
            history: Previous turns, oldest first (without `message`)
            message: The new user message
            inventory: Cached inventory used as grounding

        Returns:
            The assistant reply (a fallback text when the LLM fails)
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT.format(inventory=inventory_context(inventory))}
        ]
        messages.extend(m.to_llm() for m in history[-self._max_history :])
        messages.append({"role": MessageRole.USER.value, "content": message})

        logger.info("assistant_chat_request", message_length=len(message), history=len(history))

        try:
            response = await self._llm.chat(
                messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as e:
            logger.warning("assistant_chat_failed", error=e.message, code=e.code)
            return ChatMessage(role=MessageRole.ASSISTANT, content=UNAVAILABLE_REPLY)

        text = response.text.strip() or EMPTY_REPLY
        logger.info("assistant_chat_response", response_length=len(text))
        return ChatMessage(role=MessageRole.ASSISTANT, content=text)

    async def insights(self, inventory: list[InventoryItem]) -> str:
        """Three short observations about the inventory."""
        try:
            response = await self._llm.generate(
                INSIGHTS_PROMPT.format(inventory=inventory_context(inventory)),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except LLMError as e:
            logger.warning("assistant_insights_failed", error=e.message, code=e.code)
            return INSIGHTS_UNAVAILABLE
        return response.text.strip() or INSIGHTS_UNAVAILABLE
