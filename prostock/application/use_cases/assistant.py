"""Inventory assistant use cases."""

from prostock.application.context import AppContext
from prostock.config import get_logger
from prostock.core.entities import ChatMessage, MessageRole
from prostock.core.exceptions import MissingFieldError
from prostock.core.services import InventoryAssistant

logger = get_logger(__name__)


class ChatWithInventoryUseCase:
    """Append a user message and the assistant's reply to the conversation."""

    def __init__(self, context: AppContext, assistant: InventoryAssistant):
        self._ctx = context
        self._assistant = assistant

    async def execute(self, message: str) -> ChatMessage:
        self._ctx.require_user()
        message = message.strip()
        if not message:
            raise MissingFieldError("message")

        history = list(self._ctx.conversation)
        self._ctx.conversation.append(ChatMessage(role=MessageRole.USER, content=message))

        reply = await self._assistant.chat(history, message, self._ctx.cache.inventory)
        self._ctx.conversation.append(reply)
        return reply


class InventoryInsightsUseCase:
    """Three short observations about the cached inventory."""

    def __init__(self, context: AppContext, assistant: InventoryAssistant):
        self._ctx = context
        self._assistant = assistant

    async def execute(self) -> str:
        self._ctx.require_user()
        return await self._assistant.insights(self._ctx.cache.inventory)
