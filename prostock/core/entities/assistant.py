"""Assistant conversation entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Who wrote a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """One turn of the inventory assistant conversation."""

    role: MessageRole
    content: str
    created_at: datetime = Field(default_factory=datetime.now)

    def to_llm(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}
