"""Abstract interface for user-facing notifications."""

from abc import ABC, abstractmethod
from enum import Enum


class NotificationLevel(str, Enum):
    """Toast severity."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class INotifier(ABC):
    """Sink for transient, non-blocking messages to the operator."""

    @abstractmethod
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        """Publish a notification."""
        pass
