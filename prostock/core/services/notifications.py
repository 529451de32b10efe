"""In-memory notification center feeding the UI toasts."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from itertools import count

from prostock.config import get_logger
from prostock.core.interfaces.notifier import INotifier, NotificationLevel

logger = get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    """One published toast."""

    id: int
    message: str
    level: NotificationLevel
    created_at: datetime = field(default_factory=datetime.now)


class NotificationCenter(INotifier):
    """Keeps the most recent notifications, oldest evicted first."""

    def __init__(self, history_size: int = 50):
        self._items: deque[Notification] = deque(maxlen=history_size)
        self._ids = count(1)

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        notification = Notification(id=next(self._ids), message=message, level=level)
        self._items.append(notification)
        logger.debug("notification_published", level=level.value, message=message)

    def success(self, message: str) -> None:
        self.notify(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> None:
        self.notify(message, NotificationLevel.ERROR)

    def recent(self, limit: int | None = None) -> list[Notification]:
        """Newest first."""
        items = list(reversed(self._items))
        return items[:limit] if limit is not None else items

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
