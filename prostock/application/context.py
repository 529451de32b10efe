"""
Application root.

Owns the state a single operator session works on: the signed-in user, the
stock cache, one cart per flow, the assistant conversation and the
notification feed. Use cases receive it instead of reaching for globals.
"""

from prostock.config import Settings, get_logger, get_settings
from prostock.core.entities import ChatMessage, InventoryItem, MessageRole, User
from prostock.core.exceptions import NotAuthenticatedError, PermissionDeniedError
from prostock.core.interfaces import IClientStateStore, IInventoryBackend
from prostock.core.services import CartBuilder, CartFlow, DebouncedSearch, NotificationCenter, StockCache
from prostock.core.services.inventory_assistant import GREETING

logger = get_logger(__name__)


class AppContext:
    """Session-scoped state shared by every use case."""

    def __init__(
        self,
        backend: IInventoryBackend,
        state_store: IClientStateStore,
        settings: Settings | None = None,
        notifier: NotificationCenter | None = None,
    ):
        self.settings = settings or get_settings()
        self.backend = backend
        self.state_store = state_store
        self.notifier = notifier or NotificationCenter(self.settings.notifications.history_size)
        self.cache = StockCache(
            source=backend,
            notifier=self.notifier,
            refresh_timeout=self.settings.cache.refresh_timeout,
        )
        self.carts = self._new_carts()
        self.conversation: list[ChatMessage] = self._new_conversation()
        # one autocomplete box per operator, so one debouncer
        self.item_search: DebouncedSearch[list[InventoryItem]] | None = None
        self._user: User | None = None

    def _new_carts(self) -> dict[CartFlow, CartBuilder]:
        return {
            flow: CartBuilder(flow, cumulative_stock_check=self.settings.cart.cumulative_stock_check)
            for flow in CartFlow
        }

    @staticmethod
    def _new_conversation() -> list[ChatMessage]:
        return [ChatMessage(role=MessageRole.ASSISTANT, content=GREETING)]

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def sign_in(self, user: User) -> None:
        self._user = user.without_secret()
        logger.info("session_started", username=user.username, role=user.role.value)

    def sign_out(self) -> None:
        """Forget the user and every piece of session state."""
        username = self._user.username if self._user else None
        self._user = None
        self.cache.clear()
        self.carts = self._new_carts()
        self.conversation = self._new_conversation()
        self.item_search = None
        logger.info("session_ended", username=username)

    def require_user(self) -> User:
        if self._user is None:
            raise NotAuthenticatedError()
        return self._user

    def require_admin(self, action: str) -> User:
        user = self.require_user()
        if not user.is_admin:
            raise PermissionDeniedError(action, required_role="ADMIN")
        return user

    def cart(self, flow: CartFlow | str) -> CartBuilder:
        return self.carts[CartFlow(flow)]
