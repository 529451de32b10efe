"""Cart entry use cases: building lines one item at a time."""

from prostock.application.context import AppContext
from prostock.config import get_logger
from prostock.core.entities import TransactionItem
from prostock.core.services import CartBuilder, CartFlow

logger = get_logger(__name__)


class CartEntryUseCase:
    """Drives one flow's cart on behalf of the signed-in user."""

    def __init__(self, context: AppContext, flow: CartFlow | str):
        self._ctx = context
        self.flow = CartFlow(flow)

    @property
    def cart(self) -> CartBuilder:
        self._ctx.require_user()
        return self._ctx.cart(self.flow)

    def select_item(self, item_id: str) -> CartBuilder:
        """Select a cached item; stock is snapshotted at this moment."""
        cart = self.cart
        item = self._ctx.cache.require_item(item_id)
        cart.select_item(item)
        return cart

    def set_unit(self, unit: str) -> CartBuilder:
        cart = self.cart
        cart.set_unit(unit)
        return cart

    def set_quantity(self, quantity: float) -> CartBuilder:
        cart = self.cart
        cart.set_quantity(quantity)
        return cart

    def set_remarks(self, remarks: str) -> CartBuilder:
        cart = self.cart
        cart.set_remarks(remarks)
        return cart

    def commit_line(self) -> TransactionItem:
        line = self.cart.commit_line()
        self._ctx.notifier.success(f"Added {line.item_name} to the {self.flow.value} list")
        return line

    def remove_line(self, index: int) -> TransactionItem:
        return self.cart.remove_line(index)

    def discard(self) -> None:
        """Throw away every line and the current entry."""
        cart = self.cart
        cart.clear()
        logger.info("cart_discarded", flow=self.flow.value)
