"""
Cart submission use cases for the inbound, outbound and opname flows.

Required header fields and an empty cart are rejected locally, before any
network call. The lines in the cart when the submit starts go to the backend in one
request. On success exactly those lines leave the cart and the stock cache
is refreshed; lines added while the request was in flight stay for the next
submit. On failure the cart is left as it was so the operator can retry. A
second submit of the same cart while one is in flight is refused.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from pydantic import BaseModel

from prostock.application.context import AppContext
from prostock.application.dto.requests import SubmitCartRequest
from prostock.config import get_logger
from prostock.core.entities import (
    OpnameDocument,
    OpnameItem,
    StockInDocument,
    StockOutDocument,
    TransactionItem,
    User,
)
from prostock.core.exceptions import MissingFieldError, ProStockError
from prostock.core.services import CartBuilder, CartFlow, RefreshOutcome

logger = get_logger(__name__)


@dataclass
class SubmitResult:
    """Outcome of a successful submission."""

    flow: CartFlow
    lines_submitted: int
    refresh: RefreshOutcome


class SubmitCartUseCase(ABC):
    """Shared submission protocol. Subclasses build and send the document."""

    flow: CartFlow
    success_message: str

    def __init__(self, context: AppContext):
        self._ctx = context

    @abstractmethod
    def _required_fields(self, request: SubmitCartRequest) -> dict[str, str]:
        """Header fields that must be non-blank."""

    @abstractmethod
    def _build_document(
        self, request: SubmitCartRequest, lines: list[TransactionItem], user: User
    ) -> BaseModel:
        pass

    @abstractmethod
    async def _send(self, document: BaseModel) -> None:
        pass

    async def execute(self, request: SubmitCartRequest) -> SubmitResult:
        user = self._ctx.require_user()
        cart: CartBuilder = self._ctx.cart(self.flow)

        for field, value in self._required_fields(request).items():
            if not value.strip():
                raise MissingFieldError(field)
        lines = cart.begin_submit()
        committed = False
        try:
            document = self._build_document(request, lines, user)
            logger.info("cart_submit_started", flow=self.flow.value, lines=len(lines))
            await self._send(document)
            committed = True
        except ProStockError as e:
            logger.warning("cart_submit_failed", flow=self.flow.value, error=e.message, code=e.code)
            self._ctx.notifier.error(e.message)
            raise
        finally:
            cart.finish_submit(committed)

        self._ctx.notifier.success(self.success_message)

        # A refresh started before the commit may have read stale stock
        await self._ctx.cache.wait_idle()
        outcome = await self._ctx.cache.refresh()

        logger.info(
            "cart_submit_complete",
            flow=self.flow.value,
            lines=len(lines),
            refresh=outcome.value,
        )
        return SubmitResult(flow=self.flow, lines_submitted=len(lines), refresh=outcome)


class SubmitStockInUseCase(SubmitCartUseCase):
    """Commit an inbound receipt."""

    flow = CartFlow.INBOUND
    success_message = "Stock receipt recorded"

    def _required_fields(self, request: SubmitCartRequest) -> dict[str, str]:
        return {"supplier": request.supplier, "po_number": request.po_number}

    def _build_document(
        self, request: SubmitCartRequest, lines: list[TransactionItem], user: User
    ) -> StockInDocument:
        return StockInDocument(
            transaction_date=request.transaction_date,
            supplier=request.supplier.strip(),
            po_number=request.po_number.strip(),
            delivery_note=request.delivery_note.strip(),
            items=lines,
            photos=request.photos,
            user=user.username,
        )

    async def _send(self, document: BaseModel) -> None:
        assert isinstance(document, StockInDocument)
        await self._ctx.backend.save_stock_in(document)


class SubmitStockOutUseCase(SubmitCartUseCase):
    """Commit an outbound issuance."""

    flow = CartFlow.OUTBOUND
    success_message = "Stock issuance recorded"

    def _required_fields(self, request: SubmitCartRequest) -> dict[str, str]:
        return {"customer": request.customer}

    def _build_document(
        self, request: SubmitCartRequest, lines: list[TransactionItem], user: User
    ) -> StockOutDocument:
        return StockOutDocument(
            transaction_date=request.transaction_date,
            customer=request.customer.strip(),
            items=lines,
            user=user.username,
        )

    async def _send(self, document: BaseModel) -> None:
        assert isinstance(document, StockOutDocument)
        await self._ctx.backend.save_stock_out(document)


class SubmitOpnameUseCase(SubmitCartUseCase):
    """Commit a physical count session."""

    flow = CartFlow.OPNAME
    success_message = "Stock count recorded"

    def _required_fields(self, request: SubmitCartRequest) -> dict[str, str]:
        return {}

    def _build_document(
        self, request: SubmitCartRequest, lines: list[TransactionItem], user: User
    ) -> OpnameDocument:
        return OpnameDocument(
            transaction_date=request.transaction_date,
            items=[line for line in lines if isinstance(line, OpnameItem)],
            user=user.username,
        )

    async def _send(self, document: BaseModel) -> None:
        assert isinstance(document, OpnameDocument)
        await self._ctx.backend.save_opname(document)


SUBMIT_USE_CASES: dict[CartFlow, type[SubmitCartUseCase]] = {
    CartFlow.INBOUND: SubmitStockInUseCase,
    CartFlow.OUTBOUND: SubmitStockOutUseCase,
    CartFlow.OPNAME: SubmitOpnameUseCase,
}
