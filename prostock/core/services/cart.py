"""
Cart builder for the inbound, outbound and opname entry flows.

An operator selects one item at a time, picks a unit, types a quantity and
commits the entry as a cart line. The whole cart is later submitted to the
backend as a single batch.

Entry state machine:

    NO_ITEM_SELECTED -> ITEM_SELECTED -> QUANTITY_ENTERED -> LINE_VALIDATED
                 ^                                               |
                 +------------------ commit_line() --------------+

Lines are validated against the item snapshot taken at selection time.
By default the stock check does not account for quantities of the same
item already in the cart, so several lines can jointly exceed the cached
stock; the backend rejects such a batch. Pass cumulative_stock_check=True
to subtract existing lines before checking.
"""

import math
from enum import Enum

from prostock.config import get_logger
from prostock.core.entities import InventoryItem, OpnameItem, TransactionItem, UnitOption
from prostock.core.exceptions import (
    CartLineNotFoundError,
    EmptyCartError,
    InvalidQuantityError,
    LineNotCommittableError,
    NoItemSelectedError,
    SubmitInProgressError,
)
from prostock.core.services.stock_validator import SufficiencyResult, StockSufficiencyValidator
from prostock.core.services.unit_conversion import build_unit_options, find_unit, to_base

logger = get_logger(__name__)


class CartFlow(str, Enum):
    """Entry flow a cart belongs to."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"
    OPNAME = "opname"


class EntryState(str, Enum):
    """Where the current (uncommitted) entry stands."""

    NO_ITEM_SELECTED = "NO_ITEM_SELECTED"
    ITEM_SELECTED = "ITEM_SELECTED"
    QUANTITY_ENTERED = "QUANTITY_ENTERED"
    LINE_VALIDATED = "LINE_VALIDATED"


class CartBuilder:
    """
    Ordered list of pending lines plus the entry being typed.

    One instance per flow; carts never share lines.
    """

    def __init__(self, flow: CartFlow, cumulative_stock_check: bool = False):
        self.flow = flow
        self.cumulative_stock_check = cumulative_stock_check
        self._validator = StockSufficiencyValidator()
        self._lines: list[TransactionItem] = []
        self._batch: list[TransactionItem] | None = None
        self._reset_entry()

    def _reset_entry(self) -> None:
        self._item: InventoryItem | None = None
        self._units: list[UnitOption] = []
        self._unit: UnitOption | None = None
        self._quantity: float = 0.0
        self._quantity_entered = False
        self._remarks = ""
        self._validation: SufficiencyResult | None = None

    # ---- entry -------------------------------------------------------

    @property
    def selected_item(self) -> InventoryItem | None:
        return self._item

    @property
    def units(self) -> list[UnitOption]:
        return list(self._units)

    @property
    def unit(self) -> UnitOption | None:
        return self._unit

    @property
    def quantity(self) -> float:
        return self._quantity

    @property
    def remarks(self) -> str:
        return self._remarks

    @property
    def validation(self) -> SufficiencyResult | None:
        """Latest sufficiency result (outbound and opname only)."""
        return self._validation

    @property
    def state(self) -> EntryState:
        if self._item is None:
            return EntryState.NO_ITEM_SELECTED
        if self.can_commit:
            return EntryState.LINE_VALIDATED
        if self._quantity_entered:
            return EntryState.QUANTITY_ENTERED
        return EntryState.ITEM_SELECTED

    def select_item(self, item: InventoryItem) -> None:
        """
        Start a new entry for `item`.

        Resets the unit to the item's default unit and the quantity to the
        flow default (the system stock for opname, zero otherwise).
        """
        self._reset_entry()
        self._item = item.model_copy(deep=True)
        self._units = build_unit_options(self._item)
        self._unit = self._units[0]
        if self.flow == CartFlow.OPNAME:
            self._quantity = self._item.stock
        self._validate()

        logger.debug("cart_item_selected", flow=self.flow.value, item_id=item.id)

    def set_unit(self, name: str) -> UnitOption:
        """Switch the active unit. The typed quantity is kept."""
        self._require_item()
        self._unit = find_unit(self._units, name)
        self._validate()
        return self._unit

    def set_quantity(self, quantity: float) -> None:
        """Set the quantity in the active unit."""
        self._require_item()
        if isinstance(quantity, bool):
            raise InvalidQuantityError(quantity)
        try:
            value = float(quantity)
        except (TypeError, ValueError):
            raise InvalidQuantityError(quantity) from None
        if not math.isfinite(value) or value < 0:
            raise InvalidQuantityError(quantity)

        self._quantity = value
        self._quantity_entered = True
        self._validate()

    def set_remarks(self, text: str) -> None:
        self._require_item()
        self._remarks = text.strip()
        self._validate()

    def clear_entry(self) -> None:
        """Abandon the current entry without touching the lines."""
        self._reset_entry()

    @property
    def can_commit(self) -> bool:
        if self._item is None or self._unit is None:
            return False
        if self.flow == CartFlow.OPNAME:
            # A physical count of zero is a valid observation
            return self._quantity >= 0
        if self._quantity <= 0:
            return False
        if self.flow == CartFlow.OUTBOUND:
            return self._validation is not None and self._validation.ok
        return True

    def commit_line(self) -> TransactionItem:
        """Append the current entry as a line and reset the entry."""
        if not self.can_commit:
            raise LineNotCommittableError(self._blocking_reason())

        item, unit = self._item, self._unit
        assert item is not None and unit is not None

        converted = to_base(self._quantity, unit)
        line: TransactionItem
        if self.flow == CartFlow.OPNAME:
            line = OpnameItem(
                item_id=item.id,
                item_name=item.name,
                quantity=self._quantity,
                unit=unit.name,
                converted_quantity=converted,
                system_stock=item.stock,
                physical_stock=converted,
                difference=item.stock - converted,
                remarks=self._remarks or f"Adjustment via {unit.name}",
            )
        else:
            line = TransactionItem(
                item_id=item.id,
                item_name=item.name,
                quantity=self._quantity,
                unit=unit.name,
                converted_quantity=converted,
                remarks=self._remarks,
            )

        self._lines.append(line)
        self._reset_entry()

        logger.info(
            "cart_line_committed",
            flow=self.flow.value,
            item_id=line.item_id,
            quantity=line.quantity,
            unit=line.unit,
            converted_quantity=line.converted_quantity,
            lines=len(self._lines),
        )
        return line

    # ---- lines -------------------------------------------------------

    @property
    def lines(self) -> list[TransactionItem]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def remove_line(self, index: int) -> TransactionItem:
        """Remove one line. Remaining lines are not re-validated."""
        if index < 0 or index >= len(self._lines):
            raise CartLineNotFoundError(index, len(self._lines))
        line = self._lines.pop(index)
        logger.info("cart_line_removed", flow=self.flow.value, index=index, item_id=line.item_id)
        return line

    def clear(self) -> None:
        """Drop every line and the current entry."""
        self._lines.clear()
        self._reset_entry()

    def total_base_quantity(self, item_id: str) -> float:
        """Base-unit quantity already in the cart for one item."""
        return sum(line.converted_quantity for line in self._lines if line.item_id == item_id)

    # ---- submission --------------------------------------------------

    @property
    def submitting(self) -> bool:
        return self._batch is not None

    def begin_submit(self) -> list[TransactionItem]:
        """
        Freeze the current lines as the batch to send.

        Lines committed while the batch is in flight are not part of it and
        survive finish_submit. Only one batch per cart may be in flight.
        """
        if self._batch is not None:
            raise SubmitInProgressError(self.flow.value)
        if not self._lines:
            raise EmptyCartError(self.flow.value)
        self._batch = list(self._lines)
        return list(self._batch)

    def finish_submit(self, committed: bool) -> None:
        """Release the in-flight batch, dropping its lines if the backend took it."""
        batch, self._batch = self._batch or [], None
        if not committed:
            return
        sent = {id(line) for line in batch}
        self._lines = [line for line in self._lines if id(line) not in sent]
        logger.info(
            "cart_batch_released",
            flow=self.flow.value,
            submitted=len(batch),
            remaining=len(self._lines),
        )

    # ---- internals ---------------------------------------------------

    def _require_item(self) -> InventoryItem:
        if self._item is None:
            raise NoItemSelectedError()
        return self._item

    def _validate(self) -> None:
        if self._item is None or self._unit is None or self.flow == CartFlow.INBOUND:
            self._validation = None
            return

        available = self._item.stock
        if self.flow == CartFlow.OUTBOUND and self.cumulative_stock_check:
            available -= self.total_base_quantity(self._item.id)

        self._validation = self._validator.check(
            available_base=available,
            quantity=self._quantity,
            unit=self._unit,
            base_unit=self._item.default_unit,
        )

    def _blocking_reason(self) -> str:
        if self._item is None:
            return "Select an item first"
        if self._validation is not None and not self._validation.ok and self.flow == CartFlow.OUTBOUND:
            return self._validation.message or "Insufficient stock"
        return "Quantity must be greater than zero"
