"""
Stock sufficiency check for outbound and opname entry.

The check runs against the stock cached when the item was selected; the
backend remains the authority and may still reject the committed batch.
"""

import math
from dataclasses import dataclass

from prostock.core.entities import UnitOption
from prostock.core.exceptions import InsufficientStockError
from prostock.core.services.unit_conversion import to_base

# Relative tolerance for treating a converted quantity as equal to stock
_REL_TOLERANCE = 1e-9


@dataclass(frozen=True)
class SufficiencyResult:
    """Outcome of a sufficiency check."""

    ok: bool
    requested_base: float
    available_base: float
    unit: str
    message: str | None = None


def check_sufficiency(
    available_base: float,
    quantity: float,
    unit: UnitOption,
    base_unit: str,
) -> SufficiencyResult:
    """
    Check whether `quantity` of `unit` fits in the available base stock.

    Args:
        available_base: Cached stock in the item's base unit
        quantity: Requested quantity in `unit`
        unit: Unit the quantity is expressed in
        base_unit: Name of the item's base unit, used in the message

    Returns:
        SufficiencyResult; `ok` is False only when the converted quantity
        strictly exceeds the available stock.
    """
    requested = to_base(quantity, unit)
    exceeds = requested > available_base and not math.isclose(
        requested, available_base, rel_tol=_REL_TOLERANCE, abs_tol=_REL_TOLERANCE
    )
    if exceeds:
        return SufficiencyResult(
            ok=False,
            requested_base=requested,
            available_base=available_base,
            unit=base_unit,
            message=f"Insufficient stock: only {available_base:g} {base_unit} available.",
        )
    return SufficiencyResult(
        ok=True,
        requested_base=requested,
        available_base=available_base,
        unit=base_unit,
    )


class StockSufficiencyValidator:
    """
    The stock gate shared by cart entry and manual movements.

    `check` reports a result the cart keeps for display; `require` raises
    InsufficientStockError for callers that have no entry state to show.
    """

    def check(
        self,
        available_base: float,
        quantity: float,
        unit: UnitOption,
        base_unit: str,
    ) -> SufficiencyResult:
        return check_sufficiency(available_base, quantity, unit, base_unit)

    def require(
        self,
        item_id: str,
        available_base: float,
        quantity: float,
        unit: UnitOption,
        base_unit: str,
    ) -> SufficiencyResult:
        result = check_sufficiency(available_base, quantity, unit, base_unit)
        if not result.ok:
            raise InsufficientStockError(
                item_id=item_id,
                requested=result.requested_base,
                available=available_base,
                unit=base_unit,
            )
        return result
