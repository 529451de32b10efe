"""
Running-balance reconstruction for a historical stock report.

The backend returns an item's opening and closing stock for a date range
together with the movements in between (newest first). The client replays
the movements from the opening stock to show the balance before and after
each one, and checks that the replay lands on the backend's closing stock.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime

from prostock.config import get_logger
from prostock.core.entities import HistoricalStockReport, Transaction, TransactionType
from prostock.core.exceptions import ReportIntegrityError

logger = get_logger(__name__)

_TOLERANCE = 1e-6


@dataclass(frozen=True)
class BalancedMovement:
    """A movement with the item balance around it."""

    movement: Transaction
    balance_before: float
    balance_after: float

    @property
    def delta(self) -> float:
        return self.balance_after - self.balance_before


@dataclass
class ReconstructedReport:
    """Backend report plus the replayed balances (newest first)."""

    report: HistoricalStockReport
    movements: list[BalancedMovement] = field(default_factory=list)
    final_balance: float = 0.0
    consistent: bool = True
    problems: list[str] = field(default_factory=list)

    @property
    def opening_stock(self) -> float:
        return self.report.opening_stock

    @property
    def closing_stock(self) -> float:
        return self.report.closing_stock


def movement_delta(movement: Transaction) -> float:
    """Signed change a movement applies to the balance."""
    if movement.type == TransactionType.IN:
        return movement.quantity
    if movement.type == TransactionType.OUT:
        return -movement.quantity
    # Opname difference is system - physical, so a positive value removes stock
    return -movement.adjustment


def _chronological(movements: list[Transaction]) -> list[Transaction]:
    # Reverse first so that equal timestamps keep their oldest-first order
    ordered = list(reversed(movements))
    return sorted(ordered, key=lambda m: m.timestamp or datetime.min)


def reconstruct_report(report: HistoricalStockReport, strict: bool = True) -> ReconstructedReport:
    """
    Replay a report's movements from its opening stock.

    Args:
        report: Backend report with movements newest first
        strict: Raise ReportIntegrityError on a mismatch instead of flagging it

    Returns:
        ReconstructedReport with per-movement balances, newest first
    """
    balance = report.opening_stock
    balanced: list[BalancedMovement] = []

    for movement in _chronological(report.movements):
        before = balance
        balance = before + movement_delta(movement)
        balanced.append(BalancedMovement(movement=movement, balance_before=before, balance_after=balance))

    balanced.reverse()
    result = ReconstructedReport(report=report, movements=balanced, final_balance=balance)

    if not math.isclose(balance, report.closing_stock, abs_tol=_TOLERANCE):
        _flag(result, strict, "replayed balance differs from closing stock", report.closing_stock, balance)

    net = report.total_in - report.total_out - report.total_adjustment
    change = report.closing_stock - report.opening_stock
    if not math.isclose(change, net, abs_tol=_TOLERANCE):
        _flag(result, strict, "totals do not explain the stock change", change, net)

    logger.info(
        "report_reconstructed",
        item_id=report.item_id,
        movements=len(balanced),
        final_balance=balance,
        consistent=result.consistent,
    )
    return result


def _flag(
    result: ReconstructedReport,
    strict: bool,
    reason: str,
    expected: float,
    actual: float,
) -> None:
    item_id = result.report.item_id
    if strict:
        raise ReportIntegrityError(item_id, reason, expected=expected, actual=actual)
    result.consistent = False
    result.problems.append(reason)
    logger.warning(
        "report_inconsistent",
        item_id=item_id,
        reason=reason,
        expected=expected,
        actual=actual,
    )
