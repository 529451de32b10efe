"""Tests for historical running-balance reconstruction."""

from datetime import datetime

import pytest

from prostock.core.entities import HistoricalStockReport, Transaction, TransactionType
from prostock.core.exceptions import ReportIntegrityError
from prostock.core.services import reconstruct_report
from prostock.core.services.report_reconstructor import movement_delta


def _movement(id_: str, type_: str, quantity: float, day: int, difference: float | None = None) -> Transaction:
    return Transaction(
        id=id_,
        item_id="1",
        type=TransactionType(type_),
        quantity=quantity,
        difference=difference,
        timestamp=datetime(2024, 3, day, 9, 0),
        user="budi",
    )


@pytest.fixture
def march_report() -> HistoricalStockReport:
    # Newest first, as the backend sends them
    return HistoricalStockReport(
        item_id="1",
        item_name="Copy Paper A4",
        opening_stock=10,
        total_in=20,
        total_out=5,
        total_adjustment=2,
        closing_stock=23,
        movements=[
            _movement("m3", "OPNAME", 23, 20, difference=2),
            _movement("m2", "OUT", 5, 10),
            _movement("m1", "IN", 20, 5),
        ],
    )


class TestMovementDelta:
    def test_signs(self):
        assert movement_delta(_movement("a", "IN", 4, 1)) == 4
        assert movement_delta(_movement("b", "OUT", 4, 1)) == -4
        assert movement_delta(_movement("c", "OPNAME", 45, 1, difference=5)) == -5
        assert movement_delta(_movement("d", "OPNAME", 55, 1, difference=-5)) == 5

    def test_opname_without_difference_uses_quantity(self):
        assert movement_delta(_movement("e", "OPNAME", 3, 1)) == -3


class TestReconstructReport:
    def test_balances_replayed_oldest_first(self, march_report):
        result = reconstruct_report(march_report)

        assert result.consistent
        assert result.final_balance == 23
        assert [m.movement.id for m in result.movements] == ["m3", "m2", "m1"]
        assert [(m.balance_before, m.balance_after) for m in result.movements] == [
            (25, 23),
            (30, 25),
            (10, 30),
        ]
        assert result.movements[0].delta == -2

    def test_conservation(self, march_report):
        result = reconstruct_report(march_report)
        net = sum(m.delta for m in result.movements)
        assert result.opening_stock + net == result.closing_stock

    def test_out_of_order_input_is_sorted(self, march_report):
        march_report.movements = list(reversed(march_report.movements))
        result = reconstruct_report(march_report)
        assert [m.movement.id for m in result.movements] == ["m3", "m2", "m1"]
        assert result.consistent

    def test_equal_timestamps_keep_backend_order(self):
        report = HistoricalStockReport(
            item_id="1",
            opening_stock=0,
            total_in=5,
            total_out=5,
            closing_stock=0,
            movements=[_movement("out", "OUT", 5, 1), _movement("in", "IN", 5, 1)],
        )
        result = reconstruct_report(report)
        assert [(m.movement.id, m.balance_after) for m in result.movements] == [("out", 0), ("in", 5)]

    def test_empty_range(self):
        report = HistoricalStockReport(item_id="1", opening_stock=7, closing_stock=7)
        result = reconstruct_report(report)
        assert result.movements == []
        assert result.final_balance == 7
        assert result.consistent

    def test_strict_mismatch_raises(self, march_report):
        march_report.closing_stock = 24
        with pytest.raises(ReportIntegrityError) as exc_info:
            reconstruct_report(march_report, strict=True)
        assert exc_info.value.details["expected"] == 24
        assert exc_info.value.details["actual"] == 23

    def test_lenient_mismatch_is_flagged(self, march_report):
        march_report.closing_stock = 24
        march_report.total_adjustment = 1
        result = reconstruct_report(march_report, strict=False)
        assert not result.consistent
        assert result.problems == ["replayed balance differs from closing stock"]
        assert result.final_balance == 23

    def test_lenient_totals_mismatch(self, march_report):
        march_report.total_in = 25
        result = reconstruct_report(march_report, strict=False)
        assert result.problems == ["totals do not explain the stock change"]
