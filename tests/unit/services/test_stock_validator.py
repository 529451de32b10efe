"""Tests for the stock sufficiency check."""

import pytest

from prostock.core.entities import UnitOption
from prostock.core.exceptions import InsufficientStockError
from prostock.core.services import StockSufficiencyValidator, check_sufficiency

BOX = UnitOption(name="Box", factor=12)
PCS = UnitOption(name="Pcs", factor=1, is_default=True)


class TestCheckSufficiency:
    def test_nine_boxes_exceed_one_hundred(self):
        result = check_sufficiency(100, 9, BOX, "Pcs")
        assert not result.ok
        assert result.requested_base == 108
        assert result.message == "Insufficient stock: only 100 Pcs available."

    def test_eight_boxes_fit(self):
        result = check_sufficiency(100, 8, BOX, "Pcs")
        assert result.ok
        assert result.requested_base == 96
        assert result.message is None

    def test_exact_stock_is_allowed(self):
        assert check_sufficiency(100, 100, PCS, "Pcs").ok

    def test_float_rounding_at_boundary_is_allowed(self):
        third = UnitOption(name="Third", factor=1 / 3)
        assert check_sufficiency(1.0, 3, third, "Pcs").ok

    def test_zero_stock(self):
        assert check_sufficiency(0, 0, PCS, "Pcs").ok
        assert not check_sufficiency(0, 1, PCS, "Pcs").ok


class TestStockSufficiencyValidator:
    def test_require_raises(self):
        validator = StockSufficiencyValidator()
        with pytest.raises(InsufficientStockError) as exc_info:
            validator.require("1", 100, 9, BOX, "Pcs")
        assert exc_info.value.details["available"] == 100

    def test_require_passes_result_through(self):
        result = StockSufficiencyValidator().require("1", 100, 8, BOX, "Pcs")
        assert result.ok
