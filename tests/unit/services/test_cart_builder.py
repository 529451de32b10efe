"""Tests for the cart builder and its entry state machine."""

import math

import pytest

from prostock.core.entities import InventoryItem, OpnameItem
from prostock.core.exceptions import (
    CartLineNotFoundError,
    EmptyCartError,
    InvalidQuantityError,
    LineNotCommittableError,
    NoItemSelectedError,
    SubmitInProgressError,
    UnitNotFoundError,
)
from prostock.core.services import CartBuilder, CartFlow, EntryState, StockSufficiencyValidator


class TestEntryStateMachine:
    def test_starts_empty(self):
        cart = CartBuilder(CartFlow.OUTBOUND)
        assert cart.state == EntryState.NO_ITEM_SELECTED
        assert cart.is_empty
        assert not cart.can_commit

    def test_select_resets_to_default_unit(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        assert cart.state == EntryState.ITEM_SELECTED
        assert cart.unit.name == "Pcs"
        assert cart.quantity == 0
        assert [u.name for u in cart.units] == ["Pcs", "Box", "Pack"]

    def test_quantity_then_validated(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_quantity(5)
        assert cart.state == EntryState.LINE_VALIDATED

    def test_blocked_quantity_stays_entered(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_quantity(101)
        assert cart.state == EntryState.QUANTITY_ENTERED

    def test_operations_need_an_item(self):
        cart = CartBuilder(CartFlow.INBOUND)
        with pytest.raises(NoItemSelectedError):
            cart.set_quantity(1)
        with pytest.raises(NoItemSelectedError):
            cart.set_unit("Pcs")

    def test_reselect_discards_entry(self, paper: InventoryItem, cement: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_unit("Box")
        cart.set_quantity(3)
        cart.select_item(cement)
        assert cart.unit.name == "Sak"
        assert cart.quantity == 0


class TestQuantityValidation:
    @pytest.mark.parametrize("bad", [-1, math.inf, math.nan, True, "abc"])
    def test_rejects_bad_quantities(self, paper: InventoryItem, bad):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        with pytest.raises(InvalidQuantityError):
            cart.set_quantity(bad)

    def test_unknown_unit(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        with pytest.raises(UnitNotFoundError):
            cart.set_unit("Crate")


class TestOutbound:
    def test_nine_boxes_blocked_eight_allowed(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_unit("Box")

        cart.set_quantity(9)
        assert not cart.validation.ok
        assert cart.validation.message == "Insufficient stock: only 100 Pcs available."
        with pytest.raises(LineNotCommittableError) as exc_info:
            cart.commit_line()
        assert "Insufficient stock" in exc_info.value.details["message"]
        assert cart.is_empty

        cart.set_quantity(8)
        line = cart.commit_line()
        assert line.quantity == 8
        assert line.unit == "Box"
        assert line.converted_quantity == 96
        assert cart.state == EntryState.NO_ITEM_SELECTED

    def test_unit_switch_revalidates(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_quantity(9)
        assert cart.validation.ok
        cart.set_unit("Box")
        assert cart.quantity == 9
        assert not cart.validation.ok

    def test_zero_quantity_not_committable(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_quantity(0)
        assert not cart.can_commit

    def test_lines_may_jointly_exceed_stock(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        for _ in range(2):
            cart.select_item(paper)
            cart.set_quantity(60)
            cart.commit_line()
        assert cart.total_base_quantity("1") == 120

    def test_cumulative_check_counts_existing_lines(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND, cumulative_stock_check=True)
        cart.select_item(paper)
        cart.set_quantity(60)
        cart.commit_line()

        cart.select_item(paper)
        cart.set_quantity(60)
        assert not cart.validation.ok
        assert cart.validation.available_base == 40
        cart.set_quantity(40)
        assert cart.can_commit

    def test_selection_is_a_snapshot(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        paper.stock = 0
        cart.set_quantity(80)
        assert cart.validation.ok
        assert cart.selected_item.stock == 100


class TestInbound:
    def test_no_stock_check(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        cart.set_unit("Box")
        cart.set_quantity(1000)
        assert cart.validation is None
        line = cart.commit_line()
        assert line.converted_quantity == 12000

    def test_remarks_are_kept(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        cart.set_quantity(1)
        cart.set_remarks("  damaged carton  ")
        assert cart.commit_line().remarks == "damaged carton"


class TestOpname:
    def test_quantity_defaults_to_system_stock(self, cement: InventoryItem):
        cart = CartBuilder(CartFlow.OPNAME)
        cart.select_item(cement)
        assert cart.quantity == 50
        assert cart.can_commit

    @pytest.mark.parametrize("counted, difference", [(45, 5), (55, -5), (50, 0)])
    def test_difference_is_system_minus_physical(self, cement: InventoryItem, counted, difference):
        cart = CartBuilder(CartFlow.OPNAME)
        cart.select_item(cement)
        cart.set_quantity(counted)
        line = cart.commit_line()
        assert isinstance(line, OpnameItem)
        assert line.system_stock == 50
        assert line.physical_stock == counted
        assert line.difference == difference
        assert line.remarks == "Adjustment via Sak"

    def test_count_above_stock_is_not_blocked(self, cement: InventoryItem):
        cart = CartBuilder(CartFlow.OPNAME)
        cart.select_item(cement)
        cart.set_quantity(55)
        assert not cart.validation.ok
        assert cart.can_commit

    def test_zero_count_is_valid(self, cement: InventoryItem):
        cart = CartBuilder(CartFlow.OPNAME)
        cart.select_item(cement)
        cart.set_quantity(0)
        line = cart.commit_line()
        assert line.difference == 50

    def test_count_in_alternate_unit(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.OPNAME)
        cart.select_item(paper)
        cart.set_unit("Box")
        cart.set_quantity(8)
        line = cart.commit_line()
        assert line.physical_stock == 96
        assert line.difference == 4


class TestLines:
    def test_remove_line(self, paper: InventoryItem, cement: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        for item in (paper, cement):
            cart.select_item(item)
            cart.set_quantity(1)
            cart.commit_line()

        removed = cart.remove_line(0)
        assert removed.item_id == "1"
        assert [line.item_id for line in cart.lines] == ["2"]

    def test_removing_a_line_leaves_the_others_untouched(self, paper: InventoryItem, cement: InventoryItem):
        cart = CartBuilder(CartFlow.OUTBOUND)
        for item, unit, quantity in ((paper, "Box", 8), (cement, "Sak", 30), (paper, "Pack", 1)):
            cart.select_item(item)
            cart.set_unit(unit)
            cart.set_quantity(quantity)
            assert cart.validation.ok
            cart.commit_line()
        before = [line.model_copy() for line in cart.lines]

        removed = cart.remove_line(1)

        assert removed.item_id == "2"
        assert cart.lines == [before[0], before[2]]
        assert [line.converted_quantity for line in cart.lines] == [96, 6]

        # a new entry is validated exactly as before the removal
        cart.select_item(paper)
        cart.set_unit("Box")
        cart.set_quantity(9)
        assert not cart.validation.ok
        assert not cart.can_commit
        cart.set_quantity(8)
        assert cart.validation.ok
        assert cart.can_commit

    def test_remove_missing_line(self):
        cart = CartBuilder(CartFlow.INBOUND)
        with pytest.raises(CartLineNotFoundError):
            cart.remove_line(0)

    def test_lines_property_is_a_copy(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        cart.set_quantity(1)
        cart.commit_line()
        cart.lines.clear()
        assert len(cart.lines) == 1

    def test_carts_are_independent(self, paper: InventoryItem):
        inbound = CartBuilder(CartFlow.INBOUND)
        outbound = CartBuilder(CartFlow.OUTBOUND)
        inbound.select_item(paper)
        inbound.set_quantity(3)
        inbound.commit_line()
        assert outbound.is_empty
        assert outbound.state == EntryState.NO_ITEM_SELECTED

    def test_clear(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        cart.select_item(paper)
        cart.set_quantity(1)
        cart.commit_line()
        cart.select_item(paper)
        cart.clear()
        assert cart.is_empty
        assert cart.selected_item is None


class TestSubmitBatch:
    @staticmethod
    def _add(cart: CartBuilder, item: InventoryItem, quantity: float = 1) -> None:
        cart.select_item(item)
        cart.set_quantity(quantity)
        cart.commit_line()

    def test_committed_batch_leaves_later_lines(self, paper: InventoryItem, cement: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        self._add(cart, paper)

        batch = cart.begin_submit()
        assert cart.submitting
        self._add(cart, cement)
        cart.finish_submit(committed=True)

        assert [line.item_id for line in batch] == ["1"]
        assert [line.item_id for line in cart.lines] == ["2"]
        assert not cart.submitting

    def test_failed_batch_keeps_every_line(self, paper: InventoryItem, cement: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        self._add(cart, paper)
        cart.begin_submit()
        self._add(cart, cement)
        cart.finish_submit(committed=False)
        assert [line.item_id for line in cart.lines] == ["1", "2"]

    def test_same_item_added_again_is_kept(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        self._add(cart, paper, 2)
        cart.begin_submit()
        self._add(cart, paper, 2)
        cart.finish_submit(committed=True)
        assert len(cart.lines) == 1

    def test_one_batch_at_a_time(self, paper: InventoryItem):
        cart = CartBuilder(CartFlow.INBOUND)
        self._add(cart, paper)
        cart.begin_submit()
        with pytest.raises(SubmitInProgressError) as exc_info:
            cart.begin_submit()
        assert exc_info.value.code == "SUBMIT_IN_PROGRESS"

        cart.finish_submit(committed=False)
        assert cart.begin_submit()

    def test_empty_cart(self):
        with pytest.raises(EmptyCartError):
            CartBuilder(CartFlow.OUTBOUND).begin_submit()


class TestValidation:
    def test_entry_uses_the_shared_validator(self, paper: InventoryItem, monkeypatch):
        calls = []
        original = StockSufficiencyValidator.check

        def spy(self, *args, **kwargs):
            calls.append(kwargs)
            return original(self, *args, **kwargs)

        monkeypatch.setattr(StockSufficiencyValidator, "check", spy)
        cart = CartBuilder(CartFlow.OUTBOUND)
        cart.select_item(paper)
        cart.set_unit("Box")
        cart.set_quantity(9)

        assert calls[-1]["available_base"] == 100
        assert not cart.validation.ok
