"""Tests for stock adjustments and the adjustment ledger."""

import pytest
from inventory.stock.events import LowStockDetected, StockAdjusted
from inventory.stock.stock import AdjustmentReason, StockRecord
from protean.exceptions import ValidationError


def _make_record(quantity=100, reserved=0, threshold=10, **overrides):
    record = StockRecord.create(variant_id="var-001", sku="MUG-WHT", low_stock_threshold=threshold, **overrides)
    if quantity:
        record.adjust(quantity, AdjustmentReason.INITIAL_STOCK)
    if reserved:
        record.reserve(reserved)
    record._events.clear()
    return record


class TestAdjustQuantity:
    def test_positive_adjustment_increases_quantity(self):
        record = _make_record(quantity=100)
        record.adjust(25, "Restock")
        assert record.levels.quantity == 125
        assert record.levels.available == 125

    def test_negative_adjustment_decreases_quantity(self):
        record = _make_record(quantity=100)
        record.adjust(-30, "Shrinkage")
        assert record.levels.quantity == 70
        assert record.levels.available == 70

    def test_adjustment_keeps_reserved(self):
        record = _make_record(quantity=100, reserved=10)
        record.adjust(50, "Restock")
        assert record.levels.quantity == 150
        assert record.levels.reserved == 10
        assert record.levels.available == 140

    def test_zero_adjustment_is_recorded(self):
        record = _make_record(quantity=100)
        record.adjust(0, "Recount", notes="Count matched")
        assert record.levels.quantity == 100
        assert record.adjustments[-1].quantity_change == 0

    def test_adjust_down_to_reserved_is_allowed(self):
        record = _make_record(quantity=100, reserved=40)
        record.adjust(-60, "Recount")
        assert record.levels.quantity == 40
        assert record.levels.available == 0


class TestAdjustmentGuards:
    def test_negative_inventory_is_rejected(self):
        record = _make_record(quantity=100)
        with pytest.raises(ValidationError) as exc_info:
            record.adjust(-200, "Shrinkage")
        assert exc_info.value.messages["quantity_change"] == ["Adjustment would result in negative inventory"]

    def test_negative_available_is_rejected(self):
        record = _make_record(quantity=100, reserved=80)
        with pytest.raises(ValidationError) as exc_info:
            record.adjust(-30, "Damaged")
        assert "reserved stock exceeds total" in exc_info.value.messages["quantity_change"][0]

    def test_negative_available_is_rejected_even_with_backorder(self):
        record = _make_record(quantity=100, reserved=80, allow_backorder=True)
        with pytest.raises(ValidationError):
            record.adjust(-30, "Damaged")

    def test_rejected_adjustment_changes_nothing(self):
        record = _make_record(quantity=100)
        with pytest.raises(ValidationError):
            record.adjust(-200, "Shrinkage")
        assert record.levels.quantity == 100
        assert len(record.adjustments) == 1
        assert record._events == []

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_reason_is_required(self, reason):
        record = _make_record()
        with pytest.raises(ValidationError) as exc_info:
            record.adjust(5, reason)
        assert "reason" in exc_info.value.messages

    def test_quantity_change_is_required(self):
        record = _make_record()
        with pytest.raises(ValidationError) as exc_info:
            record.adjust(None, "Restock")
        assert "quantity_change" in exc_info.value.messages


class TestAdjustmentLedger:
    def test_entry_appended_with_metadata(self):
        record = _make_record(quantity=100)
        record.adjust(-4, "Damaged", notes="Crushed in transit", actor_id="usr-042")
        entry = record.adjustments[-1]
        assert entry.quantity_change == -4
        assert entry.reason == "Damaged"
        assert entry.notes == "Crushed in transit"
        assert entry.actor_id == "usr-042"
        assert entry.created_at is not None

    def test_enum_reason_is_stored_as_text(self):
        record = _make_record(quantity=0)
        record.adjust(10, AdjustmentReason.RESTOCK)
        assert record.adjustments[-1].reason == "Restock"

    def test_free_text_reason_is_accepted(self):
        record = _make_record(quantity=0)
        record.adjust(10, "Found behind the shelf")
        assert record.adjustments[-1].reason == "Found behind the shelf"

    def test_ledger_sums_to_quantity(self):
        record = _make_record(quantity=0)
        for delta in (40, -5, 12, -7, 0):
            record.adjust(delta, "Recount")
        assert sum(a.quantity_change for a in record.adjustments) == record.levels.quantity == 40

    def test_event_carries_the_entry(self):
        record = _make_record(quantity=100)
        record.adjust(50, "Restock", actor_id="usr-001")
        events = [e for e in record._events if isinstance(e, StockAdjusted)]
        assert len(events) == 1
        event = events[0]
        assert event.quantity_change == 50
        assert event.previous_quantity == 100
        assert event.new_quantity == 150
        assert event.new_available == 150
        assert event.adjustment_id == record.adjustments[-1].id


class TestLastRestocked:
    def test_set_on_positive_adjustment(self):
        record = _make_record(quantity=0)
        record.adjust(10, "Restock")
        assert record.last_restocked_at is not None
        assert record.last_restocked_at == record.adjustments[-1].created_at

    def test_untouched_by_negative_adjustment(self):
        record = _make_record(quantity=100)
        restocked_at = record.last_restocked_at
        record.adjust(-10, "Shrinkage")
        assert record.last_restocked_at == restocked_at

    def test_untouched_by_zero_adjustment(self):
        record = _make_record(quantity=0)
        record.adjust(0, "Recount")
        assert record.last_restocked_at is None


class TestLowStockOnAdjust:
    def test_raised_when_adjusted_into_band(self):
        record = _make_record(quantity=30, threshold=10)
        record.adjust(-25, "Shrinkage")
        events = [e for e in record._events if isinstance(e, LowStockDetected)]
        assert len(events) == 1
        assert events[0].available == 5

    def test_not_raised_when_adjusted_to_zero(self):
        record = _make_record(quantity=30, threshold=10)
        record.adjust(-30, "Shrinkage")
        assert not any(isinstance(e, LowStockDetected) for e in record._events)

    def test_not_raised_for_untracked_record(self):
        record = _make_record(quantity=30, threshold=10, track_inventory=False)
        record.adjust(-25, "Shrinkage")
        assert not any(isinstance(e, LowStockDetected) for e in record._events)

    def test_raised_on_restock_still_below_threshold(self):
        record = _make_record(quantity=0, threshold=10)
        record.adjust(3, "Restock")
        assert any(isinstance(e, LowStockDetected) for e in record._events)
