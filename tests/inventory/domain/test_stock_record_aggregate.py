"""Tests for StockRecord creation and its event-sourced state."""

import pytest
from inventory.stock.events import StockInitialized
from inventory.stock.stock import DEFAULT_LOW_STOCK_THRESHOLD, StockLevels, StockRecord
from protean.exceptions import ValidationError


def _make_record(**overrides):
    defaults = {
        "variant_id": "var-001",
        "product_id": "prod-001",
        "sku": "TSHIRT-BLK-M",
        "product_name": "Classic Tee",
        "variant_name": "Black / M",
    }
    defaults.update(overrides)
    return StockRecord.create(**defaults)


class TestStockRecordCreation:
    def test_identity_is_the_variant_id(self):
        record = _make_record(variant_id="var-123")
        assert record.id == "var-123"
        assert record.variant_id == "var-123"

    def test_starts_at_zero(self):
        record = _make_record()
        assert record.levels.quantity == 0
        assert record.levels.reserved == 0
        assert record.levels.available == 0
        assert record.adjustments == []

    def test_defaults(self):
        record = _make_record()
        assert record.low_stock_threshold == DEFAULT_LOW_STOCK_THRESHOLD
        assert record.track_inventory is True
        assert record.allow_backorder is False
        assert record.last_restocked_at is None

    def test_carries_catalogue_details(self):
        record = _make_record()
        assert record.product_id == "prod-001"
        assert record.sku == "TSHIRT-BLK-M"
        assert record.product_name == "Classic Tee"
        assert record.variant_name == "Black / M"

    def test_timestamps_are_set(self):
        record = _make_record()
        assert record.created_at is not None
        assert record.updated_at == record.created_at

    def test_custom_policy(self):
        record = _make_record(low_stock_threshold=3, track_inventory=False, allow_backorder=True)
        assert record.low_stock_threshold == 3
        assert record.track_inventory is False
        assert record.allow_backorder is True

    def test_negative_threshold_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _make_record(low_stock_threshold=-1)
        assert "low_stock_threshold" in exc_info.value.messages

    def test_zero_threshold_is_allowed(self):
        record = _make_record(low_stock_threshold=0)
        assert record.low_stock_threshold == 0


class TestStockInitializedEvent:
    def test_raised_once_on_create(self):
        record = _make_record()
        events = [e for e in record._events if isinstance(e, StockInitialized)]
        assert len(events) == 1

    def test_event_payload(self):
        record = _make_record(low_stock_threshold=5)
        event = record._events[0]
        assert event.stock_record_id == "var-001"
        assert event.variant_id == "var-001"
        assert event.sku == "TSHIRT-BLK-M"
        assert event.low_stock_threshold == 5
        assert event.track_inventory is True
        assert event.allow_backorder is False
        assert event.initialized_at is not None


class TestStockLevelsVO:
    def test_negative_quantity_is_invalid(self):
        with pytest.raises(ValidationError):
            StockLevels(quantity=-1, reserved=0, available=-1)

    def test_negative_reserved_is_invalid(self):
        with pytest.raises(ValidationError):
            StockLevels(quantity=0, reserved=-1, available=1)

    def test_available_may_be_negative(self):
        levels = StockLevels(quantity=5, reserved=8, available=-3)
        assert levels.available == -3

    def test_equality_by_value(self):
        assert StockLevels(quantity=5, reserved=1, available=4) == StockLevels(quantity=5, reserved=1, available=4)
