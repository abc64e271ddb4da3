"""Integration tests for the StockLevel projection: the projector follows the stream."""

from inventory.projections.stock_level import StockLevel
from inventory.stock.adjustment import AdjustStock
from inventory.stock.initialization import InitializeStock
from inventory.stock.reservation import ReleaseStock, ReserveStock
from inventory.stock.settings import UpdateStockSettings
from inventory.stock.stock import StockRecord
from protean import current_domain


def _initialize_stock(**overrides):
    defaults = {
        "variant_id": "var-001",
        "product_id": "prod-001",
        "sku": "TSHIRT-BLK-M",
        "product_name": "Classic Tee",
        "variant_name": "Black / M",
        "initial_quantity": 100,
        "low_stock_threshold": 10,
    }
    defaults.update(overrides)
    return current_domain.process(InitializeStock(**defaults), asynchronous=False)


def _level(variant_id):
    return current_domain.repository_for(StockLevel).get(variant_id)


class TestStockLevelProjection:
    def test_created_on_initialization(self):
        variant_id = _initialize_stock()
        level = _level(variant_id)

        assert level.stock_record_id == "var-001"
        assert level.variant_id == "var-001"
        assert level.product_id == "prod-001"
        assert level.sku == "TSHIRT-BLK-M"
        assert level.product_name == "Classic Tee"
        assert level.variant_name == "Black / M"
        assert level.quantity == 100
        assert level.reserved == 0
        assert level.available == 100
        assert level.low_stock_threshold == 10
        assert level.last_restocked_at is not None

    def test_missing_names_become_empty_strings(self):
        variant_id = _initialize_stock(variant_id="var-002", sku=None, product_name=None, variant_name=None)
        level = _level(variant_id)
        assert level.sku == ""
        assert level.product_name == ""
        assert level.variant_name == ""

    def test_follows_adjustments(self):
        variant_id = _initialize_stock()
        current_domain.process(
            AdjustStock(variant_id=variant_id, quantity_change=-40, reason="Shrinkage"),
            asynchronous=False,
        )
        level = _level(variant_id)
        assert level.quantity == 60
        assert level.available == 60

    def test_follows_reservations(self):
        variant_id = _initialize_stock()
        current_domain.process(ReserveStock(variant_id=variant_id, quantity=30), asynchronous=False)
        current_domain.process(ReleaseStock(variant_id=variant_id, quantity=10), asynchronous=False)
        level = _level(variant_id)
        assert level.quantity == 100
        assert level.reserved == 20
        assert level.available == 80

    def test_follows_settings(self):
        variant_id = _initialize_stock()
        current_domain.process(
            UpdateStockSettings(variant_id=variant_id, low_stock_threshold=3, track_inventory=False),
            asynchronous=False,
        )
        level = _level(variant_id)
        assert level.low_stock_threshold == 3
        assert level.track_inventory is False

    def test_matches_the_aggregate(self):
        variant_id = _initialize_stock()
        current_domain.process(ReserveStock(variant_id=variant_id, quantity=15), asynchronous=False)
        current_domain.process(
            AdjustStock(variant_id=variant_id, quantity_change=25, reason="Restock"),
            asynchronous=False,
        )

        record = current_domain.repository_for(StockRecord).get(variant_id)
        level = _level(variant_id)
        assert (level.quantity, level.reserved, level.available) == (
            record.levels.quantity,
            record.levels.reserved,
            record.levels.available,
        )
        assert level.last_restocked_at is not None
