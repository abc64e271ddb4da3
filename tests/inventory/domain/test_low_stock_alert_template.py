"""Tests for the low stock alert template."""

from inventory.alerting.templates import LowStockAlertTemplate


def _context(**overrides):
    context = {
        "variant_id": "var-001",
        "sku": "TSHIRT-BLK-M",
        "product_name": "Classic Tee",
        "variant_name": "Black / M",
        "available": 4,
        "low_stock_threshold": 10,
        "permission": "inventory:read",
        "action_url": "/dashboard/ecommerce/inventory",
    }
    context.update(overrides)
    return context


class TestDisplayName:
    def test_product_and_variant(self):
        assert LowStockAlertTemplate.display_name("Classic Tee", "Black / M") == "Classic Tee - Black / M"

    def test_product_only(self):
        assert LowStockAlertTemplate.display_name("Classic Tee", None) == "Classic Tee"

    def test_unknown(self):
        assert LowStockAlertTemplate.display_name(None, None) == "Unknown"
        assert LowStockAlertTemplate.display_name("", "Black / M") == "Unknown"


class TestRender:
    def test_title_and_message(self):
        rendered = LowStockAlertTemplate.render(_context())
        assert rendered["title"] == "Low Stock Alert"
        assert rendered["message"] == "Classic Tee - Black / M is running low. Only 4 units available."

    def test_metadata(self):
        metadata = LowStockAlertTemplate.render(_context())["metadata"]
        assert metadata["category"] == "WORKFLOW"
        assert metadata["priority"] == "NORMAL"
        assert metadata["action_url"] == "/dashboard/ecommerce/inventory"
        assert metadata["action_label"] == "View Inventory"
        assert metadata["required_permission"] == "inventory:read"
        assert metadata["variant_id"] == "var-001"
        assert metadata["sku"] == "TSHIRT-BLK-M"
        assert metadata["available"] == 4
        assert metadata["low_stock_threshold"] == 10
