"""Domain events for the StockRecord aggregate.

All events are versioned, immutable facts about one variant's stock.
Events are persisted to the event store and used for:
- Rebuilding aggregate state via @apply (event sourcing)
- Updating the StockLevel read model via its projector
- Triggering low-stock alerts outside the mutating transaction
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from inventory.domain import inventory


@inventory.event(part_of="StockRecord")
class StockInitialized:
    """A stock record was created for a product variant, at zero stock."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    product_id = Identifier()
    sku = String(max_length=100)
    product_name = String(max_length=255)
    variant_name = String(max_length=255)
    low_stock_threshold = Integer(required=True)
    track_inventory = Boolean(required=True)
    allow_backorder = Boolean(required=True)
    initialized_at = DateTime(required=True)


@inventory.event(part_of="StockRecord")
class StockAdjusted:
    """Physical quantity changed; carries the matching ledger entry."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    adjustment_id = Identifier(required=True)
    quantity_change = Integer(required=True)  # Signed
    reason = String(required=True, max_length=255)
    notes = String(max_length=1000)
    actor_id = Identifier()
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    new_available = Integer(required=True)
    adjusted_at = DateTime(required=True)


@inventory.event(part_of="StockRecord")
class StockReserved:
    """Units were claimed for an order, decreasing available quantity."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_available = Integer(required=True)
    new_reserved = Integer(required=True)
    new_available = Integer(required=True)
    reserved_at = DateTime(required=True)


@inventory.event(part_of="StockRecord")
class StockReleased:
    """Previously reserved units were returned to available quantity."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_available = Integer(required=True)
    new_reserved = Integer(required=True)
    new_available = Integer(required=True)
    released_at = DateTime(required=True)


@inventory.event(part_of="StockRecord")
class StockSettingsUpdated:
    """Per-variant stock policy changed."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    low_stock_threshold = Integer(required=True)
    track_inventory = Boolean(required=True)
    allow_backorder = Boolean(required=True)
    updated_at = DateTime(required=True)


@inventory.event(part_of="StockRecord")
class LowStockDetected:
    """Available stock fell to or below the threshold while still positive."""

    __version__ = 1

    stock_record_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    sku = String()
    product_name = String()
    variant_name = String()
    available = Integer(required=True)
    low_stock_threshold = Integer(required=True)
    detected_at = DateTime(required=True)
