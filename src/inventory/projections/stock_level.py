"""Stock level: one row per stock record, for listing, search and low-stock reports."""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.stock.events import (
    StockAdjusted,
    StockInitialized,
    StockReleased,
    StockReserved,
    StockSettingsUpdated,
)
from inventory.stock.stock import StockRecord


@inventory.projection
class StockLevel:
    stock_record_id = Identifier(identifier=True, required=True)
    variant_id = Identifier(required=True)
    product_id = Identifier()
    # Names default to "" so case-insensitive search never meets a NULL
    sku = String(max_length=100, default="")
    product_name = String(max_length=255, default="")
    variant_name = String(max_length=255, default="")
    quantity = Integer(default=0)
    reserved = Integer(default=0)
    available = Integer(default=0)
    low_stock_threshold = Integer(default=10)
    track_inventory = Boolean(default=True)
    allow_backorder = Boolean(default=False)
    last_restocked_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()


@inventory.projector(projector_for=StockLevel, aggregates=[StockRecord])
class StockLevelProjector:
    @on(StockInitialized)
    def on_stock_initialized(self, event):
        current_domain.repository_for(StockLevel).add(
            StockLevel(
                stock_record_id=event.stock_record_id,
                variant_id=event.variant_id,
                product_id=event.product_id,
                sku=event.sku or "",
                product_name=event.product_name or "",
                variant_name=event.variant_name or "",
                quantity=0,
                reserved=0,
                available=0,
                low_stock_threshold=event.low_stock_threshold,
                track_inventory=event.track_inventory,
                allow_backorder=event.allow_backorder,
                created_at=event.initialized_at,
                updated_at=event.initialized_at,
            )
        )

    @on(StockAdjusted)
    def on_stock_adjusted(self, event):
        repo = current_domain.repository_for(StockLevel)
        level = repo.get(event.stock_record_id)
        level.quantity = event.new_quantity
        level.available = event.new_available
        if event.quantity_change > 0:
            level.last_restocked_at = event.adjusted_at
        level.updated_at = event.adjusted_at
        repo.add(level)

    @on(StockReserved)
    def on_stock_reserved(self, event):
        repo = current_domain.repository_for(StockLevel)
        level = repo.get(event.stock_record_id)
        level.reserved = event.new_reserved
        level.available = event.new_available
        level.updated_at = event.reserved_at
        repo.add(level)

    @on(StockReleased)
    def on_stock_released(self, event):
        repo = current_domain.repository_for(StockLevel)
        level = repo.get(event.stock_record_id)
        level.reserved = event.new_reserved
        level.available = event.new_available
        level.updated_at = event.released_at
        repo.add(level)

    @on(StockSettingsUpdated)
    def on_stock_settings_updated(self, event):
        repo = current_domain.repository_for(StockLevel)
        level = repo.get(event.stock_record_id)
        level.low_stock_threshold = event.low_stock_threshold
        level.track_inventory = event.track_inventory
        level.allow_backorder = event.allow_backorder
        level.updated_at = event.updated_at
        repo.add(level)
