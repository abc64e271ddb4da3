"""Stock settings: per-variant threshold, tracking and backorder policy."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.stock.records import get_stock_record
from inventory.stock.stock import StockRecord


@inventory.command(part_of="StockRecord")
class UpdateStockSettings:
    """Change stock policy for a variant. Omitted fields keep their value."""

    variant_id = Identifier(required=True)
    low_stock_threshold = Integer(min_value=0)
    track_inventory = Boolean()
    allow_backorder = Boolean()


@inventory.command_handler(part_of=StockRecord)
class StockSettingsHandler:
    @handle(UpdateStockSettings)
    def update_settings(self, command):
        record = get_stock_record(command.variant_id)
        if record.update_settings(
            low_stock_threshold=command.low_stock_threshold,
            track_inventory=command.track_inventory,
            allow_backorder=command.allow_backorder,
        ):
            current_domain.repository_for(StockRecord).add(record)
