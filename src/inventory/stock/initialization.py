"""Stock initialization: command and handler."""

import structlog
from protean import handle
from protean.exceptions import InvalidStateError
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.stock.records import find_stock_record
from inventory.stock.stock import DEFAULT_LOW_STOCK_THRESHOLD, AdjustmentReason, StockRecord

logger = structlog.get_logger(__name__)


@inventory.command(part_of="StockRecord")
class InitializeStock:
    """Create the stock record for a product variant."""

    variant_id = Identifier(required=True)
    product_id = Identifier()
    sku = String(max_length=100)
    product_name = String(max_length=255)
    variant_name = String(max_length=255)
    initial_quantity = Integer(default=0, min_value=0)
    low_stock_threshold = Integer(min_value=0)
    track_inventory = Boolean(default=True)
    allow_backorder = Boolean(default=False)
    actor_id = Identifier()


def default_low_stock_threshold():
    return current_domain.config["custom"].get("default_low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD)


@inventory.command_handler(part_of=StockRecord)
class InitializeStockHandler:
    @handle(InitializeStock)
    def initialize_stock(self, command):
        if find_stock_record(command.variant_id) is not None:
            raise InvalidStateError(f"Inventory already exists for variant {command.variant_id}")

        threshold = command.low_stock_threshold
        if threshold is None:
            threshold = default_low_stock_threshold()

        record = StockRecord.create(
            variant_id=command.variant_id,
            product_id=command.product_id,
            sku=command.sku,
            product_name=command.product_name,
            variant_name=command.variant_name,
            low_stock_threshold=threshold,
            track_inventory=command.track_inventory,
            allow_backorder=command.allow_backorder,
        )
        # Starting stock goes through the ledger like any other quantity change
        if command.initial_quantity:
            record.adjust(
                quantity_change=command.initial_quantity,
                reason=AdjustmentReason.INITIAL_STOCK,
                actor_id=command.actor_id,
            )

        current_domain.repository_for(StockRecord).add(record)
        logger.info(
            "Stock record initialized",
            variant_id=str(record.id),
            initial_quantity=command.initial_quantity or 0,
        )
        return str(record.id)
