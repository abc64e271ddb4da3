"""Stock adjustment: command and handler.

Manual stock changes (restock, shrinkage, recount). The first adjustment
for a variant without a record creates the record at zero, in the same
unit of work as the adjustment itself.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.stock.initialization import default_low_stock_threshold
from inventory.stock.records import find_stock_record
from inventory.stock.stock import StockRecord

logger = structlog.get_logger(__name__)


@inventory.command(part_of="StockRecord")
class AdjustStock:
    """Change a variant's physical quantity with an audited reason."""

    variant_id = Identifier(required=True)
    quantity_change = Integer(required=True)  # Signed
    reason = String(required=True, max_length=255)
    notes = String(max_length=1000)
    actor_id = Identifier()


@inventory.command_handler(part_of=StockRecord)
class StockAdjustmentHandler:
    @handle(AdjustStock)
    def adjust_stock(self, command):
        record = find_stock_record(command.variant_id)
        if record is None:
            logger.info("Creating stock record on first adjustment", variant_id=str(command.variant_id))
            record = StockRecord.create(
                variant_id=command.variant_id,
                low_stock_threshold=default_low_stock_threshold(),
            )

        record.adjust(
            quantity_change=command.quantity_change,
            reason=command.reason,
            notes=command.notes,
            actor_id=command.actor_id,
        )
        current_domain.repository_for(StockRecord).add(record)
