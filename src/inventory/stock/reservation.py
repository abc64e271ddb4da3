"""Stock reservations: claim and release commands and handler.

Reserve and release are the claim/unclaim halves of order fulfilment.
Callers pair them per order line; the record itself does not track which
order holds which units.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.stock.records import get_stock_record
from inventory.stock.stock import StockRecord


@inventory.command(part_of="StockRecord")
class ReserveStock:
    """Claim units of a variant for an order."""

    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@inventory.command(part_of="StockRecord")
class ReleaseStock:
    """Return previously claimed units (cancellation, return)."""

    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@inventory.command_handler(part_of=StockRecord)
class StockReservationHandler:
    @handle(ReserveStock)
    def reserve_stock(self, command):
        record = get_stock_record(command.variant_id)
        if record.reserve(quantity=command.quantity):
            current_domain.repository_for(StockRecord).add(record)

    @handle(ReleaseStock)
    def release_stock(self, command):
        record = get_stock_record(command.variant_id)
        record.release(quantity=command.quantity)
        current_domain.repository_for(StockRecord).add(record)
