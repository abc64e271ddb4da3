"""Loading stock records by variant id."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from inventory.stock.availability import Availability, evaluate_availability
from inventory.stock.stock import StockRecord


def find_stock_record(variant_id):
    """Return the variant's StockRecord, or None when it has none."""
    try:
        return current_domain.repository_for(StockRecord).get(str(variant_id))
    except ObjectNotFoundError:
        return None


def get_stock_record(variant_id):
    """Return the variant's StockRecord or raise ObjectNotFoundError."""
    record = find_stock_record(variant_id)
    if record is None:
        raise ObjectNotFoundError(f"Inventory not found for variant {variant_id}")
    return record


def check_availability(variant_id, requested: int) -> Availability:
    """Availability of ``requested`` units for a variant. Never raises for a missing record."""
    record = find_stock_record(variant_id)
    if record is None:
        return Availability(available=False, current_stock=0)

    return evaluate_availability(
        track_inventory=record.track_inventory,
        quantity=record.levels.quantity,
        available=record.levels.available,
        allow_backorder=record.allow_backorder,
        requested=requested,
    )
