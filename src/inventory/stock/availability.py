"""Availability rules: derived stock and the questions asked of it.

The arithmetic here is pure so the aggregate, the query side and the
alerting side all agree on the same definitions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Availability:
    available: bool
    current_stock: int


def compute_available(quantity: int, reserved: int) -> int:
    return quantity - reserved


def is_low_stock(track_inventory: bool, available: int, threshold: int) -> bool:
    """True when a tracked record is running low but not yet out of stock."""
    return bool(track_inventory) and 0 < available <= threshold


def is_out_of_stock(available: int) -> bool:
    return available <= 0


def evaluate_availability(
    track_inventory: bool,
    quantity: int,
    available: int,
    allow_backorder: bool,
    requested: int,
) -> Availability:
    """Decide whether ``requested`` units can be sold from a record's state.

    Untracked records report unlimited stock and echo their quantity; tracked
    records report their available count and accept the request when it fits
    or when backorders are allowed.
    """
    if not track_inventory:
        return Availability(available=True, current_stock=quantity)

    return Availability(
        available=available >= requested or bool(allow_backorder),
        current_stock=available,
    )
