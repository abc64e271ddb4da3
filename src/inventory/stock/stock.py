"""StockRecord aggregate (Event Sourced): the ground truth for one variant's stock.

Every state change is captured as a domain event and the current state is
rebuilt by replaying events via @apply. The aggregate's identity is the
variant id, so there is exactly one stream, and one record, per variant.

Stock Level Model:
    quantity:  Units physically held
    reserved:  Units claimed by unfulfilled orders
    available: quantity - reserved (negative only through a backordered reservation)

Every quantity change lands in the adjustment ledger (the ``adjustments``
collection) through the same StockAdjusted event that moves the quantity,
so the ledger and the levels are always written together.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import apply
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from inventory.domain import inventory
from inventory.stock.availability import compute_available, is_low_stock
from inventory.stock.events import (
    LowStockDetected,
    StockAdjusted,
    StockInitialized,
    StockReleased,
    StockReserved,
    StockSettingsUpdated,
)

DEFAULT_LOW_STOCK_THRESHOLD = 10


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class AdjustmentReason(Enum):
    """Well-known adjustment reasons. Any non-empty reason is accepted."""

    INITIAL_STOCK = "Initial stock"
    RESTOCK = "Restock"
    SHRINKAGE = "Shrinkage"
    DAMAGED = "Damaged"
    RECOUNT = "Recount"
    RETURN = "Return"
    CORRECTION = "Correction"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class InsufficientStockError(InvalidStateError):
    """A reservation asked for more than is available and backorders are off."""

    def __init__(self, available, requested):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient inventory. Available: {available}, Requested: {requested}",
            extra_info={"available": available, "requested": requested},
        )

    def __reduce__(self):
        return (self.__class__, (self.available, self.requested))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@inventory.value_object(part_of="StockRecord")
class StockLevels:
    """Quantity, reserved and available counts, always replaced as a whole.

    Available is denormalized here for query convenience; it equals
    quantity - reserved unless a backordered reservation drove it negative.
    """

    quantity = Integer(default=0, min_value=0)
    reserved = Integer(default=0, min_value=0)
    available = Integer(default=0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@inventory.entity(part_of="StockRecord")
class Adjustment:
    """One immutable entry in the adjustment ledger."""

    quantity_change = Integer(required=True)
    reason = String(required=True, max_length=255)
    notes = String(max_length=1000)
    actor_id = Identifier()
    created_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root (Event Sourced)
# ---------------------------------------------------------------------------
@inventory.aggregate(is_event_sourced=True)
class StockRecord:
    """Event-sourced aggregate tracking stock for one product variant."""

    variant_id = Identifier(required=True)
    product_id = Identifier()
    sku = String(max_length=100)
    product_name = String(max_length=255)
    variant_name = String(max_length=255)
    levels = ValueObject(StockLevels)
    low_stock_threshold = Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    track_inventory = Boolean(default=True)
    allow_backorder = Boolean(default=False)
    adjustments = HasMany(Adjustment)
    last_restocked_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        variant_id,
        product_id=None,
        sku=None,
        product_name=None,
        variant_name=None,
        low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
        track_inventory=True,
        allow_backorder=False,
    ):
        """Create a zero-stock record for a variant.

        The variant id doubles as the aggregate identity, so a second
        creation for the same variant collides on the event stream instead
        of producing a duplicate record.
        """
        if low_stock_threshold is None or low_stock_threshold < 0:
            raise ValidationError({"low_stock_threshold": ["Threshold must be zero or positive"]})

        record = cls._create_new(id=str(variant_id))
        record.raise_(
            StockInitialized(
                stock_record_id=str(record.id),
                variant_id=str(variant_id),
                product_id=str(product_id) if product_id else None,
                sku=sku,
                product_name=product_name,
                variant_name=variant_name,
                low_stock_threshold=low_stock_threshold,
                track_inventory=track_inventory,
                allow_backorder=allow_backorder,
                initialized_at=datetime.now(UTC),
            )
        )
        return record

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _check_low_stock(self):
        """Raise LowStockDetected when a tracked record is low but not out of stock."""
        if self.levels and is_low_stock(self.track_inventory, self.levels.available, self.low_stock_threshold):
            self.raise_(
                LowStockDetected(
                    stock_record_id=str(self.id),
                    variant_id=str(self.variant_id),
                    sku=self.sku,
                    product_name=self.product_name,
                    variant_name=self.variant_name,
                    available=self.levels.available,
                    low_stock_threshold=self.low_stock_threshold,
                    detected_at=datetime.now(UTC),
                )
            )

    # -------------------------------------------------------------------
    # Reservations
    # -------------------------------------------------------------------
    def reserve(self, quantity):
        """Claim units for an order.

        Untracked records have unlimited stock and are left untouched.
        Returns True when the record changed.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        if not self.track_inventory:
            return False

        available = self.levels.available
        new_available = available - quantity
        if new_available < 0 and not self.allow_backorder:
            raise InsufficientStockError(available=available, requested=quantity)

        self.raise_(
            StockReserved(
                stock_record_id=str(self.id),
                quantity=quantity,
                previous_available=available,
                new_reserved=self.levels.reserved + quantity,
                new_available=new_available,
                reserved_at=datetime.now(UTC),
            )
        )
        self._check_low_stock()
        return True

    def release(self, quantity):
        """Return previously reserved units to available stock."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        reserved = self.levels.reserved
        if quantity > reserved:
            raise ValidationError(
                {"quantity": [f"Cannot release {quantity} units. Only {reserved} units are reserved."]}
            )

        available = self.levels.available
        self.raise_(
            StockReleased(
                stock_record_id=str(self.id),
                quantity=quantity,
                previous_available=available,
                new_reserved=reserved - quantity,
                new_available=available + quantity,
                released_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Adjustments
    # -------------------------------------------------------------------
    def adjust(self, quantity_change, reason, notes=None, actor_id=None):
        """Change the physical quantity and append the matching ledger entry.

        Adjustments never leave available stock negative, whatever the
        backorder policy: a manual count is not a demand event.
        """
        if quantity_change is None:
            raise ValidationError({"quantity_change": ["Quantity change is required"]})
        if not reason or not str(reason).strip():
            raise ValidationError({"reason": ["Reason is required for stock adjustments"]})
        if isinstance(reason, AdjustmentReason):
            reason = reason.value

        previous_quantity = self.levels.quantity
        new_quantity = previous_quantity + quantity_change
        new_available = compute_available(new_quantity, self.levels.reserved)

        if new_quantity < 0:
            raise ValidationError({"quantity_change": ["Adjustment would result in negative inventory"]})
        if new_available < 0:
            raise ValidationError(
                {
                    "quantity_change": [
                        "Adjustment would result in negative available inventory (reserved stock exceeds total)"
                    ]
                }
            )

        self.raise_(
            StockAdjusted(
                stock_record_id=str(self.id),
                adjustment_id=str(uuid4()),
                quantity_change=quantity_change,
                reason=reason,
                notes=notes,
                actor_id=str(actor_id) if actor_id else None,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                new_available=new_available,
                adjusted_at=datetime.now(UTC),
            )
        )
        self._check_low_stock()

    # -------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------
    def update_settings(self, low_stock_threshold=None, track_inventory=None, allow_backorder=None):
        """Change the per-variant stock policy. Returns True when anything changed."""
        if low_stock_threshold is not None and low_stock_threshold < 0:
            raise ValidationError({"low_stock_threshold": ["Threshold must be zero or positive"]})

        new_threshold = self.low_stock_threshold if low_stock_threshold is None else low_stock_threshold
        new_track = self.track_inventory if track_inventory is None else track_inventory
        new_backorder = self.allow_backorder if allow_backorder is None else allow_backorder

        if (new_threshold, new_track, new_backorder) == (
            self.low_stock_threshold,
            self.track_inventory,
            self.allow_backorder,
        ):
            return False

        self.raise_(
            StockSettingsUpdated(
                stock_record_id=str(self.id),
                low_stock_threshold=new_threshold,
                track_inventory=new_track,
                allow_backorder=new_backorder,
                updated_at=datetime.now(UTC),
            )
        )
        return True

    # -------------------------------------------------------------------
    # @apply methods: rebuild state during event replay
    # -------------------------------------------------------------------
    @apply
    def _on_stock_initialized(self, event: StockInitialized):
        self.id = event.stock_record_id
        self.variant_id = event.variant_id
        self.product_id = event.product_id
        self.sku = event.sku
        self.product_name = event.product_name
        self.variant_name = event.variant_name
        self.low_stock_threshold = event.low_stock_threshold
        self.track_inventory = event.track_inventory
        self.allow_backorder = event.allow_backorder
        self.levels = StockLevels(quantity=0, reserved=0, available=0)
        self.created_at = event.initialized_at
        self.updated_at = event.initialized_at

    @apply
    def _on_stock_adjusted(self, event: StockAdjusted):
        # Idempotent: skip the ledger entry if it is already present
        existing = next(
            (a for a in (self.adjustments or []) if str(a.id) == str(event.adjustment_id)),
            None,
        )
        if not existing:
            self.add_adjustments(
                Adjustment(
                    id=event.adjustment_id,
                    quantity_change=event.quantity_change,
                    reason=event.reason,
                    notes=event.notes,
                    actor_id=event.actor_id,
                    created_at=event.adjusted_at,
                )
            )

        self.levels = StockLevels(
            quantity=event.new_quantity,
            reserved=self.levels.reserved if self.levels else 0,
            available=event.new_available,
        )
        if event.quantity_change > 0:
            self.last_restocked_at = event.adjusted_at
        self.updated_at = event.adjusted_at

    @apply
    def _on_stock_reserved(self, event: StockReserved):
        self.levels = StockLevels(
            quantity=self.levels.quantity if self.levels else 0,
            reserved=event.new_reserved,
            available=event.new_available,
        )
        self.updated_at = event.reserved_at

    @apply
    def _on_stock_released(self, event: StockReleased):
        self.levels = StockLevels(
            quantity=self.levels.quantity if self.levels else 0,
            reserved=event.new_reserved,
            available=event.new_available,
        )
        self.updated_at = event.released_at

    @apply
    def _on_stock_settings_updated(self, event: StockSettingsUpdated):
        self.low_stock_threshold = event.low_stock_threshold
        self.track_inventory = event.track_inventory
        self.allow_backorder = event.allow_backorder
        self.updated_at = event.updated_at

    @apply
    def _on_low_stock_detected(self, event: LowStockDetected):  # noqa: ARG002
        # Notification-only event: no state change
        pass
