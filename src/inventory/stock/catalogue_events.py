"""Inbound cross-domain event handler: Inventory reacts to Catalogue events.

Listens for VariantAdded to create the stock record for every new
purchasable variant, so stock exists before the first order arrives.

Cross-domain events are imported from shared.events.catalogue and registered
as external events via inventory.register_external_event().
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import VariantAdded

from inventory.domain import inventory
from inventory.stock.records import find_stock_record
from inventory.stock.stock import StockRecord

logger = structlog.get_logger(__name__)

# Register external events so Protean can deserialize them
inventory.register_external_event(VariantAdded, "Catalogue.VariantAdded.v1")


@inventory.event_handler(part_of=StockRecord, stream_category="catalogue::product")
class CatalogueInventoryEventHandler:
    """Reacts to Catalogue domain events to initialize stock records."""

    @handle(VariantAdded)
    def on_variant_added(self, event: VariantAdded) -> None:
        """Initialize a zero-stock record when a new variant is added to a product."""
        from inventory.stock.initialization import InitializeStock

        if find_stock_record(event.variant_id) is not None:
            # Already created, typically by an adjustment that arrived first
            logger.info(
                "Stock record already exists for new variant",
                product_id=str(event.product_id),
                variant_id=str(event.variant_id),
            )
            return

        logger.info(
            "Initializing stock for new variant",
            product_id=str(event.product_id),
            variant_id=str(event.variant_id),
            variant_sku=event.variant_sku,
        )

        current_domain.process(
            InitializeStock(
                variant_id=event.variant_id,
                product_id=event.product_id,
                sku=event.variant_sku,
                product_name=event.product_name,
                variant_name=event.variant_name,
                initial_quantity=0,
            ),
            asynchronous=False,
        )
