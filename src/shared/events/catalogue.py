"""Cross-domain event contracts for Catalogue domain events.

These classes define the shape of the catalogue events the inventory
service consumes. They are registered as external events via
domain.register_external_event() with matching __type__ strings so
Protean's stream deserialization works correctly.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class VariantAdded(BaseEvent):
    """A new purchasable variant was added to a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    variant_sku = String(required=True)
    product_name = String()
    variant_name = String()
    created_at = DateTime(required=True)
