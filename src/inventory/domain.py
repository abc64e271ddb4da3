"""Inventory bounded context: stock accounting per product variant.

Tracks on-hand quantity, reserved quantity and derived availability
(event-sourced), the adjustment ledger, and low-stock alerting.
"""

from protean.domain import Domain

from inventory.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
inventory = Domain(name="inventory")
