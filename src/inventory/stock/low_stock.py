"""Low stock monitor: alerts the people who watch inventory.

The aggregate decides *when* stock is low and records LowStockDetected with
the mutation. This handler decides *who* hears about it and sends one
notification per actor. It runs after the mutation has committed (in the
Engine worker when event processing is async), and it never raises: a
failed lookup or a failed delivery is logged and the next actor is tried.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from inventory.alerting import get_actor_resolver, get_notifier
from inventory.alerting.templates import LowStockAlertTemplate
from inventory.domain import inventory
from inventory.stock.events import LowStockDetected
from inventory.stock.stock import StockRecord

logger = structlog.get_logger(__name__)

DEFAULT_PERMISSION = "inventory:read"
DEFAULT_ACTION_URL = "/dashboard/ecommerce/inventory"


def _setting(name, default):
    return current_domain.config["custom"].get(name, default)


def send_low_stock_alerts(context: dict) -> list[str]:
    """Notify every actor allowed to see low-stock alerts.

    Returns the ids of the actors that were notified successfully. Nothing
    raised while preparing or dispatching the alert escapes: the stock
    mutation that triggered it has already been stored.
    """
    try:
        return _dispatch(context)
    except Exception:
        logger.exception("Low stock alert failed", variant_id=context.get("variant_id"))
        return []


def _dispatch(context: dict) -> list[str]:
    permission = _setting("low_stock_permission", DEFAULT_PERMISSION)
    rendered = LowStockAlertTemplate.render(
        {
            **context,
            "permission": permission,
            "action_url": _setting("low_stock_action_url", DEFAULT_ACTION_URL),
        }
    )

    try:
        actor_ids = get_actor_resolver().actors_with_permission(permission)
    except Exception as e:
        logger.error(
            "Failed to resolve low stock alert recipients",
            variant_id=context.get("variant_id"),
            permission=permission,
            error=str(e),
        )
        return []

    notified = []
    notifier = get_notifier()
    for actor_id in actor_ids:
        try:
            result = notifier.send(
                actor_id=actor_id,
                title=rendered["title"],
                message=rendered["message"],
                metadata=rendered["metadata"],
            )
        except Exception as e:
            logger.error(
                "Failed to send low stock notification",
                actor_id=actor_id,
                variant_id=context.get("variant_id"),
                error=str(e),
            )
            continue

        if result.get("status") == "sent":
            notified.append(actor_id)
        else:
            logger.warning(
                "Low stock notification not delivered",
                actor_id=actor_id,
                variant_id=context.get("variant_id"),
                error=result.get("error"),
            )

    logger.info(
        "Low stock alert dispatched",
        variant_id=context.get("variant_id"),
        available=context.get("available"),
        recipients=len(actor_ids),
        delivered=len(notified),
    )
    return notified


@inventory.event_handler(part_of=StockRecord)
class LowStockMonitor:
    """Turns LowStockDetected into per-actor notifications."""

    @handle(LowStockDetected)
    def on_low_stock_detected(self, event: LowStockDetected) -> None:
        send_low_stock_alerts(
            {
                "variant_id": str(event.variant_id),
                "sku": event.sku,
                "product_name": event.product_name,
                "variant_name": event.variant_name,
                "available": event.available,
                "low_stock_threshold": event.low_stock_threshold,
            }
        )
