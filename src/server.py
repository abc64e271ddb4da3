"""Protean Engine runner for the inventory domain.

Starts the Engine worker that processes events asynchronously:
- OutboxProcessor: polls the outbox table, publishes events to the broker
- StreamSubscriptions: read the event streams and invoke the StockLevel
  projector, the LowStockMonitor and the catalogue event handler

Only needed when event processing is async (PROTEAN_ENV=production).

Usage:
    python src/server.py
    python src/server.py --test-mode   # Run a few processing cycles, then exit
"""

import argparse

from inventory.utils.logging import get_logger
from protean.server.engine import Engine

logger = get_logger(__name__)


def _get_domain():
    """Import and initialize the inventory domain."""
    from inventory.domain import inventory

    inventory.init()
    return inventory


def run(test_mode=False, debug=False):
    domain = _get_domain()
    logger.info("Starting inventory engine", test_mode=test_mode)
    # Engine owns its event loop; run() blocks until shutdown
    Engine(domain, test_mode=test_mode, debug=debug).run()


def main():
    parser = argparse.ArgumentParser(description="Inventory Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Run a few processing cycles and exit",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose engine logging")
    args = parser.parse_args()

    run(test_mode=args.test_mode, debug=args.debug)


if __name__ == "__main__":
    main()
