"""Inventory database management CLI.

Creates, drops or empties the tables of the configured database providers
(stock level projection, outbox). The event store manages its own schema.

Usage:
    python src/manage.py setup-db      # Create all tables
    python src/manage.py drop-db       # Drop all tables
    python src/manage.py truncate-db   # Delete all rows, keep the tables
"""

import argparse
import sys

ACTIONS = {
    "setup-db": ("Creating", "setup_database", "ready"),
    "drop-db": ("Dropping", "drop_database", "dropped"),
    "truncate-db": ("Truncating", "truncate_database", "emptied"),
}


def _get_domain():
    from inventory.domain import inventory

    inventory.init()
    return inventory


def manage_database(command):
    """Run one schema action against every provider of the inventory domain."""
    verb, method_name, outcome = ACTIONS[command]
    domain = _get_domain()

    print(f"{verb} inventory database schema...")
    with domain.domain_context():
        getattr(domain, method_name)()
    print(f"  inventory schema {outcome}.")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inventory database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("truncate-db", help="Delete all rows without dropping tables")

    args = parser.parse_args(argv)

    if args.command in ACTIONS:
        manage_database(args.command)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
