"""Alerting adapter registry: pluggable notification and actor resolution.

Provides singleton access to the two collaborators the low-stock monitor
depends on. Uses fake adapters by default; real adapters are either
selected with the INVENTORY_NOTIFIER / INVENTORY_ACTOR_RESOLVER environment
variables or handed in at the composition root via configure_alerting().
"""

import os

_notifier_instance = None
_actor_resolver_instance = None


def get_notifier():
    """Return the configured notifier adapter (singleton)."""
    global _notifier_instance
    if _notifier_instance is None:
        adapter = os.environ.get("INVENTORY_NOTIFIER", "fake")
        if adapter == "fake":
            from inventory.alerting.fake_notifier import FakeNotifier

            _notifier_instance = FakeNotifier()
        else:
            raise ValueError(f"Unknown notifier adapter: {adapter}")
    return _notifier_instance


def get_actor_resolver():
    """Return the configured actor resolver adapter (singleton)."""
    global _actor_resolver_instance
    if _actor_resolver_instance is None:
        adapter = os.environ.get("INVENTORY_ACTOR_RESOLVER", "fake")
        if adapter == "fake":
            from inventory.alerting.fake_actors import FakeActorResolver

            _actor_resolver_instance = FakeActorResolver()
        else:
            raise ValueError(f"Unknown actor resolver adapter: {adapter}")
    return _actor_resolver_instance


def configure_alerting(notifier=None, actor_resolver=None):
    """Install explicit adapters, e.g. clients for the notification and identity services."""
    global _notifier_instance, _actor_resolver_instance
    if notifier is not None:
        _notifier_instance = notifier
    if actor_resolver is not None:
        _actor_resolver_instance = actor_resolver


def reset_alerting():
    """Reset the adapter singletons (useful for testing)."""
    global _notifier_instance, _actor_resolver_instance
    _notifier_instance = None
    _actor_resolver_instance = None
