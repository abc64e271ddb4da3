"""Suite-wide pytest hooks.

The Protean pytest plugin selects the config overlay (``--protean-env``,
default ``test``) before any domain module is imported. This module only
tags tests with the layer they exercise.
"""

from pathlib import Path

import pytest

LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
}


def pytest_collection_modifyitems(config, items):
    """Mark each test with the layer named by its directory."""
    for item in items:
        layer = Path(item.fspath).parent.name
        marker = LAYER_MARKERS.get(layer)
        if marker is None:
            continue

        item.add_marker(marker)
        # HTTP, event store and projection round-trips count as slow unless marked fast
        if layer == "integration" and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)
