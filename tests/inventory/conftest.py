import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def inventory_bed():
    from inventory.domain import inventory

    bed = DomainFixture(inventory)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(inventory_bed):
    with inventory_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _alerting():
    """Fresh fake notifier and actor resolver for every test."""
    from inventory.alerting import reset_alerting

    reset_alerting()
    yield
    reset_alerting()


@pytest.fixture()
def notifier():
    from inventory.alerting import get_notifier

    return get_notifier()


@pytest.fixture()
def actors():
    from inventory.alerting import get_actor_resolver

    return get_actor_resolver()
