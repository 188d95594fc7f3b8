import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is first imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    """Push domain context before each test, clear all stores after."""
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared actors and products
# ---------------------------------------------------------------------------
def _register(username, role="buyer", password="secret-pass", email=None):
    from protean import current_domain

    from storefront.identity.registration import RegisterUser

    return current_domain.process(
        RegisterUser(username=username, password=password, email=email, role=role),
        asynchronous=False,
    )


@pytest.fixture()
def register():
    """Register a user and return its id."""
    return _register


@pytest.fixture()
def seller_id():
    return _register("seller_sam", role="seller")


@pytest.fixture()
def buyer_id():
    return _register("buyer_bea")


@pytest.fixture()
def add_product(seller_id):
    """Add a product as the default seller and return its id."""
    from protean import current_domain

    from storefront.catalogue.management import AddProduct

    def _add(name="Linen Shirt", price=10.0, stock=5, category="apparel", author_id=None, **extra):
        return current_domain.process(
            AddProduct(
                actor_id=author_id or seller_id,
                name=name,
                price=price,
                stock=stock,
                category=category,
                **extra,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def reject_writes(monkeypatch):
    """Make ``add`` on one aggregate's repository fail, as a rejected store write would."""
    from protean import current_domain

    from storefront.errors import StorageFailure

    def _reject(aggregate_cls):
        def _add(self, item):
            raise StorageFailure(f"{aggregate_cls.__name__} write rejected")

        monkeypatch.setattr(type(current_domain.repository_for(aggregate_cls)), "add", _add)

    return _reject
