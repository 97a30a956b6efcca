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
    """Select the protean config environment before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def cart_bed():
    from cart.domain import cart

    bed = DomainFixture(cart)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(cart_bed):
    """Run every test inside the cart domain and wipe guest carts afterwards."""
    with cart_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


# ---------------------------------------------------------------------------
# Storefront collaborators shared by the cart, identity and checkout tests
# ---------------------------------------------------------------------------
@pytest.fixture
def products():
    from decimal import Decimal

    from cart.models import Product

    return [
        Product(id=7, name="Rose Candle", slug="rose-candle", price=Decimal("250.00"), stock_qty=10),
        Product(id=8, name="Lavender Soap", slug="lavender-soap", price=Decimal("120.50"), stock_qty=3),
        Product(id=9, name="Jasmine Oil", slug="jasmine-oil", price=Decimal("499.00"), stock_qty=0, in_stock=False),
    ]


@pytest.fixture
def session():
    from identity.session import AuthSession

    return AuthSession()


@pytest.fixture
def auth_response():
    from identity.session import AuthResponse, UserProfile

    return AuthResponse(
        access_token="access-token",
        refresh_token="refresh-token",
        user=UserProfile(id=1, name="Asha Rao", email="asha@example.com", mobile_number="9999999999"),
    )


@pytest.fixture
def local_store():
    from uuid import uuid4

    from cart.guest.store import LocalCartStore

    return LocalCartStore(f"device-{uuid4().hex}")


@pytest.fixture
def gateway(products):
    from cart.remote.fake_adapter import FakeCartGateway

    return FakeCartGateway(products=products)


@pytest.fixture
def catalog(products):
    from cart.catalog.fake_adapter import InMemoryProductCatalog

    return InMemoryProductCatalog(products=products)


@pytest.fixture
def facade(session, local_store, gateway, catalog):
    from cart.facade import CartFacade

    return CartFacade(session=session, local_store=local_store, gateway=gateway, catalog=catalog)
