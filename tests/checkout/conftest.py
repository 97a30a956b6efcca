"""Checkout collaborators and fixtures shared by the checkout tests."""

import pytest
from checkout.models import CheckoutOrder, Prefill, VerificationResult
from shared.config import Settings


class FakeOrderClient:
    """Hands out provider orders the way the backend does, without a network."""

    def __init__(self, test_mode=False, amount=50000, currency="INR"):
        self.test_mode = test_mode
        self.amount = amount
        self.currency = currency
        self.failure = None
        self.created: list[CheckoutOrder] = []

    def configure(self, failure=None, test_mode=None):
        self.failure = failure
        if test_mode is not None:
            self.test_mode = test_mode

    async def create_order(self):
        if self.failure is not None:
            raise self.failure

        order = CheckoutOrder(
            provider_order_id=f"order_{len(self.created) + 1}",
            amount=self.amount,
            currency=self.currency,
            test_mode=self.test_mode,
            key_id=None if self.test_mode else "rzp_test_key",
            internal_order_id=40 + len(self.created) + 1,
            prefill=Prefill(name="Asha Rao", email="asha@example.com", contact="9999999999"),
        )
        self.created.append(order)
        return order


class FakeVerifier:
    """Records verification requests and answers with a configured result."""

    def __init__(self):
        self.requests = []
        self.result = VerificationResult(success=True, order_id=42, message="Payment verified")
        self.failure = None

    def configure(self, result=None, failure=None):
        if result is not None:
            self.result = result
        self.failure = failure

    async def verify(self, request):
        self.requests.append(request)
        if self.failure is not None:
            raise self.failure
        return self.result


@pytest.fixture
def settings():
    return Settings(test_payment_delay=0)


@pytest.fixture
def orders():
    return FakeOrderClient()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def payment_sheet():
    from checkout.provider.fake_adapter import FakePaymentSheet

    return FakePaymentSheet()


@pytest.fixture
def signed_in_with_items(session, auth_response, gateway):
    """A signed-in customer whose server cart holds two Rose Candles."""
    import asyncio

    session.sign_in(auth_response)
    asyncio.run(gateway.add_item(7, 2))
    gateway.calls.clear()


@pytest.fixture
def orchestrator(facade, orders, payment_sheet, verifier, settings):
    from checkout.orchestrator import CheckoutOrchestrator

    return CheckoutOrchestrator(
        facade=facade,
        orders=orders,
        payment_sheet=payment_sheet,
        verifier=verifier,
        settings=settings,
    )
