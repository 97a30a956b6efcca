"""PaymentVerificationClient sends at most one verification per provider order."""

import asyncio
import json

import httpx
import pytest
from checkout.models import PaymentVerificationRequest
from checkout.verification import PaymentVerificationClient
from shared.api import ApiClient
from shared.exceptions import TransportError, VerificationAlreadySubmitted


def _request(order_id="order_1"):
    return PaymentVerificationRequest(
        provider_order_id=order_id,
        provider_payment_id="pay_1",
        provider_signature="sig_1",
    )


def _verify_all(handler, requests):
    """Verify each request in turn, collecting results or raised errors."""

    async def scenario():
        outcomes = []
        async with ApiClient("http://api.test", transport=httpx.MockTransport(handler)) as api:
            client = PaymentVerificationClient(api)
            for request in requests:
                try:
                    outcomes.append(await client.verify(request))
                except Exception as exc:
                    outcomes.append(exc)
        return outcomes

    return asyncio.run(scenario())


def _ok(request):
    return httpx.Response(200, json={"success": True, "message": "OK", "data": {"success": True, "orderId": 42}})


def test_repeat_for_same_order_is_refused_locally():
    sent = []

    def handler(request):
        sent.append(json.loads(request.content))
        return _ok(request)

    first, second = _verify_all(handler, [_request(), _request()])

    assert first.success is True
    assert first.order_id == 42
    assert isinstance(second, VerificationAlreadySubmitted)
    assert len(sent) == 1


def test_different_orders_are_each_sent():
    sent = []

    def handler(request):
        sent.append(json.loads(request.content)["razorpayOrderId"])
        return _ok(request)

    _verify_all(handler, [_request("order_1"), _request("order_2")])

    assert sent == ["order_1", "order_2"]


def test_failed_send_still_counts_as_submitted():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("timed out")

    first, second = _verify_all(handler, [_request(), _request()])

    assert isinstance(first, TransportError)
    assert isinstance(second, VerificationAlreadySubmitted)
    assert len(calls) == 1


@pytest.mark.parametrize("success", [True, False])
def test_result_is_relayed(success):
    def handler(request):
        data = {"success": success, "orderId": 42 if success else None, "message": "done"}
        return httpx.Response(200, json={"success": True, "message": "OK", "data": data})

    (result,) = _verify_all(handler, [_request()])

    assert result.success is success
    assert result.message == "done"
