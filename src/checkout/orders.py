"""Order creation collaborator.

Asks the backend to turn the signed-in customer's cart into a pending order
and a matching payment-provider order. The backend rejects empty carts and
lines that are out of stock; those come back as ``BusinessRuleError``.
"""

import structlog

from checkout.models import CheckoutOrder
from shared.api import ApiClient, parse_payload

logger = structlog.get_logger(__name__)


class CheckoutOrderClient:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def create_order(self) -> CheckoutOrder:
        order = parse_payload(CheckoutOrder, await self.api.post("/checkout/create-order"))
        logger.info(
            "Provider order created",
            provider_order_id=order.provider_order_id,
            internal_order_id=order.internal_order_id,
            amount=order.amount,
            currency=order.currency,
            test_mode=order.test_mode,
        )
        return order
