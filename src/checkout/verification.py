"""Payment verification client.

The backend is the only party that can confirm a payment: it checks the
provider signature, marks the order paid and clears the cart. This client
just relays its answer. It sends at most one verification per provider
order; a repeat for the same order is refused locally.
"""

import structlog

from checkout.models import PaymentVerificationRequest, VerificationResult
from shared.api import ApiClient, parse_payload
from shared.exceptions import VerificationAlreadySubmitted

logger = structlog.get_logger(__name__)


class PaymentVerificationClient:
    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self._submitted: set[str] = set()

    async def verify(self, request: PaymentVerificationRequest) -> VerificationResult:
        if request.provider_order_id in self._submitted:
            raise VerificationAlreadySubmitted()
        self._submitted.add(request.provider_order_id)

        data = await self.api.post("/checkout/verify-payment", json=request.model_dump(by_alias=True))
        result = parse_payload(VerificationResult, data)
        logger.info(
            "Payment verification answered",
            provider_order_id=request.provider_order_id,
            success=result.success,
            order_id=result.order_id,
        )
        return result
