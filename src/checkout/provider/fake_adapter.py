"""Configurable fake payment sheet for development and testing.

Resolves immediately with the configured outcome instead of showing a real
provider UI, and records every sheet it was asked to open.
"""

from uuid import uuid4

from checkout.provider.port import (
    PaymentCompleted,
    PaymentDismissed,
    PaymentOutcome,
    PaymentSheet,
    PaymentSheetOptions,
)
from shared.exceptions import PaymentProviderUnavailable


class FakePaymentSheet(PaymentSheet):
    COMPLETE = "complete"
    DISMISS = "dismiss"
    UNAVAILABLE = "unavailable"

    def __init__(self) -> None:
        self.outcome: str = self.COMPLETE
        self.opened: list[PaymentSheetOptions] = []

    def configure(self, outcome: str) -> None:
        """Configure how the next sheets end: complete, dismiss or unavailable."""
        self.outcome = outcome

    async def open(self, options: PaymentSheetOptions) -> PaymentOutcome:
        self.opened.append(options)

        if self.outcome == self.UNAVAILABLE:
            raise PaymentProviderUnavailable()
        if self.outcome == self.DISMISS:
            return PaymentDismissed()
        return PaymentCompleted(
            provider_order_id=options.provider_order_id,
            provider_payment_id=f"pay_{uuid4().hex[:14]}",
            provider_signature=f"sig_{uuid4().hex}",
        )
