"""Payment sheet adapters.

- CallbackPaymentSheet drives the provider's runtime-loaded checkout SDK
- FakePaymentSheet for development and testing
"""

from checkout.provider.callback_adapter import CallbackPaymentSheet
from checkout.provider.fake_adapter import FakePaymentSheet
from checkout.provider.port import (
    PaymentCompleted,
    PaymentDismissed,
    PaymentOutcome,
    PaymentSheet,
    PaymentSheetOptions,
)

__all__ = [
    "CallbackPaymentSheet",
    "FakePaymentSheet",
    "PaymentCompleted",
    "PaymentDismissed",
    "PaymentOutcome",
    "PaymentSheet",
    "PaymentSheetOptions",
]
