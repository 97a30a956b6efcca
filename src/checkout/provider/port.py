"""Payment sheet port (abstract interface).

The provider's checkout SDK is callback driven: it is opened with the order
details and later calls back with either a completed payment or a dismissal.
``PaymentSheet.open`` hides that behind a single awaitable that resolves to
one of the two outcomes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from checkout.models import Prefill


@dataclass(frozen=True)
class PaymentSheetOptions:
    key: str | None
    amount: int
    currency: str
    provider_order_id: str
    name: str
    description: str
    prefill: Prefill
    theme_color: str


@dataclass(frozen=True)
class PaymentCompleted:
    """The customer paid; these values go to the backend for verification."""

    provider_order_id: str
    provider_payment_id: str
    provider_signature: str


@dataclass(frozen=True)
class PaymentDismissed:
    """The customer closed the payment sheet without paying."""


PaymentOutcome = PaymentCompleted | PaymentDismissed


class PaymentSheet(ABC):
    @abstractmethod
    async def open(self, options: PaymentSheetOptions) -> PaymentOutcome:
        """Show the payment sheet and wait for the customer to finish or dismiss it.

        Raises ``PaymentProviderUnavailable`` when the SDK cannot be loaded
        or refuses to start.
        """
        ...
