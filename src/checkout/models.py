"""Pydantic models for the checkout endpoints.

Field aliases follow the API's JSON; the verification request keeps the
provider-specific names the backend expects.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Currencies the payment provider charges in whole units
_ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "XAF", "XOF"}


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Prefill(_WireModel):
    name: str | None = None
    email: str | None = None
    contact: str | None = None


class CheckoutOrder(_WireModel):
    """A payment-provider order created for one checkout attempt."""

    provider_order_id: str = Field(alias="orderId")
    amount: int = Field(ge=0)  # minor currency units
    currency: str
    test_mode: bool = Field(default=False, alias="testMode")
    key_id: str | None = Field(default=None, alias="keyId")
    internal_order_id: int | None = Field(default=None, alias="internalOrderId")
    prefill: Prefill = Field(default_factory=Prefill)

    @property
    def major_amount(self) -> Decimal:
        if self.currency.upper() in _ZERO_DECIMAL_CURRENCIES:
            return Decimal(self.amount)
        return Decimal(self.amount) / 100


class PaymentVerificationRequest(_WireModel):
    provider_order_id: str = Field(alias="razorpayOrderId")
    provider_payment_id: str = Field(alias="razorpayPaymentId")
    provider_signature: str = Field(alias="razorpaySignature")


class VerificationResult(_WireModel):
    success: bool
    order_id: int | None = Field(default=None, alias="orderId")
    message: str | None = None
