"""Bridge from the provider's callback SDK to ``PaymentSheet``.

The SDK is loaded at runtime by ``load_sdk``, which returns a factory (or
``None`` when it could not be loaded). The factory takes the provider's
options dict, including a ``handler`` for completed payments and a
``modal.ondismiss`` callback, and returns an object with ``open()``. Either
callback resolves the awaited outcome; callbacks may arrive on another
thread and only the first one counts. A completion missing the payment id
or signature fails the sheet with ``PaymentProviderUnavailable``.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from checkout.provider.port import (
    PaymentCompleted,
    PaymentDismissed,
    PaymentOutcome,
    PaymentSheet,
    PaymentSheetOptions,
)
from shared.exceptions import PaymentProviderUnavailable

logger = structlog.get_logger(__name__)

SdkLoader = Callable[[], Awaitable[Callable[[dict], Any] | None]]


def sdk_options(
    options: PaymentSheetOptions,
    on_complete: Callable[[dict], None],
    on_dismiss: Callable[[], None],
) -> dict:
    return {
        "key": options.key,
        "amount": options.amount,
        "currency": options.currency,
        "name": options.name,
        "description": options.description,
        "order_id": options.provider_order_id,
        "prefill": {
            "name": options.prefill.name,
            "email": options.prefill.email,
            "contact": options.prefill.contact,
        },
        "theme": {"color": options.theme_color},
        "handler": on_complete,
        "modal": {"ondismiss": on_dismiss},
    }


class CallbackPaymentSheet(PaymentSheet):
    def __init__(self, load_sdk: SdkLoader) -> None:
        self.load_sdk = load_sdk

    async def open(self, options: PaymentSheetOptions) -> PaymentOutcome:
        try:
            factory = await self.load_sdk()
        except Exception as exc:
            logger.warning("Payment SDK loader failed", provider_order_id=options.provider_order_id, error=str(exc))
            raise PaymentProviderUnavailable() from exc
        if factory is None:
            logger.warning("Payment SDK could not be loaded", provider_order_id=options.provider_order_id)
            raise PaymentProviderUnavailable()

        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[PaymentOutcome] = loop.create_future()

        def _resolve(value: PaymentOutcome) -> None:
            if not outcome.done():
                outcome.set_result(value)

        def _reject(exc: Exception) -> None:
            if not outcome.done():
                outcome.set_exception(exc)

        def on_complete(response: dict) -> None:
            try:
                completed = PaymentCompleted(
                    provider_order_id=response.get("razorpay_order_id") or options.provider_order_id,
                    provider_payment_id=response["razorpay_payment_id"],
                    provider_signature=response["razorpay_signature"],
                )
            except (KeyError, TypeError, AttributeError):
                logger.warning("Payment SDK returned an incomplete response", provider_order_id=options.provider_order_id)
                loop.call_soon_threadsafe(_reject, PaymentProviderUnavailable("Payment response was incomplete"))
                return
            loop.call_soon_threadsafe(_resolve, completed)

        def on_dismiss() -> None:
            loop.call_soon_threadsafe(_resolve, PaymentDismissed())

        try:
            sheet = factory(sdk_options(options, on_complete, on_dismiss))
        except Exception as exc:
            raise PaymentProviderUnavailable("Failed to initialize payment") from exc
        if sheet is None:
            raise PaymentProviderUnavailable("Failed to initialize payment")

        try:
            sheet.open()
        except Exception as exc:
            raise PaymentProviderUnavailable("Failed to initialize payment") from exc
        return await outcome
