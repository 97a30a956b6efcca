"""Checkout orchestrator: drives one payment attempt from start to outcome.

State Machine:
    IDLE → ORDER_CREATING → TEST_SIMULATING  → VERIFYING → SUCCEEDED
    IDLE → ORDER_CREATING → PAYMENT_AWAITING → VERIFYING → SUCCEEDED
    ORDER_CREATING / TEST_SIMULATING / PAYMENT_AWAITING / VERIFYING → FAILED
    SUCCEEDED / FAILED → IDLE (next attempt, with a new provider order)

Only a verification answered with ``success: true`` leads to SUCCEEDED.
Attempts are never retried automatically and never run concurrently. An
attempt interrupted by an unexpected error or a cancellation still ends in
FAILED before the error propagates, so the next attempt can start.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

import structlog

from cart.facade import CartFacade
from checkout.models import CheckoutOrder, PaymentVerificationRequest
from checkout.orders import CheckoutOrderClient
from checkout.provider.port import PaymentDismissed, PaymentSheet, PaymentSheetOptions
from checkout.verification import PaymentVerificationClient
from shared.config import Settings
from shared.exceptions import (
    BusinessRuleError,
    CheckoutInProgressError,
    EmptyCartError,
    LoginRequiredError,
    PaymentProviderUnavailable,
    StorefrontError,
    error_message,
)

logger = structlog.get_logger(__name__)

ORDER_FAILED_MESSAGE = "Failed to start checkout. Please try again."
CANCELLED_MESSAGE = "Payment cancelled"
VERIFICATION_FAILED_MESSAGE = (
    "Payment verification failed. Please check your orders or contact support before trying to pay again."
)
SUCCESS_MESSAGE = "Payment successful!"


class CheckoutState(Enum):
    IDLE = "Idle"
    ORDER_CREATING = "OrderCreating"
    TEST_SIMULATING = "TestSimulating"
    PAYMENT_AWAITING = "PaymentAwaiting"
    VERIFYING = "Verifying"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class FailureReason(Enum):
    ORDER_FAILED = "order_failed"
    CANCELLED = "cancelled"
    UNAVAILABLE = "unavailable"
    VERIFICATION_FAILED = "verification_failed"


_VALID_TRANSITIONS = {
    CheckoutState.IDLE: {CheckoutState.ORDER_CREATING},
    CheckoutState.ORDER_CREATING: {
        CheckoutState.TEST_SIMULATING,
        CheckoutState.PAYMENT_AWAITING,
        CheckoutState.FAILED,
    },
    CheckoutState.TEST_SIMULATING: {CheckoutState.VERIFYING, CheckoutState.FAILED},
    CheckoutState.PAYMENT_AWAITING: {CheckoutState.VERIFYING, CheckoutState.FAILED},
    CheckoutState.VERIFYING: {CheckoutState.SUCCEEDED, CheckoutState.FAILED},
    CheckoutState.SUCCEEDED: {CheckoutState.IDLE},
    CheckoutState.FAILED: {CheckoutState.IDLE},
}


# Steps an attempt can be interrupted in, with how the interruption is reported
_ABANDONED_STEPS = {
    CheckoutState.ORDER_CREATING: (FailureReason.ORDER_FAILED, ORDER_FAILED_MESSAGE, True),
    CheckoutState.TEST_SIMULATING: (FailureReason.CANCELLED, CANCELLED_MESSAGE, True),
    CheckoutState.PAYMENT_AWAITING: (FailureReason.CANCELLED, CANCELLED_MESSAGE, True),
    CheckoutState.VERIFYING: (FailureReason.VERIFICATION_FAILED, VERIFICATION_FAILED_MESSAGE, False),
}


class InvalidCheckoutTransition(StorefrontError):
    pass


@dataclass(frozen=True)
class CheckoutSnapshot:
    """What subscribers see after every state change."""

    state: CheckoutState = CheckoutState.IDLE
    attempt: int = 0
    message: str | None = None
    failure_reason: FailureReason | None = None
    retryable: bool = False
    provider_order_id: str | None = None
    provider_payment_id: str | None = None
    order_id: int | None = None
    test_mode: bool = False


Listener = Callable[[CheckoutSnapshot], None]


class CheckoutOrchestrator:
    def __init__(
        self,
        facade: CartFacade,
        orders: CheckoutOrderClient,
        payment_sheet: PaymentSheet,
        verifier: PaymentVerificationClient,
        settings: Settings | None = None,
    ) -> None:
        self.facade = facade
        self.orders = orders
        self.payment_sheet = payment_sheet
        self.verifier = verifier
        self.settings = settings or Settings()

        self._snapshot = CheckoutSnapshot()
        self._listeners: list[Listener] = []
        self._in_flight = False
        self._last_test_stamp = 0

    # -------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------
    @property
    def snapshot(self) -> CheckoutSnapshot:
        return self._snapshot

    @property
    def state(self) -> CheckoutState:
        return self._snapshot.state

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` on every transition. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, state: CheckoutState, **changes) -> CheckoutSnapshot:
        current = self._snapshot.state
        if state not in _VALID_TRANSITIONS[current]:
            raise InvalidCheckoutTransition(f"Cannot move checkout from {current.value} to {state.value}")

        if state == CheckoutState.IDLE:
            self._snapshot = CheckoutSnapshot(attempt=self._snapshot.attempt)
        else:
            self._snapshot = replace(self._snapshot, state=state, **changes)

        logger.info(
            "Checkout state changed",
            from_state=current.value,
            to_state=state.value,
            attempt=self._snapshot.attempt,
        )
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def _fail(self, reason: FailureReason, message: str, retryable: bool = True) -> CheckoutSnapshot:
        logger.warning(
            "Checkout attempt failed",
            reason=reason.value,
            attempt=self._snapshot.attempt,
            provider_order_id=self._snapshot.provider_order_id,
        )
        return self._transition(
            CheckoutState.FAILED,
            failure_reason=reason,
            message=message,
            retryable=retryable,
        )

    def _abandon(self) -> CheckoutSnapshot:
        """End an attempt that was interrupted by an unexpected error or cancellation."""
        reason, message, retryable = _ABANDONED_STEPS[self.state]
        logger.warning("Checkout attempt interrupted", state=self.state.value, attempt=self._snapshot.attempt)
        return self._fail(reason, message, retryable=retryable)

    # -------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------
    async def start(self) -> CheckoutSnapshot:
        """Run one checkout attempt and return its final snapshot.

        Raises ``LoginRequiredError`` for guests (send them to login first),
        ``EmptyCartError`` for an empty cart, and ``CheckoutInProgressError``
        while another attempt is still running. None of these leave IDLE.
        """
        if self._in_flight:
            raise CheckoutInProgressError()
        if not self.facade.is_authenticated:
            raise LoginRequiredError()

        self._in_flight = True
        try:
            cart = await self.facade.get_cart()
            if cart.is_empty:
                raise EmptyCartError()
            return await self._run()
        finally:
            if self.state in _ABANDONED_STEPS:
                self._abandon()
            self._in_flight = False

    async def _run(self) -> CheckoutSnapshot:
        if self.state != CheckoutState.IDLE:
            self._transition(CheckoutState.IDLE)

        self._snapshot = replace(self._snapshot, attempt=self._snapshot.attempt + 1)
        self._transition(CheckoutState.ORDER_CREATING)

        try:
            order = await self.orders.create_order()
        except StorefrontError as exc:
            message = exc.message if isinstance(exc, BusinessRuleError) else ORDER_FAILED_MESSAGE
            return self._fail(FailureReason.ORDER_FAILED, message)

        if order.test_mode:
            self._transition(
                CheckoutState.TEST_SIMULATING,
                provider_order_id=order.provider_order_id,
                test_mode=True,
            )
            request = await self._simulate_payment(order)
        else:
            self._transition(CheckoutState.PAYMENT_AWAITING, provider_order_id=order.provider_order_id)
            try:
                outcome = await self.payment_sheet.open(self._sheet_options(order))
            except PaymentProviderUnavailable as exc:
                return self._fail(FailureReason.UNAVAILABLE, error_message(exc))
            except Exception:
                logger.exception("Payment sheet failed unexpectedly", provider_order_id=order.provider_order_id)
                return self._fail(FailureReason.UNAVAILABLE, PaymentProviderUnavailable.default_message)

            if isinstance(outcome, PaymentDismissed):
                return self._fail(FailureReason.CANCELLED, CANCELLED_MESSAGE)

            request = PaymentVerificationRequest(
                provider_order_id=outcome.provider_order_id,
                provider_payment_id=outcome.provider_payment_id,
                provider_signature=outcome.provider_signature,
            )

        return await self._verify(request)

    # -------------------------------------------------------------------
    # Payment step
    # -------------------------------------------------------------------
    def _sheet_options(self, order: CheckoutOrder) -> PaymentSheetOptions:
        return PaymentSheetOptions(
            key=order.key_id,
            amount=order.amount,
            currency=order.currency,
            provider_order_id=order.provider_order_id,
            name=self.settings.merchant_name,
            description=self.settings.payment_description,
            prefill=order.prefill,
            theme_color=self.settings.theme_color,
        )

    def _next_test_stamp(self) -> int:
        # Milliseconds, strictly increasing within this orchestrator
        stamp = max(int(time.time() * 1000), self._last_test_stamp + 1)
        self._last_test_stamp = stamp
        return stamp

    async def _simulate_payment(self, order: CheckoutOrder) -> PaymentVerificationRequest:
        await asyncio.sleep(self.settings.test_payment_delay)
        stamp = self._next_test_stamp()
        return PaymentVerificationRequest(
            provider_order_id=order.provider_order_id,
            provider_payment_id=f"test_pay_{stamp}",
            provider_signature=f"test_signature_{stamp}",
        )

    # -------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------
    async def _verify(self, request: PaymentVerificationRequest) -> CheckoutSnapshot:
        self._transition(
            CheckoutState.VERIFYING,
            provider_order_id=request.provider_order_id,
            provider_payment_id=request.provider_payment_id,
        )

        try:
            result = await self.verifier.verify(request)
        except StorefrontError as exc:
            logger.warning("Payment verification errored", error=error_message(exc))
            return self._fail(FailureReason.VERIFICATION_FAILED, VERIFICATION_FAILED_MESSAGE, retryable=False)

        if not result.success:
            return self._fail(FailureReason.VERIFICATION_FAILED, VERIFICATION_FAILED_MESSAGE, retryable=False)

        self.facade.invalidate()
        return self._transition(
            CheckoutState.SUCCEEDED,
            order_id=result.order_id,
            message=result.message or SUCCESS_MESSAGE,
        )
