"""Storefront client error taxonomy.

Validation errors are protean ``ValidationError`` and are raised before any
network call. Everything raised from talking to the remote API derives from
``StorefrontError`` so callers can catch the whole family in one place.
"""


class StorefrontError(Exception):
    """Base class for recoverable storefront client errors."""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class TransportError(StorefrontError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    default_message = "Unable to reach the store. Please check your connection and try again."
    retryable = True


class ApiError(StorefrontError):
    """The API answered with an error status or an unsuccessful envelope."""

    retryable = True

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BusinessRuleError(ApiError):
    """The server rejected the request (empty cart, insufficient stock, ...)."""

    retryable = False


class AuthenticationError(ApiError):
    """The access token is missing, expired or rejected."""

    default_message = "Please log in to continue"
    retryable = False


class LoginRequiredError(StorefrontError):
    """An operation that needs an authenticated identity was called as a guest."""

    default_message = "Please login to checkout"


class EmptyCartError(StorefrontError):
    default_message = "Your cart is empty"


class CheckoutInProgressError(StorefrontError):
    """A second checkout was started while one is still in flight."""

    default_message = "A payment is already in progress"


class PaymentProviderUnavailable(StorefrontError):
    """The payment SDK could not be loaded or initialised."""

    default_message = "Failed to load payment gateway"


class VerificationAlreadySubmitted(StorefrontError):
    """Verification for this provider order was already sent from this client."""

    default_message = "Payment verification was already submitted for this order"


def error_message(exc: BaseException) -> str:
    """User-facing text for any error: server message, then exception text."""
    if isinstance(exc, StorefrontError):
        return exc.message
    text = str(exc)
    return text or StorefrontError.default_message
