"""Storefront client composition root.

Wires the session, API client, cart facade and checkout orchestrator for one
running client. Nothing here is a module-level singleton: embedders call
``bootstrap()`` once at startup to initialise the cart domain, then build a
``Storefront`` per visitor session.

Usage:
    bootstrap()
    async with build_storefront(session_id="device-123", load_sdk=load_razorpay) as storefront:
        await storefront.cart.add(7, 2)
        await storefront.login(auth_response)
        result = await storefront.checkout.start()
"""

from dataclasses import dataclass

import httpx

from cart.catalog.http_adapter import HttpProductCatalog
from cart.domain import cart as cart_domain
from cart.facade import CartFacade, MergeOutcome
from cart.guest.store import LocalCartStore
from cart.remote.http_adapter import HttpCartGateway
from checkout.orchestrator import CheckoutOrchestrator
from checkout.orders import CheckoutOrderClient
from checkout.provider.callback_adapter import CallbackPaymentSheet, SdkLoader
from checkout.verification import PaymentVerificationClient
from identity.login import complete_login, logout
from identity.session import AuthResponse, AuthSession
from shared.api import ApiClient
from shared.config import Settings
from shared.logging import configure_logging


def bootstrap() -> None:
    """Configure logging and activate the cart domain for this process."""
    configure_logging()
    cart_domain.init()
    cart_domain.domain_context().push()


async def _sdk_not_installed():
    return None


@dataclass
class Storefront:
    settings: Settings
    session: AuthSession
    api: ApiClient
    cart: CartFacade
    checkout: CheckoutOrchestrator

    async def __aenter__(self) -> "Storefront":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def login(self, auth: AuthResponse) -> MergeOutcome:
        return await complete_login(self.session, self.cart, auth)

    def logout(self) -> None:
        logout(self.session, self.cart)

    async def aclose(self) -> None:
        await self.api.aclose()


def build_storefront(
    session_id: str,
    load_sdk: SdkLoader | None = None,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Storefront:
    """Assemble a client for one device/session against the configured API."""
    settings = settings or Settings.from_env()
    session = AuthSession()
    api = ApiClient(
        settings.api_url,
        token_provider=session.token,
        timeout=settings.http_timeout,
        transport=transport,
    )

    facade = CartFacade(
        session=session,
        local_store=LocalCartStore(session_id),
        gateway=HttpCartGateway(api),
        catalog=HttpProductCatalog(api, page_size=settings.catalog_page_size),
    )
    orchestrator = CheckoutOrchestrator(
        facade=facade,
        orders=CheckoutOrderClient(api),
        payment_sheet=CallbackPaymentSheet(load_sdk or _sdk_not_installed),
        verifier=PaymentVerificationClient(api),
        settings=settings,
    )
    return Storefront(settings=settings, session=session, api=api, cart=facade, checkout=orchestrator)
