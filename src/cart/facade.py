"""Cart facade: one cart API for guests and signed-in customers.

This is the only place that decides between the guest cart and the server
cart:

- Guest: writes go to the ``LocalCartStore``; reads join the local lines with
  catalog data, dropping lines whose product can no longer be found.
- Signed in: writes go to the ``CartGateway``; reads come from a cached copy
  of the server cart. Every write, successful or not, invalidates that copy
  before returning, so the next read reflects what the server holds.

The facade also owns the guest cart merge that runs once after each
successful sign-in.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from cart.catalog.port import ProductCatalog
from cart.guest.store import LocalCartStore
from cart.models import Cart, CartLine, GuestItem
from cart.remote.port import CartGateway
from identity.session import AuthSession
from shared.exceptions import LoginRequiredError, StorefrontError, error_message

logger = structlog.get_logger(__name__)

MERGE_FAILED_WARNING = "We couldn't move the items you added before signing in. They are still saved on this device."
MERGE_DROPPED_WARNING = "Some items you added before signing in are no longer available and were not added to your cart."


@dataclass(frozen=True)
class MergeOutcome:
    """Result of the post-login guest cart merge. Never an error."""

    merged: bool
    skipped: bool = False
    warning: str | None = None
    dropped_product_ids: tuple[int, ...] = ()
    cart: Cart | None = None


class CartFacade:
    def __init__(
        self,
        session: AuthSession,
        local_store: LocalCartStore,
        gateway: CartGateway,
        catalog: ProductCatalog,
    ) -> None:
        self.session = session
        self.local_store = local_store
        self.gateway = gateway
        self.catalog = catalog

        self._cached: Cart | None = None
        self._cache_owner: str | None = None
        self._generation = 0
        self._merged_logins: set[str] = set()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def invalidate(self) -> None:
        """Drop the cached server cart. Reads already in flight won't repopulate it."""
        self._cached = None
        self._cache_owner = None
        self._generation += 1

    # -------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------
    async def get_cart(self) -> Cart:
        if self.is_authenticated:
            return await self._remote_cart()
        return await self._guest_cart()

    async def count(self) -> int:
        """Number of units in the cart, for the header badge."""
        if self.is_authenticated:
            return (await self._remote_cart()).item_count
        return self.local_store.count()

    async def _remote_cart(self) -> Cart:
        login_id = self.session.login_id
        if self._cached is not None and self._cache_owner == login_id:
            return self._cached

        generation = self._generation
        fresh = await self.gateway.get()
        if generation == self._generation and self.session.login_id == login_id:
            self._cached = fresh
            self._cache_owner = login_id
        return fresh

    async def _guest_cart(self) -> Cart:
        lines = self.local_store.lines()
        if not lines:
            return Cart()

        products = await self.catalog.get_products([line.product_id for line in lines])

        view_lines = []
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                logger.debug("Guest cart line has no matching product", product_id=line.product_id)
                continue
            view_lines.append(CartLine.for_guest(product, line.quantity))

        return Cart(lines=view_lines)

    # -------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------
    async def add(self, product_id: int, quantity: int) -> Cart | None:
        """Add a product. Returns the server cart when signed in, else ``None``."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        if not self.is_authenticated:
            self.local_store.add(product_id, quantity)
            return None

        try:
            return await self.gateway.add_item(product_id, quantity)
        finally:
            self.invalidate()

    async def update_quantity(self, product_id: int, quantity: int) -> Cart | None:
        """Set a product's quantity. Zero or less removes it; unknown products are ignored."""
        if not self.is_authenticated:
            self.local_store.set_quantity(product_id, quantity)
            return None

        line = (await self._remote_cart()).line_for_product(product_id)
        if line is None:
            return None

        try:
            if quantity <= 0:
                return await self.gateway.remove_item(line.line_id)
            return await self.gateway.update_item(line.line_id, quantity)
        finally:
            self.invalidate()

    async def remove(self, product_id: int) -> Cart | None:
        if not self.is_authenticated:
            self.local_store.remove(product_id)
            return None

        line = (await self._remote_cart()).line_for_product(product_id)
        if line is None:
            return None

        try:
            return await self.gateway.remove_item(line.line_id)
        finally:
            self.invalidate()

    # -------------------------------------------------------------------
    # Guest cart merge
    # -------------------------------------------------------------------
    async def merge_guest_cart(self) -> MergeOutcome:
        """Move the guest cart into the server cart after a sign-in.

        Runs at most once per login: the merge endpoint adds quantities, so
        repeating it would double them. A failed merge keeps the guest lines
        and returns a warning instead of raising, so sign-in always completes.
        """
        if not self.is_authenticated:
            raise LoginRequiredError("Sign in before merging the guest cart")

        login_id = self.session.login_id
        if login_id in self._merged_logins:
            logger.info("Guest cart merge already ran for this login", login_id=login_id)
            return MergeOutcome(merged=False, skipped=True)
        self._merged_logins.add(login_id)

        lines = self.local_store.lines()
        if not lines:
            logger.debug("Guest cart empty, nothing to merge")
            return MergeOutcome(merged=False, skipped=True)

        items = [GuestItem(product_id=line.product_id, quantity=line.quantity) for line in lines]

        try:
            merged_cart = await self.gateway.merge(items)
        except StorefrontError as exc:
            logger.warning(
                "Guest cart merge failed, keeping guest lines",
                line_count=len(items),
                error=error_message(exc),
            )
            return MergeOutcome(merged=False, warning=MERGE_FAILED_WARNING)
        finally:
            self.invalidate()

        self.local_store.clear()

        dropped = tuple(item.product_id for item in items if merged_cart.line_for_product(item.product_id) is None)
        logger.info(
            "Guest cart merged",
            line_count=len(items),
            dropped_product_ids=list(dropped),
            item_count=merged_cart.item_count,
        )
        return MergeOutcome(
            merged=True,
            warning=MERGE_DROPPED_WARNING if dropped else None,
            dropped_product_ids=dropped,
            cart=merged_cart,
        )
