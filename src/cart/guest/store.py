"""Local cart store: synchronous guest cart operations for one session.

Each call loads the session's ``GuestCart`` from the cart domain's
repository, applies the change and persists it again, so the contents
survive for as long as the configured provider keeps them. Nothing here
touches the network.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from cart.guest.guest_cart import GuestCart


@dataclass(frozen=True)
class LocalCartLine:
    product_id: int
    quantity: int


class LocalCartStore:
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id

    def _load(self) -> GuestCart:
        repo = current_domain.repository_for(GuestCart)
        try:
            return repo.get(self.session_id)
        except ObjectNotFoundError:
            return GuestCart.create(self.session_id)

    def _save(self, guest_cart: GuestCart) -> None:
        current_domain.repository_for(GuestCart).add(guest_cart)

    def add(self, product_id: int, quantity: int) -> None:
        guest_cart = self._load()
        guest_cart.add_product(product_id, quantity)
        self._save(guest_cart)

    def set_quantity(self, product_id: int, quantity: int) -> None:
        guest_cart = self._load()
        guest_cart.set_product_quantity(product_id, quantity)
        self._save(guest_cart)

    def remove(self, product_id: int) -> None:
        guest_cart = self._load()
        guest_cart.remove_product(product_id)
        self._save(guest_cart)

    def clear(self) -> None:
        guest_cart = self._load()
        guest_cart.clear_lines()
        self._save(guest_cart)

    def lines(self) -> list[LocalCartLine]:
        return [LocalCartLine(product_id=line.product_id, quantity=line.quantity) for line in self._load().lines]

    def count(self) -> int:
        return self._load().total_quantity()

    def is_empty(self) -> bool:
        return not self._load().lines
