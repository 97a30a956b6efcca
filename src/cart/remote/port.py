"""Remote cart gateway port (abstract interface).

The authenticated cart is owned by the server. Every operation returns the
cart as the server sees it after the change; callers treat that response as
the new ground truth.
"""

from abc import ABC, abstractmethod

from cart.models import Cart, GuestItem


class CartGateway(ABC):
    """Abstract remote cart interface."""

    @abstractmethod
    async def get(self) -> Cart:
        """Fetch the current server-side cart."""
        ...

    @abstractmethod
    async def add_item(self, product_id: int, quantity: int) -> Cart:
        """Add a product, or increase its quantity on the server."""
        ...

    @abstractmethod
    async def update_item(self, line_id: int, quantity: int) -> Cart:
        """Replace the quantity of an existing cart line."""
        ...

    @abstractmethod
    async def remove_item(self, line_id: int) -> Cart:
        """Delete a cart line."""
        ...

    @abstractmethod
    async def merge(self, items: list[GuestItem]) -> Cart:
        """Fold guest cart lines into the server cart in a single request.

        Not safe to repeat: a second call adds the quantities again.
        """
        ...
