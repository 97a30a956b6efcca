"""In-memory remote cart for development and testing.

Mirrors the server's cart rules without any network calls:
- adding more than the available stock is rejected
- merging skips unknown or inactive products and clamps quantities to stock
- every response is a fresh ``Cart`` snapshot

It can be configured to fail, and records every call so tests can assert
what reached the "server".
"""

from dataclasses import dataclass
from decimal import Decimal

from cart.models import Cart, CartLine, GuestItem, Product
from cart.remote.port import CartGateway
from shared.exceptions import BusinessRuleError


@dataclass
class _Line:
    line_id: int
    product_id: int
    unit_price: Decimal
    quantity: int


class FakeCartGateway(CartGateway):
    """Configurable in-memory cart server."""

    def __init__(self, products: list[Product] | None = None, cart_id: int = 1) -> None:
        self.cart_id = cart_id
        self.products: dict[int, Product] = {p.id: p for p in products or []}
        self.lines: list[_Line] = []
        self.calls: list[dict] = []
        self.failure: Exception | None = None
        self._next_line_id = 1

    def configure(self, failure: Exception | None = None) -> None:
        """Make every following call raise ``failure`` (``None`` to recover)."""
        self.failure = failure

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append({"method": method, **kwargs})
        if self.failure is not None:
            raise self.failure

    def _snapshot(self) -> Cart:
        lines = []
        for line in self.lines:
            product = self.products[line.product_id]
            lines.append(
                CartLine(
                    line_id=line.line_id,
                    product_id=line.product_id,
                    product_name=product.name,
                    product_slug=product.slug,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    available_quantity=product.stock_qty,
                    in_stock=product.stock_qty > 0,
                )
            )
        return Cart(cart_id=self.cart_id, lines=lines)

    def _line_for_product(self, product_id: int) -> _Line | None:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def _line(self, line_id: int) -> _Line:
        line = next((line for line in self.lines if line.line_id == line_id), None)
        if line is None:
            raise BusinessRuleError("Cart item not found", status_code=404)
        return line

    def _append(self, product: Product, quantity: int) -> None:
        self.lines.append(
            _Line(
                line_id=self._next_line_id,
                product_id=product.id,
                unit_price=product.price,
                quantity=quantity,
            )
        )
        self._next_line_id += 1

    async def get(self) -> Cart:
        self._record("get")
        return self._snapshot()

    async def add_item(self, product_id: int, quantity: int) -> Cart:
        self._record("add_item", product_id=product_id, quantity=quantity)

        product = self.products.get(product_id)
        if product is None or not product.active:
            raise BusinessRuleError("Product is not available", status_code=400)

        existing = self._line_for_product(product_id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > product.stock_qty:
            raise BusinessRuleError(f"Insufficient stock. Available: {product.stock_qty}", status_code=400)

        if existing:
            existing.quantity = new_quantity
        else:
            self._append(product, quantity)
        return self._snapshot()

    async def update_item(self, line_id: int, quantity: int) -> Cart:
        self._record("update_item", line_id=line_id, quantity=quantity)

        line = self._line(line_id)
        stock = self.products[line.product_id].stock_qty
        if quantity > stock:
            raise BusinessRuleError(f"Insufficient stock. Available: {stock}", status_code=400)

        line.quantity = quantity
        return self._snapshot()

    async def remove_item(self, line_id: int) -> Cart:
        self._record("remove_item", line_id=line_id)

        self.lines.remove(self._line(line_id))
        return self._snapshot()

    async def merge(self, items: list[GuestItem]) -> Cart:
        self._record("merge", items=[(item.product_id, item.quantity) for item in items])

        for item in items:
            product = self.products.get(item.product_id)
            if product is None or not product.active:
                continue

            to_add = min(item.quantity, product.stock_qty)
            if to_add <= 0:
                continue

            existing = self._line_for_product(item.product_id)
            if existing:
                existing.quantity = min(existing.quantity + to_add, product.stock_qty)
            else:
                self._append(product, to_add)
        return self._snapshot()

    def clear(self) -> None:
        """Empty the server cart, as the backend does once an order is paid."""
        self.lines.clear()
