"""Pydantic models for cart payloads exchanged with the storefront API.

These are external contracts: field aliases match the API's camelCase JSON,
attribute names are what the rest of the client uses. Totals are derived
from the lines on the client so ``subtotal`` and ``item_count`` always agree
with the lines being displayed.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Product(_WireModel):
    id: int
    name: str
    slug: str | None = None
    price: Decimal
    currency: str = "INR"
    images: list[str] = Field(default_factory=list)
    stock_qty: int = Field(default=0, alias="stockQty")
    active: bool = True
    in_stock: bool = Field(default=True, alias="inStock")


class CartLine(_WireModel):
    """One cart line. ``line_id`` is ``None`` for lines of a guest view cart."""

    line_id: int | None = Field(default=None, alias="id")
    product_id: int = Field(alias="productId")
    product_name: str | None = Field(default=None, alias="productName")
    product_slug: str | None = Field(default=None, alias="productSlug")
    product_image: str | None = Field(default=None, alias="productImage")
    unit_price: Decimal = Field(alias="unitPrice")
    quantity: int = Field(ge=1, alias="qty")
    available_quantity: int = Field(default=0, alias="availableQty")
    in_stock: bool = Field(default=True, alias="inStock")

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @classmethod
    def for_guest(cls, product: Product, quantity: int) -> "CartLine":
        return cls(
            product_id=product.id,
            product_name=product.name,
            product_slug=product.slug,
            product_image=product.images[0] if product.images else None,
            unit_price=product.price,
            quantity=quantity,
            available_quantity=product.stock_qty,
            in_stock=product.in_stock,
        )


class Cart(_WireModel):
    cart_id: int | None = Field(default=None, alias="id")
    lines: list[CartLine] = Field(default_factory=list, alias="items")

    @property
    def subtotal(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line_for_product(self, product_id: int) -> CartLine | None:
        return next((line for line in self.lines if line.product_id == product_id), None)


class GuestItem(_WireModel):
    """A ``{productId, qty}`` pair as submitted to the merge endpoint."""

    product_id: int = Field(alias="productId")
    quantity: int = Field(ge=1, alias="qty")
