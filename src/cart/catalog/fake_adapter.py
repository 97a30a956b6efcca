"""In-memory product catalog for development and testing."""

from cart.catalog.port import ProductCatalog
from cart.models import Product


class InMemoryProductCatalog(ProductCatalog):
    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: dict[int, Product] = {p.id: p for p in products or []}
        self.failure: Exception | None = None
        self.lookups: list[list[int]] = []

    def configure(self, failure: Exception | None = None) -> None:
        self.failure = failure

    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        self.lookups.append(list(product_ids))
        if self.failure is not None:
            raise self.failure
        return {pid: self.products[pid] for pid in product_ids if pid in self.products}
