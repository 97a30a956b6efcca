"""Product catalog backed by the storefront API.

The API only looks products up by slug, so guest lines are priced from the
paged product listing, filtered down to the ids in the cart. Pages are read
until every requested id is found or the listing ends; ids that never show
up are treated like deleted products and left out.
"""

from pydantic import BaseModel, Field

from cart.catalog.port import ProductCatalog
from cart.models import Product
from shared.api import ApiClient, parse_payload


class ProductPage(BaseModel):
    content: list[Product] = Field(default_factory=list)
    last: bool = True
    total_pages: int | None = Field(default=None, alias="totalPages")


class HttpProductCatalog(ProductCatalog):
    def __init__(self, api: ApiClient, page_size: int = 100, max_pages: int = 20) -> None:
        self.api = api
        self.page_size = page_size
        self.max_pages = max_pages

    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        wanted = set(product_ids)
        found: dict[int, Product] = {}

        page_number = 0
        while wanted - found.keys() and page_number < self.max_pages:
            data = await self.api.get("/products", params={"page": page_number, "size": self.page_size})
            page = parse_payload(ProductPage, data or {})
            found.update({product.id: product for product in page.content if product.id in wanted})

            page_number += 1
            if page.last or not page.content or (page.total_pages is not None and page_number >= page.total_pages):
                break

        return found
