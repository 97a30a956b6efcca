"""Product catalog port used to price guest cart lines."""

from abc import ABC, abstractmethod

from cart.models import Product


class ProductCatalog(ABC):
    @abstractmethod
    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Return the requested products keyed by id.

        Products that no longer exist are left out of the result rather than
        reported as errors.
        """
        ...
