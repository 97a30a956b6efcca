"""Product catalog adapters."""

from cart.catalog.fake_adapter import InMemoryProductCatalog
from cart.catalog.http_adapter import HttpProductCatalog
from cart.catalog.port import ProductCatalog

__all__ = ["HttpProductCatalog", "InMemoryProductCatalog", "ProductCatalog"]
