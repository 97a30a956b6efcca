"""Remote cart gateway adapters.

- HttpCartGateway talks to the storefront API
- FakeCartGateway keeps the cart in memory for development and tests
"""

from cart.remote.fake_adapter import FakeCartGateway
from cart.remote.http_adapter import HttpCartGateway
from cart.remote.port import CartGateway

__all__ = ["CartGateway", "FakeCartGateway", "HttpCartGateway"]
