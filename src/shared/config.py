"""Runtime configuration for the storefront client.

Values come from environment variables so the same build can point at a
local backend, staging, or production without code changes.
"""

import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


@dataclass(frozen=True)
class Settings:
    api_url: str = "http://localhost:8080"
    http_timeout: float = 30.0
    # Pause before a simulated test-mode payment is submitted for verification
    test_payment_delay: float = 1.5
    merchant_name: str = "Jaee"
    payment_description: str = "Order Payment"
    theme_color: str = "#D4A5A5"
    catalog_page_size: int = 100

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``STOREFRONT_*`` environment variables."""
        return cls(
            api_url=os.getenv("STOREFRONT_API_URL", cls.api_url).rstrip("/"),
            http_timeout=_env_float("STOREFRONT_HTTP_TIMEOUT", cls.http_timeout),
            test_payment_delay=_env_float("STOREFRONT_TEST_PAYMENT_DELAY", cls.test_payment_delay),
            merchant_name=os.getenv("STOREFRONT_MERCHANT_NAME", cls.merchant_name),
            payment_description=os.getenv("STOREFRONT_PAYMENT_DESCRIPTION", cls.payment_description),
            theme_color=os.getenv("STOREFRONT_THEME_COLOR", cls.theme_color),
            catalog_page_size=_env_int("STOREFRONT_CATALOG_PAGE_SIZE", cls.catalog_page_size),
        )
