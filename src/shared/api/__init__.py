"""Storefront API client."""

from shared.api.client import ApiClient, parse_payload

__all__ = ["ApiClient", "parse_payload"]
