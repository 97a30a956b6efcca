"""Async HTTP client for the storefront API.

Every endpoint answers with the envelope ``{"success", "message", "data"}``.
``ApiClient`` attaches the bearer token of the current session, unwraps the
envelope and maps transport and HTTP failures onto ``shared.exceptions``.
"""

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from shared.exceptions import (
    ApiError,
    AuthenticationError,
    BusinessRuleError,
    TransportError,
)

logger = structlog.get_logger(__name__)

_BUSINESS_RULE_STATUSES = {400, 404, 409, 422}
_AUTH_STATUSES = {401, 403}

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` speaking the API envelope."""

    def __init__(
        self,
        base_url: str,
        token_provider: Callable[[], str | None] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the unwrapped ``data`` of the envelope."""
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers(),
            )
        except httpx.TransportError as exc:
            logger.warning("API request failed before a response", method=method, path=path, error=str(exc))
            raise TransportError() from exc

        body = _json_or_none(response)

        if response.is_error:
            message = _message_from(body) or response.reason_phrase or None
            logger.info(
                "API request rejected",
                method=method,
                path=path,
                status_code=response.status_code,
                message=message,
            )
            if response.status_code in _AUTH_STATUSES:
                raise AuthenticationError(message, status_code=response.status_code)
            if response.status_code in _BUSINESS_RULE_STATUSES:
                raise BusinessRuleError(message, status_code=response.status_code)
            raise ApiError(message, status_code=response.status_code)

        if not isinstance(body, dict):
            raise ApiError("Unexpected response from server", status_code=response.status_code)
        if body.get("success") is False:
            raise BusinessRuleError(_message_from(body), status_code=response.status_code)

        return body.get("data")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _message_from(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def parse_payload(model: type[ModelT], data: Any) -> ModelT:
    """Validate an unwrapped ``data`` payload, reporting a malformed one as ``ApiError``."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "API payload did not match the expected shape",
            model=model.__name__,
            errors=exc.error_count(),
        )
        raise ApiError("Unexpected response from server") from exc
