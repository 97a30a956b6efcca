"""Remote cart gateway backed by the storefront REST API."""

from cart.models import Cart, GuestItem
from cart.remote.port import CartGateway
from shared.api import ApiClient, parse_payload


class HttpCartGateway(CartGateway):
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def get(self) -> Cart:
        return parse_payload(Cart, await self.api.get("/cart"))

    async def add_item(self, product_id: int, quantity: int) -> Cart:
        data = await self.api.post("/cart/items", json={"productId": product_id, "qty": quantity})
        return parse_payload(Cart, data)

    async def update_item(self, line_id: int, quantity: int) -> Cart:
        data = await self.api.patch(f"/cart/items/{line_id}", json={"qty": quantity})
        return parse_payload(Cart, data)

    async def remove_item(self, line_id: int) -> Cart:
        return parse_payload(Cart, await self.api.delete(f"/cart/items/{line_id}"))

    async def merge(self, items: list[GuestItem]) -> Cart:
        payload = {"guestItems": [item.model_dump(by_alias=True) for item in items]}
        return parse_payload(Cart, await self.api.post("/cart/merge", json=payload))
