"""Push delivery through an HTTP gateway."""

from __future__ import annotations

from .http_gateway import HttpGatewayClient


class HttpPushProvider(HttpGatewayClient):
    gateway_name = "Push gateway"

    async def send_push(self, device_token: str, title: str, body: str) -> bool:
        return await self._post({"token": device_token, "title": title, "body": body})


__all__ = ["HttpPushProvider"]
