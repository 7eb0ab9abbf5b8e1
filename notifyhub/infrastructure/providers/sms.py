"""SMS delivery through an HTTP gateway."""

from __future__ import annotations

import httpx

from .http_gateway import HttpGatewayClient


class HttpSmsProvider(HttpGatewayClient):
    gateway_name = "SMS gateway"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        *,
        sender: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(url, token, timeout=timeout, transport=transport)
        self._sender = sender

    async def send_sms(self, to: str, body: str) -> bool:
        payload = {"to": to, "body": body}
        if self._sender:
            payload["from"] = self._sender
        return await self._post(payload)


__all__ = ["HttpSmsProvider"]
