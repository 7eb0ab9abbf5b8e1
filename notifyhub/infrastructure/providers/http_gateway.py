"""Base client for JSON-over-HTTP delivery gateways."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class HttpGatewayClient:
    """POST JSON payloads to a gateway endpoint with an optional bearer token.

    Transport errors and non-2xx responses are logged and reported as
    ``False``; they never raise.
    """

    gateway_name = "gateway"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _post(self, payload: dict[str, Any]) -> bool:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(self._url, json=payload, headers=self._headers())
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "%s rejected the request with status %s: %s",
                self.gateway_name,
                exc.response.status_code,
                exc.response.text[:500],
            )
            return False
        except httpx.HTTPError as exc:
            logger.error("%s request to %s failed: %s", self.gateway_name, self._url, exc)
            return False
        return True


__all__ = ["HttpGatewayClient"]
