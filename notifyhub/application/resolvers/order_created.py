"""``OrderCreated``: confirm a new order to the customer who placed it."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Any

from notifyhub.domain.entities import NotificationRequest, RouteConfig, User
from notifyhub.utils import utc_now

from .base import RouteParameters, UserLookupResolver
from .kinds import ORDER

ROUTE = "OrderCreated"
ESTIMATED_DELIVERY_DAYS = 3


class OrderCreatedParameters(RouteParameters):
    customer_id: int
    order_number: str | None = None
    order_total: Decimal | None = None
    item_count: int | None = None


class OrderCreatedResolver(UserLookupResolver):
    route = ROUTE
    parameters_model = OrderCreatedParameters

    async def resolve_recipients(self, request: NotificationRequest) -> list[User]:
        params = self.parameters(request)
        return await self._single_recipient(params.customer_id)

    async def resolve_full_data(self, request: NotificationRequest) -> dict[str, Any]:
        params = self.parameters(request)
        customer = await self._require_user(params.customer_id, "customerId")
        now = utc_now()
        return {
            "CustomerName": customer.name,
            "OrderNumber": params.order_number or "N/A",
            "OrderTotal": params.order_total if params.order_total is not None else Decimal("0"),
            "ItemCount": params.item_count or 0,
            "OrderDate": now,
            "EstimatedDelivery": now + timedelta(days=ESTIMATED_DELIVERY_DAYS),
        }


CONFIG = RouteConfig(
    name=ROUTE,
    template_name="OrderCreated",
    display_name="Order Created",
    description="Notification sent when a new order is created",
    object_kind=ORDER,
    tags=("order", "purchase", "confirmation"),
)

__all__ = ["CONFIG", "OrderCreatedParameters", "OrderCreatedResolver", "ROUTE"]
