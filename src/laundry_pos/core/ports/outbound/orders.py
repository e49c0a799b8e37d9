from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.order import Order, OrderId, OrderStatus


class OrderRepository(Protocol):
    def save(self, order: Order) -> Result[OrderId, CheckoutError]: ...

    def get(self, order_id: OrderId) -> Result[Order, CheckoutError]: ...

    def list(
        self,
        offset: int,
        limit: int,
        status: OrderStatus | None = None,
        search: str | None = None,
    ) -> Result[Sequence[Order], CheckoutError]:
        """Newest first."""
        ...

    def update_status(
        self, order_id: OrderId, status: OrderStatus, at: datetime
    ) -> Result[Order, CheckoutError]: ...
