from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    OrderNotFound,
    PersistenceError,
)
from laundry_pos.core.domain.model.order import Order, OrderId, OrderStatus
from laundry_pos.core.ports.outbound.orders import OrderRepository


@dataclass
class InMemoryOrderRepository(OrderRepository):
    fail: bool = False
    _store: Dict[str, Order] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def save(self, order: Order) -> Result[OrderId, CheckoutError]:
        if self.fail:
            return Failure(PersistenceError(message="order store is down"))
        key = str(order.order_id.value)
        with self._lock:
            if key in self._store:
                return Failure(PersistenceError(message="order_id already exists"))
            self._store[key] = order
        return Success(order.order_id)

    def get(self, order_id: OrderId) -> Result[Order, CheckoutError]:
        key = str(order_id.value)
        if key not in self._store:
            return Failure(OrderNotFound(message="order not found", order_id=key))
        return Success(self._store[key])

    def list(
        self,
        offset: int,
        limit: int,
        status: OrderStatus | None = None,
        search: str | None = None,
    ) -> Result[Sequence[Order], CheckoutError]:
        orders = list(self._store.values())

        if status is not None:
            orders = [o for o in orders if o.status is status]

        if search:
            needle = search.lower()
            orders = [
                o
                for o in orders
                if needle in o.customer_name.lower()
                or needle in o.receipt_id.value.lower()
            ]

        orders = sorted(orders, key=lambda o: o.created_at, reverse=True)
        return Success(tuple(orders[offset : offset + limit]))

    def update_status(
        self, order_id: OrderId, status: OrderStatus, at: datetime
    ) -> Result[Order, CheckoutError]:
        key = str(order_id.value)
        with self._lock:
            order = self._store.get(key)
            if order is None:
                return Failure(OrderNotFound(message="order not found", order_id=key))
            updated = replace(order, status=status, updated_at=at)
            self._store[key] = updated
        return Success(updated)
