from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Tuple
from uuid import UUID, uuid4

from laundry_pos.core.domain.model.inventory import OrderProduct
from laundry_pos.core.domain.model.laundry import ServiceLine
from laundry_pos.core.domain.model.money import Money


@dataclass(frozen=True)
class OrderId:
    value: UUID

    @staticmethod
    def new() -> "OrderId":
        return OrderId(uuid4())


@dataclass(frozen=True)
class ReceiptId:
    value: str


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class WorkerSession:
    """The signed-in cashier, passed explicitly to the checkout."""

    employee_id: str
    email: str


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    receipt_id: ReceiptId
    services: Tuple[ServiceLine, ...]
    products: Tuple[OrderProduct, ...]
    total_amount: Money
    payment_method: str
    customer_name: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    status: OrderStatus = OrderStatus.PENDING


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
