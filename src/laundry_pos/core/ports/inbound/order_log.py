from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.order import Order, WorkerSession


@dataclass(frozen=True)
class ListOrdersQuery:
    offset: int = 0
    limit: int = 50
    status: str = "ALL"  # ALL | PENDING | COMPLETE | CANCELLED
    search: str | None = None  # customer name or receipt id


@dataclass(frozen=True)
class ChangeOrderStatusCommand:
    order_id: str  # UUID string
    actor: WorkerSession


class OrderLogUseCase(Protocol):
    def list_orders(
        self, query: ListOrdersQuery
    ) -> Result[Sequence[Order], CheckoutError]: ...

    def get_order(self, order_id: str) -> Result[Order, CheckoutError]: ...

    def complete_order(
        self, command: ChangeOrderStatusCommand
    ) -> Result[Order, CheckoutError]: ...

    def cancel_order(
        self, command: ChangeOrderStatusCommand
    ) -> Result[Order, CheckoutError]: ...
