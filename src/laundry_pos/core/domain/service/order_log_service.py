from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence
from uuid import UUID

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    InvalidStatusTransition,
    ValidationError,
)
from laundry_pos.core.domain.model.order import Order, OrderId, OrderStatus, now_utc
from laundry_pos.core.domain.service.boundary import guarded
from laundry_pos.core.ports.inbound.order_log import (
    ChangeOrderStatusCommand,
    ListOrdersQuery,
    OrderLogUseCase,
)
from laundry_pos.core.ports.outbound.audit import (
    CANCEL_ORDER,
    COMPLETE_ORDER,
    AuditEvent,
    AuditLog,
)
from laundry_pos.core.ports.outbound.orders import OrderRepository

logger = logging.getLogger(__name__)

ORDER_LOG_PAGE = "Order Log"

_ACTIONS = {
    OrderStatus.COMPLETE: COMPLETE_ORDER,
    OrderStatus.CANCELLED: CANCEL_ORDER,
}


@dataclass(frozen=True)
class OrderLogDeps:
    orders: OrderRepository
    audit: AuditLog
    clock: Callable[[], datetime] = now_utc


@dataclass(frozen=True)
class OrderLogService(OrderLogUseCase):
    deps: OrderLogDeps

    def list_orders(
        self, query: ListOrdersQuery
    ) -> Result[Sequence[Order], CheckoutError]:
        if query.offset < 0:
            return Failure(ValidationError(message="offset must be >= 0"))
        if query.limit <= 0:
            return Failure(ValidationError(message="limit must be > 0"))
        if query.limit > 100:
            return Failure(ValidationError(message="limit must be <= 100"))

        status: OrderStatus | None = None
        if query.status != "ALL":
            try:
                status = OrderStatus(query.status)
            except ValueError:
                return Failure(
                    ValidationError(
                        message="status must be one of: ALL, PENDING, COMPLETE, CANCELLED"
                    )
                )

        search = query.search.strip() if query.search else None
        return guarded(
            self.deps.orders.list, query.offset, query.limit, status, search or None
        )

    def get_order(self, order_id: str) -> Result[Order, CheckoutError]:
        return _parse_order_id(order_id).bind(
            lambda oid: guarded(self.deps.orders.get, oid)
        )

    def complete_order(
        self, command: ChangeOrderStatusCommand
    ) -> Result[Order, CheckoutError]:
        return self._transition(command, OrderStatus.COMPLETE)

    def cancel_order(
        self, command: ChangeOrderStatusCommand
    ) -> Result[Order, CheckoutError]:
        return self._transition(command, OrderStatus.CANCELLED)

    def _transition(
        self, command: ChangeOrderStatusCommand, target: OrderStatus
    ) -> Result[Order, CheckoutError]:
        def check(order: Order) -> Result[Order, CheckoutError]:
            # only pending orders can be closed, and only once
            if order.status is not OrderStatus.PENDING:
                return Failure(
                    InvalidStatusTransition(
                        message="only pending orders can change status",
                        current=order.status.value,
                        requested=target.value,
                    )
                )
            return Success(order)

        result = (
            self.get_order(command.order_id)
            .bind(check)
            .bind(
                lambda o: guarded(
                    self.deps.orders.update_status,
                    o.order_id,
                    target,
                    self.deps.clock(),
                )
            )
        )

        if isinstance(result, Success):
            order = result.unwrap()
            logger.info(
                "order status changed",
                extra={
                    "order_id": str(order.order_id.value),
                    "status": order.status.value,
                },
            )
            audited = guarded(
                self.deps.audit.record,
                AuditEvent(
                    actor_id=command.actor.employee_id,
                    actor_email=command.actor.email,
                    action_type=_ACTIONS[target],
                    details=f"Marked order {order.receipt_id.value} as {target.value}",
                    page=ORDER_LOG_PAGE,
                ),
            )
            if isinstance(audited, Failure):
                logger.warning(
                    "audit event dropped",
                    extra={"action_type": _ACTIONS[target]},
                )
        return result


def _parse_order_id(raw: str) -> Result[OrderId, CheckoutError]:
    try:
        return Success(OrderId(UUID(raw)))
    except (TypeError, ValueError):
        return Failure(ValidationError(message="order_id must be a valid UUID"))
