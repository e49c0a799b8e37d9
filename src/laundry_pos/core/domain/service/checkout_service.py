from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Callable
from uuid import UUID

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.draft import DraftId, DraftStatus, OrderDraft
from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    ConfirmationRequired,
    InsufficientStock,
    ValidationError,
)
from laundry_pos.core.domain.model.inventory import EntryId, ItemId
from laundry_pos.core.domain.model.laundry import LaundryTypeId, ServiceId
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY
from laundry_pos.core.domain.model.order import (
    Order,
    OrderId,
    ReceiptId,
    WorkerSession,
    now_utc,
)
from laundry_pos.core.domain.service import draft as drafting
from laundry_pos.core.domain.service.boundary import guarded
from laundry_pos.core.domain.service.receipt import generate_receipt_id
from laundry_pos.core.ports.inbound.checkout import (
    AddProductCommand,
    CheckoutUseCase,
    OpenCheckoutCommand,
    OrderReceipt,
    RemoveProductCommand,
    SetCustomerCommand,
    SetWeightCommand,
    SubmitOrderCommand,
    ToggleServiceCommand,
)
from laundry_pos.core.ports.outbound.audit import CREATE_ORDER, AuditEvent, AuditLog
from laundry_pos.core.ports.outbound.catalog import CatalogGateway
from laundry_pos.core.ports.outbound.drafts import DraftRepository
from laundry_pos.core.ports.outbound.inventory import StockGateway
from laundry_pos.core.ports.outbound.orders import OrderRepository

logger = logging.getLogger(__name__)

CASHIER_PAGE = "Cashier"

Edit = Callable[[OrderDraft], Result[OrderDraft, CheckoutError]]


@dataclass(frozen=True)
class CheckoutDeps:
    catalog: CatalogGateway
    stock: StockGateway
    orders: OrderRepository
    drafts: DraftRepository
    audit: AuditLog
    high_value_threshold: Decimal = Decimal("10000")
    currency: str = DEFAULT_CURRENCY
    stock_workers: int = 4
    clock: Callable[[], datetime] = now_utc
    rng: random.Random | None = None


@dataclass(frozen=True)
class CheckoutService(CheckoutUseCase):
    deps: CheckoutDeps

    # ---- draft lifecycle ---------------------------------------------------

    def open_checkout(
        self, command: OpenCheckoutCommand
    ) -> Result[OrderDraft, CheckoutError]:
        if not command.employee_id.strip():
            return Failure(ValidationError("employee_id is required"))
        worker = WorkerSession(
            employee_id=command.employee_id.strip(), email=command.email.strip()
        )
        return self._fresh_draft(DraftId.new(), worker).bind(self._save_draft)

    def get_draft(self, draft_id: str) -> Result[OrderDraft, CheckoutError]:
        return flow(draft_id, _parse_draft_id, bind(self._get_draft))

    def close_checkout(self, draft_id: str) -> Result[None, CheckoutError]:
        return flow(
            draft_id,
            _parse_draft_id,
            bind(self._get_draft),
            bind(drafting.ensure_editable),
            bind(lambda d: guarded(self.deps.drafts.delete, d.draft_id)),
        )

    # ---- editing -----------------------------------------------------------

    def set_weight(self, command: SetWeightCommand) -> Result[OrderDraft, CheckoutError]:
        type_id = LaundryTypeId(command.type_id)
        return self._edit(
            command.draft_id, lambda d: drafting.set_weight(d, type_id, command.value)
        )

    def toggle_service(
        self, command: ToggleServiceCommand
    ) -> Result[OrderDraft, CheckoutError]:
        service_id = ServiceId(command.service_id)
        if command.selected:
            return self._edit(
                command.draft_id, lambda d: drafting.select_service(d, service_id)
            )
        return self._edit(
            command.draft_id, lambda d: drafting.deselect_service(d, service_id)
        )

    def add_product(self, command: AddProductCommand) -> Result[OrderDraft, CheckoutError]:
        result = self._edit(
            command.draft_id,
            lambda d: drafting.add_product(d, EntryId(command.entry_id)),
        )
        if isinstance(result, Failure) and isinstance(
            result.failure(), InsufficientStock
        ):
            logger.info(
                "add to cart refused, batch is empty",
                extra={"draft_id": command.draft_id, "entry_id": command.entry_id},
            )
        return result

    def remove_product(
        self, command: RemoveProductCommand
    ) -> Result[OrderDraft, CheckoutError]:
        entry_id = EntryId(command.entry_id) if command.entry_id else None
        return self._edit(
            command.draft_id,
            lambda d: drafting.remove_product(d, ItemId(command.item_id), entry_id),
        )

    def set_customer(
        self, command: SetCustomerCommand
    ) -> Result[OrderDraft, CheckoutError]:
        return self._edit(
            command.draft_id,
            lambda d: drafting.set_customer(
                d, command.customer_name, command.payment_method
            ),
        )

    # ---- submission --------------------------------------------------------

    def submit(self, command: SubmitOrderCommand) -> Result[OrderReceipt, CheckoutError]:
        checked = flow(
            command.draft_id,
            _parse_draft_id,
            bind(self._get_draft),
            bind(
                lambda d: drafting.check_submittable(
                    d, self.deps.high_value_threshold, command.confirm_high_value
                )
            ),
        )
        if isinstance(checked, Failure):
            err = checked.failure()
            if isinstance(err, ConfirmationRequired):
                logger.info(
                    "high-value order needs confirmation",
                    extra={"draft_id": command.draft_id, "total": str(err.total)},
                )
            return checked

        started = guarded(self.deps.drafts.begin_submission, checked.unwrap())
        if isinstance(started, Failure):
            return started
        submitting = started.unwrap()

        now = self.deps.clock()
        order = _build_order(
            submitting,
            order_id=OrderId.new(),
            receipt=generate_receipt_id(now.date(), self.deps.rng),
            at=now,
        )

        saved = guarded(self.deps.orders.save, order)
        if isinstance(saved, Failure):
            logger.error(
                "order could not be saved, draft kept for retry",
                extra={
                    "draft_id": command.draft_id,
                    "error": str(saved.failure()),
                },
            )
            released = self._save_draft(drafting.release_submission(submitting))
            if isinstance(released, Failure):
                logger.error(
                    "draft could not be released after a failed submit",
                    extra={
                        "draft_id": command.draft_id,
                        "error": str(released.failure()),
                    },
                )
            return saved

        logger.info(
            "order created",
            extra={
                "order_id": str(order.order_id.value),
                "receipt_id": order.receipt_id.value,
                "total": str(order.total_amount.amount),
            },
        )

        warnings = self._decrement_stock(order)
        self._record(
            AuditEvent(
                actor_id=submitting.worker.employee_id,
                actor_email=submitting.worker.email,
                action_type=CREATE_ORDER,
                details=(
                    f"Created order {order.receipt_id.value} for "
                    f"{order.customer_name} ({order.total_amount.amount} "
                    f"{order.total_amount.currency})"
                ),
                page=CASHIER_PAGE,
            )
        )

        next_draft = self._clear_after_submit(submitting)
        return Success(
            OrderReceipt(
                order_id=order.order_id,
                receipt_id=order.receipt_id,
                total=order.total_amount,
                stock_warnings=warnings,
                next_draft=next_draft,
            )
        )

    # ---- side effects ------------------------------------------------------

    def _fresh_draft(
        self, draft_id: DraftId, worker: WorkerSession
    ) -> Result[OrderDraft, CheckoutError]:
        return fresh_draft(self.deps.catalog, draft_id, worker, self.deps.currency)

    def _get_draft(self, draft_id: DraftId) -> Result[OrderDraft, CheckoutError]:
        return guarded(self.deps.drafts.get, draft_id)

    def _save_draft(self, draft: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        return guarded(self.deps.drafts.save, draft)

    def _edit(self, draft_id: str, change: Edit) -> Result[OrderDraft, CheckoutError]:
        return flow(
            draft_id,
            _parse_draft_id,
            bind(self._get_draft),
            bind(change),
            bind(self._save_draft),
        )

    def _decrement_stock(self, order: Order) -> int:
        """
        One decrement per product line, all in flight together. The order is
        already saved, so a failed line is only logged; returns the count.
        """
        if not order.products:
            return 0

        workers = max(1, min(self.deps.stock_workers, len(order.products)))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="stock-decrement"
        ) as pool:
            pending = {
                pool.submit(
                    guarded, self.deps.stock.decrement_stock, p.entry_id, p.quantity
                ): p
                for p in order.products
            }
            settled = [(pending[f], f.result()) for f in as_completed(pending)]

        failed = 0
        for line, result in settled:
            if isinstance(result, Failure):
                failed += 1
                logger.warning(
                    "stock decrement failed",
                    extra={
                        "order_id": str(order.order_id.value),
                        "entry_id": line.entry_id.value,
                        "quantity": line.quantity,
                        "error": str(result.failure()),
                    },
                )
        return failed

    def _record(self, event: AuditEvent) -> None:
        result = guarded(self.deps.audit.record, event)
        if isinstance(result, Failure):
            logger.warning(
                "audit event dropped",
                extra={"action_type": event.action_type, "error": str(result.failure())},
            )

    def _clear_after_submit(self, submitted: OrderDraft) -> OrderDraft:
        refreshed = self._fresh_draft(submitted.draft_id, submitted.worker)
        if isinstance(refreshed, Failure):
            logger.warning(
                "catalog refresh failed after submit, keeping local stock view",
                extra={"draft_id": str(submitted.draft_id.value)},
            )
            cleared = replace(
                submitted,
                weights={},
                services={},
                products=(),
                customer_name="",
                payment_method=None,
            )
            cleared = drafting.recompute_draft(replace(cleared, status=DraftStatus.EMPTY))
        else:
            cleared = refreshed.unwrap()

        done = replace(cleared, status=DraftStatus.SUBMITTED, version=submitted.version)
        saved = self._save_draft(done)
        if isinstance(saved, Failure):
            logger.warning(
                "cleared draft could not be stored",
                extra={"draft_id": str(submitted.draft_id.value)},
            )
            return done
        return saved.unwrap()


def fresh_draft(
    catalog: CatalogGateway,
    draft_id: DraftId,
    worker: WorkerSession,
    currency: str = DEFAULT_CURRENCY,
) -> Result[OrderDraft, CheckoutError]:
    """New empty draft over a freshly fetched catalog snapshot."""
    return guarded(catalog.fetch_services).bind(
        lambda services: guarded(catalog.fetch_laundry_types).bind(
            lambda types: guarded(catalog.fetch_product_catalog).map(
                lambda entries: drafting.new_draft(
                    draft_id, worker, services, types, entries, currency=currency
                )
            )
        )
    )


# ---- pure helpers ----------------------------------------------------------


def _parse_draft_id(raw: str) -> Result[DraftId, CheckoutError]:
    try:
        return Success(DraftId(UUID(raw)))
    except (TypeError, ValueError):
        return Failure(ValidationError("draft_id must be a valid UUID"))


def _build_order(
    draft: OrderDraft, order_id: OrderId, receipt: ReceiptId, at: datetime
) -> Order:
    return Order(
        order_id=order_id,
        receipt_id=receipt,
        services=tuple(draft.services.values()),
        products=draft.products,
        total_amount=draft.total,
        payment_method=draft.payment_method or "",
        customer_name=draft.customer_name,
        created_by=draft.worker.employee_id,
        created_at=at,
        updated_at=at,
    )
