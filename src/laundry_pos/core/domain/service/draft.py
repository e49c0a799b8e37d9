"""
Checkout draft transitions.

Every function takes a draft and returns a new one; nothing is mutated.
Each editing action ends in `recompute_draft`, so totals never go stale.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Iterable

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.draft import DraftId, DraftStatus, OrderDraft
from laundry_pos.core.domain.model.errors import (
    CatalogEntryNotFound,
    CheckoutError,
    ConfirmationRequired,
    SubmissionInProgress,
    ValidationError,
)
from laundry_pos.core.domain.model.inventory import CatalogEntry, EntryId, ItemId
from laundry_pos.core.domain.model.laundry import (
    LaundryType,
    LaundryTypeId,
    Service,
    ServiceId,
    WeightInput,
)
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY, Money
from laundry_pos.core.domain.model.order import WorkerSession
from laundry_pos.core.domain.service.allocator import (
    CartUpdate,
    add_to_cart,
    remove_from_cart,
)
from laundry_pos.core.domain.service.pricing import compute_order_total, price_service

EDITABLE = frozenset({DraftStatus.EMPTY, DraftStatus.BUILDING, DraftStatus.SUBMITTED})


def new_draft(
    draft_id: DraftId,
    worker: WorkerSession,
    services: Iterable[Service],
    laundry_types: Iterable[LaundryType],
    catalog: Iterable[CatalogEntry],
    currency: str = DEFAULT_CURRENCY,
) -> OrderDraft:
    entries = {e.entry_id: e for e in catalog}
    return OrderDraft(
        draft_id=draft_id,
        worker=worker,
        services_catalog={s.service_id: s for s in services},
        laundry_types={t.type_id: t for t in laundry_types},
        catalog=entries,
        stock={eid: e.quantity_on_hand for eid, e in entries.items()},
        total=Money.zero(currency),
    )


def recompute_draft(draft: OrderDraft) -> OrderDraft:
    services = {
        sid: price_service(line.service, draft.weights)
        for sid, line in draft.services.items()
    }
    total = compute_order_total(
        services.values(), draft.products, currency=draft.total.currency
    )
    status = draft.status
    if status is not DraftStatus.SUBMITTING:
        status = (
            DraftStatus.EMPTY
            if not services and not draft.products
            else DraftStatus.BUILDING
        )
    return replace(draft, services=services, total=total, status=status)


# ---- editing ---------------------------------------------------------------


def set_weight(
    draft: OrderDraft, type_id: LaundryTypeId, value: Decimal
) -> Result[OrderDraft, CheckoutError]:
    weight = Decimal(value)

    def apply(d: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        if not weight.is_finite():
            return Failure(ValidationError("weight must be a finite number"))
        laundry_type = d.laundry_types.get(type_id)
        if laundry_type is None:
            return Failure(ValidationError(f"unknown laundry type: {type_id.value}"))

        weights = dict(d.weights)
        if weight > 0:
            weights[type_id] = WeightInput(value=weight, limit=laundry_type.limit)
        else:
            weights.pop(type_id, None)
        return Success(recompute_draft(replace(d, weights=weights)))

    return ensure_editable(draft).bind(apply)


def select_service(
    draft: OrderDraft, service_id: ServiceId
) -> Result[OrderDraft, CheckoutError]:
    def apply(d: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        service = d.services_catalog.get(service_id)
        if service is None:
            return Failure(ValidationError(f"unknown service: {service_id.value}"))
        services = dict(d.services)
        services[service_id] = price_service(service, d.weights)
        return Success(recompute_draft(replace(d, services=services)))

    return ensure_editable(draft).bind(apply)


def deselect_service(
    draft: OrderDraft, service_id: ServiceId
) -> Result[OrderDraft, CheckoutError]:
    def apply(d: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        services = dict(d.services)
        services.pop(service_id, None)
        return Success(recompute_draft(replace(d, services=services)))

    return ensure_editable(draft).bind(apply)


def add_product(
    draft: OrderDraft, entry_id: EntryId
) -> Result[OrderDraft, CheckoutError]:
    def apply(d: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        entry = d.catalog.get(entry_id)
        if entry is None:
            return Failure(
                CatalogEntryNotFound(
                    message="entry is not in the catalog", entry_id=entry_id.value
                )
            )
        return add_to_cart(d.products, d.stock, entry).map(
            lambda upd: _apply_cart(d, upd)
        )

    return ensure_editable(draft).bind(apply)


def remove_product(
    draft: OrderDraft, item_id: ItemId, entry_id: EntryId | None = None
) -> Result[OrderDraft, CheckoutError]:
    return ensure_editable(draft).bind(
        lambda d: remove_from_cart(d.products, d.stock, item_id, entry_id).map(
            lambda upd: _apply_cart(d, upd)
        )
    )


def set_customer(
    draft: OrderDraft, customer_name: str, payment_method: str | None
) -> Result[OrderDraft, CheckoutError]:
    return ensure_editable(draft).map(
        lambda d: replace(
            d,
            customer_name=customer_name.strip(),
            payment_method=(payment_method or "").strip() or None,
        )
    )


# ---- submission ------------------------------------------------------------


def check_submittable(
    draft: OrderDraft, high_value_threshold: Decimal, confirmed: bool
) -> Result[OrderDraft, CheckoutError]:
    if draft.status is DraftStatus.SUBMITTING:
        return Failure(
            SubmissionInProgress(
                message="order is already being submitted",
                draft_id=str(draft.draft_id.value),
            )
        )
    if draft.is_empty:
        return Failure(ValidationError("add at least one service or product"))
    if not draft.payment_method:
        return Failure(ValidationError("payment_method is required"))
    if not draft.customer_name.strip():
        return Failure(ValidationError("customer_name is required"))
    if draft.total.amount > high_value_threshold and not confirmed:
        return Failure(
            ConfirmationRequired(
                message="total is above the high-value threshold; confirm to proceed",
                total=draft.total.amount,
                threshold=high_value_threshold,
            )
        )
    return Success(draft)


def mark_submitting(draft: OrderDraft) -> OrderDraft:
    return replace(draft, status=DraftStatus.SUBMITTING)


def release_submission(draft: OrderDraft) -> OrderDraft:
    """Back to editing after a failed submit, contents untouched."""
    return recompute_draft(replace(draft, status=DraftStatus.BUILDING))


# ---- helpers ---------------------------------------------------------------


def _apply_cart(draft: OrderDraft, update: CartUpdate) -> OrderDraft:
    return recompute_draft(replace(draft, products=update.products, stock=update.stock))


def ensure_editable(draft: OrderDraft) -> Result[OrderDraft, CheckoutError]:
    if draft.status not in EDITABLE:
        return Failure(
            SubmissionInProgress(
                message="draft cannot change while it is being submitted",
                draft_id=str(draft.draft_id.value),
            )
        )
    return Success(draft)
