from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.draft import DraftId, OrderDraft
from laundry_pos.core.domain.model.errors import (
    CatalogEntryNotFound,
    CheckoutError,
    InsufficientStock,
    ValidationError,
)
from laundry_pos.core.domain.model.inventory import EntryId
from laundry_pos.core.domain.model.laundry import LaundryTypeId, ServiceId
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY, fold_money
from laundry_pos.core.domain.model.order import WorkerSession
from laundry_pos.core.domain.service import draft as drafting
from laundry_pos.core.domain.service.checkout_service import fresh_draft
from laundry_pos.core.ports.inbound.quote import (
    Quote,
    QuoteCommand,
    QuoteProductLine,
    QuoteUseCase,
)
from laundry_pos.core.ports.outbound.catalog import CatalogGateway

MAX_QUOTE_QUANTITY = 1000

_QUOTE_WORKER = WorkerSession(employee_id="quote", email="")


@dataclass(frozen=True)
class QuoteDeps:
    catalog: CatalogGateway
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class QuoteService(QuoteUseCase):
    """Prices a cart without opening a checkout; stock limits still apply."""

    deps: QuoteDeps

    def quote(self, command: QuoteCommand) -> Result[Quote, CheckoutError]:
        for i, ln in enumerate(command.products):
            if ln.quantity <= 0:
                return Failure(ValidationError(f"products[{i}].quantity must be > 0"))
            if ln.quantity > MAX_QUOTE_QUANTITY:
                return Failure(
                    ValidationError(
                        f"products[{i}].quantity must be <= {MAX_QUOTE_QUANTITY}"
                    )
                )

        result = fresh_draft(
            self.deps.catalog, DraftId.new(), _QUOTE_WORKER, self.deps.currency
        )
        for w in command.weights:
            result = result.bind(
                lambda d, w=w: drafting.set_weight(d, LaundryTypeId(w.type_id), w.value)
            )
        for sid in command.service_ids:
            result = result.bind(
                lambda d, sid=sid: drafting.select_service(d, ServiceId(sid))
            )
        return (
            result.bind(lambda d: _check_stock(d, command.products))
            .bind(lambda d: _add_products(d, command.products))
            .map(_to_quote)
        )


def _check_stock(
    draft: OrderDraft, lines: Sequence[QuoteProductLine]
) -> Result[OrderDraft, CheckoutError]:
    requested: Dict[str, int] = {}
    for ln in lines:
        requested[ln.entry_id] = requested.get(ln.entry_id, 0) + ln.quantity

    for entry_id, qty in requested.items():
        entry = draft.catalog.get(EntryId(entry_id))
        if entry is None:
            return Failure(
                CatalogEntryNotFound(
                    message="entry is not in the catalog", entry_id=entry_id
                )
            )
        on_hand = draft.stock.get(entry.entry_id, 0)
        if qty > on_hand:
            return Failure(
                InsufficientStock(
                    message=f"only {on_hand} {entry.item_name} left, {qty} requested",
                    entry_id=entry_id,
                )
            )
    return Success(draft)


def _add_products(
    draft: OrderDraft, lines: Sequence[QuoteProductLine]
) -> Result[OrderDraft, CheckoutError]:
    for ln in lines:
        for _ in range(ln.quantity):
            added = drafting.add_product(draft, EntryId(ln.entry_id))
            if isinstance(added, Failure):
                return added
            draft = added.unwrap()
    return Success(draft)


def _to_quote(draft: OrderDraft) -> Quote:
    return Quote(
        services=tuple(draft.services.values()),
        products_total=fold_money(
            (p.subtotal() for p in draft.products), currency=draft.total.currency
        ),
        total=draft.total,
    )
