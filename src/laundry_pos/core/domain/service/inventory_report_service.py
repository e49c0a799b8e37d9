from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence, Tuple

from returns.result import Failure, Result

from laundry_pos.core.domain.model.errors import CheckoutError, ValidationError
from laundry_pos.core.domain.model.inventory import (
    ExpiringEntry,
    ItemId,
    LowStockItem,
    ProductEntry,
    ProductItem,
)
from laundry_pos.core.domain.service.boundary import guarded
from laundry_pos.core.ports.inbound.inventory_report import (
    ExpiringQuery,
    InventoryReportUseCase,
    LowStockQuery,
)
from laundry_pos.core.ports.outbound.inventory import StockGateway

Rows = Sequence[Tuple[ProductEntry, ProductItem]]


@dataclass(frozen=True)
class InventoryReportDeps:
    stock: StockGateway
    low_stock_threshold: int = 5
    expiring_within_days: int = 30


@dataclass(frozen=True)
class InventoryReportService(InventoryReportUseCase):
    deps: InventoryReportDeps

    def low_stock(
        self, query: LowStockQuery
    ) -> Result[Sequence[LowStockItem], CheckoutError]:
        threshold = (
            self.deps.low_stock_threshold if query.threshold is None else query.threshold
        )
        if threshold < 0:
            return Failure(ValidationError(message="threshold must be >= 0"))
        return guarded(self.deps.stock.list_entries).map(
            lambda rows: summarize_low_stock(rows, threshold)
        )

    def expiring_soon(
        self, query: ExpiringQuery
    ) -> Result[Sequence[ExpiringEntry], CheckoutError]:
        days = (
            self.deps.expiring_within_days
            if query.within_days is None
            else query.within_days
        )
        if days <= 0:
            return Failure(ValidationError(message="within_days must be > 0"))
        return guarded(self.deps.stock.list_entries).map(
            lambda rows: find_expiring(rows, query.today, days)
        )


def summarize_low_stock(rows: Rows, threshold: int) -> Sequence[LowStockItem]:
    """Sum entry quantities per item; keep items at or under the threshold."""
    totals: dict[ItemId, LowStockItem] = {}
    for entry, item in rows:
        prev = totals.get(entry.item_id)
        qty = (prev.total_quantity if prev else 0) + entry.quantity
        totals[entry.item_id] = LowStockItem(
            item_id=entry.item_id, item_name=item.name, total_quantity=qty
        )
    low = [i for i in totals.values() if i.total_quantity <= threshold]
    return tuple(sorted(low, key=lambda i: i.total_quantity))


def find_expiring(rows: Rows, today: date, within_days: int) -> Sequence[ExpiringEntry]:
    horizon = today + timedelta(days=within_days)
    found = [
        ExpiringEntry(
            entry_id=entry.entry_id,
            item_id=entry.item_id,
            item_name=item.name,
            quantity=entry.quantity,
            expiration_date=entry.expiration_date,
            days_remaining=(entry.expiration_date - today).days,
        )
        for entry, item in rows
        if entry.expiration_date is not None and today < entry.expiration_date < horizon
    ]
    return tuple(sorted(found, key=lambda e: e.expiration_date))
