from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.inventory import ExpiringEntry, LowStockItem


@dataclass(frozen=True)
class LowStockQuery:
    threshold: int | None = None


@dataclass(frozen=True)
class ExpiringQuery:
    today: date
    within_days: int | None = None


class InventoryReportUseCase(Protocol):
    def low_stock(
        self, query: LowStockQuery
    ) -> Result[Sequence[LowStockItem], CheckoutError]: ...

    def expiring_soon(
        self, query: ExpiringQuery
    ) -> Result[Sequence[ExpiringEntry], CheckoutError]: ...
