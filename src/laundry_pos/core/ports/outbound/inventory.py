from __future__ import annotations

from typing import Protocol, Sequence, Tuple

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.inventory import EntryId, ProductEntry, ProductItem


class StockGateway(Protocol):
    def decrement_stock(
        self, entry_id: EntryId, quantity: int
    ) -> Result[None, CheckoutError]:
        """Authoritative decrement. Called once per product line after the order is saved."""
        ...

    def list_entries(
        self,
    ) -> Result[Sequence[Tuple[ProductEntry, ProductItem]], CheckoutError]: ...
