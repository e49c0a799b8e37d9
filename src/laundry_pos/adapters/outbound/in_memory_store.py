from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Set, Tuple

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.errors import (
    CatalogEntryNotFound,
    CheckoutError,
    InsufficientStock,
    PersistenceError,
)
from laundry_pos.core.domain.model.inventory import (
    CatalogEntry,
    EntryId,
    ProductEntry,
    ProductItem,
)
from laundry_pos.core.domain.model.laundry import LaundryType, Service
from laundry_pos.core.ports.outbound.catalog import CatalogGateway
from laundry_pos.core.ports.outbound.inventory import StockGateway


@dataclass
class InMemoryStore(CatalogGateway, StockGateway):
    """
    Stand-in for the hosted database: pricing tables, product items and
    their stocked entries. `fail_entries` makes decrements of those entry
    ids fail, to exercise the partial-failure path.
    """

    services: List[Service] = field(default_factory=list)
    laundry_types: List[LaundryType] = field(default_factory=list)
    items: Dict[str, ProductItem] = field(default_factory=dict)
    entries: Dict[str, ProductEntry] = field(default_factory=dict)
    fail_entries: Set[str] = field(default_factory=set)
    unavailable: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add_item(self, item: ProductItem) -> None:
        self.items[item.item_id.value] = item

    def add_entry(self, entry: ProductEntry) -> None:
        self.entries[entry.entry_id.value] = entry

    # ---- CatalogGateway ----------------------------------------------------

    def fetch_services(self) -> Result[Sequence[Service], CheckoutError]:
        if self.unavailable:
            return Failure(PersistenceError(message="store is unavailable"))
        return Success(tuple(self.services))

    def fetch_laundry_types(self) -> Result[Sequence[LaundryType], CheckoutError]:
        if self.unavailable:
            return Failure(PersistenceError(message="store is unavailable"))
        return Success(tuple(self.laundry_types))

    def fetch_product_catalog(self) -> Result[Sequence[CatalogEntry], CheckoutError]:
        if self.unavailable:
            return Failure(PersistenceError(message="store is unavailable"))
        with self._lock:
            rows = [
                CatalogEntry(
                    entry_id=e.entry_id,
                    item_id=e.item_id,
                    item_name=item.name,
                    unit_weight=item.weight,
                    unit_price=item.price,
                    quantity_on_hand=e.quantity,
                    purchased_date=e.purchased_date,
                    expiration_date=e.expiration_date,
                )
                for e in self.entries.values()
                if (item := self.items.get(e.item_id.value)) is not None
            ]
        return Success(tuple(rows))

    # ---- StockGateway ------------------------------------------------------

    def decrement_stock(
        self, entry_id: EntryId, quantity: int
    ) -> Result[None, CheckoutError]:
        key = entry_id.value
        if key in self.fail_entries:
            return Failure(PersistenceError(message=f"decrement rejected for {key}"))

        with self._lock:
            entry = self.entries.get(key)
            if entry is None:
                return Failure(
                    CatalogEntryNotFound(message="entry not found", entry_id=key)
                )
            if entry.quantity < quantity:
                return Failure(
                    InsufficientStock(message="not enough on hand", entry_id=key)
                )
            self.entries[key] = replace(entry, quantity=entry.quantity - quantity)
        return Success(None)

    def list_entries(
        self,
    ) -> Result[Sequence[Tuple[ProductEntry, ProductItem]], CheckoutError]:
        if self.unavailable:
            return Failure(PersistenceError(message="store is unavailable"))
        with self._lock:
            rows = [
                (e, item)
                for e in self.entries.values()
                if (item := self.items.get(e.item_id.value)) is not None
            ]
        return Success(tuple(rows))
