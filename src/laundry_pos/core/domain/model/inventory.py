from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from laundry_pos.core.domain.model.money import Money


@dataclass(frozen=True)
class ItemId:
    value: str


@dataclass(frozen=True)
class EntryId:
    value: str


@dataclass(frozen=True)
class ProductItem:
    item_id: ItemId
    name: str
    category: str
    price: Money
    weight: str
    barcode: str = ""


@dataclass(frozen=True)
class ProductEntry:
    """One stocked batch of a product item."""

    entry_id: EntryId
    item_id: ItemId
    quantity: int
    purchased_date: date | None = None
    expiration_date: date | None = None
    supplier: str = ""
    damaged_quantity: int = 0
    missing_quantity: int = 0
    or_id: str = ""
    added_at: datetime | None = None


@dataclass(frozen=True)
class CatalogEntry:
    """Entry joined with its item, as the cashier screen sees it."""

    entry_id: EntryId
    item_id: ItemId
    item_name: str
    unit_weight: str
    unit_price: Money
    quantity_on_hand: int
    purchased_date: date | None = None
    expiration_date: date | None = None


@dataclass(frozen=True)
class OrderProduct:
    entry_id: EntryId
    item_id: ItemId
    item_name: str
    weight: str
    unit_price: Money
    quantity: int

    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class LowStockItem:
    item_id: ItemId
    item_name: str
    total_quantity: int


@dataclass(frozen=True)
class ExpiringEntry:
    entry_id: EntryId
    item_id: ItemId
    item_name: str
    quantity: int
    expiration_date: date
    days_remaining: int
