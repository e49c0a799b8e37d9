"""
Cart-side stock bookkeeping.

Works on a local mirror of entry quantities so the cashier sees what is
left without a round trip. Nothing here touches the store.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Tuple

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    InsufficientStock,
    NotInCart,
)
from laundry_pos.core.domain.model.inventory import (
    CatalogEntry,
    EntryId,
    ItemId,
    OrderProduct,
)


@dataclass(frozen=True)
class CartUpdate:
    products: Tuple[OrderProduct, ...]
    stock: Mapping[EntryId, int]


def add_to_cart(
    products: Tuple[OrderProduct, ...],
    stock: Mapping[EntryId, int],
    entry: CatalogEntry,
) -> Result[CartUpdate, CheckoutError]:
    remaining = stock.get(entry.entry_id, 0)
    if remaining <= 0:
        return Failure(
            InsufficientStock(
                message=f"no more {entry.item_name} left in this batch",
                entry_id=entry.entry_id.value,
            )
        )

    new_stock = dict(stock)
    new_stock[entry.entry_id] = remaining - 1

    idx = _find_line(products, entry.item_id, entry.entry_id)
    if idx is None:
        line = OrderProduct(
            entry_id=entry.entry_id,
            item_id=entry.item_id,
            item_name=entry.item_name,
            weight=entry.unit_weight,
            unit_price=entry.unit_price,
            quantity=1,
        )
        return Success(CartUpdate(products=products + (line,), stock=new_stock))

    current = products[idx]
    bumped = replace(current, quantity=current.quantity + 1)
    return Success(
        CartUpdate(
            products=products[:idx] + (bumped,) + products[idx + 1 :],
            stock=new_stock,
        )
    )


def remove_from_cart(
    products: Tuple[OrderProduct, ...],
    stock: Mapping[EntryId, int],
    item_id: ItemId,
    entry_id: EntryId | None = None,
) -> Result[CartUpdate, CheckoutError]:
    idx = _find_line(products, item_id, entry_id)
    if idx is None:
        return Failure(NotInCart(message="item is not in the cart", item_id=item_id.value))

    line = products[idx]
    new_stock = dict(stock)
    new_stock[line.entry_id] = new_stock.get(line.entry_id, 0) + 1

    if line.quantity > 1:
        kept = replace(line, quantity=line.quantity - 1)
        new_products = products[:idx] + (kept,) + products[idx + 1 :]
    else:
        new_products = products[:idx] + products[idx + 1 :]

    return Success(CartUpdate(products=new_products, stock=new_stock))


def _find_line(
    products: Tuple[OrderProduct, ...],
    item_id: ItemId,
    entry_id: EntryId | None,
) -> int | None:
    # without an entry id the most recently opened line for the item wins
    for i in range(len(products) - 1, -1, -1):
        p = products[i]
        if p.item_id != item_id:
            continue
        if entry_id is None or p.entry_id == entry_id:
            return i
    return None
