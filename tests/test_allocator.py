# tests/test_allocator.py
from laundry_pos.core.domain.model.errors import InsufficientStock, NotInCart
from laundry_pos.core.domain.model.inventory import CatalogEntry, EntryId, ItemId
from laundry_pos.core.domain.model.money import Money
from laundry_pos.core.domain.service.allocator import add_to_cart, remove_from_cart


def entry(entry_id, item_id, price, on_hand, name=None):
    return CatalogEntry(
        entry_id=EntryId(entry_id),
        item_id=ItemId(item_id),
        item_name=name or item_id,
        unit_weight="70g",
        unit_price=Money.of(price),
        quantity_on_hand=on_hand,
    )


DETERGENT = entry("det-1", "detergent", "20", 5, "Detergent Powder")
DETERGENT_NEW_BATCH = entry("det-2", "detergent", "20", 5, "Detergent Powder")
SOFTENER = entry("sof-1", "softener", "15", 1, "Fabric Softener")


def stock_of(*entries):
    return {e.entry_id: e.quantity_on_hand for e in entries}


def test_add_opens_a_line_and_takes_one_from_stock():
    upd = add_to_cart((), stock_of(DETERGENT), DETERGENT).unwrap()

    assert len(upd.products) == 1
    assert upd.products[0].quantity == 1
    assert upd.products[0].unit_price == Money.of("20")
    assert upd.stock[DETERGENT.entry_id] == 4


def test_add_same_entry_bumps_the_existing_line():
    upd = add_to_cart((), stock_of(DETERGENT), DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT).unwrap()

    assert len(upd.products) == 1
    assert upd.products[0].quantity == 2
    assert upd.stock[DETERGENT.entry_id] == 3


def test_same_item_from_another_batch_gets_its_own_line():
    stock = stock_of(DETERGENT, DETERGENT_NEW_BATCH)
    upd = add_to_cart((), stock, DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT_NEW_BATCH).unwrap()

    assert [p.entry_id.value for p in upd.products] == ["det-1", "det-2"]


def test_add_at_zero_stock_is_refused_and_nothing_changes():
    upd = add_to_cart((), stock_of(SOFTENER), SOFTENER).unwrap()
    before_products, before_stock = upd.products, dict(upd.stock)

    result = add_to_cart(upd.products, upd.stock, SOFTENER)

    assert isinstance(result.failure(), InsufficientStock)
    assert result.failure().entry_id == "sof-1"
    assert upd.products == before_products
    assert dict(upd.stock) == before_stock


def test_add_then_remove_restores_cart_and_stock():
    products, stock = (), stock_of(DETERGENT, SOFTENER)

    upd = add_to_cart(products, stock, DETERGENT).unwrap()
    back = remove_from_cart(upd.products, upd.stock, DETERGENT.item_id).unwrap()

    assert back.products == products
    assert dict(back.stock) == stock


def test_remove_decrements_quantity_before_dropping_the_line():
    upd = add_to_cart((), stock_of(DETERGENT), DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT).unwrap()

    upd = remove_from_cart(upd.products, upd.stock, DETERGENT.item_id).unwrap()
    assert upd.products[0].quantity == 1
    assert upd.stock[DETERGENT.entry_id] == 4

    upd = remove_from_cart(upd.products, upd.stock, DETERGENT.item_id).unwrap()
    assert upd.products == ()
    assert upd.stock[DETERGENT.entry_id] == 5


def test_remove_by_item_takes_the_most_recent_batch():
    stock = stock_of(DETERGENT, DETERGENT_NEW_BATCH)
    upd = add_to_cart((), stock, DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT_NEW_BATCH).unwrap()

    upd = remove_from_cart(upd.products, upd.stock, ItemId("detergent")).unwrap()

    assert [p.entry_id.value for p in upd.products] == ["det-1"]
    assert upd.stock[DETERGENT_NEW_BATCH.entry_id] == 5


def test_remove_with_entry_id_targets_that_batch():
    stock = stock_of(DETERGENT, DETERGENT_NEW_BATCH)
    upd = add_to_cart((), stock, DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT_NEW_BATCH).unwrap()

    upd = remove_from_cart(
        upd.products, upd.stock, ItemId("detergent"), EntryId("det-1")
    ).unwrap()

    assert [p.entry_id.value for p in upd.products] == ["det-2"]
    assert upd.stock[DETERGENT.entry_id] == 5


def test_remove_missing_item_is_not_in_cart():
    result = remove_from_cart((), stock_of(DETERGENT), ItemId("detergent"))

    assert isinstance(result.failure(), NotInCart)
    assert result.failure().item_id == "detergent"


def test_mixed_cart_subtotals():
    stock = stock_of(DETERGENT, SOFTENER)
    upd = add_to_cart((), stock, DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, DETERGENT).unwrap()
    upd = add_to_cart(upd.products, upd.stock, SOFTENER).unwrap()

    # 20 * 2 + 15
    assert sum(p.subtotal().amount for p in upd.products) == Money.of("55").amount

    upd = remove_from_cart(upd.products, upd.stock, DETERGENT.item_id).unwrap()
    # 20 + 15
    assert sum(p.subtotal().amount for p in upd.products) == Money.of("35").amount
