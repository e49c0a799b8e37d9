# tests/test_inventory_reports.py
from datetime import timedelta

from laundry_pos.core.domain.model.errors import PersistenceError, ValidationError
from laundry_pos.core.domain.model.inventory import EntryId, ItemId, ProductEntry
from laundry_pos.core.domain.service.inventory_report_service import (
    find_expiring,
    summarize_low_stock,
)
from laundry_pos.core.ports.inbound.inventory_report import ExpiringQuery, LowStockQuery


def test_low_stock_uses_the_configured_threshold(usecases):
    rows = usecases.inventory.low_stock(LowStockQuery()).unwrap()
    # seed: bleach 3, softener 12, detergent 24; default threshold is 5
    assert [(i.item_id.value, i.total_quantity) for i in rows] == [("item-bleach", 3)]


def test_low_stock_sums_batches_of_the_same_item(usecases, store):
    store.add_entry(
        ProductEntry(EntryId("entry-bleach-2"), ItemId("item-bleach"), quantity=4)
    )
    rows = usecases.inventory.low_stock(LowStockQuery(threshold=12)).unwrap()
    # bleach is now 3 + 4 = 7; softener sits exactly on the threshold
    assert [(i.item_id.value, i.total_quantity) for i in rows] == [
        ("item-bleach", 7),
        ("item-softener", 12),
    ]


def test_low_stock_rejects_negative_threshold(usecases):
    result = usecases.inventory.low_stock(LowStockQuery(threshold=-1))
    assert isinstance(result.failure(), ValidationError)


def test_reports_surface_store_outages(usecases, store, today):
    store.unavailable = True
    assert isinstance(
        usecases.inventory.low_stock(LowStockQuery()).failure(), PersistenceError
    )
    assert isinstance(
        usecases.inventory.expiring_soon(ExpiringQuery(today=today)).failure(),
        PersistenceError,
    )


def test_expiring_within_default_window(usecases, today):
    rows = usecases.inventory.expiring_soon(ExpiringQuery(today=today)).unwrap()
    # softener expires in 20 days; bleach (180) and detergent (365) are outside 30
    assert [(e.entry_id.value, e.days_remaining) for e in rows] == [
        ("entry-softener-1", 20)
    ]


def test_expiring_window_can_be_widened(usecases, today):
    rows = usecases.inventory.expiring_soon(
        ExpiringQuery(today=today, within_days=200)
    ).unwrap()
    assert [e.entry_id.value for e in rows] == ["entry-softener-1", "entry-bleach-1"]


def test_expiring_rejects_non_positive_window(usecases, today):
    result = usecases.inventory.expiring_soon(ExpiringQuery(today=today, within_days=0))
    assert isinstance(result.failure(), ValidationError)


def test_find_expiring_skips_expired_and_undated(store, today):
    rows = store.list_entries().unwrap()
    entry, item = rows[0]
    expired = (
        ProductEntry(
            EntryId("old"), entry.item_id, quantity=1, expiration_date=today - timedelta(days=1)
        ),
        item,
    )
    today_exp = (
        ProductEntry(EntryId("today"), entry.item_id, quantity=1, expiration_date=today),
        item,
    )
    undated = (ProductEntry(EntryId("none"), entry.item_id, quantity=1), item)

    assert find_expiring([expired, today_exp, undated], today, 30) == ()


def test_summarize_low_stock_on_empty_rows():
    assert summarize_low_stock([], 5) == ()
