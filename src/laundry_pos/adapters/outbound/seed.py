from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from laundry_pos.adapters.outbound.in_memory_store import InMemoryStore
from laundry_pos.core.domain.model.inventory import (
    EntryId,
    ItemId,
    ProductEntry,
    ProductItem,
)
from laundry_pos.core.domain.model.laundry import (
    FULL_SERVICE_NAME,
    LaundryType,
    LaundryTypeId,
    Service,
    ServiceId,
)
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY, Money


def seeded_store(currency: str = DEFAULT_CURRENCY, today: date | None = None) -> InMemoryStore:
    """Shop defaults: three laundry types, four services, a few detergents."""
    today = today or date.today()

    def php(v: str) -> Money:
        return Money.of(v, currency)

    store = InMemoryStore(
        services=[
            Service(ServiceId("svc-wash"), "Wash", php("55")),
            Service(ServiceId("svc-dry"), "Dry", php("55")),
            Service(ServiceId("svc-fold"), "Fold", php("20")),
            Service(ServiceId("svc-full"), FULL_SERVICE_NAME, php("100")),
        ],
        laundry_types=[
            LaundryType(LaundryTypeId("lt-regular"), "Regular Clothes", Decimal("7"), "kg"),
            LaundryType(
                LaundryTypeId("lt-towels"),
                "Towels, Blankets, Beddings",
                Decimal("4"),
                "kg",
            ),
            LaundryType(
                LaundryTypeId("lt-comforter"),
                "Comforter Queensize, Heavy Blankets",
                Decimal("1"),
                "pc",
            ),
        ],
    )

    store.add_item(
        ProductItem(ItemId("item-detergent"), "Detergent Powder", "Detergent", php("20"), "70g")
    )
    store.add_item(
        ProductItem(ItemId("item-softener"), "Fabric Softener", "Softener", php("15"), "24ml")
    )
    store.add_item(
        ProductItem(ItemId("item-bleach"), "Color Safe Bleach", "Bleach", php("25"), "60ml")
    )

    store.add_entry(
        ProductEntry(
            EntryId("entry-detergent-1"),
            ItemId("item-detergent"),
            quantity=24,
            purchased_date=today - timedelta(days=10),
            expiration_date=today + timedelta(days=365),
            supplier="Main Supplier",
        )
    )
    store.add_entry(
        ProductEntry(
            EntryId("entry-softener-1"),
            ItemId("item-softener"),
            quantity=12,
            purchased_date=today - timedelta(days=40),
            expiration_date=today + timedelta(days=20),
            supplier="Main Supplier",
        )
    )
    store.add_entry(
        ProductEntry(
            EntryId("entry-bleach-1"),
            ItemId("item-bleach"),
            quantity=3,
            purchased_date=today - timedelta(days=5),
            expiration_date=today + timedelta(days=180),
            supplier="Corner Wholesale",
        )
    )
    return store
