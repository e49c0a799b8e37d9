# tests/test_pricing.py
from decimal import Decimal

import pytest

from laundry_pos.core.domain.model.inventory import EntryId, ItemId, OrderProduct
from laundry_pos.core.domain.model.laundry import (
    FULL_SERVICE_NAME,
    LaundryTypeId,
    Service,
    ServiceId,
    WeightInput,
)
from laundry_pos.core.domain.model.money import Money
from laundry_pos.core.domain.service.pricing import (
    compute_laundry_total,
    compute_order_total,
    compute_service_subtotal,
    count_loads,
    price_service,
)

REGULAR = LaundryTypeId("lt-regular")
TOWELS = LaundryTypeId("lt-towels")


def wash():
    return Service(ServiceId("svc-wash"), "Wash", Money.of("55"))


def full_service():
    return Service(ServiceId("svc-full"), FULL_SERVICE_NAME, Money.of("100"))


def product(item, price, qty):
    return OrderProduct(
        entry_id=EntryId(f"entry-{item}"),
        item_id=ItemId(item),
        item_name=item,
        weight="",
        unit_price=Money.of(price),
        quantity=qty,
    )


@pytest.mark.parametrize(
    "weight, expected",
    [
        ("5", "55.00"),  # under the limit is still one load
        ("7", "55.00"),  # exactly the limit
        ("7.1", "110.00"),  # a started second load
        ("8", "110.00"),
        ("14", "110.00"),
        ("14.01", "165.00"),
    ],
)
def test_laundry_total_bills_per_started_load(weight, expected):
    total = compute_laundry_total(Money.of("55"), Decimal(weight), Decimal("7"))
    assert total == Money.of(expected)


@pytest.mark.parametrize("weight", ["0", "-3"])
def test_zero_or_negative_weight_costs_nothing(weight):
    assert compute_laundry_total(Money.of("55"), Decimal(weight), Decimal("7")) == Money.zero()


def test_non_positive_price_contributes_zero():
    assert compute_laundry_total(Money.of("0"), Decimal("8"), Decimal("7")) == Money.zero()
    assert compute_laundry_total(Money.of("-10"), Decimal("8"), Decimal("7")) == Money.zero()


def test_count_loads_ignores_bad_limits():
    assert count_loads(Decimal("5"), Decimal("0")) == 0
    assert count_loads(Decimal("1"), Decimal("1")) == 1


def test_service_subtotal_sums_every_weighed_type():
    weights = {
        REGULAR: WeightInput(value=Decimal("8"), limit=Decimal("7")),  # 2 loads
        TOWELS: WeightInput(value=Decimal("3"), limit=Decimal("4")),  # 1 load
    }
    # 3 loads * 55 = 165
    assert compute_service_subtotal(wash(), weights) == Money.of("165")


def test_unweighed_types_do_not_appear_on_the_line():
    weights = {
        REGULAR: WeightInput(value=Decimal("2"), limit=Decimal("7")),
        TOWELS: WeightInput(value=Decimal("0"), limit=Decimal("4")),
    }
    line = price_service(wash(), weights)
    assert set(line.laundry_weights) == {REGULAR}
    assert line.laundry_weights[REGULAR].laundry_total == Money.of("55")


def test_full_service_is_flat_regardless_of_weight():
    light = {REGULAR: WeightInput(value=Decimal("1"), limit=Decimal("7"))}
    heavy = {REGULAR: WeightInput(value=Decimal("40"), limit=Decimal("7"))}

    assert compute_service_subtotal(full_service(), {}) == Money.of("100")
    assert compute_service_subtotal(full_service(), light) == Money.of("100")
    assert compute_service_subtotal(full_service(), heavy) == Money.of("100")
    assert price_service(full_service(), heavy).laundry_weights == {}


def test_order_total_adds_services_and_products():
    weights = {REGULAR: WeightInput(value=Decimal("7.1"), limit=Decimal("7"))}
    services = [price_service(wash(), weights), price_service(full_service(), weights)]
    products = [product("detergent", "20", 2), product("softener", "15", 1)]

    # 110 (wash) + 100 (full) + 40 + 15
    assert compute_order_total(services, products) == Money.of("265")


def test_order_total_does_not_depend_on_order():
    weights = {REGULAR: WeightInput(value=Decimal("9"), limit=Decimal("7"))}
    services = [price_service(wash(), weights), price_service(full_service(), weights)]
    products = [product("a", "20", 2), product("b", "15", 3), product("c", "7.25", 1)]

    forward = compute_order_total(services, products)
    backward = compute_order_total(list(reversed(services)), list(reversed(products)))
    # 110 (wash, 2 loads) + 100 (full) + 40 + 45 + 7.25
    assert forward == backward == Money.of("302.25")


def test_empty_order_totals_zero():
    assert compute_order_total([], []) == Money.zero()
