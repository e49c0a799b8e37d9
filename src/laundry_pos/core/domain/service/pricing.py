"""
Laundry pricing.

A laundry type has a load limit (7 kg of regular clothes, 1 pc of
comforter). Weight is billed per started load: 7.1 kg at a 7 kg limit is
two loads. Every selected service is billed over the same weights, except
Full Service which is a flat fee.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from typing import Iterable, Mapping

from laundry_pos.core.domain.model.inventory import OrderProduct
from laundry_pos.core.domain.model.laundry import (
    LaundryTypeId,
    LaundryWeight,
    Service,
    ServiceLine,
    WeightInput,
)
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY, Money, fold_money


def count_loads(weight_value: Decimal, limit: Decimal) -> int:
    if weight_value <= 0 or limit <= 0:
        return 0
    return int((weight_value / limit).to_integral_value(rounding=ROUND_CEILING))


def compute_laundry_total(
    price_per_limit: Money, weight_value: Decimal, limit: Decimal
) -> Money:
    loads = count_loads(Decimal(weight_value), Decimal(limit))
    if loads == 0 or not price_per_limit.is_positive():
        return Money.zero(price_per_limit.currency)
    return price_per_limit * loads


def price_weights(
    service: Service, weights: Mapping[LaundryTypeId, WeightInput]
) -> dict[LaundryTypeId, LaundryWeight]:
    return {
        type_id: LaundryWeight(
            value=w.value,
            limit=w.limit,
            laundry_total=compute_laundry_total(
                service.price_per_limit, w.value, w.limit
            ),
        )
        for type_id, w in weights.items()
        if w.value > 0
    }


def price_service(
    service: Service, weights: Mapping[LaundryTypeId, WeightInput]
) -> ServiceLine:
    if service.is_flat_fee:
        return ServiceLine(service=service, sub_total=service.price_per_limit)
    priced = price_weights(service, weights)
    return ServiceLine(
        service=service,
        sub_total=fold_money(
            (lw.laundry_total for lw in priced.values()),
            currency=service.price_per_limit.currency,
        ),
        laundry_weights=priced,
    )


def compute_service_subtotal(
    service: Service, weights: Mapping[LaundryTypeId, WeightInput]
) -> Money:
    return price_service(service, weights).sub_total


def compute_order_total(
    services: Iterable[ServiceLine],
    products: Iterable[OrderProduct],
    currency: str = DEFAULT_CURRENCY,
) -> Money:
    service_total = fold_money((s.sub_total for s in services), currency=currency)
    product_total = fold_money((p.subtotal() for p in products), currency=currency)
    return service_total + product_total
