from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping

from laundry_pos.core.domain.model.money import Money

FULL_SERVICE_NAME = "Full Service"


@dataclass(frozen=True)
class ServiceId:
    value: str


@dataclass(frozen=True)
class LaundryTypeId:
    value: str


@dataclass(frozen=True)
class Service:
    service_id: ServiceId
    name: str
    price_per_limit: Money

    @property
    def is_flat_fee(self) -> bool:
        return self.name == FULL_SERVICE_NAME


@dataclass(frozen=True)
class LaundryType:
    type_id: LaundryTypeId
    name: str
    limit: Decimal
    unit: str = "kg"


@dataclass(frozen=True)
class WeightInput:
    """A weight typed by the cashier for one laundry type."""

    value: Decimal
    limit: Decimal


@dataclass(frozen=True)
class LaundryWeight:
    value: Decimal
    limit: Decimal
    laundry_total: Money


@dataclass(frozen=True)
class ServiceLine:
    service: Service
    sub_total: Money
    laundry_weights: Mapping[LaundryTypeId, LaundryWeight] = field(
        default_factory=dict
    )

    @property
    def service_price(self) -> Money:
        return self.service.price_per_limit
