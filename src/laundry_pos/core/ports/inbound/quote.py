from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.laundry import ServiceLine
from laundry_pos.core.domain.model.money import Money


@dataclass(frozen=True)
class QuoteWeight:
    type_id: str
    value: Decimal


@dataclass(frozen=True)
class QuoteProductLine:
    entry_id: str
    quantity: int


@dataclass(frozen=True)
class QuoteCommand:
    weights: Sequence[QuoteWeight] = ()
    service_ids: Sequence[str] = ()
    products: Sequence[QuoteProductLine] = ()


@dataclass(frozen=True)
class Quote:
    services: Sequence[ServiceLine]
    products_total: Money
    total: Money


class QuoteUseCase(Protocol):
    def quote(self, command: QuoteCommand) -> Result[Quote, CheckoutError]: ...
