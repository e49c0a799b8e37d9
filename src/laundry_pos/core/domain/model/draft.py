from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple
from uuid import UUID, uuid4

from laundry_pos.core.domain.model.inventory import CatalogEntry, EntryId, OrderProduct
from laundry_pos.core.domain.model.laundry import (
    LaundryType,
    LaundryTypeId,
    Service,
    ServiceId,
    ServiceLine,
    WeightInput,
)
from laundry_pos.core.domain.model.money import DEFAULT_CURRENCY, Money
from laundry_pos.core.domain.model.order import WorkerSession


@dataclass(frozen=True)
class DraftId:
    value: UUID

    @staticmethod
    def new() -> "DraftId":
        return DraftId(uuid4())


class DraftStatus(str, Enum):
    EMPTY = "EMPTY"
    BUILDING = "BUILDING"
    SUBMITTING = "SUBMITTING"
    SUBMITTED = "SUBMITTED"


@dataclass(frozen=True)
class OrderDraft:
    """
    In-progress order owned by one checkout session.

    `stock` mirrors the remaining quantity of every catalog entry as the
    cart consumes it. It is advisory; the store is only touched on submit.

    `version` is bumped by the draft store on every write; a write carrying
    an older version is refused.
    """

    draft_id: DraftId
    worker: WorkerSession
    services_catalog: Mapping[ServiceId, Service] = field(default_factory=dict)
    laundry_types: Mapping[LaundryTypeId, LaundryType] = field(default_factory=dict)
    catalog: Mapping[EntryId, CatalogEntry] = field(default_factory=dict)
    stock: Mapping[EntryId, int] = field(default_factory=dict)
    weights: Mapping[LaundryTypeId, WeightInput] = field(default_factory=dict)
    services: Mapping[ServiceId, ServiceLine] = field(default_factory=dict)
    products: Tuple[OrderProduct, ...] = ()
    customer_name: str = ""
    payment_method: str | None = None
    total: Money = field(default_factory=lambda: Money.zero(DEFAULT_CURRENCY))
    status: DraftStatus = DraftStatus.EMPTY
    version: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.services and not self.products
