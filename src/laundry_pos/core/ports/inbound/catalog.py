from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.inventory import CatalogEntry
from laundry_pos.core.domain.model.laundry import LaundryType, Service


class CatalogQueryUseCase(Protocol):
    def list_services(self) -> Result[Sequence[Service], CheckoutError]: ...

    def list_laundry_types(self) -> Result[Sequence[LaundryType], CheckoutError]: ...

    def list_products(self) -> Result[Sequence[CatalogEntry], CheckoutError]: ...
