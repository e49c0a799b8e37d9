from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.inventory import CatalogEntry
from laundry_pos.core.domain.model.laundry import LaundryType, Service


class CatalogGateway(Protocol):
    def fetch_services(self) -> Result[Sequence[Service], CheckoutError]: ...

    def fetch_laundry_types(self) -> Result[Sequence[LaundryType], CheckoutError]: ...

    def fetch_product_catalog(
        self,
    ) -> Result[Sequence[CatalogEntry], CheckoutError]:
        """Entries joined with their item, one row per entry."""
        ...
