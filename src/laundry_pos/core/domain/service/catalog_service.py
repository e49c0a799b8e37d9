from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.inventory import CatalogEntry
from laundry_pos.core.domain.model.laundry import LaundryType, Service
from laundry_pos.core.domain.service.boundary import guarded
from laundry_pos.core.ports.inbound.catalog import CatalogQueryUseCase
from laundry_pos.core.ports.outbound.catalog import CatalogGateway


@dataclass(frozen=True)
class CatalogDeps:
    catalog: CatalogGateway


@dataclass(frozen=True)
class CatalogService(CatalogQueryUseCase):
    deps: CatalogDeps

    def list_services(self) -> Result[Sequence[Service], CheckoutError]:
        return guarded(self.deps.catalog.fetch_services)

    def list_laundry_types(self) -> Result[Sequence[LaundryType], CheckoutError]:
        return guarded(self.deps.catalog.fetch_laundry_types)

    def list_products(self) -> Result[Sequence[CatalogEntry], CheckoutError]:
        """Only entries with stock left are offered at the counter."""
        return guarded(self.deps.catalog.fetch_product_catalog).map(
            lambda rows: tuple(r for r in rows if r.quantity_on_hand > 0)
        )
