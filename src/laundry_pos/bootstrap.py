from __future__ import annotations

from dataclasses import dataclass

from laundry_pos.adapters.outbound.in_memory_drafts import InMemoryDraftRepository
from laundry_pos.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from laundry_pos.adapters.outbound.in_memory_store import InMemoryStore
from laundry_pos.adapters.outbound.logging_audit import LoggingAuditLog
from laundry_pos.adapters.outbound.seed import seeded_store
from laundry_pos.config import Settings
from laundry_pos.core.domain.service.catalog_service import (
    CatalogDeps,
    CatalogService,
)
from laundry_pos.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)
from laundry_pos.core.domain.service.inventory_report_service import (
    InventoryReportDeps,
    InventoryReportService,
)
from laundry_pos.core.domain.service.order_log_service import (
    OrderLogDeps,
    OrderLogService,
)
from laundry_pos.core.domain.service.quote_service import QuoteDeps, QuoteService
from laundry_pos.core.ports.outbound.audit import AuditLog
from laundry_pos.core.ports.outbound.orders import OrderRepository


@dataclass(frozen=True)
class UseCases:
    catalog: CatalogService
    checkout: CheckoutService
    quote: QuoteService
    order_log: OrderLogService
    inventory: InventoryReportService


def build_usecases(
    settings: Settings,
    store: InMemoryStore | None = None,
    orders: OrderRepository | None = None,
    audit: AuditLog | None = None,
) -> UseCases:
    store = store if store is not None else seeded_store(currency=settings.currency)
    orders = orders if orders is not None else InMemoryOrderRepository()
    audit = audit if audit is not None else LoggingAuditLog()
    drafts = InMemoryDraftRepository()

    checkout = CheckoutService(
        CheckoutDeps(
            catalog=store,
            stock=store,
            orders=orders,
            drafts=drafts,
            audit=audit,
            high_value_threshold=settings.high_value_threshold,
            currency=settings.currency,
            stock_workers=settings.stock_workers,
        )
    )
    catalog = CatalogService(CatalogDeps(catalog=store))
    quote = QuoteService(QuoteDeps(catalog=store, currency=settings.currency))
    order_log = OrderLogService(OrderLogDeps(orders=orders, audit=audit))
    inventory = InventoryReportService(
        InventoryReportDeps(
            stock=store,
            low_stock_threshold=settings.low_stock_threshold,
            expiring_within_days=settings.expiring_within_days,
        )
    )
    return UseCases(
        catalog=catalog,
        checkout=checkout,
        quote=quote,
        order_log=order_log,
        inventory=inventory,
    )
