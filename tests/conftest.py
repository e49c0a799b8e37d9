# tests/conftest.py
# Shared wiring: every test gets its own seeded store and repositories so
# failure flags can be flipped without leaking into other tests.
from datetime import date
from decimal import Decimal

import pytest

from laundry_pos.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from laundry_pos.adapters.outbound.logging_audit import LoggingAuditLog
from laundry_pos.adapters.outbound.seed import seeded_store
from laundry_pos.bootstrap import build_usecases
from laundry_pos.config import Settings
from laundry_pos.core.ports.inbound.checkout import (
    AddProductCommand,
    OpenCheckoutCommand,
    SetCustomerCommand,
    SetWeightCommand,
    ToggleServiceCommand,
)

TODAY = date(2026, 3, 1)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store():
    return seeded_store(today=TODAY)


@pytest.fixture
def orders():
    return InMemoryOrderRepository()


@pytest.fixture
def audit():
    return LoggingAuditLog()


@pytest.fixture
def usecases(settings, store, orders, audit):
    return build_usecases(settings, store=store, orders=orders, audit=audit)


@pytest.fixture
def checkout(usecases):
    return usecases.checkout


@pytest.fixture
def open_draft(checkout):
    """Returns the id of a freshly opened checkout."""

    def _open(employee_id="emp-001", email="cashier@example.com"):
        draft = checkout.open_checkout(
            OpenCheckoutCommand(employee_id=employee_id, email=email)
        ).unwrap()
        return str(draft.draft_id.value)

    return _open


@pytest.fixture
def ready_draft(checkout, open_draft):
    """
    A submittable checkout: 7.1 kg regular wash (2 loads = 110.00),
    two detergents (40.00) and one softener (15.00). Total 165.00.
    """

    def _ready(customer="Juan Dela Cruz", payment="Cash"):
        draft_id = open_draft()
        checkout.set_weight(
            SetWeightCommand(draft_id=draft_id, type_id="lt-regular", value=Decimal("7.1"))
        ).unwrap()
        checkout.toggle_service(
            ToggleServiceCommand(draft_id=draft_id, service_id="svc-wash")
        ).unwrap()
        for entry_id in ("entry-detergent-1", "entry-detergent-1", "entry-softener-1"):
            checkout.add_product(
                AddProductCommand(draft_id=draft_id, entry_id=entry_id)
            ).unwrap()
        checkout.set_customer(
            SetCustomerCommand(
                draft_id=draft_id, customer_name=customer, payment_method=payment
            )
        ).unwrap()
        return draft_id

    return _ready
