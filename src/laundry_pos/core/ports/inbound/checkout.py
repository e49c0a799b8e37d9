from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from returns.result import Result

from laundry_pos.core.domain.model.draft import OrderDraft
from laundry_pos.core.domain.model.errors import CheckoutError
from laundry_pos.core.domain.model.money import Money
from laundry_pos.core.domain.model.order import OrderId, ReceiptId


@dataclass(frozen=True)
class OpenCheckoutCommand:
    employee_id: str
    email: str


@dataclass(frozen=True)
class SetWeightCommand:
    draft_id: str
    type_id: str
    value: Decimal


@dataclass(frozen=True)
class ToggleServiceCommand:
    draft_id: str
    service_id: str
    selected: bool = True


@dataclass(frozen=True)
class AddProductCommand:
    draft_id: str
    entry_id: str


@dataclass(frozen=True)
class RemoveProductCommand:
    draft_id: str
    item_id: str
    entry_id: str | None = None


@dataclass(frozen=True)
class SetCustomerCommand:
    draft_id: str
    customer_name: str
    payment_method: str | None


@dataclass(frozen=True)
class SubmitOrderCommand:
    draft_id: str
    confirm_high_value: bool = False


@dataclass(frozen=True)
class OrderReceipt:
    order_id: OrderId
    receipt_id: ReceiptId
    total: Money
    stock_warnings: int
    next_draft: OrderDraft


class CheckoutUseCase(Protocol):
    def open_checkout(
        self, command: OpenCheckoutCommand
    ) -> Result[OrderDraft, CheckoutError]: ...

    def get_draft(self, draft_id: str) -> Result[OrderDraft, CheckoutError]: ...

    def close_checkout(self, draft_id: str) -> Result[None, CheckoutError]: ...

    def set_weight(self, command: SetWeightCommand) -> Result[OrderDraft, CheckoutError]: ...

    def toggle_service(
        self, command: ToggleServiceCommand
    ) -> Result[OrderDraft, CheckoutError]: ...

    def add_product(self, command: AddProductCommand) -> Result[OrderDraft, CheckoutError]: ...

    def remove_product(
        self, command: RemoveProductCommand
    ) -> Result[OrderDraft, CheckoutError]: ...

    def set_customer(
        self, command: SetCustomerCommand
    ) -> Result[OrderDraft, CheckoutError]: ...

    def submit(self, command: SubmitOrderCommand) -> Result[OrderReceipt, CheckoutError]: ...
