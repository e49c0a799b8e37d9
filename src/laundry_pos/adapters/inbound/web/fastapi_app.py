from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Result, Success

from laundry_pos.bootstrap import UseCases
from laundry_pos.core.domain.model.draft import OrderDraft
from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    ConfirmationRequired,
    DraftConflict,
    InsufficientStock,
    InvalidStatusTransition,
    NotFound,
    NotInCart,
    PersistenceError,
    SubmissionInProgress,
    ValidationError,
)
from laundry_pos.core.domain.model.laundry import ServiceLine
from laundry_pos.core.domain.model.order import Order, WorkerSession
from laundry_pos.core.domain.service.quote_service import MAX_QUOTE_QUANTITY
from laundry_pos.core.ports.inbound.checkout import (
    AddProductCommand,
    OpenCheckoutCommand,
    OrderReceipt,
    RemoveProductCommand,
    SetCustomerCommand,
    SetWeightCommand,
    SubmitOrderCommand,
    ToggleServiceCommand,
)
from laundry_pos.core.ports.inbound.inventory_report import ExpiringQuery, LowStockQuery
from laundry_pos.core.ports.inbound.order_log import (
    ChangeOrderStatusCommand,
    ListOrdersQuery,
)
from laundry_pos.core.ports.inbound.quote import (
    Quote,
    QuoteCommand,
    QuoteProductLine,
    QuoteWeight,
)

T = TypeVar("T")

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class OpenCheckoutRequest(BaseModel):
    employee_id: str = Field(min_length=1, examples=["emp-001"])
    email: str = Field(default="", examples=["cashier@example.com"])


class SetWeightRequest(BaseModel):
    value: Decimal = Field(ge=0, examples=["7.1"])


class AddProductRequest(BaseModel):
    entry_id: str = Field(min_length=1, examples=["entry-detergent-1"])


class SetCustomerRequest(BaseModel):
    customer_name: str = Field(default="", examples=["Juan Dela Cruz"])
    payment_method: str | None = Field(default=None, examples=["Cash"])


class SubmitRequest(BaseModel):
    confirm_high_value: bool = False


class StatusChangeRequest(BaseModel):
    employee_id: str = Field(min_length=1, examples=["emp-001"])
    email: str = ""


class QuoteWeightIn(BaseModel):
    type_id: str = Field(min_length=1, examples=["lt-regular"])
    value: Decimal = Field(ge=0, examples=["7.1"])


class QuoteProductIn(BaseModel):
    entry_id: str = Field(min_length=1, examples=["entry-detergent-1"])
    quantity: int = Field(gt=0, le=MAX_QUOTE_QUANTITY, examples=[2])


class QuoteRequest(BaseModel):
    weights: list[QuoteWeightIn] = Field(default_factory=list)
    service_ids: list[str] = Field(default_factory=list)
    products: list[QuoteProductIn] = Field(default_factory=list)


class ServiceOut(BaseModel):
    service_id: str
    name: str
    price_per_limit: str


class LaundryTypeOut(BaseModel):
    type_id: str
    name: str
    limit: str
    unit: str


class CatalogEntryOut(BaseModel):
    entry_id: str
    item_id: str
    item_name: str
    unit_weight: str
    unit_price: str
    quantity_on_hand: int
    purchased_date: date | None = None
    expiration_date: date | None = None


class LaundryWeightOut(BaseModel):
    type_id: str
    value: str
    limit: str
    laundry_total: str


class ServiceLineOut(BaseModel):
    service_id: str
    name: str
    service_price: str
    sub_total: str
    laundry_weights: list[LaundryWeightOut]


class CartLineOut(BaseModel):
    entry_id: str
    item_id: str
    item_name: str
    weight: str
    unit_price: str
    quantity: int
    subtotal: str


class DraftOut(BaseModel):
    draft_id: str
    status: str
    employee_id: str
    weights: dict[str, str]
    services: list[ServiceLineOut]
    products: list[CartLineOut]
    stock: dict[str, int]
    customer_name: str
    payment_method: str | None
    total: str
    currency: str
    version: int


class ReceiptOut(BaseModel):
    order_id: str
    receipt_id: str
    total: str
    currency: str
    stock_warnings: int
    draft: DraftOut


class QuoteOut(BaseModel):
    services: list[ServiceLineOut]
    products_total: str
    total: str
    currency: str


class OrderOut(BaseModel):
    order_id: str
    receipt_id: str
    status: str
    customer_name: str
    payment_method: str
    total: str
    currency: str
    created_by: str
    created_at: str
    updated_at: str
    services: list[ServiceLineOut]
    products: list[CartLineOut]


class OrderListOut(BaseModel):
    offset: int
    limit: int
    items: list[OrderOut]


class LowStockOut(BaseModel):
    item_id: str
    item_name: str
    total_quantity: int


class ExpiringOut(BaseModel):
    entry_id: str
    item_id: str
    item_name: str
    quantity: int
    expiration_date: date
    days_remaining: int


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


# ---- Mapping helpers -------------------------------------------------------


def _map_error_to_http(err: CheckoutError) -> tuple[int, ErrorResponse]:
    if isinstance(err, ValidationError):
        return 400, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, NotFound):
        return 404, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(
        err,
        (
            InsufficientStock,
            NotInCart,
            SubmissionInProgress,
            DraftConflict,
            InvalidStatusTransition,
        ),
    ):
        return 409, ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, ConfirmationRequired):
        return 428, ErrorResponse(
            type=type(err).__name__,
            message=str(err),
            details=[{"total": str(err.total), "threshold": str(err.threshold)}],
        )

    if isinstance(err, PersistenceError):
        return 500, ErrorResponse(type=type(err).__name__, message=str(err))

    return 500, ErrorResponse(type=type(err).__name__, message=str(err))


def _respond(result: Result[T, CheckoutError], render: Callable[[T], Any]) -> Any:
    if isinstance(result, Success):
        return render(result.unwrap())
    status, body = _map_error_to_http(result.failure())
    return JSONResponse(status_code=status, content=body.model_dump())


def _service_line_out(line: ServiceLine) -> ServiceLineOut:
    return ServiceLineOut(
        service_id=line.service.service_id.value,
        name=line.service.name,
        service_price=str(line.service_price.amount),
        sub_total=str(line.sub_total.amount),
        laundry_weights=[
            LaundryWeightOut(
                type_id=tid.value,
                value=str(lw.value),
                limit=str(lw.limit),
                laundry_total=str(lw.laundry_total.amount),
            )
            for tid, lw in line.laundry_weights.items()
        ],
    )


def _cart_lines_out(products) -> list[CartLineOut]:
    return [
        CartLineOut(
            entry_id=p.entry_id.value,
            item_id=p.item_id.value,
            item_name=p.item_name,
            weight=p.weight,
            unit_price=str(p.unit_price.amount),
            quantity=p.quantity,
            subtotal=str(p.subtotal().amount),
        )
        for p in products
    ]


def _draft_out(d: OrderDraft) -> DraftOut:
    return DraftOut(
        draft_id=str(d.draft_id.value),
        status=d.status.value,
        employee_id=d.worker.employee_id,
        weights={tid.value: str(w.value) for tid, w in d.weights.items()},
        services=[_service_line_out(s) for s in d.services.values()],
        products=_cart_lines_out(d.products),
        stock={eid.value: qty for eid, qty in d.stock.items()},
        customer_name=d.customer_name,
        payment_method=d.payment_method,
        total=str(d.total.amount),
        currency=d.total.currency,
        version=d.version,
    )


def _receipt_out(r: OrderReceipt) -> ReceiptOut:
    return ReceiptOut(
        order_id=str(r.order_id.value),
        receipt_id=r.receipt_id.value,
        total=str(r.total.amount),
        currency=r.total.currency,
        stock_warnings=r.stock_warnings,
        draft=_draft_out(r.next_draft),
    )


def _quote_out(q: Quote) -> QuoteOut:
    return QuoteOut(
        services=[_service_line_out(s) for s in q.services],
        products_total=str(q.products_total.amount),
        total=str(q.total.amount),
        currency=q.total.currency,
    )


def _order_out(o: Order) -> OrderOut:
    return OrderOut(
        order_id=str(o.order_id.value),
        receipt_id=o.receipt_id.value,
        status=o.status.value,
        customer_name=o.customer_name,
        payment_method=o.payment_method,
        total=str(o.total_amount.amount),
        currency=o.total_amount.currency,
        created_by=o.created_by,
        created_at=o.created_at.isoformat(),
        updated_at=o.updated_at.isoformat(),
        services=[_service_line_out(s) for s in o.services],
        products=_cart_lines_out(o.products),
    )


# ---- App factory -----------------------------------------------------------


def create_app(usecases: UseCases) -> FastAPI:
    app = FastAPI(title="laundry_pos")

    checkout = usecases.checkout
    order_log = usecases.order_log

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(CheckoutError)
    async def handle_domain_error(_: Request, exc: CheckoutError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- catalog -------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/catalog/services", response_model=list[ServiceOut])
    def list_services() -> Any:
        return _respond(
            usecases.catalog.list_services(),
            lambda rows: [
                ServiceOut(
                    service_id=s.service_id.value,
                    name=s.name,
                    price_per_limit=str(s.price_per_limit.amount),
                )
                for s in rows
            ],
        )

    @app.get("/catalog/laundry-types", response_model=list[LaundryTypeOut])
    def list_laundry_types() -> Any:
        return _respond(
            usecases.catalog.list_laundry_types(),
            lambda rows: [
                LaundryTypeOut(
                    type_id=t.type_id.value, name=t.name, limit=str(t.limit), unit=t.unit
                )
                for t in rows
            ],
        )

    @app.get("/catalog/products", response_model=list[CatalogEntryOut])
    def list_products() -> Any:
        return _respond(
            usecases.catalog.list_products(),
            lambda rows: [
                CatalogEntryOut(
                    entry_id=e.entry_id.value,
                    item_id=e.item_id.value,
                    item_name=e.item_name,
                    unit_weight=e.unit_weight,
                    unit_price=str(e.unit_price.amount),
                    quantity_on_hand=e.quantity_on_hand,
                    purchased_date=e.purchased_date,
                    expiration_date=e.expiration_date,
                )
                for e in rows
            ],
        )

    @app.post("/quotes", response_model=QuoteOut, responses={400: {"model": ErrorResponse}})
    def quote(req: QuoteRequest) -> Any:
        cmd = QuoteCommand(
            weights=tuple(QuoteWeight(type_id=w.type_id, value=w.value) for w in req.weights),
            service_ids=tuple(req.service_ids),
            products=tuple(
                QuoteProductLine(entry_id=p.entry_id, quantity=p.quantity)
                for p in req.products
            ),
        )
        return _respond(usecases.quote.quote(cmd), _quote_out)

    # --- checkout ------------------------------------------------------------

    @app.post("/checkouts", response_model=DraftOut, status_code=201)
    def open_checkout(req: OpenCheckoutRequest) -> Any:
        result = checkout.open_checkout(
            OpenCheckoutCommand(employee_id=req.employee_id, email=req.email)
        )
        return _respond(result, _draft_out)

    @app.get("/checkouts/{draft_id}", response_model=DraftOut)
    def get_checkout(draft_id: str) -> Any:
        return _respond(checkout.get_draft(draft_id), _draft_out)

    @app.delete("/checkouts/{draft_id}", status_code=204, response_model=None)
    def close_checkout(draft_id: str) -> Any:
        return _respond(checkout.close_checkout(draft_id), lambda _: None)

    @app.put("/checkouts/{draft_id}/weights/{type_id}", response_model=DraftOut)
    def set_weight(draft_id: str, type_id: str, req: SetWeightRequest) -> Any:
        result = checkout.set_weight(
            SetWeightCommand(draft_id=draft_id, type_id=type_id, value=req.value)
        )
        return _respond(result, _draft_out)

    @app.put("/checkouts/{draft_id}/services/{service_id}", response_model=DraftOut)
    def select_service(draft_id: str, service_id: str) -> Any:
        result = checkout.toggle_service(
            ToggleServiceCommand(draft_id=draft_id, service_id=service_id, selected=True)
        )
        return _respond(result, _draft_out)

    @app.delete("/checkouts/{draft_id}/services/{service_id}", response_model=DraftOut)
    def deselect_service(draft_id: str, service_id: str) -> Any:
        result = checkout.toggle_service(
            ToggleServiceCommand(draft_id=draft_id, service_id=service_id, selected=False)
        )
        return _respond(result, _draft_out)

    @app.post(
        "/checkouts/{draft_id}/products",
        response_model=DraftOut,
        responses={409: {"model": ErrorResponse}},
    )
    def add_product(draft_id: str, req: AddProductRequest) -> Any:
        result = checkout.add_product(
            AddProductCommand(draft_id=draft_id, entry_id=req.entry_id)
        )
        return _respond(result, _draft_out)

    @app.delete(
        "/checkouts/{draft_id}/products/{item_id}",
        response_model=DraftOut,
        responses={409: {"model": ErrorResponse}},
    )
    def remove_product(
        draft_id: str, item_id: str, entry_id: str | None = Query(None, min_length=1)
    ) -> Any:
        result = checkout.remove_product(
            RemoveProductCommand(draft_id=draft_id, item_id=item_id, entry_id=entry_id)
        )
        return _respond(result, _draft_out)

    @app.put("/checkouts/{draft_id}/customer", response_model=DraftOut)
    def set_customer(draft_id: str, req: SetCustomerRequest) -> Any:
        result = checkout.set_customer(
            SetCustomerCommand(
                draft_id=draft_id,
                customer_name=req.customer_name,
                payment_method=req.payment_method,
            )
        )
        return _respond(result, _draft_out)

    @app.post(
        "/checkouts/{draft_id}/submit",
        response_model=ReceiptOut,
        status_code=201,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            428: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    def submit(draft_id: str, req: SubmitRequest | None = None) -> Any:
        confirm = req.confirm_high_value if req is not None else False
        result = checkout.submit(
            SubmitOrderCommand(draft_id=draft_id, confirm_high_value=confirm)
        )
        return _respond(result, _receipt_out)

    # --- order log -----------------------------------------------------------

    @app.get("/orders", response_model=OrderListOut)
    def list_orders(
        offset: int = Query(0, ge=0),
        limit: int = Query(50, ge=1, le=100),
        status: str = Query("ALL"),
        search: str | None = Query(None),
    ) -> Any:
        result = order_log.list_orders(
            ListOrdersQuery(offset=offset, limit=limit, status=status, search=search)
        )
        return _respond(
            result,
            lambda orders: OrderListOut(
                offset=offset, limit=limit, items=[_order_out(o) for o in orders]
            ),
        )

    @app.get("/orders/{order_id}", response_model=OrderOut)
    def get_order(order_id: str) -> Any:
        return _respond(order_log.get_order(order_id), _order_out)

    @app.post("/orders/{order_id}/complete", response_model=OrderOut)
    def complete_order(order_id: str, req: StatusChangeRequest) -> Any:
        result = order_log.complete_order(
            ChangeOrderStatusCommand(
                order_id=order_id,
                actor=WorkerSession(employee_id=req.employee_id, email=req.email),
            )
        )
        return _respond(result, _order_out)

    @app.post("/orders/{order_id}/cancel", response_model=OrderOut)
    def cancel_order(order_id: str, req: StatusChangeRequest) -> Any:
        result = order_log.cancel_order(
            ChangeOrderStatusCommand(
                order_id=order_id,
                actor=WorkerSession(employee_id=req.employee_id, email=req.email),
            )
        )
        return _respond(result, _order_out)

    # --- inventory -----------------------------------------------------------

    @app.get("/inventory/low-stock", response_model=list[LowStockOut])
    def low_stock(threshold: int | None = Query(None, ge=0)) -> Any:
        return _respond(
            usecases.inventory.low_stock(LowStockQuery(threshold=threshold)),
            lambda rows: [
                LowStockOut(
                    item_id=i.item_id.value,
                    item_name=i.item_name,
                    total_quantity=i.total_quantity,
                )
                for i in rows
            ],
        )

    @app.get("/inventory/expiring", response_model=list[ExpiringOut])
    def expiring(within_days: int | None = Query(None, ge=1)) -> Any:
        return _respond(
            usecases.inventory.expiring_soon(
                ExpiringQuery(today=date.today(), within_days=within_days)
            ),
            lambda rows: [
                ExpiringOut(
                    entry_id=e.entry_id.value,
                    item_id=e.item_id.value,
                    item_name=e.item_name,
                    quantity=e.quantity,
                    expiration_date=e.expiration_date,
                    days_remaining=e.days_remaining,
                )
                for e in rows
            ],
        )

    return app
