from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from returns.result import Success

from laundry_pos.core.ports.inbound.quote import (
    QuoteCommand,
    QuoteProductLine,
    QuoteUseCase,
    QuoteWeight,
)


def run_quote_cli(usecase: QuoteUseCase, raw: str) -> int:
    """
    raw: JSON string.
    Example:
      {"weights":[{"type_id":"lt-regular","value":"7.1"}],
       "service_ids":["svc-wash"],
       "products":[{"entry_id":"entry-detergent-1","quantity":2}]}
    """
    try:
        payload = json.loads(raw)
        cmd = _parse_command(payload)
    except Exception as e:  # noqa: BLE001
        print(f"invalid_input: {e}")
        return 2

    result = usecase.quote(cmd)

    if isinstance(result, Success):
        q = result.unwrap()
        print(
            "[ok]",
            {
                "services": {
                    line.service.name: str(line.sub_total.amount) for line in q.services
                },
                "products_total": str(q.products_total.amount),
                "total": str(q.total.amount),
                "currency": q.total.currency,
            },
        )
        return 0

    err = result.failure()
    print("[ng]", str(err))
    return 1


def _parse_command(payload: dict[str, Any]) -> QuoteCommand:
    return QuoteCommand(
        weights=tuple(
            QuoteWeight(type_id=str(w["type_id"]), value=_parse_weight(w["value"]))
            for w in payload.get("weights", [])
        ),
        service_ids=tuple(str(s) for s in payload.get("service_ids", [])),
        products=tuple(
            QuoteProductLine(entry_id=str(p["entry_id"]), quantity=int(p["quantity"]))
            for p in payload.get("products", [])
        ),
    )


def _parse_weight(raw: Any) -> Decimal:
    value = Decimal(str(raw))
    if not value.is_finite():
        raise ValueError(f"weight must be a finite number, got {raw!r}")
    return value
