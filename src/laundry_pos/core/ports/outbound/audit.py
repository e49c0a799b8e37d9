from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from laundry_pos.core.domain.model.errors import CheckoutError

CREATE_ORDER = "CREATE_ORDER"
COMPLETE_ORDER = "COMPLETE_ORDER"
CANCEL_ORDER = "CANCEL_ORDER"


@dataclass(frozen=True)
class AuditEvent:
    actor_id: str
    actor_email: str
    action_type: str
    details: str
    page: str


class AuditLog(Protocol):
    def record(self, event: AuditEvent) -> Result[None, CheckoutError]: ...
