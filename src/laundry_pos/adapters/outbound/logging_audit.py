from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.errors import AuditError, CheckoutError
from laundry_pos.core.ports.outbound.audit import AuditEvent, AuditLog

logger = logging.getLogger(__name__)


@dataclass
class LoggingAuditLog(AuditLog):
    fail: bool = False
    events: List[AuditEvent] = field(default_factory=list)

    def record(self, event: AuditEvent) -> Result[None, CheckoutError]:
        if self.fail:
            return Failure(AuditError(message="audit log is down"))
        self.events.append(event)
        logger.info(
            "audit",
            extra={
                "actor_id": event.actor_id,
                "actor_email": event.actor_email,
                "action_type": event.action_type,
                "details": event.details,
                "page": event.page,
            },
        )
        return Success(None)
