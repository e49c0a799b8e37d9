from __future__ import annotations

from typing import Protocol

from returns.result import Result

from laundry_pos.core.domain.model.draft import DraftId, OrderDraft
from laundry_pos.core.domain.model.errors import CheckoutError


class DraftRepository(Protocol):
    def get(self, draft_id: DraftId) -> Result[OrderDraft, CheckoutError]: ...

    def save(self, draft: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        """
        Compare-and-set on `version`: the stored draft must still carry the
        version the caller read. Returns the stored draft, version bumped.
        """
        ...

    def begin_submission(
        self, draft: OrderDraft
    ) -> Result[OrderDraft, CheckoutError]:
        """
        Flip the stored draft to SUBMITTING unless it already is, or has
        changed since `draft` was read. Must be atomic: it is the busy flag
        that blocks a double submit.
        """
        ...

    def delete(self, draft_id: DraftId) -> Result[None, CheckoutError]: ...
