from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Dict

from returns.result import Failure, Result, Success

from laundry_pos.core.domain.model.draft import DraftId, DraftStatus, OrderDraft
from laundry_pos.core.domain.model.errors import (
    CheckoutError,
    DraftConflict,
    DraftNotFound,
    SubmissionInProgress,
)
from laundry_pos.core.domain.service.draft import mark_submitting
from laundry_pos.core.ports.outbound.drafts import DraftRepository


@dataclass
class InMemoryDraftRepository(DraftRepository):
    _store: Dict[str, OrderDraft] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self, draft_id: DraftId) -> Result[OrderDraft, CheckoutError]:
        key = str(draft_id.value)
        draft = self._store.get(key)
        if draft is None:
            return Failure(DraftNotFound(message="no open checkout", draft_id=key))
        return Success(draft)

    def save(self, draft: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        key = str(draft.draft_id.value)
        with self._lock:
            current = self._store.get(key)
            if current is not None and current.version != draft.version:
                return Failure(_stale(current, key))
            stored = replace(draft, version=draft.version + 1)
            self._store[key] = stored
        return Success(stored)

    def begin_submission(self, draft: OrderDraft) -> Result[OrderDraft, CheckoutError]:
        key = str(draft.draft_id.value)
        with self._lock:
            current = self._store.get(key)
            if current is None:
                return Failure(DraftNotFound(message="no open checkout", draft_id=key))
            if current.version != draft.version:
                return Failure(_stale(current, key))
            if current.status is DraftStatus.SUBMITTING:
                return Failure(
                    SubmissionInProgress(
                        message="order is already being submitted", draft_id=key
                    )
                )
            submitting = replace(mark_submitting(current), version=current.version + 1)
            self._store[key] = submitting
        return Success(submitting)

    def delete(self, draft_id: DraftId) -> Result[None, CheckoutError]:
        key = str(draft_id.value)
        with self._lock:
            current = self._store.get(key)
            if current is not None and current.status is DraftStatus.SUBMITTING:
                return Failure(
                    SubmissionInProgress(
                        message="order is being submitted", draft_id=key
                    )
                )
            self._store.pop(key, None)
        return Success(None)


def _stale(current: OrderDraft, key: str) -> CheckoutError:
    if current.status is DraftStatus.SUBMITTING:
        return SubmissionInProgress(message="order is already being submitted", draft_id=key)
    return DraftConflict(message="checkout changed since it was read", draft_id=key)
