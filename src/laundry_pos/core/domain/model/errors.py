from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(CheckoutError):
    pass


@dataclass(frozen=True)
class NotFound(CheckoutError):
    pass


@dataclass(frozen=True)
class DraftNotFound(NotFound):
    draft_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"draft_not_found: {self.draft_id} ({self.message})"


@dataclass(frozen=True)
class OrderNotFound(NotFound):
    order_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"order_not_found: {self.order_id} ({self.message})"


@dataclass(frozen=True)
class CatalogEntryNotFound(NotFound):
    entry_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"catalog_entry_not_found: {self.entry_id} ({self.message})"


@dataclass(frozen=True)
class InsufficientStock(CheckoutError):
    entry_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"insufficient_stock: entry={self.entry_id} ({self.message})"


@dataclass(frozen=True)
class NotInCart(CheckoutError):
    item_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"not_in_cart: item={self.item_id} ({self.message})"


@dataclass(frozen=True)
class SubmissionInProgress(CheckoutError):
    draft_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"submission_in_progress: {self.draft_id} ({self.message})"


@dataclass(frozen=True)
class DraftConflict(CheckoutError):
    draft_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"draft_conflict: {self.draft_id} ({self.message})"


@dataclass(frozen=True)
class ConfirmationRequired(CheckoutError):
    total: Decimal
    threshold: Decimal

    def __str__(self) -> str:  # pragma: no cover
        return (
            f"confirmation_required: total={self.total} "
            f"threshold={self.threshold} ({self.message})"
        )


@dataclass(frozen=True)
class InvalidStatusTransition(CheckoutError):
    current: str
    requested: str

    def __str__(self) -> str:  # pragma: no cover
        return (
            f"invalid_status_transition: {self.current} -> {self.requested} "
            f"({self.message})"
        )


@dataclass(frozen=True)
class PersistenceError(CheckoutError):
    pass


@dataclass(frozen=True)
class AuditError(CheckoutError):
    pass
