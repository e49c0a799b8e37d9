from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from returns.functions import identity
from returns.result import Result, safe

from laundry_pos.core.domain.model.errors import CheckoutError, PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def guarded(
    call: Callable[..., Result[T, CheckoutError]], *args: Any
) -> Result[T, CheckoutError]:
    """Run a port call; anything it raises comes back as a Failure."""
    return safe(call)(*args).alt(_normalize).bind(identity)


def _normalize(exc: Exception) -> CheckoutError:
    if isinstance(exc, CheckoutError):
        return exc
    logger.exception("store call raised", exc_info=exc)
    return PersistenceError(f"{type(exc).__name__}: {exc}")
