from __future__ import annotations

import random
from datetime import date

from laundry_pos.core.domain.model.order import ReceiptId

SUFFIX_MIN = 1
SUFFIX_MAX = 999_999_999


def generate_receipt_id(today: date, rng: random.Random | None = None) -> ReceiptId:
    """
    RID-MMDDYYYY-NNN. Display-friendly only: two receipts may collide, the
    store has to enforce uniqueness if it matters.
    """
    r = rng or random.Random()
    suffix = r.randint(SUFFIX_MIN, SUFFIX_MAX)
    return ReceiptId(f"RID-{today:%m%d%Y}-{suffix:03d}")
