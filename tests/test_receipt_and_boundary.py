# tests/test_receipt_and_boundary.py
import random
import re
from datetime import date

from returns.result import Failure, Success

from laundry_pos.core.domain.model.errors import NotInCart, PersistenceError
from laundry_pos.core.domain.service.boundary import guarded
from laundry_pos.core.domain.service.receipt import generate_receipt_id


def test_receipt_id_format():
    rid = generate_receipt_id(date(2025, 3, 7), random.Random(42))
    assert re.fullmatch(r"RID-03072025-\d{3,9}", rid.value)


def test_receipt_id_is_reproducible_with_a_seeded_rng():
    a = generate_receipt_id(date(2025, 12, 31), random.Random(7))
    b = generate_receipt_id(date(2025, 12, 31), random.Random(7))
    assert a == b


def test_small_suffix_is_zero_padded():
    class Fixed(random.Random):
        def randint(self, a, b):
            return 7

    assert generate_receipt_id(date(2025, 1, 2), Fixed()).value == "RID-01022025-007"


def test_large_suffix_is_not_truncated():
    class Fixed(random.Random):
        def randint(self, a, b):
            return b

    assert generate_receipt_id(date(2025, 1, 2), Fixed()).value == "RID-01022025-999999999"


def test_guarded_passes_results_through():
    assert guarded(lambda x: Success(x * 2), 21) == Success(42)

    err = NotInCart(message="gone", item_id="item-1")
    assert guarded(lambda: Failure(err)) == Failure(err)


def test_guarded_turns_raised_errors_into_persistence_failures():
    def explode():
        raise ConnectionError("socket closed")

    result = guarded(explode)

    assert isinstance(result.failure(), PersistenceError)
    assert "ConnectionError" in result.failure().message


def test_guarded_keeps_raised_domain_errors():
    err = NotInCart(message="gone", item_id="item-1")

    def raise_domain():
        raise err

    assert guarded(raise_domain).failure() == err
