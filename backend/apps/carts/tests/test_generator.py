import string
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.carts.generator import (
    CURRENCY,
    PLANS,
    compute_totals,
    context_hash,
    generate_cart,
    round2,
)

EXPIRES_AT = datetime(2026, 3, 1, 12, 15, tzinfo=dt_timezone.utc)

SAMPLE_IDS = [f"ctx-{n}" for n in range(1, 200)] + [
    "",
    "unknown-ctx",
    "polygenelubricants",
    string.ascii_letters * 4,
    "контекст-42",
]


def test_hash_matches_known_values():
    assert context_hash("") == 0
    assert context_hash("hello") == 99162322
    assert context_hash("ctx-1") == 95001099


def test_hash_wraps_to_signed_32_bit_before_absolute_value():
    # Wraps to exactly -2**31, whose absolute value is 2**31.
    assert context_hash("polygenelubricants") == 2**31
    assert all(0 <= context_hash(value) <= 2**31 for value in SAMPLE_IDS)


def test_single_item_cart_for_ctx_1():
    cart = generate_cart("ctx-1", EXPIRES_AT)
    assert cart.cart_id == "cart-ctx-1"
    assert cart.expires_at == EXPIRES_AT
    assert [(item.plan, item.quantity) for item in cart.items] == [("basic", 1)]
    assert cart.totals.currency == "CAD"
    assert cart.totals.subtotal == Decimal("29.99")
    assert cart.totals.tax == Decimal("3.90")
    assert cart.totals.total == Decimal("33.89")


def test_two_item_cart_for_ctx_2():
    cart = generate_cart("ctx-2", EXPIRES_AT)
    assert [(item.plan, item.quantity) for item in cart.items] == [
        ("premium", 2),
        ("enterprise", 3),
    ]
    assert cart.totals.subtotal == Decimal("399.95")
    assert cart.totals.tax == Decimal("51.99")
    assert cart.totals.total == Decimal("451.94")


@pytest.mark.parametrize("context_id", SAMPLE_IDS)
def test_generation_is_deterministic(context_id):
    assert generate_cart(context_id, EXPIRES_AT) == generate_cart(context_id, EXPIRES_AT)


@pytest.mark.parametrize("context_id", SAMPLE_IDS)
def test_items_stay_within_bounds(context_id):
    cart = generate_cart(context_id, EXPIRES_AT)
    assert 1 <= len(cart.items) <= 3
    for item in cart.items:
        assert item.plan in PLANS
        assert 1 <= item.quantity <= 3


@pytest.mark.parametrize("context_id", SAMPLE_IDS)
def test_totals_arithmetic(context_id):
    totals = generate_cart(context_id, EXPIRES_AT).totals
    assert totals.currency == CURRENCY
    assert totals.tax == round2(totals.subtotal * Decimal("0.13"))
    assert totals.total == round2(totals.subtotal + totals.tax)
    for amount in (totals.subtotal, totals.tax, totals.total):
        assert amount.as_tuple().exponent == -2


def test_round2_rounds_half_up():
    assert round2(Decimal("0.125")) == Decimal("0.13")
    assert round2(Decimal("3.8987")) == Decimal("3.90")


def test_compute_totals_of_empty_cart_is_zero():
    totals = compute_totals([])
    assert totals.subtotal == totals.tax == totals.total == Decimal("0.00")
