"""Deterministic cart contents derived from a context identifier.

Upstream providers return carts built by ``generate_cart`` so that fetching the
same context twice yields identical items and totals without caching anything.
"""
from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Tuple

from .dtos import CartItemDTO, CartSnapshotDTO, CartTotalsDTO

PLANS: Tuple[str, ...] = ("basic", "premium", "enterprise")
PLAN_PRICES: Dict[str, Decimal] = {
    "basic": Decimal("29.99"),
    "premium": Decimal("49.99"),
    "enterprise": Decimal("99.99"),
}
CURRENCY = "CAD"
TAX_RATE = Decimal("0.13")
CART_ID_PREFIX = "cart-"

_CENTS = Decimal("0.01")


def context_hash(value: str) -> int:
    """31-multiplier rolling hash, wrapped to signed 32-bit, returned as its absolute value."""
    acc = 0
    for char in value:
        acc = (acc * 31 + ord(char)) & 0xFFFFFFFF
    if acc >= 0x80000000:
        acc -= 0x100000000
    return abs(acc)


def round2(amount: Decimal) -> Decimal:
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def build_items(seed: int) -> List[CartItemDTO]:
    item_count = (seed % 3) + 1
    return [
        CartItemDTO(
            plan=PLANS[(seed + offset) % len(PLANS)],
            quantity=((seed + offset) % 3) + 1,
        )
        for offset in range(item_count)
    ]


def compute_totals(items: List[CartItemDTO]) -> CartTotalsDTO:
    subtotal = round2(
        sum((PLAN_PRICES[item.plan] * item.quantity for item in items), Decimal("0"))
    )
    tax = round2(subtotal * TAX_RATE)
    return CartTotalsDTO(
        currency=CURRENCY,
        subtotal=subtotal,
        tax=tax,
        total=round2(subtotal + tax),
    )


def generate_cart(context_id: str, expires_at: datetime) -> CartSnapshotDTO:
    items = build_items(context_hash(context_id))
    return CartSnapshotDTO(
        cart_id=f"{CART_ID_PREFIX}{context_id}",
        expires_at=expires_at,
        items=tuple(items),
        totals=compute_totals(items),
    )
