from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class ContextRecord:
    context_id: str
    expires_at: datetime


@dataclass(frozen=True)
class ContextResult:
    context_id: str
    expires_at: datetime


@dataclass(frozen=True)
class CartItemDTO:
    plan: str
    quantity: int


@dataclass(frozen=True)
class CartTotalsDTO:
    currency: str
    subtotal: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class CartSnapshotDTO:
    cart_id: str
    expires_at: datetime
    items: Tuple[CartItemDTO, ...]
    totals: CartTotalsDTO


@dataclass(frozen=True)
class CreatedContextDTO:
    context: ContextResult
    cart: CartSnapshotDTO
