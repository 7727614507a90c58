from __future__ import annotations

import itertools
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from django.conf import settings
from django.utils import timezone

from apps.common import get_logger

from .dtos import CartSnapshotDTO, ContextResult
from .errors import CartValidationError, ContextExpiredError, ContextNotFoundError
from .generator import generate_cart
from .stores import Clock

logger = get_logger(__name__).bind(component="carts", layer="client")

DEFAULT_CONTEXT_TTL = timedelta(minutes=15)
CONTEXT_ID_PREFIX = "ctx-"


def configured_ttl() -> timedelta:
    seconds = getattr(settings, "CART_CONTEXT_TTL_SECONDS", None)
    if seconds is None:
        return DEFAULT_CONTEXT_TTL
    return timedelta(seconds=int(seconds))


class InMemoryUpstreamCartClient:
    """
    Simulated commerce provider.

    Contexts live for a fixed TTL from creation. Expiry is checked when a cart
    is requested; there is no background cleanup, so stale entries stay in
    memory for the life of the process.
    """

    def __init__(self, ttl: Optional[timedelta] = None, clock: Optional[Clock] = None):
        self.ttl = ttl if ttl is not None else configured_ttl()
        self._clock = clock or timezone.now
        self._contexts: Dict[str, datetime] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self.logger = logger.bind(client="InMemoryUpstreamCartClient")

    def create_context(self, market: str, channel: str) -> ContextResult:
        missing = [
            name
            for name, value in (("market", market), ("channel", channel))
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            self.logger.warning("Upstream rejected context input", missing=missing)
            raise CartValidationError(
                f"Missing required fields: {', '.join(missing)}",
                {"fields": missing},
            )
        with self._lock:
            context_id = f"{CONTEXT_ID_PREFIX}{next(self._counter)}"
            expires_at = self._clock() + self.ttl
            self._contexts[context_id] = expires_at
        self.logger.info(
            "Upstream context created",
            context_id=context_id,
            market=market,
            channel=channel,
            expires_at=expires_at,
        )
        return ContextResult(context_id=context_id, expires_at=expires_at)

    def get_cart(self, context_id: str) -> CartSnapshotDTO:
        with self._lock:
            expires_at = self._contexts.get(context_id)
        if expires_at is None:
            self.logger.info("Upstream context not found", context_id=context_id)
            raise ContextNotFoundError(
                f"Context {context_id} not found", {"contextId": context_id}
            )
        if self._clock() > expires_at:
            self.logger.info("Upstream context expired", context_id=context_id)
            raise ContextExpiredError(
                f"Context {context_id} has expired",
                {"contextId": context_id, "expiresAt": expires_at.isoformat()},
            )
        return generate_cart(context_id, expires_at)
