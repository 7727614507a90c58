from __future__ import annotations

import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional

from django.utils import timezone

from apps.common import get_logger

from .dtos import ContextRecord

logger = get_logger(__name__).bind(component="carts", layer="store")

Clock = Callable[[], datetime]


class ContextStatus(str, Enum):
    UNKNOWN = "unknown"
    ACTIVE = "active"
    EXPIRED = "expired"


class InMemoryContextStore:
    """
    Local authority for which contexts exist and when they expire.

    Expiry is evaluated on read against the injected clock; nothing is ever
    evicted. A context is expired from the exact instant of its expires_at.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or timezone.now
        self._records: Dict[str, ContextRecord] = {}
        self._lock = threading.Lock()
        self.logger = logger.bind(store="InMemoryContextStore")

    def record(self, context_id: str, expires_at: datetime) -> ContextRecord:
        entry = ContextRecord(context_id=context_id, expires_at=expires_at)
        with self._lock:
            replaced = context_id in self._records
            self._records[context_id] = entry
        self.logger.debug(
            "Context recorded",
            context_id=context_id,
            expires_at=expires_at,
            replaced=replaced,
        )
        return entry

    def lookup(self, context_id: str) -> Optional[ContextRecord]:
        with self._lock:
            return self._records.get(context_id)

    def status(self, context_id: str) -> ContextStatus:
        entry = self.lookup(context_id)
        if entry is None:
            return ContextStatus.UNKNOWN
        if entry.expires_at <= self._clock():
            return ContextStatus.EXPIRED
        return ContextStatus.ACTIVE

    def is_valid(self, context_id: str) -> bool:
        return self.status(context_id) is ContextStatus.ACTIVE

    def is_expired(self, context_id: str) -> bool:
        return self.status(context_id) is ContextStatus.EXPIRED

    def __contains__(self, context_id: object) -> bool:
        with self._lock:
            return context_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
