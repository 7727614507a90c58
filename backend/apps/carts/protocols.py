from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .dtos import CartSnapshotDTO, ContextRecord, ContextResult
from .stores import ContextStatus


class UpstreamCartClientProtocol(Protocol):
    """
    The only contract CartService needs from a commerce provider.

    create_context raises CartValidationError for a missing or blank market or
    channel and UpstreamUnavailableError when the provider is down. get_cart
    raises ContextNotFoundError, ContextExpiredError or UpstreamUnavailableError.
    """

    def create_context(self, market: str, channel: str) -> ContextResult:
        ...

    def get_cart(self, context_id: str) -> CartSnapshotDTO:
        ...


class ContextStoreProtocol(Protocol):
    def record(self, context_id: str, expires_at: datetime) -> ContextRecord:
        ...

    def lookup(self, context_id: str) -> Optional[ContextRecord]:
        ...

    def is_valid(self, context_id: str) -> bool:
        ...

    def is_expired(self, context_id: str) -> bool:
        ...

    def status(self, context_id: str) -> ContextStatus:
        ...

    def __contains__(self, context_id: object) -> bool:
        ...

    def __len__(self) -> int:
        ...
