from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from apps.api.exceptions import ApplicationError


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONTEXT_NOT_FOUND = "CONTEXT_NOT_FOUND"
    CONTEXT_EXPIRED = "CONTEXT_EXPIRED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class CartError(ApplicationError):
    """Typed cart failure; the code decides the HTTP status at the API boundary."""

    code_enum: ErrorCode

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(self.code_enum.value, message, details=dict(details or {}))


class CartValidationError(CartError):
    code_enum = ErrorCode.VALIDATION_ERROR


class ContextNotFoundError(CartError):
    code_enum = ErrorCode.CONTEXT_NOT_FOUND


class ContextExpiredError(CartError):
    code_enum = ErrorCode.CONTEXT_EXPIRED


class UpstreamUnavailableError(CartError):
    """Upstream provider could not serve the request. Callers may retry."""

    code_enum = ErrorCode.UPSTREAM_UNAVAILABLE
