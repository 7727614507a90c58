from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response, status_for_code
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"
FORWARDED_HEADERS = ("Allow", "Retry-After")


class ApplicationError(Exception):
    """
    Domain-level error meant to be raised from services, clients or views.

    Args:
        code: Machine readable error code.
        message: Human readable explanation of the error.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code if status_code is not None else status_for_code(code)
        self.details = details

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF EXCEPTION_HANDLER returning the structured error envelope for every failure.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log = bound_logger.error if exc.status_code >= 500 else bound_logger.info
        log("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_normalize_django_validation_error(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        INTERNAL_ERROR_CODE,
        INTERNAL_ERROR_MESSAGE,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    if isinstance(exc, UnsupportedMediaType):
        status_code = status.HTTP_400_BAD_REQUEST
    code, message, details = _normalize_payload(exc, response.data, status_code)
    headers = {
        name: response[name] for name in FORWARDED_HEADERS if response.has_header(name)
    } or None

    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(code, message, details, http_status=status_code, headers=headers)


def _normalize_django_validation_error(
    exc: DjangoValidationError,
) -> Union[Dict[str, Any], list[str]]:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    if hasattr(exc, "messages"):
        return list(exc.messages)
    return {"detail": getattr(exc, "message", "Validation failed")}


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", _validation_message(payload), payload
    if isinstance(exc, (ParseError, UnsupportedMediaType)):
        return (
            "VALIDATION_ERROR",
            _extract_message(payload, "Malformed request", status_code),
            None,
        )
    if isinstance(exc, (NotFound, Http404)):
        return (
            "NOT_FOUND",
            _extract_message(payload, "Resource not found", status_code),
            None,
        )
    if isinstance(exc, MethodNotAllowed):
        return (
            "METHOD_NOT_ALLOWED",
            _extract_message(payload, "Method not allowed", status_code),
            None,
        )
    if status_code >= 500:
        return INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE, None
    return "REQUEST_FAILED", _extract_message(payload, "Request failed", status_code), None


def _validation_message(payload: Any) -> str:
    if isinstance(payload, dict):
        fields = [str(key) for key in payload if key != "non_field_errors"]
        if fields:
            return f"Validation failed: {', '.join(fields)}"
    return _extract_message(payload, "Validation failed", status.HTTP_400_BAD_REQUEST)


def _extract_message(payload: Any, fallback: str, status_code: int) -> str:
    if status_code >= 500:
        return INTERNAL_ERROR_MESSAGE
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
        non_field = payload.get("non_field_errors")
        if isinstance(non_field, list) and non_field and isinstance(non_field[0], str):
            return non_field[0]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
