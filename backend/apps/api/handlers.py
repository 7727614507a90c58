from django.http import JsonResponse
from rest_framework import status

from apps.api.exceptions import INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE
from apps.api.utils import error_payload
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="handler")


def not_found(request, exception=None):
    """Unmatched URLs get the same error envelope as the API views."""
    logger.info("No route matched", method=request.method, path=request.path)
    return JsonResponse(
        error_payload("NOT_FOUND", "Resource not found"),
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request):
    return JsonResponse(
        error_payload(INTERNAL_ERROR_CODE, INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
