"""
API exception handlers.

Every error leaves the API as ``{"error": {"code": ..., "message": ...}}``.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Type

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ActivationException,
    DomainException,
    LicenseNotFoundError,
    StorageFailureError,
)

logger = logging.getLogger(__name__)

# First match wins; anything else derived from DomainException is a 400.
DOMAIN_STATUS_CODES: Tuple[Tuple[Type[DomainException], int], ...] = (
    (LicenseNotFoundError, status.HTTP_404_NOT_FOUND),
    (ActivationException, status.HTTP_403_FORBIDDEN),
    (StorageFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        status_code = _status_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
        return _error_response(exc.code, exc.message, status_code, trace_id)

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = getattr(exc, "default_code", "api_error").upper().replace("-", "_")
        return _error_response(code, _api_message(exc), response.status_code, trace_id)

    if isinstance(exc, Http404):
        return _error_response("NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND, trace_id)

    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=exc)
    return _error_response(
        "INTERNAL_ERROR",
        "An internal error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        trace_id,
    )


def _status_for(exc: DomainException) -> int:
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _api_message(exc: APIException) -> str:
    """Flatten DRF error details into one line."""
    if isinstance(exc, ValidationError) and isinstance(exc.detail, dict):
        return "; ".join(
            f"{field}: {' '.join(str(item) for item in errors)}"
            if isinstance(errors, list)
            else f"{field}: {errors}"
            for field, errors in exc.detail.items()
        )
    if isinstance(exc.detail, list):
        return " ".join(str(item) for item in exc.detail)
    return str(exc.detail)


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _error_response(
    code: str, message: str, status_code: int, trace_id: Optional[str]
) -> Response:
    response = Response({"error": {"code": code, "message": message}}, status=status_code)
    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response
