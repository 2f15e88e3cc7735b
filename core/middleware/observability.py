"""
Observability middleware.

Gives every request a correlation id, ties it to the active trace and
writes one structured log line when the request finishes.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional, Tuple

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def current_trace_context() -> Tuple[Optional[str], Optional[str]]:
    """Trace and span id of the active span, if it is being recorded."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None, None
    return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)


def _log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class ObservabilityMiddleware:
    """
    Request logging and correlation.

    The correlation id is taken from the ``X-Correlation-ID`` request
    header when the caller sends one and is echoed back on the response
    together with the request duration and, when tracing is active, the
    trace id. Client payloads are never logged; the activation views log
    device display prefixes themselves.
    """

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = current_trace_context()
        context: Dict[str, Any] = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
        }
        if trace_id:
            request.trace_id = trace_id  # type: ignore
            context.update(trace_id=trace_id, span_id=span_id)

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "%s %s failed",
                request.method,
                request.path,
                extra={**context, "error_type": type(e).__name__},
                exc_info=True,
            )
            raise
        duration = time.perf_counter() - started

        logger.log(
            _log_level(response.status_code),
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            },
        )

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response
