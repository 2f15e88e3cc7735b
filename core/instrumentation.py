"""
OpenTelemetry tracing.

Views open spans through ``get_tracer(__name__)``. Until
``setup_opentelemetry`` installs an SDK provider those spans are no-ops,
so tracing costs nothing when no collector is configured.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

Status = trace.Status
StatusCode = trace.StatusCode

SERVICE_NAME = "device-license-service"


def _service_resource() -> Resource:
    return Resource.create(
        {
            "service.name": os.environ.get("OTEL_SERVICE_NAME", SERVICE_NAME),
            "service.version": os.environ.get("OTEL_SERVICE_VERSION", "1.0.0"),
            "deployment.environment": os.environ.get("ENVIRONMENT", "development"),
        }
    )


def setup_opentelemetry() -> bool:
    """
    Export spans over OTLP and instrument Django.

    Only runs when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set.

    Returns:
        True if tracing was configured
    """
    endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        logger.info("OTEL_EXPORTER_OTLP_ENDPOINT not set, tracing disabled")
        return False

    provider = TracerProvider(resource=_service_resource())
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=endpoint,
                insecure=os.environ.get("OTEL_EXPORTER_OTLP_INSECURE", "true").lower() == "true",
            )
        )
    )
    trace.set_tracer_provider(provider)
    DjangoInstrumentor().instrument()

    logger.info("OpenTelemetry tracing exported to %s", endpoint)
    return True


def get_tracer(name: str) -> trace.Tracer:
    """Tracer for manual spans in ``name`` (usually ``__name__``)."""
    return trace.get_tracer(name)
