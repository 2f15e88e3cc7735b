"""
Logging configuration.

JSON lines on stdout by default; ``LOG_FORMAT=text`` switches to a short
human-readable format for local work. The ``audit`` logger carries one
record per domain event.
"""

import os
import sys

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id
from pythonjsonlogger import jsonlogger

APP_LOGGERS = ("core", "api", "licenses", "devices", "activations")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps records with the active trace context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("level", record.levelname)

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record.setdefault("trace_id", format_trace_id(span_context.trace_id))
            log_record.setdefault("span_id", format_span_id(span_context.span_id))


def get_logging_config(environment: str = "development") -> dict:
    """
    Build the Django ``LOGGING`` dict.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = os.environ.get("LOG_LEVEL") or ("DEBUG" if environment == "development" else "INFO")
    formatter = "text" if os.environ.get("LOG_FORMAT", "json").lower() == "text" else "json"

    def console(level: str) -> dict:
        return {"handlers": ["console"], "level": level, "propagate": False}

    loggers = {
        "django": console("INFO"),
        "django.request": console("WARNING"),
        "django.db.backends": console("WARNING"),
        "audit": console("INFO"),
    }
    loggers.update({name: console(log_level) for name in APP_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "text": {
                "format": "{asctime} {levelname:<7} {name}: {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": sys.stdout,
            },
        },
        "root": {"handlers": ["console"], "level": log_level},
        "loggers": loggers,
    }
