"""
Structured logging for the Windows Live token strategy.

Events are rendered as one JSON object per line on stdout, carrying the
service name, the active OpenTelemetry span and the id of the request
being authenticated.
"""

import sys
import uuid
import logging
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

import structlog
from opentelemetry import trace

EventDict = Dict[str, Any]

request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Route structlog through the stdlib root logger as JSON lines."""
    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=_processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    get_logger(f"{service_name}.logging").debug("Logging configured", log_level=log_level)


def _processors() -> List[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_service_context,
        add_trace_context,
        add_correlation_context,
        structlog.processors.JSONRenderer(),
    ]


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Use the first segment of a dotted logger name as ``service``."""
    name = event_dict.get("logger", "")
    if "." in name:
        event_dict["service"] = name.split(".", 1)[0]
    return event_dict


def add_trace_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    span = trace.get_current_span()
    if not span or not span.is_recording():
        return event_dict

    ctx = span.get_span_context()
    if ctx.trace_id:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
    if ctx.span_id:
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def add_correlation_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    request_id = request_id_var.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind ``request_id`` (or a fresh uuid4) to the current context and return it."""
    request_id = request_id or str(uuid.uuid4())
    request_id_var.set(request_id)
    return request_id


def clear_context() -> None:
    request_id_var.set(None)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
