"""Tracing and logging for complytrack services."""

from .logger import ServiceEvent, ServiceTracer, get_tracer, log_service_event, setup_tracing

__all__ = [
    "ServiceEvent",
    "ServiceTracer",
    "setup_tracing",
    "get_tracer",
    "log_service_event",
]
