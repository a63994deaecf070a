"""Service event tracing for complytrack.

Events are kept in a bounded in-memory buffer (exposed by the ``/trace``
endpoint) and mirrored to the ``complytrack`` logger.
"""

import logging
import sys
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

DEFAULT_MAX_EVENTS = 1000


@dataclass(frozen=True)
class ServiceEvent:
    """A single traced event."""

    event_type: str  # e.g. "evidence_added", "status_changed", "fallback"
    component: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "event_type": self.event_type,
            "component": self.component,
            "message": self.message,
            "data": dict(self.data),
        }

    def render(self) -> str:
        text = f"[{self.component}] {self.event_type}: {self.message}"
        return f"{text} | {self.data}" if self.data else text


class ServiceTracer:
    """Records service events; safe to call from request threads."""

    def __init__(self, name: str = "complytrack", max_events: int = DEFAULT_MAX_EVENTS):
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter(
                    "[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
                    datefmt="%H:%M:%S",
                )
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
        self._events: deque[ServiceEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def log(
        self,
        event_type: str,
        component: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> ServiceEvent:
        """Record an event and write it to the log.

        Once the buffer is full the oldest event is dropped.
        """
        event = ServiceEvent(event_type, component, message, dict(data or {}))
        with self._lock:
            self._events.append(event)
        self.logger.info(event.render())
        return event

    def get_events(
        self,
        component: str | None = None,
        event_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return recorded events, oldest first, optionally filtered."""
        with self._lock:
            events = list(self._events)
        return [
            e.to_dict()
            for e in events
            if (component is None or e.component == component)
            and (event_type is None or e.event_type == event_type)
        ]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


_tracer: ServiceTracer | None = None


def setup_tracing(log_level: str = "INFO", max_events: int = DEFAULT_MAX_EVENTS) -> ServiceTracer:
    """Replace the global tracer and set the complytrack log level.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        max_events: Size of the in-memory event buffer.
    """
    global _tracer
    _tracer = ServiceTracer(max_events=max_events)
    _tracer.logger.setLevel(getattr(logging, log_level.upper()))
    return _tracer


def get_tracer() -> ServiceTracer:
    global _tracer
    if _tracer is None:
        _tracer = ServiceTracer()
    return _tracer


def log_service_event(
    event_type: str,
    component: str,
    message: str,
    data: dict[str, Any] | None = None,
) -> None:
    """Record an event on the global tracer."""
    get_tracer().log(event_type, component, message, data)
