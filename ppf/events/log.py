"""In-memory event recorder for indexers and tests."""
from __future__ import annotations

import threading

from ..interfaces.event_sink import EventSink
from ..models import OracleEvent


class EventLog:
    """Keep every emitted event in order, optionally forwarding to another sink."""

    def __init__(self, forward_to: EventSink | None = None) -> None:
        self._events: list[OracleEvent] = []
        self._lock = threading.Lock()
        self._forward_to = forward_to

    def emit(self, event: OracleEvent) -> None:
        with self._lock:
            self._events.append(event)
        if self._forward_to is not None:
            self._forward_to.emit(event)

    @property
    def events(self) -> tuple[OracleEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def of_type(self, event_type: type) -> list[OracleEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
