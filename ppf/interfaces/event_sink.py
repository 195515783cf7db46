"""Event sink protocol — delivery of oracle events to external observers."""
from typing import Protocol

from ..models import OracleEvent


class EventSink(Protocol):
    """Abstract interface for publishing oracle events."""

    def emit(self, event: OracleEvent) -> None: ...
