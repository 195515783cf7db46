"""Event sinks for oracle observers."""
from .log import EventLog
from .logging_sink import LoggingEventSink

__all__ = ["EventLog", "LoggingEventSink"]
