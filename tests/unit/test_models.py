"""Unit tests for data models and event sinks."""
from __future__ import annotations

import logging

import pytest

from ppf.events import EventLog, LoggingEventSink
from ppf.models import (
    UNSET,
    OperatorChanged,
    OperatorOwnerChanged,
    Quote,
    RateUpdate,
    RateUpdated,
)


class TestQuote:
    def test_unset_sentinel(self) -> None:
        assert UNSET == Quote(rate=0, observed_at=0)
        assert not UNSET.is_set

    def test_set(self) -> None:
        assert Quote(rate=1, observed_at=1).is_set

    def test_frozen(self) -> None:
        q = Quote(rate=1, observed_at=1)
        with pytest.raises(AttributeError):
            q.rate = 2  # type: ignore[misc]


class TestRateUpdate:
    def test_equality(self) -> None:
        assert RateUpdate("0x1", "0x2", 5, 1) == RateUpdate("0x1", "0x2", 5, 1)

    def test_frozen(self) -> None:
        u = RateUpdate("0x1", "0x2", 5, 1)
        with pytest.raises(AttributeError):
            u.timestamp = 2  # type: ignore[misc]


class TestEventLog:
    def test_records_in_order(self) -> None:
        log = EventLog()
        log.emit(OperatorChanged("0x1"))
        log.emit(RateUpdated("0x1", "0x2", 5, 1))
        assert log.events == (
            OperatorChanged("0x1"),
            RateUpdated("0x1", "0x2", 5, 1),
        )
        assert log.of_type(RateUpdated) == [RateUpdated("0x1", "0x2", 5, 1)]

    def test_forwards(self) -> None:
        downstream = EventLog()
        log = EventLog(forward_to=downstream)
        log.emit(OperatorOwnerChanged("0x9"))
        assert downstream.events == (OperatorOwnerChanged("0x9"),)

    def test_clear(self) -> None:
        log = EventLog()
        log.emit(OperatorChanged("0x1"))
        log.clear()
        assert log.events == ()


class TestLoggingEventSink:
    def test_rate_updated_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="ppf.events.logging_sink"):
            LoggingEventSink().emit(RateUpdated("0x1", "0x2", 5, 7))
        assert "SetRate 0x1/0x2 rate=5 when=7" in caplog.text

    def test_operator_events_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="ppf.events.logging_sink"):
            LoggingEventSink().emit(OperatorChanged("0xa"))
            LoggingEventSink().emit(OperatorOwnerChanged("0xb"))
        assert "SetOperator 0xa" in caplog.text
        assert "SetOperatorOwner 0xb" in caplog.text
