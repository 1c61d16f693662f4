"""Tests for trace sinks and result types."""

import logging
from datetime import UTC, datetime

import pytest

from nvisy_sdk.errors import ErrorKind, ServerError
from nvisy_sdk.result import Attempt, Failure, Success
from nvisy_sdk.testing import RecordingTraceSink
from nvisy_sdk.tracing import NULL_SINK, TRACE_LOGGER_NAME, LoggingTraceSink, NullTraceSink, TraceEvent, TraceSink


class TestSinks:
    """Test the provided trace sinks."""

    @pytest.mark.unit
    def test_null_sink_discards(self):
        assert NULL_SINK.emit(TraceEvent("request.prepare", {"method": "GET"})) is None
        assert NullTraceSink() == NULL_SINK

    @pytest.mark.unit
    def test_sinks_satisfy_protocol(self):
        assert isinstance(NULL_SINK, TraceSink)
        assert isinstance(LoggingTraceSink(), TraceSink)
        assert isinstance(RecordingTraceSink(), TraceSink)

    @pytest.mark.unit
    def test_logging_sink_writes_to_trace_logger(self, caplog):
        caplog.set_level(logging.DEBUG, logger=TRACE_LOGGER_NAME)

        LoggingTraceSink().emit(TraceEvent("request.attempt", {"attempt": 2, "status_code": 503}))

        record = caplog.records[-1]
        assert record.name == TRACE_LOGGER_NAME
        assert record.getMessage() == "request.attempt attempt=2 status_code=503"
        assert record.trace_event == "request.attempt"

    @pytest.mark.unit
    def test_logging_sink_respects_level(self, caplog):
        caplog.set_level(logging.WARNING, logger=TRACE_LOGGER_NAME)

        LoggingTraceSink().emit(TraceEvent("request.prepare", {}))

        assert not [r for r in caplog.records if r.name == TRACE_LOGGER_NAME]

    @pytest.mark.unit
    def test_logging_sink_custom_logger_and_level(self, caplog):
        logger = logging.getLogger("my_app.nvisy")
        caplog.set_level(logging.INFO, logger="my_app.nvisy")

        LoggingTraceSink(logger=logger, level=logging.INFO).emit(TraceEvent("request.success", {"attempts": 1}))

        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].name == "my_app.nvisy"


class TestResults:
    """Test Success and Failure."""

    @pytest.mark.unit
    def test_success(self):
        attempt = Attempt(1, datetime.now(UTC), 0.01, 200)
        result = Success({"ok": True}, (attempt,))

        assert result.is_success is True
        assert result.attempt_count == 1
        assert result.unwrap() == {"ok": True}

    @pytest.mark.unit
    def test_failure_unwrap_raises(self):
        error = ServerError("boom", status_code=500, attempts=2)
        attempts = (
            Attempt(1, datetime.now(UTC), 0.01, 500, ErrorKind.SERVER, 0.2),
            Attempt(2, datetime.now(UTC), 0.01, 500, ErrorKind.SERVER),
        )
        result = Failure(error, attempts)

        assert result.is_success is False
        assert result.attempt_count == error.attempts == 2
        with pytest.raises(ServerError):
            result.unwrap()

    @pytest.mark.unit
    def test_pattern_matching(self):
        result = Failure(ServerError("boom", status_code=502))

        match result:
            case Success(value=value):
                outcome = value
            case Failure(error=error):
                outcome = error.status_code

        assert outcome == 502
