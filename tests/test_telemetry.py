"""Tests for the telemetry facade and JSON-lines file logging."""

from __future__ import annotations

import json
import logging

import pytest

from opentelemetry.trace import StatusCode

from cmdpal.telemetry import LOGGER_NAME, Telemetry, configure_file_logging, get_telemetry


@pytest.fixture
def file_logging(tmp_path):
    """Attach the file handler, then detach it so other tests are unaffected."""
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    level = logger.level
    path = configure_file_logging(str(tmp_path / "logs"))
    yield path
    for handler in logger.handlers:
        if handler not in before:
            handler.close()
    logger.handlers = before
    logger.setLevel(level)


class TestSpans:
    def test_spans_are_exported(self):
        tel, exporter = Telemetry.for_testing()
        with tel.span("palette.rank") as span:
            span.set_attribute("palette.result_count", 3)
        spans = exporter.get_finished_spans()
        assert [s.name for s in spans] == ["palette.rank"]
        assert spans[0].attributes["palette.result_count"] == 3

    def test_initial_attributes(self):
        tel, exporter = Telemetry.for_testing()
        with tel.span("palette.activate", {"command.id": "file.save", "command.index": 0}):
            pass
        span = exporter.get_finished_spans()[0]
        assert span.attributes["command.id"] == "file.save"
        assert span.attributes["command.index"] == 0

    def test_error_recorded_and_reraised(self):
        tel, exporter = Telemetry.for_testing()
        with pytest.raises(KeyError):
            with tel.span("palette.activate"):
                raise KeyError("missing")
        span = exporter.get_finished_spans()[0]
        assert span.status.status_code == StatusCode.ERROR
        assert span.events[0].name == "exception"

    def test_noop_spans(self):
        with Telemetry.noop().span("palette.rank", {"palette.query_length": 1}) as span:
            span.set_attribute("palette.result_count", 0)

    def test_bad_attribute_does_not_raise(self):
        tel, _ = Telemetry.for_testing()
        with tel.span("palette.rank") as span:
            span.set_attribute("bad", object())

    def test_active_instance(self, telemetry):
        tel, _ = telemetry
        assert get_telemetry() is tel


class TestEvents:
    def test_fields_rendered_in_message(self, caplog):
        tel, _ = Telemetry.for_testing()
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            tel.event("query committed", query="save", result_count=1)
            tel.event("palette closed")
        assert caplog.messages == ["query committed query='save' result_count=1", "palette closed"]


class TestFileLogging:
    def test_json_lines_with_trace_ids(self, file_logging):
        tel, _ = Telemetry.for_testing()
        with tel.span("palette.activate"):
            tel.log.info("command activated id='file.save'")
        tel.log.info("palette closed")

        with open(file_logging, encoding="utf-8") as f:
            records = [json.loads(line) for line in f if line.strip()]

        assert [r["msg"] for r in records] == ["command activated id='file.save'", "palette closed"]
        assert records[0]["trace"] != "0" * 32
        assert records[1]["trace"] == "0" * 32
        assert records[0]["logger"] == LOGGER_NAME

    def test_second_call_is_noop(self, file_logging, tmp_path):
        logger = logging.getLogger(LOGGER_NAME)
        count = len(logger.handlers)
        configure_file_logging(str(tmp_path / "other"))
        assert len(logger.handlers) == count

    def test_event_fields_in_json(self, file_logging):
        tel, _ = Telemetry.for_testing()
        tel.event("query committed", query="save", result_count=1)

        with open(file_logging, encoding="utf-8") as f:
            record = json.loads(f.readline())

        assert record["event"] == "query committed"
        assert record["fields"] == {"query": "save", "result_count": 1}
        assert record["msg"] == "query committed query='save' result_count=1"
