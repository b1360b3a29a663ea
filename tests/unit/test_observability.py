"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import sys

from slackify.observability import MetricsHook, NoopMetricsHook, StructuredFormatter, get_logger


class TestStructuredFormatter:
    def _get_record(self, msg, level=logging.INFO, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="test",
            level=level,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_keys(self):
        fmt = StructuredFormatter()
        result = json.loads(fmt.format(self._get_record("hello")))
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert result["message"] == "hello"
        assert result["ts"].endswith("+00:00")

    def test_extra_fields_merged(self):
        fmt = StructuredFormatter()
        record = self._get_record("skipped", extra_fields={"code": "UNKNOWN_TOKEN"})
        result = json.loads(fmt.format(record))
        assert result["code"] == "UNKNOWN_TOKEN"

    def test_non_ascii_preserved(self):
        fmt = StructuredFormatter()
        output = fmt.format(self._get_record("• bullet"))
        assert "• bullet" in output

    def test_exception_included(self):
        fmt = StructuredFormatter()
        try:
            raise ValueError("broken")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(fmt.format(self._get_record("oops", exc_info=exc_info)))
        assert "ValueError" in result["exception"]

    def test_no_exception_key_by_default(self):
        fmt = StructuredFormatter()
        result = json.loads(fmt.format(self._get_record("fine")))
        assert "exception" not in result


class TestGetLogger:
    def test_returns_logger_with_handler(self):
        logger = get_logger("test.slackify.unique1")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_default_level_is_warning(self):
        assert get_logger("test.slackify.unique2").level == logging.WARNING

    def test_string_level(self):
        logger = get_logger("test.slackify.unique3", level="debug")
        assert logger.level == logging.DEBUG

    def test_idempotent_no_duplicate_handlers(self):
        name = "test.slackify.unique4"
        first = get_logger(name)
        second = get_logger(name, level=logging.DEBUG)
        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.WARNING

    def test_custom_stream_receives_json(self):
        stream = io.StringIO()
        logger = get_logger("test.slackify.stream", level=logging.INFO, stream=stream)
        logger.info("converted", extra={"extra_fields": {"blocks": 3}})
        line = json.loads(stream.getvalue().strip())
        assert line["message"] == "converted"
        assert line["blocks"] == 3


class TestMetricsHook:
    def test_noop_satisfies_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_noop_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("slackify.blocks_created_total", tags={"type": "section"}) is None
        assert hook.timing("slackify.conversion_duration_ms", 1.5) is None

    def test_structural_subtyping(self):
        class Custom:
            def increment(self, name, value=1, tags=None):
                pass

            def timing(self, name, ms, tags=None):
                pass

        assert isinstance(Custom(), MetricsHook)

    def test_missing_method_not_a_hook(self):
        class IncrementOnly:
            def increment(self, name, value=1, tags=None):
                pass

        assert not isinstance(IncrementOnly(), MetricsHook)
