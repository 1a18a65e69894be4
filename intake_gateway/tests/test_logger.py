"""
Tests for logging configuration
"""
import logging

from intake_gateway.utils.logger import ContextFormatter, get_logger, record_context


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("intake", logging.INFO, __file__, 1, "Incident created", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_get_logger_does_not_duplicate_handlers():
    first = get_logger("intake_gateway.tests.dup")
    second = get_logger("intake_gateway.tests.dup")

    assert first is second
    assert len(second.handlers) == 1


def test_record_context_only_extra_fields():
    assert record_context(make_record(sys_id="abc", topic="General Support")) == {
        "sys_id": "abc",
        "topic": "General Support",
    }


def test_formatter_appends_context():
    line = ContextFormatter("%(levelname)s - %(message)s").format(make_record(number="INC0010001"))
    assert line == "INFO - Incident created | number='INC0010001'"


def test_formatter_without_context():
    line = ContextFormatter("%(levelname)s - %(message)s").format(make_record())
    assert line == "INFO - Incident created"
