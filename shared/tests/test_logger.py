import json
import logging

from shared.app_logging.logger import (
    CorrelationContext,
    CorrelationIDFilter,
    JSONFormatter,
    ServiceNameFilter,
    StructuredFormatter,
    get_correlation_id,
    setup_logging,
)
from shared.config.settings import LoggingSettings, Settings


def make_record(msg="hello", **extra):
    record = logging.LogRecord("headlines.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_correlation_context_scopes_id():
    assert get_correlation_id() is None
    with CorrelationContext("feed-load-7") as cid:
        assert cid == "feed-load-7"
        assert get_correlation_id() == "feed-load-7"
    assert get_correlation_id() is None


def test_filters_stamp_record():
    record = make_record()
    with CorrelationContext("abc"):
        CorrelationIDFilter().filter(record)
    ServiceNameFilter("headlines").filter(record)

    assert record.correlation_id == "abc"
    assert record.service_name == "headlines"


def test_json_formatter_includes_extra_fields():
    record = make_record(correlation_id="abc", service_name="headlines", articles=3)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "hello"
    assert entry["correlation_id"] == "abc"
    assert entry["service"] == "headlines"
    assert entry["articles"] == 3


def test_structured_formatter_layout():
    record = make_record(correlation_id="abc", service_name="headlines")

    line = StructuredFormatter().format(record)

    assert "[INFO] [headlines] [abc] headlines.test: hello" in line


def test_setup_logging_installs_single_handler():
    settings = Settings(logging=LoggingSettings(level="DEBUG", json_logs=True))

    setup_logging("headlines-test", settings=settings)
    logger = setup_logging("headlines-test", settings=settings)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
