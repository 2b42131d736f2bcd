"""
Unit tests for the logging configuration.
"""

import io
import json
import logging

import pytest
import structlog

from bookstore.core.logging import configure_logging


@pytest.fixture
def production_log(settings):
    stream = io.StringIO()
    configure_logging(settings.model_copy(update={"ENVIRONMENT": "production", "LOG_LEVEL": "INFO"}), stream=stream)
    yield stream
    configure_logging(settings)


def last_line(stream: io.StringIO) -> dict:
    return json.loads(stream.getvalue().splitlines()[-1])


def test_structlog_events_are_one_json_object(production_log):
    structlog.get_logger("bookstore.tests").info("Token issued", user_id=7)

    line = last_line(production_log)
    assert line["event"] == "Token issued"
    assert line["user_id"] == 7
    assert line["level"] == "info"
    assert line["logger"] == "bookstore.tests"
    assert "timestamp" in line


def test_stdlib_records_share_the_renderer(production_log):
    logging.getLogger("bookstore.tests.stdlib").warning("pool %s exhausted", "main")

    line = last_line(production_log)
    assert line["event"] == "pool main exhausted"
    assert line["level"] == "warning"


def test_reconfiguring_replaces_our_handler(settings, production_log):
    configure_logging(settings.model_copy(update={"ENVIRONMENT": "production"}), stream=production_log)

    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count("bookstore") == 1
