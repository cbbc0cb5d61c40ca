"""Tests for logging setup."""

import json
import logging

from opnotify.logging_config import JSONFormatter, configure_logging, resource_logger


class TestConfigureLogging:
    def test_level_from_string(self):
        configure_logging("debug")
        assert logging.getLogger("opnotify").level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self):
        configure_logging("chatty")
        assert logging.getLogger("opnotify").level == logging.INFO

    def test_replaces_handlers(self):
        configure_logging(logging.INFO)
        configure_logging(logging.WARNING, json_format=True)
        logger = logging.getLogger("opnotify")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)


class TestJSONFormatter:
    def test_includes_resource(self):
        record = logging.LogRecord(
            "opnotify.resource", logging.WARNING, __file__, 1, "Sent %s", ("x",), None
        )
        record.resource = "ci/jenkins"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "Sent x"
        assert entry["level"] == "WARNING"
        assert entry["resource"] == "ci/jenkins"


def test_resource_logger_extra():
    adapter = resource_logger("jenkins", "ci")
    assert adapter.logger.name == "opnotify.resource"
    assert adapter.extra == {"resource": "ci/jenkins"}
