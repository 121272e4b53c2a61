"""Logging setup tests."""

import json
import logging

from homegpt.logger import ColoredFormatter, JSONFormatter, setup_logging


def test_setup_logging_installs_single_handler():
    """Test that setup replaces existing root handlers."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("DEBUG", "json")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG

        setup_logging("nonsense")
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)
        assert root.level == logging.INFO
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_json_formatter_output():
    """Test the JSON record layout."""
    record = logging.LogRecord("homegpt.inference", logging.ERROR, __file__, 1, "failed: %s", ("refused",), None)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["level"] == "ERROR"
    assert entry["logger"] == "homegpt.inference"
    assert entry["message"] == "failed: refused"
