"""Unit tests for structured logging setup"""

import json
import logging
import pytest
from ladder_engine.observability.logging import CustomJsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_json_handler(restore_root_logger):
    """Test a single stdout handler with the JSON formatter"""
    setup_logging("DEBUG")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)


def test_json_formatter_adds_metadata():
    """Test records carry level, service, timestamp and extra fields"""
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    record = logging.LogRecord(
        name="ladder_engine.portfolio",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Portfolio snapshot computed",
        args=(),
        exc_info=None,
    )
    record.deposit_count = 3

    payload = json.loads(formatter.format(record))

    assert payload["level"] == "INFO"
    assert payload["service"] == "ladder-engine"
    assert payload["message"] == "Portfolio snapshot computed"
    assert payload["deposit_count"] == 3
    assert "timestamp" in payload
