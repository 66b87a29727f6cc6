"""Tests for debug output and logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from veracode_mcp.utils.debug import (
    debug_api_request,
    debug_print,
    debug_tool_execution,
    is_debug_enabled,
    set_debug_enabled,
)
from veracode_mcp.utils.logging_setup import PACKAGE_LOGGER, configure_logging


@pytest.fixture
def debug_on():
    set_debug_enabled(True)
    yield
    set_debug_enabled(False)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class TestDebugOutput:
    """Tests for the debug helpers."""

    def test_disabled_by_default(self, capsys):
        assert is_debug_enabled() is False
        debug_print("api", "hidden")
        assert capsys.readouterr().err == ""

    def test_api_request_goes_to_stderr(self, capsys, debug_on):
        debug_api_request("GET", "appsec/v1/applications", [("name", "Metamail"), ("page", "0")])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "GET appsec/v1/applications" in captured.err
        assert "name=Metamail&page=0" in captured.err

    def test_tool_execution_events(self, capsys, debug_on):
        debug_tool_execution("get-findings", {"application": "Metamail"}, start=True)
        debug_tool_execution("get-findings", {}, start=False, elapsed=1.5, success=True)
        err = capsys.readouterr().err
        assert "dispatch_tool(get-findings) +0.0s" in err
        assert "completed +1.5s" in err


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_adds_one_rich_handler(self, package_logger):
        configure_logging("debug")
        configure_logging("WARNING")
        handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert package_logger.level == logging.WARNING
        assert package_logger.propagate is False
