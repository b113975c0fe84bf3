from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import patch

import pytest

import updateresolver.utils.logger as logger_module
from updateresolver.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the updateresolver logger around each test."""
    root_logger = logging.getLogger("updateresolver")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    logger_module._logging_configured = False


def _record(level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="updateresolver.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_level_name(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            result = formatter.format(_record(logging.ERROR))

        assert result == f"{ColoredFormatter.COLORS['ERROR']}ERROR{ColoredFormatter.RESET}: hello"

    def test_does_not_mutate_record(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s")
        record = _record(logging.WARNING)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "WARNING"

    def test_use_color_false(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "INFO: hello"

    def test_no_color_env_disables_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert ColoredFormatter("%(message)s")._should_use_color() is False

    def test_non_tty_stream_disables_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        formatter = ColoredFormatter("%(message)s", stream=io.StringIO())

        assert formatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging, get_logger and disable_logging."""

    def test_writes_to_stream_at_level(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.INFO, stream=stream)

        get_logger("core.resolver").info("resolving %s", "1.0.0")
        get_logger("core.resolver").debug("hidden")

        assert stream.getvalue() == "INFO: resolving 1.0.0\n"
        assert is_logging_configured()

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger("updateresolver").handlers) == 1

    def test_verbose_format_includes_logger_name(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, verbose=True, stream=stream)

        get_logger("config").debug("loaded")

        assert "updateresolver.config - DEBUG - loaded" in stream.getvalue()

    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "updateresolver"),
            ("updateresolver", "updateresolver"),
            ("updateresolver.cli", "updateresolver.cli"),
            ("core.checker", "updateresolver.core.checker"),
        ],
    )
    def test_get_logger_names(self, name: str, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_get_logger_is_library_safe(self) -> None:
        get_logger("anything")

        handlers = logging.getLogger("updateresolver").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_disable_logging(self) -> None:
        setup_logging(stream=io.StringIO())

        disable_logging()

        handlers = logging.getLogger("updateresolver").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)
        assert not is_logging_configured()
