"""Тесты для Logging configuration.

Покрытие:
- console handler + optional file handler
- text / json formatters
- уровень из settings и override
"""

import io
import json
import logging

import pytest

from src.core.config import Settings
from src.core.logging_config import JsonFormatter, build_formatter, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Восстановление root logger после configure_logging(force=True)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestFormatters:
    def test_text_formatter(self):
        formatter = build_formatter("text")
        assert not isinstance(formatter, JsonFormatter)

    def test_json_formatter(self):
        formatter = build_formatter("JSON")
        record = logging.LogRecord("src.test", logging.INFO, __file__, 1, "value=%r", (0.5,), None)
        record.rule = "left"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "value=0.5"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "src.test"
        assert payload["rule"] == "left"


class TestConfigureLogging:
    def test_console_only(self):
        stream = io.StringIO()
        handlers = configure_logging(Settings(), stream=stream)

        assert len(handlers) == 1
        logging.getLogger("src.test").info("hello")
        assert "hello" in stream.getvalue()

    def test_file_handler_appends(self, tmp_path):
        log_file = tmp_path / "logs" / "riemann.log"
        log_file.parent.mkdir()
        log_file.write_text("previous line\n", encoding="utf-8")

        handlers = configure_logging(Settings(), log_file=log_file, stream=io.StringIO())
        assert len(handlers) == 2

        logging.getLogger("src.test").warning("step echoed")
        for handler in handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert content.startswith("previous line\n")
        assert "step echoed" in content

    def test_file_from_settings(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "app.log"
        handlers = configure_logging(
            Settings(log_file_path=str(log_file)), stream=io.StringIO()
        )
        assert len(handlers) == 2
        assert log_file.parent.exists()

    def test_level_override(self):
        configure_logging(Settings(log_level="WARNING"), level="debug", stream=io.StringIO())
        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_settings(self):
        configure_logging(Settings(log_level="ERROR"), stream=io.StringIO())
        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_rejected_before_handlers(self, tmp_path):
        log_file = tmp_path / "never.log"
        with pytest.raises(ValueError, match="unknown log level"):
            configure_logging(Settings(), log_file=log_file, level="verbose", stream=io.StringIO())
        assert not log_file.exists()
