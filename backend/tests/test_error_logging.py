import logging

import pytest

from inventory.services.error_logging import ErrorLogger, truncate_string


@pytest.fixture
def file_logger(tmp_path):
    root_logger = logging.getLogger()
    handlers_before = list(root_logger.handlers)

    error_logger = ErrorLogger()
    assert error_logger.configure(str(tmp_path / "logs"))
    yield error_logger

    for handler in root_logger.handlers:
        if handler not in handlers_before:
            root_logger.removeHandler(handler)
            handler.close()


class TestErrorLogger:
    def test_report_includes_context_and_trace(self):
        error_logger = ErrorLogger()
        try:
            raise RuntimeError("connection reset")
        except RuntimeError as e:
            report = error_logger.log_error(e, context={"operation": "barcode.insert"})

        assert "Type: RuntimeError" in report
        assert '"operation": "barcode.insert"' in report
        assert "=== STACK TRACE ===" in report

    def test_logs_to_error_logging_logger(self, caplog):
        with caplog.at_level(logging.ERROR, logger="error_logging"):
            ErrorLogger().log_error(ValueError("boom"), context={"operation": "product.update"})

        assert "ValueError: boom | Operation: product.update" in caplog.text

    def test_without_directory_file_logging_stays_off(self):
        error_logger = ErrorLogger()
        assert error_logger.configure(None) is False
        assert error_logger.file_logging_enabled is False

    def test_writes_detailed_file(self, file_logger):
        file_logger.log_error(KeyError("barcode"), severity="critical")

        detailed = (file_logger.logs_dir / "errors_detailed.log").read_text(encoding="utf-8")
        assert "Severity: critical" in detailed


def test_truncate_string():
    assert truncate_string("abc", 5) == "abc"
    assert truncate_string("abcdefgh", 3).startswith("abc... [TRUNCATED, total 8 chars]")
