"""
Error Logging Service

Records backend failures with enough context to reproduce them:
- Writes to the "error_logging" logger
- Writes to rotating log files when a writable LOG_DIR is configured
- Captures operation context and the full traceback

Usage:
    from inventory.services.error_logging import error_logger

    try:
        # some code
    except SQLAlchemyError as e:
        error_logger.log_error(e, context={"operation": "barcode.insert"})
"""

import logging
import traceback
import json
import sys
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from pathlib import Path
from logging.handlers import RotatingFileHandler

from inventory.core.config import settings


logger = logging.getLogger("error_logging")
logger.setLevel(logging.DEBUG)

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
DETAILED_LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'


def truncate_string(s: str, max_length: int = 10000) -> str:
    """Truncate string to max length."""
    if len(s) > max_length:
        return s[:max_length] + f"... [TRUNCATED, total {len(s)} chars]"
    return s


class ErrorLogger:
    """
    Error logging service that writes to the logger and, optionally, to files.
    """

    def __init__(self):
        self.logs_dir: Optional[Path] = None

    @property
    def file_logging_enabled(self) -> bool:
        return self.logs_dir is not None

    def configure(self, log_dir: Optional[str]) -> bool:
        """
        Attach rotating file handlers under log_dir.

        Returns:
            True if file logging is enabled, False if the directory is unusable
        """
        if not log_dir:
            return False

        path = Path(log_dir)
        try:
            path.mkdir(parents=True, exist_ok=True)
            # Test if we can write to the directory
            test_file = path / ".write_test"
            test_file.touch()
            test_file.unlink()
        except (PermissionError, OSError) as e:
            logger.warning(f"Cannot write to logs directory {path}: {e}. File logging disabled.")
            return False

        file_handler = RotatingFileHandler(
            path / "errors.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=10,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        detailed_handler = RotatingFileHandler(
            path / "app_detailed.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        detailed_handler.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
        detailed_handler.setFormatter(logging.Formatter(DETAILED_LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)
        root_logger.addHandler(detailed_handler)

        self.logs_dir = path
        logger.info(f"Error logging writing to {path}")
        return True

    def log_error(
        self,
        error: Exception,
        severity: str = "error",
        context: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Log an error with full context.

        Args:
            error: The exception that occurred
            severity: debug, info, warning, error, critical
            context: Additional context data (operation name, ids...)

        Returns:
            The detailed error report that was logged
        """
        timestamp = datetime.now(timezone.utc)
        error_type = type(error).__name__
        error_message = str(error)

        exc_type, exc_value, exc_tb = sys.exc_info()
        if exc_tb:
            stack_trace = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
        else:
            stack_trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))

        error_buffer_parts = [
            "=== ERROR LOG ===",
            f"Timestamp: {timestamp.isoformat()}",
            f"Type: {error_type}",
            f"Message: {error_message}",
            f"Severity: {severity}",
        ]

        if context:
            error_buffer_parts.extend([
                "\n=== CONTEXT ===",
                json.dumps(context, indent=2, default=str),
            ])

        error_buffer_parts.extend([
            "\n=== STACK TRACE ===",
            stack_trace,
        ])

        error_buffer = truncate_string("\n".join(error_buffer_parts), 50000)  # Max 50KB

        operation = (context or {}).get("operation", "N/A")
        log_message = f"{error_type}: {truncate_string(error_message, 1000)} | Operation: {operation}"

        if severity == "critical":
            logger.critical(log_message)
        elif severity == "error":
            logger.error(log_message)
        elif severity == "warning":
            logger.warning(log_message)
        else:
            logger.info(log_message)

        if self.file_logging_enabled:
            error_file = self.logs_dir / "errors_detailed.log"
            try:
                with open(error_file, "a", encoding="utf-8") as f:
                    f.write(f"\n{'='*80}\n")
                    f.write(error_buffer)
                    f.write(f"\n{'='*80}\n")
            except OSError as file_err:
                logger.error(f"Failed to write to error file: {file_err}")

        return error_buffer


# Singleton instance
error_logger = ErrorLogger()

# File logging is switched on at import time when LOG_DIR is configured
if settings.LOG_DIR:
    error_logger.configure(settings.LOG_DIR)
