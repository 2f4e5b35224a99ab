#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for journal exports, imports and store access.

Each component gets two rotating files under its log directory:

    <component>.log   every operation, debug note and warning
    errors.log        errors only, with context and traceback

Warnings are echoed to the console as well. Structured details are
written as JSON with non-ASCII kept, so tags and note text stay readable
in the log.

Code that may run without a logger wraps it with ``safe_logger``:

    safe_logger(logger).log_operation("export_start", {"output": path})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ERROR_LOG_NAME = "errors.log"


def _format_details(details: Optional[Dict[str, Any]]) -> str:
    """Render a details mapping as a JSON suffix, or nothing."""
    if not details:
        return ""
    return ": " + json.dumps(details, default=str, ensure_ascii=False)


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """One-line CLI message for an exception, optionally with its traceback."""
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        message += f"\n\n{traceback.format_exc()}"
    return message


class DaybookLogger:
    """
    Operations and error logging for one component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component label, also the operations log file stem
        main_logger: Logger for operations, debug, info and warnings
        error_logger: Logger for errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "daybook",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Args:
            log_dir: Directory for log files, created if missing
            component_name: Component label (e.g. 'journal')
            max_bytes: Size at which a log file rotates (default: 10MB)
            backup_count: Rotated files kept per log (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._fresh_logger("operations", logging.DEBUG)
        self.error_logger = self._fresh_logger("errors", logging.ERROR)

        self.main_logger.addHandler(
            self._file_handler(self.log_dir / f"{component_name}.log", logging.DEBUG)
        )
        self.error_logger.addHandler(
            self._file_handler(self.log_dir / ERROR_LOG_NAME, logging.ERROR)
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _fresh_logger(self, channel: str, level: int) -> logging.Logger:
        """Get the named logger with any handlers from an earlier instance closed."""
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        return logger

    def _file_handler(self, path: Path, level: int) -> RotatingFileHandler:
        handler = RotatingFileHandler(
            path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a named pipeline step (export_start, journal_parsed, ...)."""
        self.main_logger.info(f"OPERATION - {operation}{_format_details(details or {})}")

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an exception to the error log.

        The context mapping is written as ``key=value`` pairs on its own
        line, followed by the current traceback.
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(f"DEBUG - {message}{_format_details(details)}")

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(f"INFO - {message}{_format_details(details)}")

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(f"WARNING - {message}{_format_details(details)}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised under a CLI command and return its display text.

        Examples:
            >>> logger.log_cli_error(JournalImportError("Unsupported file type"))
            '❌ JournalImportError: Unsupported file type'
        """
        self.log_error(error, context or {"source": "cli"})
        return format_cli_error(error, show_traceback)


class NullLogger:
    """Stands in for DaybookLogger when no logger was given; discards everything."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[DaybookLogger]) -> DaybookLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed CLI command and exit.

    Logs the error through the logger stored in ``ctx.obj`` together
    with the operation name and any extra context, prints a one-line
    message to stderr (with traceback under --verbose) and exits with
    ``exit_code``. Never returns.
    """
    logger: Optional[DaybookLogger] = ctx.obj.get("logger")
    verbose: bool = ctx.obj.get("verbose", False)

    context: Dict[str, Any] = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    click.echo(
        safe_logger(logger).log_cli_error(error, context, show_traceback=verbose),
        err=True,
    )
    sys.exit(exit_code)
