#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Run logging for the phlog stages (fetch, parse, render).

Each component gets two rotating files below the log directory:

    <component>.log   every record, DEBUG and up
    errors.log        failures with their context and traceback

Warnings and worse are echoed to the console as well. Terminal-facing
failure messages are produced by ``handle_cli_error``, which logs the
full error and exits with a one-line ``❌ [stage] Type: message``.

Components take an optional logger and call it through ``safe_logger``,
so library code never has to test for ``None``.
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


def _details(details: Optional[Dict[str, Any]]) -> str:
    return f": {json.dumps(details, default=str)}" if details else ""


class PhlogLogger:
    """
    File and console logging for one phlog component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component prefix of the logger names and main log file
        main_logger: Receives operations, info and debug records
        error_logger: Receives errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "phlog",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Create the log directory and attach handlers.

        Args:
            log_dir: Directory for log files
            component_name: e.g. 'pipeline'
            max_bytes: Size at which a log file is rotated (default: 10MB)
            backup_count: Rotated files kept per log (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._logger(
            "operations", f"{component_name}.log", logging.DEBUG
        )
        self.error_logger = self._logger("errors", ERROR_LOG_NAME, logging.ERROR)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _logger(self, suffix: str, filename: str, level: int) -> logging.Logger:
        """Named logger with a fresh rotating file handler."""
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Handlers from an earlier instance with the same component are replaced
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed stage step, e.g. ``load_corpus`` with counts."""
        self.main_logger.info(f"OPERATION - {operation}{_details(details or {})}")

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(f"INFO - {message}{_details(details)}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(f"DEBUG - {message}{_details(details)}")

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an error, its context and the active traceback to errors.log.

        Args:
            error: The exception being reported
            context: Stage, paths and similar key/value pairs
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            self.error_logger.error(f"Context: {pairs}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error and return its terminal message.

        Examples:
            >>> logger.log_cli_error(RenderError("Template not found"), {"stage": "render"})
            '❌ [render] RenderError: Template not found'
        """
        context = context or {}
        self.log_error(error, context)
        return format_cli_error(error, context, show_traceback)


def format_cli_error(
    error: Exception, context: Dict[str, Any], show_traceback: bool = False
) -> str:
    """One-line terminal message, prefixed with the failing stage if known."""
    stage = context.get("stage")
    message = f"❌ {f'[{stage}] ' if stage else ''}{type(error).__name__}: {error}"
    if show_traceback:
        message += f"\n\n{traceback.format_exc()}"
    return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a stage failure and end the command.

    The error goes to the context's logger with ``operation`` and
    ``additional_context``; the terminal gets the short message (plus the
    traceback with ``-v``). Never returns.

    Args:
        ctx: Click context whose obj holds 'logger' and 'verbose'
        error: Exception that stopped the stage
        operation: Failing operation, e.g. 'parse'
        additional_context: Extra context such as {'stage': 'render'}
        exit_code: Process exit code (default: 1)
    """
    context: Dict[str, Any] = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Stand-in used when no PhlogLogger was given; drops every record."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Terminal message only; nothing is written."""
        return format_cli_error(error, context or {}, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[PhlogLogger]) -> PhlogLogger:
    """
    Return ``logger``, or the shared NullLogger when it is None.

        safe_logger(self.logger).log_debug("message")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
