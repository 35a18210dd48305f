#!/usr/bin/env python3
"""
base.py
-------------------
Base class for builders in the phlog project.

Provides BaseBuilder, the common interface and logging helpers shared by
builders that turn the journal corpus into output files.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from phlog.core.cli import OperationStats
from phlog.core.logging_manager import PhlogLogger, safe_logger


class BaseBuilder(ABC):
    """
    Abstract base class for builder implementations.

    Attributes:
        logger: Optional logger for operation tracking
    """

    def __init__(self, logger: Optional[PhlogLogger] = None):
        """
        Initialize builder with optional logger.

        Args:
            logger: Optional logger for operation tracking
        """
        self.logger = logger

    @abstractmethod
    def build(self) -> OperationStats:
        """
        Execute the build process.

        Returns:
            OperationStats subclass instance with build results
        """
        pass

    def _log_operation(
        self, operation: str, details: Optional[dict] = None
    ) -> None:
        """Log an operation if logger is available."""
        safe_logger(self.logger).log_operation(operation, details or {})

    def _log_debug(self, message: str) -> None:
        safe_logger(self.logger).log_debug(message)

    def _log_error(self, error: Exception, context: Optional[dict] = None) -> None:
        safe_logger(self.logger).log_error(error, context or {})
