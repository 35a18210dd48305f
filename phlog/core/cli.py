#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for phlog commands.

Functions:
    setup_logger: Initialize PhlogLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    PhlogBuildStats: For month page builds

Usage:
    from phlog.core.cli import setup_logger, PhlogBuildStats

    logger = setup_logger(log_dir, "pipeline")
    stats = PhlogBuildStats()
    stats.pages_written += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# --- Local imports ---
from phlog.core.logging_manager import PhlogLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> PhlogLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a PhlogLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'pipeline')

    Returns:
        Configured PhlogLogger instance

    Examples:
        >>> from phlog.core.paths import LOG_DIR
        >>> logger = setup_logger(LOG_DIR, "pipeline")
        >>> logger.log_info("Starting build...")
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return PhlogLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files successfully processed
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")

    def duration(self) -> float:
        """
        Get elapsed time in seconds (cached after first call).

        Returns:
            Seconds elapsed since start_time
        """
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.files_processed} files processed "
            f"in {self.duration():.2f}s"
        )


@dataclass
class PhlogBuildStats(OperationStats):
    """
    Statistics for a month page build.

    Attributes:
        entries_rendered: Entries placed on a page
        pages_written: Pages created or changed on disk
        pages_unchanged: Pages whose rendered content was already current
        links: Link references emitted across all pages
        media: Media references emitted across all pages
    """
    entries_rendered: int = 0
    pages_written: int = 0
    pages_unchanged: int = 0
    links: int = 0
    media: int = 0

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.entries_rendered} entries, "
            f"{self.pages_written} pages written, "
            f"{self.pages_unchanged} unchanged, "
            f"{self.links} links, "
            f"{self.media} media in {self.duration():.2f}s"
        )
