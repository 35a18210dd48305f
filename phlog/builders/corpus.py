#!/usr/bin/env python3
"""
corpus.py
-------------------
Load and order the kitchen log corpus.

The journal repository is laid out as ``<root>/<year>/<month>/<day-file>``.
Year and month directory names are only path components; dates come from
each entry's BEGIN header. ``<root>/media`` holds attachment binaries and
is never traversed.

Functions:
    iter_entry_files: Yield entry file paths in traversal order
    load_corpus: Parse every entry file (any failure aborts the load)
    sort_entries: Stable chronological sort by BEGIN

Usage:
    entries = sort_entries(load_corpus(Path("kitchenlog"), logger=logger))
"""
from __future__ import annotations

from operator import attrgetter
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from phlog.core.logging_manager import PhlogLogger, safe_logger
from phlog.core.paths import MEDIA_DIRNAME
from phlog.dataclasses.log_entry import LogEntry


def _listing(directory: Path) -> List[Path]:
    """Directory contents in name order, hidden entries left out."""
    return sorted(
        (child for child in directory.iterdir() if not child.name.startswith(".")),
        key=lambda child: child.name,
    )


def iter_entry_files(root: Path) -> Iterator[Path]:
    """
    Walk ``root/<year>/<month>/`` and yield every day file.

    Args:
        root: Journal repository checkout

    Yields:
        Entry file paths, year by year and month by month in name order

    Raises:
        OSError: If a directory cannot be listed
    """
    for year_dir in _listing(root):
        if year_dir.name == MEDIA_DIRNAME or not year_dir.is_dir():
            continue
        for month_dir in _listing(year_dir):
            if not month_dir.is_dir():
                continue
            for day_file in _listing(month_dir):
                if not day_file.is_dir():
                    yield day_file


def load_corpus(root: Path, logger: Optional[PhlogLogger] = None) -> List[LogEntry]:
    """
    Parse every entry file below the repository root.

    There is no skip-and-continue: the first file that fails to parse
    aborts the load and its error propagates unchanged.

    Args:
        root: Journal repository checkout
        logger: Optional logger

    Returns:
        Parsed entries in traversal order (not chronological)

    Raises:
        OSError: Unreadable directory or file
        MalformedEntry: Entry without header/body boundary
        DateParseError: Entry with missing or malformed dates
    """
    log = safe_logger(logger)
    entries: List[LogEntry] = []

    for path in iter_entry_files(root):
        entries.append(LogEntry.from_file(path))
        log.log_debug(f"Parsed entry {path.relative_to(root)}")

    log.log_operation("load_corpus", {"root": str(root), "entries": len(entries)})
    return entries


def sort_entries(entries: Iterable[LogEntry]) -> List[LogEntry]:
    """Stable ascending sort by BEGIN; ties keep their loader order."""
    return sorted(entries, key=attrgetter("begin"))
