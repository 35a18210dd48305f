#!/usr/bin/env python3
"""
page.py
-------------------

Render-time data structures handed to the month template.

- OutputEntry: display-formatted copy of a LogEntry with its body
  rewritten and its inline media labels.
- Page: one month of OutputEntries plus the link and media footnote lists
  accumulated while converting them.

Both exist only for the duration of one page render. Field names form the
template schema: ``page.year``, ``page.month``, ``page.entries``,
``page.links`` and ``page.media_links``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class OutputEntry:
    """
    Display form of one entry.

    Attributes:
        begin: Formatted BEGIN date
        end: Formatted END date with range marker, empty unless the entry
            spans more than one day
        topic: Topic label
        appendix: Appendix text
        body: Body with bracket references rewritten
        media: Inline media labels (``[BILD n]``)
    """

    begin: str
    end: str = ""
    topic: str = ""
    appendix: str = ""
    body: str = ""
    media: List[str] = field(default_factory=list)


@dataclass
class Page:
    """
    One month index page.

    Attributes:
        year: Four-digit year label, also the year directory name
        month: Month label such as ``12-December``, also the month directory name
        entries: OutputEntries in chronological order
        links: Link footnote lines, numbered from 1 on this page
        media_links: Media footnote lines, numbered from 1 on this page
    """

    year: str
    month: str
    entries: List[OutputEntry] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    media_links: List[str] = field(default_factory=list)

    def to_context(self) -> Dict[str, Any]:
        """Template context for this page."""
        return {"page": self}
