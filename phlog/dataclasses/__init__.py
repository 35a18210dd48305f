"""
Entry and page data structures.

- LogEntry: one parsed journal entry file
- OutputEntry / Page: render-time records for the month template
"""

from phlog.dataclasses.log_entry import LogEntry
from phlog.dataclasses.page import OutputEntry, Page

__all__ = ["LogEntry", "OutputEntry", "Page"]
