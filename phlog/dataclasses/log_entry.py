#!/usr/bin/env python3
"""
log_entry.py
-------------------

Defines the LogEntry dataclass representing one dated journal record
parsed from a kitchen log entry file.

An entry file is a header block and a body block separated by exactly one
blank line:

    # comment lines are ignored
    BEGIN: 2023-12-02
    END: None
    TOPIC: Lötworkshop
    APPENDIX: Mitgebracht von Anna
    MEDIA: workshop.jpg

    Body text, may contain [[wiki:page|Links]].

Each LogEntry instance contains:
- begin/end dates
- topic and appendix labels
- media filename tokens
- the raw, not yet rewritten body

Entries are immutable once parsed; markup is rewritten later, per page.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

# --- Local imports ---
from phlog.core.exceptions import DateParseError, MalformedEntry


# ----- Format constants -----
HEADER_BODY_SEPARATOR = "\n\n"
KEY_SEPARATOR = ": "
COMMENT_PREFIX = "#"
NO_END_DATE = "None"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_header_date(key: str, value: str) -> date:
    """
    Parse a YYYY-MM-DD header value.

    Args:
        key: Header key, used in the error message
        value: Raw header value

    Returns:
        Parsed date

    Raises:
        DateParseError: If the value is not a valid calendar date
    """
    if not DATE_PATTERN.match(value):
        raise DateParseError(f"Invalid {key} date: {value!r} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise DateParseError(f"Invalid {key} date: {value!r} ({e})") from e


def split_entry(content: str) -> Tuple[str, str]:
    """
    Split entry text into header and body at its single blank line.

    Exactly one blank line is allowed; the body cannot contain another.

    Raises:
        MalformedEntry: If the text does not split into exactly two parts
    """
    parts = content.split(HEADER_BODY_SEPARATOR)
    if len(parts) != 2:
        raise MalformedEntry(
            f"Invalid entry format: expected one blank line between header "
            f"and body, found {len(parts) - 1}"
        )
    return parts[0], parts[1]


# ----- Dataclass -----
@dataclass(frozen=True)
class LogEntry:
    """
    A single kitchen log entry.

    Attributes:
        begin (date): First day of the entry.
        end (Optional[date]): Last day for multi-day entries. An END
            before BEGIN is dropped on construction; an END equal to
            BEGIN is kept but never displayed as a range.
        topic (str): Free text label, may be empty.
        appendix (str): Free text, may be empty.
        media (List[str]): Media filename tokens in header order. Only the
            first comma-separated token of each MEDIA line is kept.
        body (str): Raw body text, verbatim.
        source (Optional[Path]): File the entry was read from.

    Methods:
        from_text(cls, content, source=None) -> LogEntry
        from_file(cls, path) -> LogEntry
        has_range(self) -> bool
        to_header(self) -> str
    """

    # ---- Attributes ----
    begin: date
    end: Optional[date] = None
    topic: str = ""
    appendix: str = ""
    media: List[str] = field(default_factory=list)
    body: str = ""
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.begin:
            object.__setattr__(self, "end", None)

    # ---- Public constructors ----
    @classmethod
    def from_text(cls, content: str, source: Optional[Path] = None) -> "LogEntry":
        """
        Parse entry text into a LogEntry.

        Args:
            content: Complete entry file contents
            source: Optional path for diagnostics

        Returns:
            Parsed LogEntry

        Raises:
            MalformedEntry: If the text has no single header/body boundary
            DateParseError: If BEGIN is missing or BEGIN/END is malformed
        """
        header, body = split_entry(content)

        begin: Optional[date] = None
        end: Optional[date] = None
        topic = ""
        appendix = ""
        media: List[str] = []

        for line in header.split("\n"):
            if line.startswith(COMMENT_PREFIX):
                continue
            key, _, value = line.partition(KEY_SEPARATOR)

            if key == "BEGIN":
                begin = parse_header_date(key, value)
            elif key == "END":
                if value != NO_END_DATE:
                    end = parse_header_date(key, value)
            elif key == "TOPIC":
                topic = value
            elif key == "APPENDIX":
                appendix = value
            elif key == "MEDIA":
                media.append(value.split(",")[0])

        if begin is None:
            raise DateParseError("Missing required BEGIN header")

        return cls(
            begin=begin,
            end=end,
            topic=topic,
            appendix=appendix,
            media=media,
            body=body,
            source=source,
        )

    @classmethod
    def from_file(cls, path: Path) -> "LogEntry":
        """
        Read and parse one entry file.

        Raises:
            OSError: If the file cannot be read
            MalformedEntry: If the file is not valid UTF-8, see also from_text
            DateParseError: See from_text
        """
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedEntry(
                f"{path}: not valid UTF-8 (byte {e.start}: {e.reason})"
            ) from e
        try:
            return cls.from_text(content, source=path)
        except MalformedEntry as e:
            raise MalformedEntry(f"{path}: {e}") from e
        except DateParseError as e:
            raise DateParseError(f"{path}: {e}") from e

    # ---- Derived values ----
    @property
    def has_range(self) -> bool:
        """True when the entry spans more than its BEGIN day."""
        return self.end is not None and self.end > self.begin

    @property
    def month_key(self) -> Tuple[int, int]:
        """(year, month) grouping key for pagination."""
        return self.begin.year, self.begin.month

    def to_header(self) -> str:
        """Serialize the recognized header fields back to entry header text."""
        lines = [f"BEGIN: {self.begin.isoformat()}"]
        lines.append(f"END: {self.end.isoformat() if self.end else NO_END_DATE}")
        lines.append(f"TOPIC: {self.topic}")
        lines.append(f"APPENDIX: {self.appendix}")
        lines.extend(f"MEDIA: {name}" for name in self.media)
        return "\n".join(lines)
