#!/usr/bin/env python3
"""
converter.py
------------
Rewrite an entry's inline markup into numbered gopher references.

Two passes run per entry, at render time, because reference numbers are
page-scoped and page membership is only known after grouping:

1. Bracket references. ``[[target]]`` and ``[[target|Name]]`` spans in
   the body become ``[Name][LINK:n]``; each one adds a footnote line.
   A target starting with ``:`` is a wiki namespace reference; otherwise a
   target containing ``http://`` or ``https://`` is a raw link; anything
   else falls back to a namespace reference.
2. Media. Every MEDIA filename becomes an inline ``[BILD n]`` label plus
   a footnote resolving the file against the media base URL. The body is
   not touched by this pass.

Scanning takes the first ``[[`` and the first ``]]`` after it, then
resumes behind the replacement. Nested brackets are not supported, and an
unterminated ``[[`` leaves the rest of the body as is.

Counters are plain values: callers pass the current link and media
numbers in and receive the next ones back.

Usage:
    from phlog.markup.converter import Counters, MarkupContext, format_entry

    ctx = MarkupContext(wiki_url=..., media_url=..., gopher_host=...)
    converted = format_entry(entry, Counters(), ctx)
    converted.counters  # -> numbers for the next entry on the same page
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from datetime import date
from typing import List, NamedTuple, Sequence, Tuple

# --- Local imports ---
from phlog.dataclasses.log_entry import LogEntry
from phlog.dataclasses.page import OutputEntry
from phlog.gopher.filters import DEFAULT_PORT, gph_link


OPEN = "[["
CLOSE = "]]"
NAMESPACE_MARKER = ":"
NAME_SEPARATOR = "|"
URL_SCHEMES = ("http://", "https://")

MEDIA_LABEL = "BILD"
RANGE_MARKER = "bis"

NAMESPACE = "namespace"
EXTERNAL = "external"


class Counters(NamedTuple):
    """Next link and media numbers on the current page."""

    links: int = 1
    media: int = 1


class Reference(NamedTuple):
    """A classified bracket reference."""

    kind: str
    target: str
    name: str


@dataclass(frozen=True)
class MarkupContext:
    """
    Fixed resolution settings for one build.

    Attributes:
        wiki_url: Wiki page URL; namespace targets go into its ``id`` parameter
        media_url: Base URL media filenames are appended to
        gopher_host: Host written into footnote menu lines
        gopher_port: Port written into footnote menu lines
    """

    wiki_url: str
    media_url: str
    gopher_host: str
    gopher_port: int = DEFAULT_PORT

    def resolve(self, reference: Reference) -> str:
        """Destination URL of a reference."""
        if reference.kind == EXTERNAL:
            return reference.target
        return f"{self.wiki_url}?id={reference.target}"

    def footnote(self, display: str, url: str) -> str:
        return gph_link(display, url, self.gopher_host, self.gopher_port)


class ConvertedEntry(NamedTuple):
    """Result of converting one entry."""

    entry: OutputEntry
    links: List[str]
    media_links: List[str]
    counters: Counters


# ----- Dates -----

def format_display_date(value: date) -> str:
    """Format a date like ``Saturday, 2. December 2023``."""
    return f"{value:%A}, {value.day}. {value:%B %Y}"


def format_month_label(value: date) -> str:
    """Month directory and label, e.g. ``12-December``."""
    return f"{value:%m}-{value:%B}"


def format_year_label(value: date) -> str:
    return f"{value.year:04d}"


# ----- Bracket references -----

def classify_reference(inner: str) -> Reference:
    """
    Classify the text between ``[[`` and ``]]``.

    Args:
        inner: Span content without delimiters

    Returns:
        Reference with kind, target and display name
    """
    if inner.startswith(NAMESPACE_MARKER):
        kind = NAMESPACE
        inner = inner[len(NAMESPACE_MARKER):]
    elif any(scheme in inner for scheme in URL_SCHEMES):
        kind = EXTERNAL
    else:
        kind = NAMESPACE

    target, separator, name = inner.partition(NAME_SEPARATOR)
    if not separator:
        name = target
    return Reference(kind, target, name)


def convert_link(inner: str, number: int, ctx: MarkupContext) -> Tuple[str, str]:
    """
    Convert one bracket span into its inline text and footnote line.

    Returns:
        (inline replacement, footnote line)
    """
    reference = classify_reference(inner)
    inline = f"[{reference.name}][LINK:{number}]"
    footnote = ctx.footnote(f"[LINK {number}]: {reference.name}", ctx.resolve(reference))
    return inline, footnote


def rewrite_links(
    body: str, link_count: int, ctx: MarkupContext
) -> Tuple[str, List[str], int]:
    """
    Rewrite every ``[[...]]`` span of a body, left to right.

    Args:
        body: Raw entry body
        link_count: Number for the first reference found
        ctx: Resolution settings

    Returns:
        (rewritten body, footnote lines, next link number)
    """
    pieces: List[str] = []
    footnotes: List[str] = []
    pos = 0

    while True:
        start = body.find(OPEN, pos)
        if start == -1:
            break
        end = body.find(CLOSE, start + len(OPEN))
        if end == -1:
            break

        inline, footnote = convert_link(body[start + len(OPEN):end], link_count, ctx)
        pieces.append(body[pos:start])
        pieces.append(inline)
        footnotes.append(footnote)
        link_count += 1
        pos = end + len(CLOSE)

    pieces.append(body[pos:])
    return "".join(pieces), footnotes, link_count


# ----- Media -----

def rewrite_media(
    media: Sequence[str], media_count: int, ctx: MarkupContext
) -> Tuple[List[str], List[str], int]:
    """
    Number an entry's media files.

    Returns:
        (inline labels, footnote lines, next media number)
    """
    labels: List[str] = []
    footnotes: List[str] = []
    for filename in media:
        label = f"[{MEDIA_LABEL} {media_count}]"
        labels.append(label)
        footnotes.append(ctx.footnote(label, f"{ctx.media_url}{filename}"))
        media_count += 1
    return labels, footnotes, media_count


# ----- Entry -----

def format_entry(entry: LogEntry, counters: Counters, ctx: MarkupContext) -> ConvertedEntry:
    """
    Produce the display form of one entry.

    Args:
        entry: Parsed entry
        counters: Next link and media numbers on the page
        ctx: Resolution settings

    Returns:
        ConvertedEntry holding the OutputEntry, its footnotes and the
        counters for the next entry on the same page
    """
    body, links, link_count = rewrite_links(entry.body, counters.links, ctx)
    labels, media_links, media_count = rewrite_media(entry.media, counters.media, ctx)

    output = OutputEntry(
        begin=format_display_date(entry.begin),
        end=f"{RANGE_MARKER} {format_display_date(entry.end)}" if entry.has_range else "",
        topic=entry.topic,
        appendix=entry.appendix,
        body=body,
        media=labels,
    )
    return ConvertedEntry(output, links, media_links, Counters(link_count, media_count))
