#!/usr/bin/env python3
"""
phlogbuilder.py
-------------------
Paginate sorted log entries into monthly gopher pages.

Handles:
- Grouping contiguous entries that share a (year, month) key
- Page-scoped link and media numbering (reset to 1 on every page)
- Rendering each page to ``<output_dir>/<year>/<month>/index.gph``

Pages are stamped with the year and month of their own entries, so the
December page that precedes a January page keeps December's year. The
last month is flushed once the entry stream ends.

Usage:
    builder = PhlogBuilder(
        entries=sort_entries(load_corpus(repo_dir)),
        output_dir=Path("/var/gopher/Kuechenlog"),
        markup=MarkupContext(wiki_url=..., media_url=..., gopher_host=...),
        template_path=MONTH_TEMPLATE,
        logger=logger,
    )
    stats = builder.build()
"""
from __future__ import annotations

from itertools import groupby
from operator import attrgetter
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from phlog.builders.base import BaseBuilder
from phlog.core.cli import PhlogBuildStats
from phlog.core.config import PhlogConfig
from phlog.core.exceptions import RenderError
from phlog.core.logging_manager import PhlogLogger
from phlog.core.paths import PAGE_FILENAME
from phlog.dataclasses.log_entry import LogEntry
from phlog.dataclasses.page import Page
from phlog.gopher.renderer import GopherRenderer
from phlog.markup.converter import (
    Counters,
    MarkupContext,
    format_entry,
    format_month_label,
    format_year_label,
)


def build_page(entries: Sequence[LogEntry], markup: MarkupContext) -> Page:
    """
    Convert one month of entries into a Page.

    Args:
        entries: Entries of a single (year, month), already in order
        markup: Link and media resolution settings

    Returns:
        Page labelled with the entries' own year and month
    """
    first = entries[0].begin
    page = Page(year=format_year_label(first), month=format_month_label(first))

    counters = Counters()
    for entry in entries:
        converted = format_entry(entry, counters, markup)
        page.entries.append(converted.entry)
        page.links.extend(converted.links)
        page.media_links.extend(converted.media_links)
        counters = converted.counters
    return page


def paginate(entries: Iterable[LogEntry], markup: MarkupContext) -> Iterator[Page]:
    """
    Group contiguous entries by (year, month) and yield one Page per group.

    Entries must already be sorted; a month that reappears later in the
    sequence starts a new page.
    """
    for _, group in groupby(entries, key=attrgetter("month_key")):
        yield build_page(list(group), markup)


class PhlogBuilder(BaseBuilder):
    """
    Render the sorted corpus into monthly gopher pages.

    Attributes:
        entries: Entries sorted by BEGIN
        output_dir: Gopher root for ``<year>/<month>/index.gph``
        markup: Link and media resolution settings
        template_path: Month page template
        renderer: GopherRenderer applying the template
        logger: Optional logger
    """

    def __init__(
        self,
        entries: Sequence[LogEntry],
        output_dir: Path,
        markup: MarkupContext,
        template_path: Path,
        renderer: Optional[GopherRenderer] = None,
        logger: Optional[PhlogLogger] = None,
    ):
        super().__init__(logger)
        self.entries = entries
        self.output_dir = output_dir
        self.markup = markup
        self.template_path = template_path
        self.renderer = renderer if renderer is not None else GopherRenderer(
            templates_dir=template_path.parent,
            gopher_host=markup.gopher_host,
            gopher_port=markup.gopher_port,
        )

    @classmethod
    def from_config(
        cls,
        entries: Sequence[LogEntry],
        config: PhlogConfig,
        logger: Optional[PhlogLogger] = None,
    ) -> "PhlogBuilder":
        """Create a builder from a PhlogConfig."""
        markup = MarkupContext(
            wiki_url=config.wiki_url,
            media_url=config.media_url,
            gopher_host=config.gopher_host,
            gopher_port=config.gopher_port,
        )
        return cls(
            entries=entries,
            output_dir=config.output_dir,
            markup=markup,
            template_path=config.template_path,
            logger=logger,
        )

    def pages(self) -> Iterator[Page]:
        """Pages for the configured entries, in order."""
        return paginate(self.entries, self.markup)

    def page_path(self, page: Page) -> Path:
        """Output file of a page."""
        return self.output_dir / page.year / page.month / PAGE_FILENAME

    def write_page(self, page: Page) -> bool:
        """
        Render one page to disk.

        Returns:
            True if the page file was written, False if already current

        Raises:
            RenderError: If the month directory, template or file fails
        """
        path = self.page_path(page)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RenderError(f"Error creating month directory {path.parent}: {e}") from e
        return self.renderer.render_page(page, self.template_path, path)

    def build(self) -> PhlogBuildStats:
        """
        Execute the page build.

        Returns:
            PhlogBuildStats with build results

        Raises:
            RenderError: On the first page that cannot be produced
        """
        stats = PhlogBuildStats()
        self._log_operation(
            "phlog_build_start",
            {
                "entries": len(self.entries),
                "output_dir": str(self.output_dir),
                "template": str(self.template_path),
            },
        )

        written: List[str] = []
        for page in self.pages():
            try:
                changed = self.write_page(page)
            except RenderError as e:
                self._log_error(e, {"year": page.year, "month": page.month})
                raise

            stats.entries_rendered += len(page.entries)
            stats.links += len(page.links)
            stats.media += len(page.media_links)
            if changed:
                stats.pages_written += 1
                written.append(f"{page.year}/{page.month}")
                self._log_debug(f"Wrote {self.page_path(page)}")
            else:
                stats.pages_unchanged += 1
            stats.files_processed += 1

        self._log_operation(
            "phlog_build_complete",
            {"written": written, "summary": stats.summary()},
        )
        return stats
