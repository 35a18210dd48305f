"""Inline markup rewriting for gopher pages."""

from phlog.markup.converter import (
    ConvertedEntry,
    Counters,
    MarkupContext,
    format_entry,
)

__all__ = ["ConvertedEntry", "Counters", "MarkupContext", "format_entry"]
