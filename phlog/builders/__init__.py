"""
Builders package for phlog.

Provides the corpus loader and the month page builder:
- load_corpus / sort_entries: read and order the journal checkout
- PhlogBuilder: paginate entries and render month pages
"""

from phlog.builders.base import BaseBuilder
from phlog.builders.corpus import load_corpus, sort_entries
from phlog.builders.phlogbuilder import PhlogBuilder, build_page, paginate

__all__ = [
    "BaseBuilder",
    "load_corpus",
    "sort_entries",
    "PhlogBuilder",
    "build_page",
    "paginate",
]
