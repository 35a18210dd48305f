"""
phlog
=====

Kitchen log to gopher phlog converter.

Turns a repository of dated plain-text journal entries, laid out as
``<year>/<month>/<day-file>``, into one geomyidae ``index.gph`` page per
month. Wiki-style ``[[target|Name]]`` references become numbered links
and media attachments become numbered image references, each with a
page-local footnote list.

Main Components:
    - dataclasses: LogEntry parsing, Page/OutputEntry render records
    - markup: Link and media rewriting with page-scoped counters
    - builders: Corpus loading, sorting and month pagination
    - gopher: Jinja2 renderer, .gph filters and templates
    - sync: Git clone/update of the journal repository
    - core: Logging, exceptions, paths, configuration
    - pipeline: Click CLI (``phlog``)

Example Usage:
    >>> from phlog.builders.corpus import load_corpus, sort_entries
    >>> from phlog.builders.phlogbuilder import PhlogBuilder
    >>> from phlog.core.config import PhlogConfig
    >>> config = PhlogConfig(repo_dir=Path("kitchenlog"), output_dir=Path("out"))
    >>> entries = sort_entries(load_corpus(config.repo_dir))
    >>> PhlogBuilder.from_config(entries, config).build()
"""

__version__ = "1.0.0"
