#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the phlog project.

This module defines the hierarchy of exceptions raised by the phlog
pipeline. Every one of them is fatal to a run: the pipeline does not skip
broken entries and does not retry failed steps.

Exception Hierarchy:
    Exception (built-in)
    ├── EntryParseError - Base for all entry parsing failures
    │   ├── MalformedEntry - Header/body split invalid
    │   └── DateParseError - BEGIN/END value missing or unparsable
    ├── RenderError - Template loading, application or page write failures
    ├── SyncError - Source repository fetch failures
    └── ConfigError - Invalid configuration file

Unreadable input files and directories surface as the built-in OSError.

Usage:
    from phlog.core.exceptions import MalformedEntry, RenderError

    try:
        entries = load_corpus(repo_dir)
    except EntryParseError as e:
        logger.log_error(e, {"stage": "parse"})
        raise
"""


class EntryParseError(Exception):
    """
    Base exception for entry parsing failures.

    Raised when a journal entry file cannot be turned into a LogEntry.
    Catch this to handle any parse failure, or catch one of the specific
    subclasses for more granular handling.

    Attributes:
        message: Error description

    See Also:
        MalformedEntry, DateParseError
    """

    pass


class MalformedEntry(EntryParseError):
    """
    Exception for entries that cannot be split into header and body.

    Raised when the entry text does not contain exactly one blank line
    (none at all, or a further one inside the body), or when the file is
    not valid UTF-8.

    Examples:
        >>> raise MalformedEntry("No blank line between header and body")
    """

    pass


class DateParseError(EntryParseError):
    """
    Exception for unusable entry dates.

    Raised when a BEGIN or END header value is not a YYYY-MM-DD date,
    or when the required BEGIN header is missing altogether.

    Examples:
        >>> raise DateParseError("Invalid BEGIN date: '2023-13-01'")
        >>> raise DateParseError("Missing required BEGIN header")
    """

    pass


class RenderError(Exception):
    """
    Exception for page rendering failures.

    Raised when a month page cannot be produced:
    - Template file missing or unreadable
    - Template syntax or execution errors
    - Output directory cannot be created
    - Output file cannot be written

    Examples:
        >>> raise RenderError("Template not found: month.gph.jinja2")
        >>> raise RenderError("Cannot create month directory: permission denied")
    """

    pass


class SyncError(Exception):
    """
    Exception for source repository synchronization failures.

    Raised when cloning, resetting or pulling the journal repository
    fails. Carries the failing step and the git error output.

    Examples:
        >>> raise SyncError("git pull failed: could not resolve host")
    """

    pass


class ConfigError(Exception):
    """
    Exception for invalid configuration files.

    Raised when the YAML configuration cannot be parsed, is not a mapping,
    or contains unknown keys.

    Examples:
        >>> raise ConfigError("Unknown configuration key: 'outptu_dir'")
    """

    pass
