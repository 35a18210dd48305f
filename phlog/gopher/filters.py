#!/usr/bin/env python3
"""
filters.py
----------
Gopher formatting helpers and Jinja2 filters for .gph pages.

geomyidae .gph files mix plain text lines with menu lines of the form
``[type|display|selector|host|port]``. Footnotes are written as ``h``
(HTML/URL) items whose selector is ``URL:<address>``.

Filters:
    - gph_link: Build a URL menu line
    - gph_escape: Keep text lines from being read as menu lines
    - gph_text: Escape every line of a multi-line text block
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any


DEFAULT_PORT = 70
FIELD_SEPARATOR = "|"
# Shown instead of "|" inside a menu line field
SEPARATOR_STANDIN = "\u00a6"


def gph_link(display: str, url: str, host: str, port: int = DEFAULT_PORT) -> str:
    """
    Build a geomyidae URL menu line.

    ``|`` separates the fields of a menu line, so any ``|`` in the display
    text or the address is replaced by ``¦``.

    Args:
        display: Text shown in the gopher client
        url: Target address, written as the ``URL:`` selector
        host: Gopher host of this server
        port: Gopher port of this server

    Returns:
        Menu line, e.g. ``[h|[LINK 1]: Rules|URL:http://x|host|70]``
    """
    return f"[h|{gph_field(display)}|URL:{gph_field(url)}|{host}|{port}]"


def gph_field(value: str) -> str:
    """Make text safe to place inside one menu line field."""
    return value.replace(FIELD_SEPARATOR, SEPARATOR_STANDIN)


def gph_escape(line: str) -> str:
    """
    Escape a single text line for a .gph file.

    geomyidae treats lines starting with ``[`` as menu items and strips a
    leading ``t`` from text lines, so both get a ``t`` prefix.
    """
    if line.startswith("[") or line.startswith("t"):
        return "t" + line
    return line


def gph_text(value: Any) -> str:
    """Escape every line of a text block, preserving line breaks."""
    if value is None:
        return ""
    return "\n".join(gph_escape(line) for line in str(value).split("\n"))


def register_filters(env) -> None:
    """
    Register the gopher filters with a Jinja2 environment.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["gph_link"] = gph_link
    env.filters["gph_escape"] = gph_escape
    env.filters["gph_text"] = gph_text
