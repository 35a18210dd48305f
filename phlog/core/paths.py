#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and defaults for the phlog project.

Package-internal paths (bundled templates) are resolved relative to this
file so they work from a source checkout and from an installed wheel.
Runtime locations (logs, checkout, gopher root) are defaults only; every
one of them can be overridden from the configuration file or the CLI.

The package structure:
    phlog/
    ├── core/          # Logging, exceptions, paths, configuration
    ├── dataclasses/   # LogEntry parsing
    ├── markup/        # Link and media rewriting
    ├── builders/      # Corpus loading and month pagination
    ├── gopher/        # Jinja2 renderer and .gph templates
    ├── sync/          # Source repository synchronization
    └── pipeline/      # Click command-line interface
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


# ----- Package directory -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent

# ---- Templates ----
TEMPLATES_DIR = PACKAGE_DIR / "gopher" / "templates"
MONTH_TEMPLATE = TEMPLATES_DIR / "month.gph.jinja2"

# ---- Logs ----
_STATE_HOME = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
LOG_DIR = _STATE_HOME / "phlog" / "logs"

# ---- Source repository & output ----
REPO_DIR = Path("./")
GOPHER_DIR = Path("/var/gopher/Kuechenlog")

# ---- Corpus layout ----
MEDIA_DIRNAME = "media"
PAGE_FILENAME = "index.gph"
