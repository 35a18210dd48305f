#!/usr/bin/env python3
"""
config.py
---------
Runtime configuration for the phlog pipeline.

Holds the handful of locations and URLs the pipeline needs: where the
journal repository lives and where to fetch it from, where the gopher
pages go, which template renders them, and the base URLs used to resolve
wiki references and media attachments.

Values come from three layers, later layers winning:
    1. Built-in defaults (below)
    2. An optional YAML file (``phlog --config phlog.yml ...``)
    3. Explicit CLI options

Example phlog.yml:
    repo_url: https://github.com/Binary-Kitchen/kitchenlog.git
    repo_dir: /srv/kitchenlog
    output_dir: /var/gopher/Kuechenlog
    gopher_host: gopher.binary-kitchen.de
    gopher_port: 70
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from phlog.core.exceptions import ConfigError
from phlog.core.paths import GOPHER_DIR, MONTH_TEMPLATE, REPO_DIR


DEFAULT_REPO_URL = "https://github.com/Binary-Kitchen/kitchenlog.git"
DEFAULT_MEDIA_URL = (
    "https://raw.githubusercontent.com/Binary-Kitchen/kitchenlog/master/media/"
)
DEFAULT_WIKI_URL = "http://www.binary-kitchen.de/wiki/doku.php"
DEFAULT_GOPHER_HOST = "gopher.binary-kitchen.de"
DEFAULT_GOPHER_PORT = 70

_PATH_FIELDS = {"repo_dir", "output_dir", "template_path"}


@dataclass(frozen=True)
class PhlogConfig:
    """
    Configuration for one phlog run.

    Attributes:
        repo_url: Git URL of the journal repository
        repo_dir: Local checkout of the journal repository (entry root)
        output_dir: Gopher root receiving ``<year>/<month>/index.gph``
        media_url: Base URL media filenames are appended to
        template_path: Jinja2 template rendering one month page
        wiki_url: Wiki page URL namespace references resolve against
        gopher_host: Host written into gopher link lines
        gopher_port: Port written into gopher link lines
    """

    repo_url: str = DEFAULT_REPO_URL
    repo_dir: Path = REPO_DIR
    output_dir: Path = GOPHER_DIR
    media_url: str = DEFAULT_MEDIA_URL
    template_path: Path = MONTH_TEMPLATE
    wiki_url: str = DEFAULT_WIKI_URL
    gopher_host: str = DEFAULT_GOPHER_HOST
    gopher_port: int = DEFAULT_GOPHER_PORT

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "PhlogConfig":
        """
        Build a config from a plain mapping, coercing path fields.

        Raises:
            ConfigError: If the mapping contains unknown keys or a bad port
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if key in _PATH_FIELDS:
                values[key] = Path(value).expanduser()
            elif key == "gopher_port":
                try:
                    values[key] = int(value)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"gopher_port must be an integer, got {value!r}") from e
            else:
                values[key] = str(value)
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path) -> "PhlogConfig":
        """
        Load a config from a YAML file.

        Args:
            path: YAML file with any subset of the config keys

        Returns:
            PhlogConfig with file values over the defaults

        Raises:
            ConfigError: If the file is unreadable, not YAML, or not a mapping
        """
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_mapping(data)

    def with_overrides(self, **overrides: Any) -> "PhlogConfig":
        """Return a copy with every non-None override applied."""
        present = {k: v for k, v in overrides.items() if v is not None}
        if not present:
            return self
        merged = {f.name: getattr(self, f.name) for f in fields(self)}
        merged.update(present)
        return PhlogConfig.from_mapping(merged)


def load_config(path: Optional[Path] = None) -> PhlogConfig:
    """Load the config file if one is given, otherwise the defaults."""
    if path is None:
        return PhlogConfig()
    return PhlogConfig.from_yaml(path)
