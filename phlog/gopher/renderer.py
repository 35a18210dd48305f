#!/usr/bin/env python3
"""
renderer.py
-----------
Jinja2 template engine for gopher month pages.

Configures the Jinja2 environment with the gopher filters and renders
Page records into .gph text. Supports both filesystem-based templates
(production) and dict-based templates (testing).

Key Features:
    - Gopher filter registration (gph_link, gph_escape, gph_text)
    - Change detection: only writes files when content differs
    - Support for DictLoader (tests) and FileSystemLoader (production)
    - render_page: render a Page through a template given by file path

Usage:
    from phlog.gopher.renderer import GopherRenderer

    # Production: loads from phlog/gopher/templates/
    renderer = GopherRenderer()
    changed = renderer.render_page(page, template_path, output_path)

    # Testing: supply templates as dict
    renderer = GopherRenderer(templates={"test.jinja2": "{{ page.year }}"})
    content = renderer.render("test.jinja2", page.to_context())

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third-party imports ---
from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)

# --- Local imports ---
from phlog.core.exceptions import RenderError
from phlog.core.paths import TEMPLATES_DIR
from phlog.dataclasses.page import Page
from phlog.gopher import filters as gopher_filters


class GopherRenderer:
    """
    Jinja2-based gopher page renderer.

    Attributes:
        env: Configured Jinja2 Environment instance
        templates_dir: Directory the environment loads from (None for dict templates)
        gopher_host: Host exposed to templates as ``gopher_host``
        gopher_port: Port exposed to templates as ``gopher_port``
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
        gopher_host: str = "localhost",
        gopher_port: int = gopher_filters.DEFAULT_PORT,
    ) -> None:
        """
        Initialize the gopher renderer.

        Provide either a filesystem templates directory or a dict of
        template strings. If neither is provided, defaults to the
        bundled templates directory.

        Args:
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name → template_string (DictLoader)
            gopher_host: Gopher host for menu lines built in templates
            gopher_port: Gopher port for menu lines built in templates

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError(
                "Provide either templates_dir or templates, not both"
            )

        self.gopher_host = gopher_host
        self.gopher_port = gopher_port
        self.templates_dir: Optional[Path] = None
        if templates is not None:
            self.env = self._make_env(DictLoader(templates))
        else:
            self.use_templates_dir(templates_dir or TEMPLATES_DIR)

    def use_templates_dir(self, templates_dir: Path) -> None:
        """Load templates from ``templates_dir`` unless it is already in use."""
        templates_dir = Path(templates_dir)
        if templates_dir == self.templates_dir:
            return
        self.templates_dir = templates_dir
        self.env = self._make_env(FileSystemLoader(str(templates_dir)))

    def _make_env(self, loader: BaseLoader) -> Environment:
        env = Environment(
            loader=loader,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        gopher_filters.register_filters(env)
        env.globals["gopher_host"] = self.gopher_host
        env.globals["gopher_port"] = self.gopher_port
        return env

    def render(
        self,
        template_name: str,
        context: Dict[str, Any],
    ) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template path relative to templates root
            context: Template variables

        Returns:
            Rendered gph string
        """
        template = self.env.get_template(template_name)
        return template.render(**context)

    def render_page(self, page: Page, template_path: Path, output_path: Path) -> bool:
        """
        Render one month page through the template at ``template_path``.

        The template's directory becomes the loader root (see
        use_templates_dir), so templates may include or extend siblings. The
        environment is kept while successive pages use the same directory.

        Args:
            page: Page to render
            template_path: Template file
            output_path: Destination ``index.gph``

        Returns:
            True if the page was written, False if it was already current

        Raises:
            RenderError: If the template cannot be loaded or applied, or
                the output cannot be written
        """
        self.use_templates_dir(template_path.parent)
        try:
            content = self.render(template_path.name, page.to_context())
        except TemplateError as e:
            raise RenderError(f"Error applying template {template_path}: {e}") from e

        try:
            return _write_if_changed(output_path, content)
        except OSError as e:
            raise RenderError(f"Error writing gopher page {output_path}: {e}") from e


def _write_if_changed(output_path: Path, content: str) -> bool:
    """Write content unless the file already holds exactly that text."""
    if output_path.exists():
        existing = output_path.read_text(encoding="utf-8")
        if existing == content:
            return False

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return True
