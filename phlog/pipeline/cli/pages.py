"""
Month Page Commands
-------------------

Commands for turning the journal checkout into gopher month pages.

Commands:
    - check: Parse every entry and report what would be built
    - build: Parse, sort, paginate and render month pages
    - run-all: Sync the repository, then build
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional

# --- Third party imports ---
import click

# --- Local imports ---
from phlog.builders.corpus import load_corpus, sort_entries
from phlog.builders.phlogbuilder import PhlogBuilder
from phlog.core.config import PhlogConfig
from phlog.core.exceptions import EntryParseError, RenderError
from phlog.core.logging_manager import PhlogLogger, handle_cli_error
from phlog.dataclasses.log_entry import LogEntry
from .sync import sync_repository


def _config(ctx: click.Context, **overrides: Optional[str]) -> PhlogConfig:
    return ctx.obj["config"].with_overrides(**overrides)


def parse_corpus(ctx: click.Context, config: PhlogConfig) -> List[LogEntry]:
    """Run the parse stage; exits through handle_cli_error on failure."""
    logger: PhlogLogger = ctx.obj["logger"]
    click.echo(f"Parsing log entries in {config.repo_dir}")
    try:
        return sort_entries(load_corpus(config.repo_dir, logger=logger))
    except (EntryParseError, OSError) as e:
        handle_cli_error(
            ctx, e, "parse",
            {"stage": "parse", "repo_dir": str(config.repo_dir)},
        )
        raise


def render_pages(ctx: click.Context, config: PhlogConfig, entries: List[LogEntry]) -> None:
    """Run the render stage; exits through handle_cli_error on failure."""
    logger: PhlogLogger = ctx.obj["logger"]
    click.echo(f"Writing gopher pages to {config.output_dir}")
    builder = PhlogBuilder.from_config(entries, config, logger=logger)
    try:
        stats = builder.build()
    except RenderError as e:
        handle_cli_error(
            ctx, e, "build",
            {"stage": "render", "output_dir": str(config.output_dir)},
        )
        return
    click.echo(f"✅ {stats.summary()}")


def source_options(f):
    """Options selecting the checkout to read."""
    return click.option(
        "-r", "--repo-dir",
        type=click.Path(file_okay=False),
        help="Directory holding the repository checkout",
    )(f)


def output_options(f):
    """Options controlling page output."""
    f = click.option(
        "-t", "--template",
        "template_path",
        type=click.Path(dir_okay=False),
        help="Path to the template for the gopher pages",
    )(f)
    f = click.option(
        "-i", "--media-url",
        help="The URL for the raw image files",
    )(f)
    f = click.option(
        "-g", "--output-dir",
        type=click.Path(file_okay=False),
        help="Directory for the generated gopher content",
    )(f)
    return f


@click.command("check")
@source_options
@click.pass_context
def check(ctx: click.Context, repo_dir: Optional[str]) -> None:
    """Parse all entries and report months without writing pages."""
    config = _config(ctx, repo_dir=repo_dir)
    entries = parse_corpus(ctx, config)
    months = {entry.month_key for entry in entries}
    click.echo(f"✅ {len(entries)} entries across {len(months)} months")


@click.command("build")
@source_options
@output_options
@click.pass_context
def build(
    ctx: click.Context,
    repo_dir: Optional[str],
    output_dir: Optional[str],
    media_url: Optional[str],
    template_path: Optional[str],
) -> None:
    """Render month pages from an existing checkout."""
    config = _config(
        ctx,
        repo_dir=repo_dir,
        output_dir=output_dir,
        media_url=media_url,
        template_path=template_path,
    )
    entries = parse_corpus(ctx, config)
    render_pages(ctx, config, entries)


@click.command("run-all")
@source_options
@click.option("-u", "--repo-url", help="URL of the log repository")
@output_options
@click.pass_context
def run_all(
    ctx: click.Context,
    repo_dir: Optional[str],
    repo_url: Optional[str],
    output_dir: Optional[str],
    media_url: Optional[str],
    template_path: Optional[str],
) -> None:
    """Sync the repository, then render month pages."""
    config = _config(
        ctx,
        repo_dir=repo_dir,
        repo_url=repo_url,
        output_dir=output_dir,
        media_url=media_url,
        template_path=template_path,
    )
    sync_repository(ctx, config)
    entries = parse_corpus(ctx, config)
    render_pages(ctx, config, entries)
    click.echo("Done")
