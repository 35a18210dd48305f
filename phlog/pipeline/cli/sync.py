"""
Repository Sync Command
-----------------------

Commands:
    - sync: Clone or update the kitchen log repository (fetch stage)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
import click

# --- Local imports ---
from phlog.core.config import PhlogConfig
from phlog.core.exceptions import SyncError
from phlog.core.logging_manager import PhlogLogger, handle_cli_error
from phlog.sync.repository import RepositorySync


def sync_repository(ctx: click.Context, config: PhlogConfig) -> None:
    """Run the fetch stage; exits through handle_cli_error on failure."""
    logger: PhlogLogger = ctx.obj["logger"]
    click.echo(f"Getting repository {config.repo_url}")
    try:
        changed = RepositorySync(config.repo_dir, config.repo_url, logger).sync()
    except SyncError as e:
        handle_cli_error(
            ctx, e, "sync",
            {"stage": "fetch", "repo_dir": str(config.repo_dir)},
        )
        return
    click.echo("Repository updated" if changed else "Repository already up to date")


@click.command("sync")
@click.option("-r", "--repo-dir", type=click.Path(file_okay=False), help="Checkout directory")
@click.option("-u", "--repo-url", help="URL of the log repository")
@click.pass_context
def sync(ctx: click.Context, repo_dir: Optional[str], repo_url: Optional[str]) -> None:
    """Clone or update the kitchen log repository."""
    config: PhlogConfig = ctx.obj["config"].with_overrides(
        repo_dir=repo_dir, repo_url=repo_url
    )
    sync_repository(ctx, config)
