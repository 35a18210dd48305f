#!/usr/bin/env python3
"""
phlog Pipeline CLI
------------------

Command-line interface for the kitchen log → gopher phlog pipeline.

Orchestrates the workflow:
1. sync → Clone or update the journal repository (fetch)
2. check → Parse the whole corpus without writing anything (parse)
3. build → Parse, sort, paginate and render month pages (parse, render)
4. run-all → sync followed by build

Usage:
    phlog run-all
    phlog --config phlog.yml build -g /var/gopher/Kuechenlog
    phlog check -r ./kitchenlog
    phlog sync -u https://github.com/Binary-Kitchen/kitchenlog.git
"""
from __future__ import annotations

import click
from pathlib import Path

from phlog.core.config import load_config
from phlog.core.exceptions import ConfigError
from phlog.core.logging_manager import handle_cli_error
from phlog.core.paths import LOG_DIR
from phlog.core.cli import setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, config_path: str, verbose: bool) -> None:
    """phlog - Kitchen log to gopher phlog pipeline"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "pipeline")
    try:
        ctx.obj["config"] = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        handle_cli_error(ctx, e, "load_config", {"stage": "config"})


# Import and register commands from submodules
from .pages import build, check, run_all
from .sync import sync

cli.add_command(sync)
cli.add_command(check)
cli.add_command(build)
cli.add_command(run_all)


if __name__ == "__main__":
    cli(obj={})
