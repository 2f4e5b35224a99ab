#!/usr/bin/env python3
"""
Daybook CLI
-----------

Command-line interface for exporting and importing journal documents.

Commands:
    - export: YAML store → journal Markdown
    - import: journal Markdown → YAML store

Usage:
    # Full export into data/exports/
    daybook export

    # Only notes mentioning a term, no tag summary
    daybook export --search 工作 --no-tag-summary

    # Preview, then import
    daybook import --dry-run 土豆笔记本-完整导出-2024-01-15T09-30-00.md
    daybook import 土豆笔记本-完整导出-2024-01-15T09-30-00.md
"""
from __future__ import annotations

import click
from pathlib import Path

from daybook.core.paths import LOG_DIR
from daybook.core.cli import setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, log_dir: str, verbose: bool) -> None:
    """Daybook journal export and import"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(Path(log_dir), "journal")


# Import and register commands from submodules
from .journal import export, import_journal_cmd

cli.add_command(export)
cli.add_command(import_journal_cmd)


if __name__ == "__main__":
    cli(obj={})
