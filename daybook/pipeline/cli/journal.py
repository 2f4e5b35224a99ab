"""
Journal Commands
----------------

Commands for moving records between the YAML store and journal
Markdown documents.

Commands:
    - export: Write every stored record to a new journal document
    - import: Read a journal document back into the store

Export then import is the backup/restore pathway; the document can be
edited by hand in between.
"""
from __future__ import annotations

import click
from pathlib import Path

from daybook.core.paths import EXPORT_DIR, STORE_PATH
from daybook.core.logging_manager import DaybookLogger, handle_cli_error
from daybook.codec.parser import parse
from daybook.pipeline.md_export import export_journal
from daybook.pipeline.md_import import import_journal, read_journal
from daybook.store.yaml_store import YamlStore


@click.command()
@click.option(
    "--store",
    type=click.Path(),
    default=str(STORE_PATH),
    help="YAML record store to export from",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(),
    default=str(EXPORT_DIR),
    help="Output directory for the journal document",
)
@click.option("--search", default=None, help="Only export notes containing this term")
@click.option("--no-tag-summary", is_flag=True, help="Omit the tag summary section")
@click.pass_context
def export(
    ctx: click.Context, store: str, output: str, search: str, no_tag_summary: bool
) -> None:
    """
    Export stored notes, todos and schedules to one Markdown journal.

    Notes, todos and schedules are grouped by day, newest day first.
    """
    logger: DaybookLogger = ctx.obj["logger"]

    click.echo("📤 Exporting journal...")

    try:
        record_store = YamlStore(Path(store), autosave=False)
        stats = export_journal(
            record_store,
            Path(output),
            search_term=search,
            include_tag_summary=not no_tag_summary,
            logger=logger,
        )

        click.echo("\n✅ Export complete:")
        click.echo(f"  Notes: {stats.notes_exported}")
        click.echo(f"  Todos: {stats.todos_exported}")
        click.echo(f"  Schedules: {stats.schedules_exported}")
        click.echo(f"  Days: {stats.date_groups}")
        click.echo(f"  File: {stats.output_file}")
        click.echo(f"  Duration: {stats.duration():.2f}s")

    except Exception as e:
        handle_cli_error(ctx, e, "export", {"store": store, "output": output})


@click.command("import")
@click.argument("journal_file", type=click.Path())
@click.option(
    "--store",
    type=click.Path(),
    default=str(STORE_PATH),
    help="YAML record store to import into",
)
@click.option("--dry-run", is_flag=True, help="Parse and report without touching the store")
@click.pass_context
def import_journal_cmd(ctx: click.Context, journal_file: str, store: str, dry_run: bool) -> None:
    """
    Import a Markdown journal into the record store.

    Items under date headings that cannot be read are skipped and
    reported; everything else is imported.
    """
    logger: DaybookLogger = ctx.obj["logger"]
    journal_path = Path(journal_file)

    if dry_run:
        click.echo("📥 Importing journal (DRY RUN - store will not be modified)...")
        try:
            result = parse(read_journal(journal_path))
        except Exception as e:
            handle_cli_error(ctx, e, "import", {"file": journal_file, "dry_run": True})
            return

        click.echo(f"\nWould import from {journal_path.name}:")
        click.echo(f"  Notes: {len(result.notes)}")
        click.echo(f"  Todos: {len(result.todos)}")
        click.echo(f"  Schedules: {len(result.schedules)}")
        click.echo(f"  Tag contents: {len(result.tag_contents)}")
        if result.dropped:
            click.echo(f"  ⚠️  Dropped: {result.dropped}")
            for heading in result.unknown_headings:
                click.echo(f"    • {heading}")
        click.echo("\n💡 Run without --dry-run to import")
        return

    click.echo("📥 Importing journal...")

    try:
        record_store = YamlStore(Path(store), autosave=False)
        stats = import_journal(journal_path, record_store, logger)
        record_store.save()

        click.echo("\n✅ Import complete:")
        click.echo(f"  Notes: {stats.notes_created}")
        click.echo(f"  Todos: {stats.todos_created}")
        click.echo(f"  Schedules: {stats.schedules_created}")
        if stats.tag_contents_created > 0:
            click.echo(f"  Tag contents: {stats.tag_contents_created}")
        if stats.items_dropped > 0:
            click.echo(f"  ⚠️  Dropped: {stats.items_dropped}")
        if stats.errors > 0:
            click.echo(f"  ⚠️  Errors: {stats.errors}")
        click.echo(f"  Duration: {stats.duration():.2f}s")

    except Exception as e:
        handle_cli_error(ctx, e, "import", {"file": journal_file, "store": store})
