#!/usr/bin/env python3
"""
md_export.py
-------------------
Export stored records as one journal Markdown document.

Reads every note, todo and schedule from a record source, renders them
with the journal serializer and writes a single timestamped file:

    exports/
    ├── 土豆笔记本-完整导出-2024-01-15T09-30-00.md
    └── 土豆笔记本-搜索结果-工作-2024-01-15T09-31-12.md

A search term narrows the exported notes to those whose content or tags
contain it; todos and schedules are always exported in full.

Programmatic API:
    from daybook.pipeline.md_export import export_journal
    stats = export_journal(store, output_dir, search_term=None, logger=logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

# --- Local imports ---
from daybook.codec.serializer import build_date_groups, serialize
from daybook.core.cli import ExportStats
from daybook.core.exceptions import JournalExportError
from daybook.core.logging_manager import DaybookLogger, safe_logger
from daybook.dataclasses import Note, Schedule, TagContent, Todo
from daybook.store.protocols import RecordSource
from daybook.utils.dates import export_timestamp
from daybook.utils.tags import matches_search


EXPORT_PREFIX = "土豆笔记本"
FULL_EXPORT_LABEL = "完整导出"
SEARCH_EXPORT_LABEL = "搜索结果"

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]+')


def build_export_filename(exported_at: datetime, search_term: Optional[str] = None) -> str:
    """
    Filename for an export, embedding the timestamp and any search term.

    Examples:
        >>> build_export_filename(datetime(2024, 1, 15, 9, 30))
        '土豆笔记本-完整导出-2024-01-15T09-30-00.md'
        >>> build_export_filename(datetime(2024, 1, 15, 9, 30), "工作")
        '土豆笔记本-搜索结果-工作-2024-01-15T09-30-00.md'
    """
    timestamp = export_timestamp(exported_at)
    term = _UNSAFE_FILENAME_CHARS.sub("_", search_term.strip()).strip("_") if search_term else ""
    if term:
        return f"{EXPORT_PREFIX}-{SEARCH_EXPORT_LABEL}-{term}-{timestamp}.md"
    return f"{EXPORT_PREFIX}-{FULL_EXPORT_LABEL}-{timestamp}.md"


def collect_records(
    source: RecordSource, search_term: Optional[str] = None
) -> Tuple[List[Note], List[Todo], List[Schedule], List[TagContent]]:
    """
    Bulk-read everything the export needs from the source.

    Args:
        source: Record source (one call per bulk-read method)
        search_term: Optional filter applied to notes

    Returns:
        Tuple of (notes, todos, schedules, tag_contents)
    """
    notes = source.get_all_notes()
    if search_term:
        notes = [n for n in notes if matches_search(n.content, n.tags, search_term)]

    todos = [todo for items in source.get_all_todos_by_date().values() for todo in items]
    schedules = [
        schedule for items in source.get_all_schedules_by_date().values() for schedule in items
    ]
    tag_contents = source.get_all_tag_contents()
    return notes, todos, schedules, tag_contents


def export_journal(
    source: RecordSource,
    output_dir: Path,
    search_term: Optional[str] = None,
    include_tag_summary: bool = True,
    exported_at: Optional[datetime] = None,
    logger: Optional[DaybookLogger] = None,
) -> ExportStats:
    """
    Write every stored record to a new journal document.

    Processing Flow:
    1. Bulk-read notes, todos, schedules and tag contents
    2. Filter notes by the search term, if any
    3. Serialize to Markdown
    4. Write ``<output_dir>/<filename>`` as UTF-8

    Args:
        source: Record source to export from
        output_dir: Directory for the export (created if missing)
        search_term: Optional note filter, also embedded in the filename
        include_tag_summary: Append the tag summary section
        exported_at: Export time (defaults to now)
        logger: Optional logger for operation tracking

    Returns:
        ExportStats with counts and the written path

    Raises:
        JournalExportError: If reading the source or writing the file fails
    """
    stats = ExportStats()
    exported_at = exported_at or datetime.now()

    safe_logger(logger).log_operation(
        "export_start", {"output": str(output_dir), "search_term": search_term}
    )

    try:
        notes, todos, schedules, tag_contents = collect_records(source, search_term)
    except Exception as e:
        safe_logger(logger).log_error(e, {"operation": "collect_records"})
        raise JournalExportError(f"Failed to read records: {e}") from e

    if not (notes or todos or schedules or tag_contents):
        safe_logger(logger).log_info("No records to export; writing header-only document")

    document = serialize(
        notes,
        todos,
        schedules,
        tag_contents=tag_contents,
        exported_at=exported_at,
        include_tag_summary=include_tag_summary,
    )

    output_path = Path(output_dir) / build_export_filename(exported_at, search_term)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")
    except OSError as e:
        safe_logger(logger).log_error(e, {"operation": "write_export", "file": str(output_path)})
        raise JournalExportError(f"Cannot write export {output_path}: {e}") from e

    stats.notes_exported = len(notes)
    stats.todos_exported = len(todos)
    stats.schedules_exported = len(schedules)
    stats.date_groups = len(build_date_groups(notes, todos, schedules))
    stats.files_processed = 1
    stats.output_file = output_path

    safe_logger(logger).log_operation("export_complete", {"stats": stats.summary()})
    return stats
