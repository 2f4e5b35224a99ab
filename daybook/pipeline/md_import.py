#!/usr/bin/env python3
"""
md_import.py
-------------------
Import a journal Markdown document into a record sink.

The whole file is read, normalised with ftfy and parsed in one pass.
Every recovered record is then handed to the sink with its own call,
so one rejected record does not stop the rest of the batch. Records
created before a failure stay created.

Accepted files: ``.md``, ``.markdown``, ``.txt``.

Programmatic API:
    from daybook.pipeline.md_import import import_journal
    stats = import_journal(path, store, logger=logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional

# --- Third party imports ---
from ftfy import fix_text  # type: ignore

# --- Local imports ---
from daybook.codec.parser import parse
from daybook.core.cli import ImportStats
from daybook.core.exceptions import JournalImportError, JournalParseError
from daybook.core.logging_manager import DaybookLogger, safe_logger
from daybook.dataclasses import ParseResult
from daybook.store.protocols import RecordSink


ACCEPTED_EXTENSIONS = (".md", ".markdown", ".txt")


def read_journal(path: Path) -> str:
    """
    Read and normalise a journal file.

    Full-width punctuation and curly quotes are part of the journal's
    Chinese text, so ftfy is told to leave them alone.

    Raises:
        JournalImportError: If the file is missing, has an unsupported
            extension or cannot be decoded as UTF-8
    """
    path = Path(path)
    if not path.is_file():
        raise JournalImportError(f"Journal file not found: {path}")
    if path.suffix.lower() not in ACCEPTED_EXTENSIONS:
        raise JournalImportError(
            f"Unsupported file type '{path.suffix}' "
            f"(expected one of {', '.join(ACCEPTED_EXTENSIONS)}): {path}"
        )

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JournalImportError(f"Cannot read journal {path}: {e}") from e

    return fix_text(text, fix_character_width=False, uncurl_quotes=False)


def import_records(
    result: ParseResult,
    sink: RecordSink,
    logger: Optional[DaybookLogger] = None,
    stats: Optional[ImportStats] = None,
) -> ImportStats:
    """
    Hand every parsed record to the sink, one call per record.

    Sink failures are logged with the record's context and tallied in
    ``stats.errors``; the remaining records are still created.

    Args:
        result: Output of ``parse``
        sink: Record sink
        logger: Optional logger for operation tracking
        stats: Existing stats to update (a new object by default)

    Returns:
        ImportStats with per-kind counts
    """
    stats = stats or ImportStats()
    log = safe_logger(logger)

    for note in result.notes:
        try:
            sink.create_note(note.to_text(), list(note.tags), note.created_at)
            stats.notes_created += 1
        except Exception as e:
            stats.errors += 1
            log.log_error(
                e, {"operation": "create_note", "created_at": note.created_at.isoformat()}
            )

    for todo in result.todos:
        try:
            sink.add_todo(todo.date_key, todo)
            stats.todos_created += 1
        except Exception as e:
            stats.errors += 1
            log.log_error(
                e, {"operation": "add_todo", "date": todo.date_key, "content": todo.content}
            )

    for schedule in result.schedules:
        try:
            sink.add_schedule(schedule.date_key, schedule)
            stats.schedules_created += 1
        except Exception as e:
            stats.errors += 1
            log.log_error(
                e,
                {"operation": "add_schedule", "date": schedule.date_key, "title": schedule.title},
            )

    for pinned in result.tag_contents:
        try:
            sink.set_tag_content(pinned.tag, pinned.content)
            stats.tag_contents_created += 1
        except Exception as e:
            stats.errors += 1
            log.log_error(e, {"operation": "set_tag_content", "tag": pinned.tag})

    return stats


def import_journal(
    path: Path,
    sink: RecordSink,
    logger: Optional[DaybookLogger] = None,
) -> ImportStats:
    """
    Read, parse and import one journal document.

    Processing Flow:
    1. Validate and read the file (UTF-8, ftfy-normalised)
    2. Parse into notes, todos, schedules and pinned tag contents
    3. Push each record into the sink
    4. Log the summary, including items dropped under unreadable dates

    Args:
        path: Journal file to import
        sink: Record sink receiving the records
        logger: Optional logger for operation tracking

    Returns:
        ImportStats object with import results

    Raises:
        JournalImportError: If the file cannot be read
        JournalParseError: If the document yields no records at all
    """
    path = Path(path)
    stats = ImportStats()

    safe_logger(logger).log_operation("import_start", {"input": str(path)})

    text = read_journal(path)
    result = parse(text)
    stats.items_dropped = result.dropped

    safe_logger(logger).log_operation(
        "journal_parsed", {"file": path.name, "summary": result.summary()}
    )
    if result.unknown_headings:
        safe_logger(logger).log_warning(
            f"Unreadable date headings in {path.name}",
            {"headings": result.unknown_headings, "dropped": result.dropped},
        )

    if result.is_empty:
        raise JournalParseError(f"No notes, todos or schedules found in {path}")

    import_records(result, sink, logger, stats)
    stats.files_processed = 1

    safe_logger(logger).log_operation("import_complete", {"stats": stats.summary()})
    return stats
