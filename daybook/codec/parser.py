#!/usr/bin/env python3
"""
parser.py
-------------------
Recover notes, todos and schedules from a journal Markdown document.

Single forward pass over the lines. A ``ParserState`` carries the
current date, the current section and the note being accumulated;
``apply_line`` performs one transition. Numbered todo and schedule items
read their attribute lines through a ``LineCursor`` that only advances
past lines it recognises, so anything unexpected is left for the main
loop.

Recovery policy:
- A ``##`` heading that matches neither date grammar unsets the current
  date; items below it are dropped (and counted) until the next valid
  date heading.
- An item that fails record validation is dropped (and counted).
- ``parse`` never raises.

Older per-tag exports (``# 土豆标签内容导出``) are recognised by
``detect_format`` and read into tagged notes by ``parse_tag_export``.
The older single-kind exports share the journal's line grammar and go
through the main pass.

Programmatic API:
    from daybook.codec.parser import parse
    result = parse(document)
    result.notes, result.todos, result.schedules
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Callable, Iterator, List, Optional

# --- Local imports ---
from daybook.codec.grammar import (
    COMPLETED_MARK,
    DATE_HEADING,
    DOCUMENT_TITLE,
    DUE_DATE_LABEL,
    ITEM_DATE_LINE,
    NOTE_HEADING,
    PINNED_CONTENT_LABEL,
    SCHEDULE_ITEM,
    SCHEDULE_ITEM_START,
    SCHEDULE_TYPE_LABEL,
    SECTION_EMOJIS,
    SECTION_HEADING,
    SEPARATOR,
    START_DATE_LABEL,
    STATS_LABEL,
    SUBHEADING,
    Section,
    TAG_EXPORT_HEADING,
    TAG_EXPORT_ITEM,
    TAG_HEADING,
    TAG_LINE,
    TAG_SUMMARY_HEADING,
    TAGS_LABEL,
    TODO_ATTRIBUTE_LABELS,
    TODO_ITEM,
    TODO_ITEM_START,
    is_attribute_line,
)
from daybook.core.exceptions import RecordValidationError
from daybook.dataclasses import Note, ParseResult, Schedule, ScheduleType, TagContent, Todo
from daybook.utils.dates import (
    parse_calendar_date,
    parse_heading_date,
    parse_item_datetime,
    parse_time,
)
from daybook.utils.tags import parse_tag_tokens


# ----- Logging ----
logger = logging.getLogger(__name__)


# ----- Cursor -----
class LineCursor:
    """
    Forward-only iterator over document lines with one line of look-ahead.

    Iterating yields raw lines. ``take_while`` consumes following lines
    only while they satisfy a predicate; the first line that does not is
    left in place for the next iteration.
    """

    def __init__(self, lines: List[str]) -> None:
        self._lines = lines
        self._index = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._index >= len(self._lines):
            raise StopIteration
        line = self._lines[self._index]
        self._index += 1
        return line

    @property
    def line_number(self) -> int:
        """1-based number of the line most recently returned."""
        return self._index

    def peek(self) -> Optional[str]:
        if self._index >= len(self._lines):
            return None
        return self._lines[self._index]

    def take_while(self, predicate: Callable[[str], bool]) -> Iterator[str]:
        """Yield stripped following lines while ``predicate`` accepts them."""
        while True:
            upcoming = self.peek()
            if upcoming is None:
                return
            stripped = upcoming.strip()
            if not predicate(stripped):
                return
            self._index += 1
            yield stripped


# ----- State -----
@dataclass
class NoteBuffer:
    """
    A note being accumulated under a ``#### HH:MM - 笔记 N`` heading.

    Blank lines are held back and only written once more body text
    follows, so paragraph breaks survive but trailing blanks do not.
    """

    time: time
    lines: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    in_content: bool = False
    pending_blanks: int = 0

    def add_line(self, raw: str) -> None:
        if self.lines and self.pending_blanks:
            self.lines.extend([""] * self.pending_blanks)
        self.pending_blanks = 0
        self.lines.append(raw.rstrip())
        self.in_content = True

    def add_blank(self) -> None:
        if self.in_content and self.lines:
            self.pending_blanks += 1

    def end_content(self) -> None:
        self.in_content = False
        self.pending_blanks = 0

    @property
    def content(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass
class ParserState:
    """
    Everything the parser remembers between lines.

    Attributes:
        current_date: Day of the latest valid date heading, or None
        current_date_key: ISO form of ``current_date`` ("" when unset)
        section: Kind of items under the current ``###`` heading
        note: Note being accumulated, if any
        current_tag: Tag heading in effect inside the tag summary
        pinned: Pinned-content lines being captured, if any
    """

    current_date: Optional[date] = None
    current_date_key: str = ""
    section: Section = Section.NONE
    note: Optional[NoteBuffer] = None
    current_tag: Optional[str] = None
    pinned: Optional[List[str]] = None


class JournalFormat(Enum):
    JOURNAL = "journal"
    TAG_EXPORT = "tag_export"


# ----- Entry point -----
def detect_format(document: str) -> JournalFormat:
    """
    Tell the full journal apart from the older per-tag export.

    The journal title or statistics block wins over a tag-export title;
    documents with neither are read as journals.
    """
    if DOCUMENT_TITLE in document or f"{STATS_LABEL}:" in document:
        return JournalFormat.JOURNAL
    if any(TAG_EXPORT_HEADING.match(line.strip()) for line in document.splitlines()):
        return JournalFormat.TAG_EXPORT
    return JournalFormat.JOURNAL


def parse(document: str) -> ParseResult:
    """
    Parse a journal document into records.

    Args:
        document: Whole document text, full journal or per-tag export

    Returns:
        ParseResult with recovered records and drop counts
    """
    if detect_format(document) is JournalFormat.TAG_EXPORT:
        return parse_tag_export(document)

    result = ParseResult()
    state = ParserState()
    cursor = LineCursor(document.splitlines())

    for raw in cursor:
        apply_line(state, raw, cursor, result)

    flush_note(state, result)
    _flush_pinned(state, result)

    logger.debug(f"Parsed journal: {result.summary()}")
    if result.dropped:
        logger.warning(
            f"{result.dropped} items dropped; unreadable headings: {result.unknown_headings}"
        )
    return result


def apply_line(
    state: ParserState, raw: str, cursor: LineCursor, result: ParseResult
) -> None:
    """
    Apply one document line to the parser state.

    Matchers are tried in a fixed order; the first that applies wins.
    Numbered items may consume their attribute lines from ``cursor``.
    """
    line = raw.strip()

    if state.section is Section.TAG_SUMMARY:
        _apply_tag_summary_line(state, raw, line, result)
        return

    if TAG_SUMMARY_HEADING.match(line):
        flush_note(state, result)
        state.section = Section.TAG_SUMMARY
        state.current_date = None
        state.current_date_key = ""
        return

    # "### ..." also matches "##\s*(.+)"; sub-headings take precedence
    date_match = DATE_HEADING.match(line)
    if date_match and not SUBHEADING.match(line):
        on_date_heading(state, date_match.group("text").strip(), result)
        return

    section_match = SECTION_HEADING.match(line)
    if section_match:
        on_section_heading(state, section_match.group("emoji"), result)
        return

    note_match = NOTE_HEADING.match(line)
    if note_match and state.section is Section.NOTES:
        on_note_heading(state, note_match.group("time"), result)
        return

    todo_match = TODO_ITEM.match(line)
    if todo_match and state.section is Section.TODOS:
        on_todo_item(state, todo_match, cursor, result)
        return

    schedule_match = SCHEDULE_ITEM.match(line)
    if schedule_match and state.section is Section.SCHEDULES:
        on_schedule_item(state, schedule_match, cursor, result)
        return

    tag_match = TAG_LINE.match(line)
    if tag_match and state.section is Section.NOTES:
        if state.note is not None:
            state.note.tags = parse_tag_tokens(tag_match.group("tags"))
            state.note.in_content = True
        return

    if line == SEPARATOR:
        if state.note is not None:
            state.note.end_content()
        return

    if line == "":
        if state.note is not None:
            state.note.add_blank()
        return

    if line.startswith("#"):
        return

    if state.section is Section.NOTES and state.note is not None:
        if not is_attribute_line(line):
            state.note.add_line(raw)


# ----- Transitions -----
def on_date_heading(state: ParserState, text: str, result: ParseResult) -> None:
    """Close the previous day and open a new one (or an unreadable one)."""
    flush_note(state, result)
    state.section = Section.NONE
    state.note = None

    day = parse_heading_date(text)
    if day is None:
        logger.warning(f"Cannot parse date heading {text!r}; skipping its items")
        result.unknown_headings.append(text)
        state.current_date = None
        state.current_date_key = ""
        return

    state.current_date = day
    state.current_date_key = day.isoformat()


def on_section_heading(state: ParserState, emoji: str, result: ParseResult) -> None:
    flush_note(state, result)
    state.section = SECTION_EMOJIS[emoji]


def on_note_heading(state: ParserState, time_text: str, result: ParseResult) -> None:
    flush_note(state, result)
    note_time = parse_time(time_text)
    if note_time is None:
        logger.warning(f"Invalid note time {time_text!r}; skipping note")
        result.dropped += 1
        return
    state.note = NoteBuffer(time=note_time)


def flush_note(state: ParserState, result: ParseResult) -> None:
    """
    Emit the buffered note, if it has content.

    A note under an unreadable date heading is counted as dropped.
    """
    buffer = state.note
    state.note = None
    if buffer is None or not buffer.content:
        return

    if state.current_date is None:
        result.dropped += 1
        return

    try:
        result.notes.append(
            Note(
                content=buffer.content,
                created_at=datetime.combine(state.current_date, buffer.time),
                tags=buffer.tags,
            )
        )
    except RecordValidationError as e:
        logger.warning(f"Skipping invalid note on {state.current_date_key}: {e}")
        result.dropped += 1


def _is_todo_attribute(line: str) -> bool:
    return line.startswith(TODO_ATTRIBUTE_LABELS)


def on_todo_item(
    state: ParserState, match: re.Match, cursor: LineCursor, result: ParseResult
) -> None:
    """Build a todo from its numbered line and the attribute lines right below it."""
    tags: List[str] = []
    due_date: Optional[date] = None
    start_date: Optional[date] = None

    for attribute in cursor.take_while(_is_todo_attribute):
        if attribute.startswith(TAGS_LABEL):
            tags = parse_tag_tokens(attribute[len(TAGS_LABEL):])
        elif attribute.startswith(DUE_DATE_LABEL):
            due_date = _attribute_date(attribute[len(DUE_DATE_LABEL):])
        elif attribute.startswith(START_DATE_LABEL):
            start_date = _attribute_date(attribute[len(START_DATE_LABEL):])

    if state.current_date is None:
        result.dropped += 1
        return

    try:
        result.todos.append(
            Todo(
                date=state.current_date,
                content=match.group("content"),
                completed=match.group("mark") == COMPLETED_MARK,
                tags=tags,
                due_date=due_date,
                start_date=start_date,
            )
        )
    except RecordValidationError as e:
        logger.warning(f"Skipping invalid todo on {state.current_date_key}: {e}")
        result.dropped += 1


def _is_schedule_detail(line: str) -> bool:
    if line.startswith(SCHEDULE_TYPE_LABEL):
        return True
    if not line or line == SEPARATOR or line.startswith("#"):
        return False
    if is_attribute_line(line) or SCHEDULE_ITEM_START.match(line) or TODO_ITEM_START.match(line):
        return False
    return True


def on_schedule_item(
    state: ParserState, match: re.Match, cursor: LineCursor, result: ParseResult
) -> None:
    """Build a schedule from its numbered line, description lines and type line."""
    description: List[str] = []
    schedule_type: Optional[ScheduleType] = None

    for detail in cursor.take_while(_is_schedule_detail):
        if detail.startswith(SCHEDULE_TYPE_LABEL):
            value = detail[len(SCHEDULE_TYPE_LABEL):].strip()
            schedule_type = ScheduleType.parse(value)
            if schedule_type is None:
                logger.info(f"Ignoring unknown schedule type {value!r}")
        else:
            description.append(detail)

    if state.current_date is None:
        result.dropped += 1
        return

    try:
        result.schedules.append(
            Schedule(
                date=state.current_date,
                title=match.group("title"),
                time=match.group("time"),
                description="\n".join(description) or None,
                type=schedule_type,
            )
        )
    except RecordValidationError as e:
        logger.warning(f"Skipping invalid schedule on {state.current_date_key}: {e}")
        result.dropped += 1


def _attribute_date(value: str) -> Optional[date]:
    parsed = parse_calendar_date(value)
    if parsed is None and value.strip():
        logger.warning(f"Cannot parse attribute date {value.strip()!r}; leaving it unset")
    return parsed


# ----- Tag summary -----
def _apply_tag_summary_line(
    state: ParserState, raw: str, line: str, result: ParseResult
) -> None:
    tag_match = TAG_HEADING.match(line)
    if tag_match:
        _flush_pinned(state, result)
        state.current_tag = tag_match.group("tag")
        return

    if state.pinned is not None:
        if line == SEPARATOR:
            _flush_pinned(state, result)
        else:
            state.pinned.append(raw.rstrip())
        return

    if line == PINNED_CONTENT_LABEL and state.current_tag:
        state.pinned = []


def _flush_pinned(state: ParserState, result: ParseResult) -> None:
    lines = state.pinned
    state.pinned = None
    if lines is None or state.current_tag is None:
        return
    content = "\n".join(lines).strip()
    if not content:
        return
    try:
        result.tag_contents.append(TagContent(tag=state.current_tag, content=content))
    except RecordValidationError as e:
        logger.warning(f"Skipping pinned content for tag {state.current_tag!r}: {e}")
        result.dropped += 1


# ----- Tag export -----
@dataclass
class TagExportItem:
    """One ``### N. 📝`` entry of a per-tag export."""

    tag: str
    created_at: Optional[datetime] = None
    lines: List[str] = field(default_factory=list)
    in_content: bool = False

    @property
    def content(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass
class TagExportState:
    current_tag: Optional[str] = None
    item: Optional[TagExportItem] = None


def parse_tag_export(document: str) -> ParseResult:
    """
    Read a per-tag export into notes.

    Each entry becomes a note tagged with its block's tag and dated by
    its ``**日期:**`` line. Entries with text but no readable date are
    dropped and counted. Blank lines inside an entry are not kept.

    Args:
        document: Whole per-tag export text

    Returns:
        ParseResult holding notes only
    """
    result = ParseResult()
    state = TagExportState()

    for raw in document.splitlines():
        apply_tag_export_line(state, raw, result)
    _flush_tag_item(state, result)

    logger.debug(f"Parsed tag export: {result.summary()}")
    return result


def apply_tag_export_line(state: TagExportState, raw: str, result: ParseResult) -> None:
    line = raw.strip()

    tag_match = TAG_HEADING.match(line)
    if tag_match:
        _flush_tag_item(state, result)
        state.current_tag = tag_match.group("tag")
        state.item = TagExportItem(tag=state.current_tag)
        return

    if TAG_EXPORT_ITEM.match(line):
        _flush_tag_item(state, result)
        if state.current_tag:
            state.item = TagExportItem(tag=state.current_tag)
        return

    item = state.item
    if item is None:
        return

    date_match = ITEM_DATE_LINE.match(line)
    if date_match:
        value = date_match.group("value").strip()
        item.created_at = parse_item_datetime(value)
        if item.created_at is None:
            logger.warning(f"Cannot parse entry date {value!r} under #{item.tag}")
        item.in_content = True
        return

    if not item.in_content:
        return
    if not line or line == SEPARATOR or line.startswith("#") or is_attribute_line(line):
        return
    item.lines.append(raw.rstrip())


def _flush_tag_item(state: TagExportState, result: ParseResult) -> None:
    item = state.item
    state.item = None
    if item is None or not item.content:
        return

    if item.created_at is None:
        result.dropped += 1
        return

    try:
        result.notes.append(Note(content=item.content, created_at=item.created_at, tags=[item.tag]))
    except RecordValidationError as e:
        logger.warning(f"Skipping invalid entry under #{item.tag}: {e}")
        result.dropped += 1
