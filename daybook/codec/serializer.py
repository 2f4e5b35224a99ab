#!/usr/bin/env python3
"""
serializer.py
-------------------
Render notes, todos and schedules as a single journal Markdown document.

Records are grouped by calendar day (newest day first) and, inside each
day, by kind: notes, then todos, then schedules. A document header with
record counts opens the file and an optional tag summary closes it.

The output is always valid input for ``daybook.codec.parser.parse``.

Programmatic API:
    from daybook.codec.serializer import serialize
    document = serialize(notes, todos, schedules)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

# --- Local imports ---
from daybook.codec.grammar import (
    ATTRIBUTE_INDENT,
    COMPLETED_MARK,
    DOCUMENT_TITLE,
    DUE_DATE_LABEL,
    EXPORTED_AT_LABEL,
    NOTE_LABEL,
    NOTES_EMOJI,
    PENDING_MARK,
    PINNED_CONTENT_LABEL,
    PREVIEW_LENGTH,
    RELATED_LABEL,
    SCHEDULE_TYPE_LABEL,
    SEPARATOR,
    STATS_LABEL,
    START_DATE_LABEL,
    Section,
    TAG_COUNT_LABEL,
    TAG_SUMMARY_TITLE,
    TAGS_LABEL,
    TODOS_EMOJI,
    section_heading,
)
from daybook.dataclasses import DateGroup, Note, Schedule, TagContent, Todo
from daybook.utils.dates import format_time, local_sort_key
from daybook.utils.tags import format_tags


# ----- Grouping -----
def build_date_groups(
    notes: Iterable[Note],
    todos: Iterable[Todo],
    schedules: Iterable[Schedule],
) -> List[DateGroup]:
    """
    Partition records into one DateGroup per calendar day.

    Notes are anchored on the local day of ``created_at``; todos and
    schedules on their own ``date``. Groups come back newest day first,
    notes inside a group newest first, todos and schedules in input order.

    Args:
        notes: Notes in any order
        todos: Todos in any order
        schedules: Schedules in any order

    Returns:
        List of non-empty DateGroups in descending date order
    """
    groups: Dict[date, DateGroup] = {}

    def _group(day: date) -> DateGroup:
        if day not in groups:
            groups[day] = DateGroup(date=day)
        return groups[day]

    for note in notes:
        _group(note.date).notes.append(note)
    for todo in todos:
        _group(todo.date).todos.append(todo)
    for schedule in schedules:
        _group(schedule.date).schedules.append(schedule)

    for group in groups.values():
        group.notes.sort(key=lambda n: local_sort_key(n.created_at), reverse=True)

    return sorted(groups.values(), key=lambda g: g.date, reverse=True)


# ----- Document -----
def serialize(
    notes: Iterable[Note] = (),
    todos: Iterable[Todo] = (),
    schedules: Iterable[Schedule] = (),
    *,
    tag_contents: Iterable[TagContent] = (),
    exported_at: Optional[datetime] = None,
    include_tag_summary: bool = True,
) -> str:
    """
    Render records as a journal Markdown document.

    Never fails for well-typed input; with no records the result is the
    document header alone.

    Args:
        notes: Notes to export
        todos: Todos to export
        schedules: Schedules to export
        tag_contents: Pinned tag texts, listed in the tag summary
        exported_at: Export time shown in the header (omitted when None)
        include_tag_summary: Append the tag summary section

    Returns:
        The document, ending with a single newline
    """
    notes = list(notes)
    todos = list(todos)
    schedules = list(schedules)
    # Later entries for the same tag win; blank pinned texts are not exported
    pinned = {tc.tag: tc.content for tc in tag_contents}
    pinned = {tag: content for tag, content in pinned.items() if content}

    groups = build_date_groups(notes, todos, schedules)

    md_lines: List[str] = _render_header(
        len(notes), len(todos), len(schedules), len(pinned), exported_at
    )
    for group in groups:
        md_lines.extend(render_date_group(group))

    if include_tag_summary:
        md_lines.extend(_render_tag_summary(groups, pinned))

    return "\n".join(md_lines).rstrip("\n") + "\n"


def _render_header(
    note_count: int,
    todo_count: int,
    schedule_count: int,
    tag_content_count: int,
    exported_at: Optional[datetime],
) -> List[str]:
    lines = [f"# {DOCUMENT_TITLE}", ""]
    if exported_at is not None:
        lines.extend([f"{EXPORTED_AT_LABEL}: {exported_at:%Y-%m-%d %H:%M:%S}", ""])
    lines.extend(
        [
            f"{STATS_LABEL}:",
            f"- 笔记: {note_count} 条",
            f"- 待办事项: {todo_count} 条",
            f"- 日程安排: {schedule_count} 条",
            f"- 标签固定内容: {tag_content_count} 个",
            "",
            SEPARATOR,
            "",
        ]
    )
    return lines


def render_date_group(group: DateGroup) -> List[str]:
    """Render one day: heading, non-empty kind sections, closing separator."""
    lines = [f"## {group.heading}", ""]

    if group.notes:
        lines.extend([section_heading(Section.NOTES, len(group.notes)), ""])
        for index, note in enumerate(group.notes, 1):
            lines.extend(_render_note(note, index))

    if group.todos:
        lines.extend([section_heading(Section.TODOS, len(group.todos)), ""])
        for index, todo in enumerate(group.todos, 1):
            lines.extend(_render_todo(todo, index))

    if group.schedules:
        lines.extend([section_heading(Section.SCHEDULES, len(group.schedules)), ""])
        for index, schedule in enumerate(group.schedules, 1):
            lines.extend(_render_schedule(schedule, index))

    lines.extend([SEPARATOR, ""])
    return lines


# ----- Items -----
def _render_note(note: Note, index: int) -> List[str]:
    lines = [f"#### {format_time(note.created_at)} - {NOTE_LABEL} {index}", ""]
    if note.tags:
        lines.extend([f"{TAGS_LABEL} {format_tags(note.tags)}", ""])
    body = note.body
    if body:
        lines.extend([*body.splitlines(), ""])
    return lines


def _render_todo(todo: Todo, index: int) -> List[str]:
    mark = COMPLETED_MARK if todo.completed else PENDING_MARK
    lines = [f"{index}. {mark} {_single_line(todo.content)}"]
    if todo.tags:
        lines.append(f"{ATTRIBUTE_INDENT}{TAGS_LABEL} {format_tags(todo.tags)}")
    if todo.due_date:
        lines.append(f"{ATTRIBUTE_INDENT}{DUE_DATE_LABEL} {todo.due_date.isoformat()}")
    if todo.start_date:
        lines.append(f"{ATTRIBUTE_INDENT}{START_DATE_LABEL} {todo.start_date.isoformat()}")
    lines.append("")
    return lines


def _render_schedule(schedule: Schedule, index: int) -> List[str]:
    lines = [f"{index}. **{schedule.time}** - {_single_line(schedule.title)}"]
    if schedule.description:
        for line in schedule.description.splitlines():
            if line.strip():
                lines.append(f"{ATTRIBUTE_INDENT}{line.strip()}")
    if schedule.type:
        lines.append(f"{ATTRIBUTE_INDENT}{SCHEDULE_TYPE_LABEL} {schedule.type.value}")
    lines.append("")
    return lines


def _single_line(text: str) -> str:
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


# ----- Tag summary -----
def _render_tag_summary(
    groups: Sequence[DateGroup], pinned: Dict[str, str]
) -> List[str]:
    """
    Render the closing tag summary.

    Items are collected from the already-ordered groups so that the
    summary does not depend on the order records were passed in.
    """
    related: Dict[str, List[Tuple[str, str]]] = {}
    for group in groups:
        for note in group.notes:
            for tag in note.tags:
                related.setdefault(tag, []).append((NOTES_EMOJI, note.body))
        for todo in group.todos:
            for tag in todo.tags:
                related.setdefault(tag, []).append((TODOS_EMOJI, todo.content))

    all_tags = sorted(set(related) | set(pinned))
    if not all_tags:
        return []

    lines = [
        f"# {TAG_SUMMARY_TITLE}",
        "",
        f"{TAG_COUNT_LABEL}: {len(all_tags)} 个",
        "",
        SEPARATOR,
        "",
    ]
    for tag in all_tags:
        lines.extend([f"## #{tag}", ""])

        content = pinned.get(tag, "")
        if content:
            lines.extend([PINNED_CONTENT_LABEL, "", *content.splitlines(), "", SEPARATOR, ""])

        items = related.get(tag, [])
        if items:
            lines.extend([f"{RELATED_LABEL} 包含 {len(items)} 条", ""])
            for index, (emoji, text) in enumerate(items, 1):
                lines.append(f"{index}. {emoji} {_preview(text)}")
            lines.append("")

    return lines


def _preview(text: str) -> str:
    flat = _single_line(text)
    if len(flat) > PREVIEW_LENGTH:
        return flat[:PREVIEW_LENGTH] + "..."
    return flat
