#!/usr/bin/env python3
"""
journal.py
-------------------
Intermediate structures of the journal codec.

- DateGroup: every record anchored on one calendar day, used while
  writing a journal document
- ParseResult: everything recovered from a journal document, plus what
  had to be dropped
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
from dataclasses import dataclass, field
from datetime import date
from typing import List

# ---- Local imports ----
from daybook.dataclasses.records import Note, Schedule, TagContent, Todo
from daybook.utils.dates import format_date_heading


@dataclass
class DateGroup:
    """
    Records sharing one calendar day.

    Attributes:
        date (date): The day.
        notes (List[Note]): Notes created that day, newest first.
        todos (List[Todo]): Todos filed under the day, input order.
        schedules (List[Schedule]): Schedules for the day, input order.
    """

    date: date
    notes: List[Note] = field(default_factory=list)
    todos: List[Todo] = field(default_factory=list)
    schedules: List[Schedule] = field(default_factory=list)

    @property
    def heading(self) -> str:
        return format_date_heading(self.date)


@dataclass
class ParseResult:
    """
    Records recovered from one journal document.

    Attributes:
        notes (List[Note]): Notes in document order.
        todos (List[Todo]): Todos in document order.
        schedules (List[Schedule]): Schedules in document order.
        tag_contents (List[TagContent]): Pinned tag texts from the tag summary.
        dropped (int): Items discarded because their date heading could
            not be read, or because the item itself was invalid.
        unknown_headings (List[str]): Date headings that matched no
            date grammar.
    """

    notes: List[Note] = field(default_factory=list)
    todos: List[Todo] = field(default_factory=list)
    schedules: List[Schedule] = field(default_factory=list)
    tag_contents: List[TagContent] = field(default_factory=list)
    dropped: int = 0
    unknown_headings: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of notes, todos and schedules recovered."""
        return len(self.notes) + len(self.todos) + len(self.schedules)

    @property
    def is_empty(self) -> bool:
        return self.total == 0 and not self.tag_contents

    def summary(self) -> str:
        return (
            f"{len(self.notes)} notes, {len(self.todos)} todos, "
            f"{len(self.schedules)} schedules, "
            f"{len(self.tag_contents)} tag contents, {self.dropped} dropped"
        )
