#!/usr/bin/env python3
"""
protocols.py
-------------------
Interfaces the journal pipelines use to reach persisted records.

- RecordSource: bulk reads, called once before an export
- RecordSink: one call per recovered record after an import

``YamlStore`` implements both; anything else with the same methods
(an API client, a database layer) can be passed in its place.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from typing import Dict, List, Protocol

# --- Local imports ---
from daybook.dataclasses import Note, Schedule, TagContent, Todo


class RecordSource(Protocol):
    """Bulk read access to every stored record."""

    def get_all_notes(self) -> List[Note]:
        ...

    def get_all_todos_by_date(self) -> Dict[str, List[Todo]]:
        """Todos keyed by ISO date key."""
        ...

    def get_all_schedules_by_date(self) -> Dict[str, List[Schedule]]:
        """Schedules keyed by ISO date key."""
        ...

    def get_all_tag_contents(self) -> List[TagContent]:
        ...


class RecordSink(Protocol):
    """Per-record creation; each call may fail independently."""

    def create_note(self, content: str, tags: List[str], timestamp: datetime) -> None:
        ...

    def add_todo(self, date_key: str, todo: Todo) -> None:
        ...

    def add_schedule(self, date_key: str, schedule: Schedule) -> None:
        ...

    def set_tag_content(self, tag: str, content: str) -> None:
        ...
