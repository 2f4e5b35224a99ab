#!/usr/bin/env python3
"""
yaml_store.py
-------------------
A single-file YAML record store.

Layout on disk:

    notes:
      - content: |-
          今天很开心

          #心情
        tags: [心情]
        created_at: '2024-01-15T09:00:00'
    todos:
      '2024-01-15':
        - content: 买牛奶
          completed: false
          due_date: '2024-01-16'
    schedules:
      '2024-01-15':
        - title: 组会
          time: '14:00'
          type: meeting
    tag_contents:
      心情: 记录每天的心情

The store is both a RecordSource (for exports) and a RecordSink (for
imports). Records that fail validation on load are logged and skipped
so one bad entry does not block an export.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

# --- Third party imports ---
import yaml

# --- Local imports ---
from daybook.core.exceptions import RecordValidationError, StoreError
from daybook.dataclasses import Note, Schedule, TagContent, Todo
from daybook.utils.dates import coerce_date


# ----- Logging ----
logger = logging.getLogger(__name__)


class YamlStore:
    """
    Records persisted in one YAML file.

    Attributes:
        path: Location of the YAML file (created on first save)
        autosave: Write the file after every sink call
    """

    def __init__(self, path: Path, autosave: bool = True) -> None:
        self.path = Path(path)
        self.autosave = autosave
        self._data: Dict[str, Any] = self._load()

    # ---- File I/O ----
    def _load(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"notes": [], "todos": {}, "schedules": {}, "tag_contents": {}}
        if not self.path.exists():
            return data

        try:
            loaded = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise StoreError(f"Invalid YAML in store {self.path}: {e}") from e
        except OSError as e:
            raise StoreError(f"Cannot read store {self.path}: {e}") from e

        if loaded is None:
            return data
        if not isinstance(loaded, dict):
            raise StoreError(f"Store file is not a mapping: {self.path}")

        data["notes"] = list(loaded.get("notes") or [])
        data["todos"] = self._normalize_by_date(loaded.get("todos"), "todos")
        data["schedules"] = self._normalize_by_date(loaded.get("schedules"), "schedules")
        data["tag_contents"] = dict(loaded.get("tag_contents") or {})
        return data

    def _normalize_by_date(self, section: Any, name: str) -> Dict[str, List[Dict[str, Any]]]:
        """Key by ISO date string; YAML may hand back date objects for unquoted keys."""
        if not section:
            return {}
        if not isinstance(section, dict):
            raise StoreError(f"Store section '{name}' must map dates to lists: {self.path}")

        normalized: Dict[str, List[Dict[str, Any]]] = {}
        for key, items in section.items():
            day = coerce_date(key)
            if day is None:
                logger.warning(f"Ignoring {name} under unreadable date key {key!r}")
                continue
            normalized.setdefault(day.isoformat(), []).extend(items or [])
        return normalized

    def save(self) -> None:
        """Write the store to disk."""
        content = yaml.dump(
            self._data, default_flow_style=False, allow_unicode=True, sort_keys=False
        )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Cannot write store {self.path}: {e}") from e

    def _changed(self) -> None:
        if self.autosave:
            self.save()

    # ---- RecordSource ----
    def get_all_notes(self) -> List[Note]:
        notes: List[Note] = []
        for raw in self._data["notes"]:
            try:
                notes.append(Note.from_dict(raw))
            except (RecordValidationError, AttributeError) as e:
                logger.warning(f"Skipping stored note: {e}")
        return notes

    def get_all_todos_by_date(self) -> Dict[str, List[Todo]]:
        return self._records_by_date("todos", Todo.from_dict)

    def get_all_schedules_by_date(self) -> Dict[str, List[Schedule]]:
        return self._records_by_date("schedules", Schedule.from_dict)

    def _records_by_date(self, name: str, factory: Any) -> Dict[str, List[Any]]:
        by_date: Dict[str, List[Any]] = {}
        for key, items in self._data[name].items():
            day = coerce_date(key)
            records = []
            for raw in items:
                try:
                    records.append(factory(day, raw))
                except (RecordValidationError, AttributeError) as e:
                    logger.warning(f"Skipping stored {name[:-1]} on {key}: {e}")
            if records:
                by_date[key] = records
        return by_date

    def get_all_tag_contents(self) -> List[TagContent]:
        return [
            TagContent(tag=str(tag), content=str(content or ""))
            for tag, content in self._data["tag_contents"].items()
        ]

    # ---- RecordSink ----
    def create_note(self, content: str, tags: List[str], timestamp: datetime) -> None:
        note = Note(content=content, created_at=timestamp, tags=list(tags))
        self._data["notes"].append(note.to_dict())
        self._changed()

    def add_todo(self, date_key: str, todo: Todo) -> None:
        self._data["todos"].setdefault(self._checked_key(date_key), []).append(todo.to_dict())
        self._changed()

    def add_schedule(self, date_key: str, schedule: Schedule) -> None:
        self._data["schedules"].setdefault(self._checked_key(date_key), []).append(
            schedule.to_dict()
        )
        self._changed()

    def set_tag_content(self, tag: str, content: str) -> None:
        entry = TagContent(tag=tag, content=content)
        self._data["tag_contents"][entry.tag] = entry.content
        self._changed()

    @staticmethod
    def _checked_key(date_key: str) -> str:
        day = coerce_date(date_key)
        if day is None:
            raise RecordValidationError(f"Invalid date key: {date_key!r}")
        return day.isoformat()

    # ---- Introspection ----
    def counts(self) -> Dict[str, int]:
        """Number of stored records per kind."""
        return {
            "notes": len(self._data["notes"]),
            "todos": sum(len(items) for items in self._data["todos"].values()),
            "schedules": sum(len(items) for items in self._data["schedules"].values()),
            "tag_contents": len(self._data["tag_contents"]),
        }
