#!/usr/bin/env python3
"""
records.py
-------------------
Defines the record dataclasses the journal codec reads and writes.

- Note: free text stamped with a creation time, optionally tagged
- Todo: a checklist item filed under a calendar day
- Schedule: a timed entry filed under a calendar day
- TagContent: free text pinned to a tag

Each record validates itself on construction and converts to/from the
plain dictionaries the YAML record store keeps on disk.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

# ---- Local imports ----
from daybook.core.exceptions import RecordValidationError
from daybook.utils.dates import coerce_date, coerce_datetime, local_date
from daybook.utils.tags import dedupe_tags, extract_tags, format_tags, strip_tags


class ScheduleType(str, Enum):
    """Schedule categories accepted on import."""

    EVENT = "event"
    MEETING = "meeting"
    APPOINTMENT = "appointment"
    REMINDER = "reminder"
    TASK = "task"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[ScheduleType]:
        """
        Look up a category by its label, ignoring case and whitespace.

        Unknown labels return None rather than raising.

        Examples:
            >>> ScheduleType.parse(" Meeting ")
            <ScheduleType.MEETING: 'meeting'>
            >>> ScheduleType.parse("party") is None
            True
        """
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# ----- Note -----
@dataclass
class Note:
    """
    A timestamped note.

    ``content`` may embed ``#tag`` tokens; ``tags`` is the de-duplicated
    tag list shown on the note's tag line.

    Attributes:
        content (str): Note text as stored.
        created_at (datetime): Creation time; anchors the note to a day.
        tags (List[str]): Tags in display order.
    """

    content: str
    created_at: datetime
    tags: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.content, str) or not self.content.strip():
            raise RecordValidationError("Note content cannot be empty")
        if not isinstance(self.created_at, datetime):
            raise RecordValidationError(
                f"Note created_at must be a datetime, got {type(self.created_at).__name__}"
            )
        self.tags = dedupe_tags(self.tags)

    @property
    def date(self) -> date:
        return local_date(self.created_at)

    @property
    def body(self) -> str:
        """Content without the tags that already appear on the tag line."""
        return strip_tags(self.content, self.tags)

    def to_text(self) -> str:
        """
        Recombine body and tags into one blob, as the notebook stores it.

        Examples:
            >>> Note("今天很开心", datetime(2024, 1, 15, 9), ["心情"]).to_text()
            '今天很开心\\n\\n#心情'
        """
        body = self.body
        if not self.tags:
            return body
        tag_line = format_tags(self.tags)
        return f"{body}\n\n{tag_line}" if body else tag_line

    @classmethod
    def from_text(cls, text: str, created_at: datetime) -> Note:
        """Split a stored blob back into content and extracted tags."""
        return cls(content=text.strip(), created_at=created_at, tags=extract_tags(text))

    # ---- Storage ----
    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Note:
        created_at = coerce_datetime(data.get("created_at"))
        if created_at is None:
            raise RecordValidationError(f"Note has no valid created_at: {data!r}")
        return cls(
            content=data.get("content") or "",
            created_at=created_at,
            tags=list(data.get("tags") or []),
        )


# ----- Todo -----
@dataclass
class Todo:
    """
    A checklist item filed under a calendar day.

    Attributes:
        date (date): Day the todo is filed under (its journal section).
        content (str): Todo text, single line.
        completed (bool): Checked off or not.
        tags (List[str]): Tags in display order.
        due_date (Optional[date]): Deadline.
        start_date (Optional[date]): Planned start.
    """

    date: date
    content: str
    completed: bool = False
    tags: List[str] = field(default_factory=list)
    due_date: Optional[date] = None
    start_date: Optional[date] = None

    def __post_init__(self) -> None:
        if not isinstance(self.content, str) or not self.content.strip():
            raise RecordValidationError("Todo content cannot be empty")
        if not isinstance(self.date, date):
            raise RecordValidationError("Todo date is required")
        self.content = self.content.strip()
        self.completed = bool(self.completed)
        self.tags = dedupe_tags(self.tags)

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    # ---- Storage ----
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "content": self.content,
            "completed": self.completed,
            "tags": list(self.tags),
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "start_date": self.start_date.isoformat() if self.start_date else None,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, day: date, data: Dict[str, Any]) -> Todo:
        return cls(
            date=day,
            content=data.get("content") or "",
            completed=bool(data.get("completed", False)),
            tags=list(data.get("tags") or []),
            due_date=coerce_date(data.get("due_date")),
            start_date=coerce_date(data.get("start_date")),
        )


# ----- Schedule -----
@dataclass
class Schedule:
    """
    A timed entry filed under a calendar day.

    Attributes:
        date (date): Day the schedule belongs to.
        title (str): What is happening.
        time (str): Free-form time text (``14:00``, ``下午``, ``9-11``).
        description (Optional[str]): Extra detail, may span lines.
        type (Optional[ScheduleType]): Category.
    """

    date: date
    title: str
    time: str
    description: Optional[str] = None
    type: Optional[ScheduleType] = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise RecordValidationError("Schedule title cannot be empty")
        if not isinstance(self.time, str) or not self.time.strip():
            raise RecordValidationError("Schedule time is required")
        if not isinstance(self.date, date):
            raise RecordValidationError("Schedule date is required")
        self.title = self.title.strip()
        self.time = self.time.strip()
        if self.description is not None:
            self.description = self.description.strip() or None
        if self.type is not None and not isinstance(self.type, ScheduleType):
            parsed = ScheduleType.parse(self.type)
            if parsed is None:
                raise RecordValidationError(f"Unknown schedule type: {self.type!r}")
            self.type = parsed

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    # ---- Storage ----
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "time": self.time,
            "description": self.description,
            "type": self.type.value if self.type else None,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, day: date, data: Dict[str, Any]) -> Schedule:
        # Stored types outside the enumeration are dropped, not rejected
        return cls(
            date=day,
            title=data.get("title") or "",
            time=str(data.get("time") or ""),
            description=data.get("description"),
            type=ScheduleType.parse(data.get("type")),
        )


# ----- TagContent -----
@dataclass
class TagContent:
    """Free text pinned to a tag."""

    tag: str
    content: str

    def __post_init__(self) -> None:
        self.tag = (self.tag or "").strip().lstrip("#")
        if not self.tag:
            raise RecordValidationError("Tag content needs a tag")
        self.content = (self.content or "").strip()
