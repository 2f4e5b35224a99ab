"""
dataclasses package
-------------------
Dataclass definitions for journal records.

- Note, Todo, Schedule, TagContent: the records a journal holds
- ScheduleType: schedule categories accepted on import
- DateGroup: records sharing one calendar day (export only)
- ParseResult: what a journal document parsed into
"""
from daybook.dataclasses.records import Note, Schedule, ScheduleType, TagContent, Todo
from daybook.dataclasses.journal import DateGroup, ParseResult

__all__ = [
    "Note",
    "Todo",
    "Schedule",
    "ScheduleType",
    "TagContent",
    "DateGroup",
    "ParseResult",
]
