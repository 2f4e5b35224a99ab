"""
Daybook Package
===============

Export and import of a personal notebook as a single Markdown journal.

Notes, todos and schedules are written into one human-readable document
grouped by calendar day, with Chinese section labels and emoji markers,
and the same document can be parsed back into records after editing.

Main Components:
    - codec: Pure serializer and parser for the journal format
    - dataclasses: Note, Todo, Schedule, TagContent and codec results
    - store: RecordSource/RecordSink protocols and the YAML record store
    - pipeline: File-level export/import and the click CLI
    - core: Logging, exceptions, paths, statistics
    - utils: Date and tag helpers

Primary Interfaces:
    - daybook.pipeline.cli: ``daybook export`` / ``daybook import``
    - daybook.codec.serialize / daybook.codec.parse

Example Usage:
    >>> from daybook.codec import parse, serialize
    >>> document = serialize(notes, todos, schedules)
    >>> result = parse(document)
"""

__version__ = "1.0.0"
__author__ = "Daybook Project"

from daybook.core.paths import DATA_DIR, EXPORT_DIR, LOG_DIR, STORE_PATH

__all__ = [
    "DATA_DIR",
    "EXPORT_DIR",
    "LOG_DIR",
    "STORE_PATH",
]
