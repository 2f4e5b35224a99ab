"""
codec package
-------------
Journal Markdown codec.

- serialize: records → journal document
- parse: journal document (or older per-tag export) → ParseResult
- detect_format: which of the two a document is

Both are pure functions over in-memory values; file handling lives in
``daybook.pipeline``.
"""
from daybook.codec.parser import JournalFormat, detect_format, parse
from daybook.codec.serializer import build_date_groups, serialize

__all__ = ["parse", "serialize", "build_date_groups", "detect_format", "JournalFormat"]
