"""
Utilities package for the Daybook project.

This package provides commonly-used utilities organized by domain:
- dates: Journal date headings, clock times, lenient date coercion
- tags: ``#tag`` extraction, stripping, formatting and search

Import commonly-used utilities directly from this package:
    from daybook.utils import format_date_heading, extract_tags

Or import specific modules:
    from daybook.utils import dates, tags
"""

# Date utilities
from .dates import (
    format_date_heading,
    parse_heading_date,
    parse_calendar_date,
    format_time,
    parse_time,
    local_date,
    coerce_date,
    coerce_datetime,
    export_timestamp,
)

# Tag utilities
from .tags import (
    dedupe_tags,
    extract_tags,
    strip_tags,
    format_tags,
    parse_tag_tokens,
    matches_search,
)

__all__ = [
    # Dates
    "format_date_heading",
    "parse_heading_date",
    "parse_calendar_date",
    "format_time",
    "parse_time",
    "local_date",
    "coerce_date",
    "coerce_datetime",
    "export_timestamp",
    # Tags
    "dedupe_tags",
    "extract_tags",
    "strip_tags",
    "format_tags",
    "parse_tag_tokens",
    "matches_search",
]
