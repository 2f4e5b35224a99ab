#!/usr/bin/env python3
"""
dates.py
--------------------
Date and time utilities shared by the journal serializer and parser.

Journal date headings are rendered the way the notebook shows them:

    2024年1月15日 星期一

and are read back from either that form or a plain ISO date. Attribute
values (due/start dates) accept the same two grammars.

Functions:
    format_date_heading: date → "2024年1月15日 星期一"
    parse_heading_date: heading text → date (first grammar that matches)
    parse_calendar_date: attribute value → date
    format_time / parse_time: "HH:MM" ↔ time
    local_date: calendar day of a (possibly aware) datetime
    local_sort_key: naive local datetime, so naive and aware values compare
    parse_item_datetime: "2024年1月1日 14:30" → datetime (time optional)
    coerce_date / coerce_datetime: lenient conversion for stored values
    export_timestamp: filesystem-safe timestamp for export filenames
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime, time
from typing import Any, Optional


# ----- Grammar -----
WEEKDAYS = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")

CJK_DATE_PATTERN = re.compile(r"(\d{4})年(\d{1,2})月(\d{1,2})日")
ISO_DATE_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")

# Tried in order; first match wins
DATE_PATTERNS = (CJK_DATE_PATTERN, ISO_DATE_PATTERN)

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
CLOCK_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")


# ----- Rendering -----
def format_date_heading(day: date) -> str:
    """
    Render a calendar day as a journal date heading.

    Examples:
        >>> format_date_heading(date(2024, 1, 15))
        '2024年1月15日 星期一'
    """
    return f"{day.year}年{day.month}月{day.day}日 {WEEKDAYS[day.weekday()]}"


def format_time(moment: datetime) -> str:
    """Render the local clock time of a datetime as HH:MM."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment.hour:02d}:{moment.minute:02d}"


def export_timestamp(moment: datetime) -> str:
    """
    Timestamp used in export filenames (colons are not filename-safe).

    Examples:
        >>> export_timestamp(datetime(2024, 1, 15, 9, 30, 5))
        '2024-01-15T09-30-05'
    """
    return moment.strftime("%Y-%m-%dT%H-%M-%S")


# ----- Parsing -----
def parse_heading_date(text: str) -> Optional[date]:
    """
    Extract a calendar date from heading text.

    Tries ``YYYY年M月D日`` first, then ``YYYY-M-D``. Anything after the
    date (weekday, notes) is ignored.

    Args:
        text: Heading text without the leading ``##``

    Returns:
        Parsed date, or None if neither grammar matches or the matched
        numbers are not a real day

    Examples:
        >>> parse_heading_date("2024年1月15日 星期一")
        datetime.date(2024, 1, 15)
        >>> parse_heading_date("2024-01-15")
        datetime.date(2024, 1, 15)
        >>> parse_heading_date("Someday") is None
        True
    """
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError:
                return None
    return None


def parse_calendar_date(value: str) -> Optional[date]:
    """Parse an attribute date value (ISO or CJK grammar)."""
    value = value.strip()
    if not value:
        return None
    return parse_heading_date(value)


def parse_time(text: str) -> Optional[time]:
    """
    Parse an ``H:MM`` / ``HH:MM`` clock time.

    Examples:
        >>> parse_time("9:05")
        datetime.time(9, 5)
        >>> parse_time("25:00") is None
        True
    """
    match = TIME_PATTERN.match(text.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return time(hours, minutes)


def local_date(moment: datetime) -> date:
    """Calendar day of a datetime in local time."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def local_sort_key(moment: datetime) -> datetime:
    """
    Naive local-time view of a datetime.

    Imported notes carry naive timestamps while stored ISO strings with
    an offset load as aware ones; both compare once converted.
    """
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def parse_item_datetime(value: str) -> Optional[datetime]:
    """
    Parse a dated item line value: a calendar date, optionally a clock time.

    Without a time (or with an impossible one) the item is placed at
    midnight.

    Examples:
        >>> parse_item_datetime("2024年1月1日 14:30")
        datetime.datetime(2024, 1, 1, 14, 30)
        >>> parse_item_datetime("2024年1月1日")
        datetime.datetime(2024, 1, 1, 0, 0)
        >>> parse_item_datetime("昨天") is None
        True
    """
    day = parse_calendar_date(value)
    if day is None:
        return None
    clock = CLOCK_PATTERN.search(value)
    moment = parse_time(f"{clock.group(1)}:{clock.group(2)}") if clock else None
    return datetime.combine(day, moment or time())


# ----- Coercion -----
def coerce_date(value: Any) -> Optional[date]:
    """
    Normalize date-like values (date, datetime, str) to a date.

    YAML loads unquoted ISO dates as ``date`` objects and quoted ones as
    strings; both end up here.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_calendar_date(value)
    return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    """Normalize datetime-like values (datetime, date, ISO str) to a datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None
