#!/usr/bin/env python3
"""
grammar.py
-------------------
Line grammar shared by the journal serializer and parser.

A journal document looks like:

    # 土豆笔记本完整导出

    数据统计:
    - 笔记: 1 条
    ...
    ---

    ## 2024年1月15日 星期一

    ### 📝 笔记 (1条)

    #### 09:00 - 笔记 1

    **标签:** #心情

    今天很开心

    ### ✅ Todo事项 (1条)

    1. ⬜ 买牛奶
       **截止日期:** 2024-01-16

    ### 📅 日程安排 (1条)

    1. **14:00** - 组会
       讨论实验进度
       **类型:** meeting

    ---

    # 📋 标签汇总
    ...

Both directions import their markers from here so the written form and
the recognised form cannot drift apart.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from enum import Enum


# ----- Sections -----
class Section(Enum):
    """Which kind of item the lines under the current heading describe."""

    NONE = "none"
    NOTES = "notes"
    TODOS = "todos"
    SCHEDULES = "schedules"
    TAG_SUMMARY = "tag_summary"


NOTES_EMOJI = "📝"
TODOS_EMOJI = "✅"
SCHEDULES_EMOJI = "📅"

SECTION_EMOJIS = {
    NOTES_EMOJI: Section.NOTES,
    TODOS_EMOJI: Section.TODOS,
    SCHEDULES_EMOJI: Section.SCHEDULES,
}

SECTION_TITLES = {
    Section.NOTES: "笔记",
    Section.TODOS: "Todo事项",
    Section.SCHEDULES: "日程安排",
}

# ----- Document header -----
DOCUMENT_TITLE = "土豆笔记本完整导出"
EXPORTED_AT_LABEL = "导出时间"
STATS_LABEL = "数据统计"
SEPARATOR = "---"

# ----- Items -----
COMPLETED_MARK = "✅"
PENDING_MARK = "⬜"
NOTE_LABEL = "笔记"

# ----- Attribute labels -----
TAGS_LABEL = "**标签:**"
DUE_DATE_LABEL = "**截止日期:**"
START_DATE_LABEL = "**开始日期:**"
SCHEDULE_TYPE_LABEL = "**类型:**"

TODO_ATTRIBUTE_LABELS = (TAGS_LABEL, DUE_DATE_LABEL, START_DATE_LABEL)

ATTRIBUTE_INDENT = "   "

# ----- Tag summary -----
TAG_SUMMARY_TITLE = "📋 标签汇总"
TAG_COUNT_LABEL = "标签数量"
PINNED_CONTENT_LABEL = "**标签固定内容:**"
RELATED_LABEL = "**关联内容:**"
PREVIEW_LENGTH = 100


# ----- Line patterns -----
DATE_HEADING = re.compile(r"^##\s*(?P<text>.+)$")
SUBHEADING = re.compile(r"^###")
SECTION_HEADING = re.compile(
    rf"^###\s*(?P<emoji>[{NOTES_EMOJI}{TODOS_EMOJI}{SCHEDULES_EMOJI}])\s*(?P<title>.+)$"
)
NOTE_HEADING = re.compile(rf"^####\s*(?P<time>\d{{1,2}}:\d{{2}})\s*-\s*{NOTE_LABEL}")
TAG_LINE = re.compile(r"^\*\*标签:\*\*\s*(?P<tags>.*)$")
TODO_ITEM = re.compile(
    rf"^(?P<index>\d+)\. (?P<mark>[{COMPLETED_MARK}{PENDING_MARK}])\s*(?P<content>.+)$"
)
TODO_ITEM_START = re.compile(rf"^\d+\. [{COMPLETED_MARK}{PENDING_MARK}]")
SCHEDULE_ITEM = re.compile(r"^(?P<index>\d+)\. \*\*(?P<time>[^*]+)\*\*\s*-\s*(?P<title>.+)$")
SCHEDULE_ITEM_START = re.compile(r"^\d+\. \*\*")
TAG_SUMMARY_HEADING = re.compile(rf"^#\s*{TAG_SUMMARY_TITLE}")
TAG_HEADING = re.compile(r"^##\s*#(?P<tag>[^#\s]\S*)\s*$")

# ----- Tag export -----
# Older per-tag export: "## #tag" blocks of "### N. 📝 ..." items, each
# dated by a "**日期:**" line and followed by its text.
TAG_EXPORT_TITLE = "土豆标签内容导出"
ITEM_DATE_LABEL = "**日期:**"
TAG_EXPORT_HEADING = re.compile(rf"^#\s*{TAG_EXPORT_TITLE}")
TAG_EXPORT_ITEM = re.compile(rf"^###\s*\d+\.\s*[{NOTES_EMOJI}{TODOS_EMOJI}]")
ITEM_DATE_LINE = re.compile(r"^\*\*日期:\*\*\s*(?P<value>.+)$")

ATTRIBUTE_LABELS = (
    *TODO_ATTRIBUTE_LABELS,
    SCHEDULE_TYPE_LABEL,
    PINNED_CONTENT_LABEL,
    RELATED_LABEL,
    ITEM_DATE_LABEL,
)


def is_attribute_line(line: str) -> bool:
    """
    True for lines carrying one of the journal's ``**Label:**`` markers.

    Other bold text at the start of a line is ordinary content.

    Examples:
        >>> is_attribute_line("**截止日期:** 2024-01-16")
        True
        >>> is_attribute_line("**重要** 带电脑")
        False
    """
    return line.startswith(ATTRIBUTE_LABELS)


def section_heading(section: Section, count: int) -> str:
    """
    Render a section heading with its item count.

    Examples:
        >>> section_heading(Section.TODOS, 2)
        '### ✅ Todo事项 (2条)'
    """
    emoji = {v: k for k, v in SECTION_EMOJIS.items()}[section]
    return f"### {emoji} {SECTION_TITLES[section]} ({count}条)"
