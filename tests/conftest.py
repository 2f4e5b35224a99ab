"""
conftest.py
-----------
Shared pytest fixtures for Daybook tests.

Provides fixtures for:
- Sample records (notes, todos, schedules, pinned tag texts)
- Sample journal documents
- Temporary YAML stores
"""
import pytest
from datetime import date, datetime

from daybook.dataclasses import Note, Schedule, ScheduleType, TagContent, Todo
from daybook.store import YamlStore


# ----- Record Fixtures -----

@pytest.fixture
def sample_notes():
    """Three notes over two days, one of them untagged."""
    return [
        Note(content="今天很开心", created_at=datetime(2024, 1, 15, 9, 0), tags=["心情"]),
        Note(
            content="读完了第三章\n\n明天继续第四章",
            created_at=datetime(2024, 1, 15, 21, 30),
            tags=["读书", "学习"],
        ),
        Note(content="下雨了，没出门", created_at=datetime(2024, 1, 14, 18, 5)),
    ]


@pytest.fixture
def sample_todos():
    """Two todos on one day, one done with attributes."""
    return [
        Todo(
            date=date(2024, 1, 15),
            content="买牛奶",
            completed=False,
            due_date=date(2024, 1, 16),
        ),
        Todo(
            date=date(2024, 1, 15),
            content="交报告",
            completed=True,
            tags=["工作"],
            start_date=date(2024, 1, 10),
            due_date=date(2024, 1, 15),
        ),
    ]


@pytest.fixture
def sample_schedules():
    """A typed schedule with description and a bare one."""
    return [
        Schedule(
            date=date(2024, 1, 15),
            title="组会",
            time="14:00",
            description="讨论实验进度\n带上电脑",
            type=ScheduleType.MEETING,
        ),
        Schedule(date=date(2024, 1, 13), title="看电影", time="晚上"),
    ]


@pytest.fixture
def sample_tag_contents():
    """One pinned text for a tag that notes also use."""
    return [TagContent(tag="心情", content="记录每天的心情")]


# ----- Document Fixtures -----

@pytest.fixture
def minimal_journal():
    """Smallest document with one note and one todo."""
    return """# 土豆笔记本完整导出

## 2024年1月15日 星期一

### 📝 笔记 (1条)

#### 09:00 - 笔记 1

**标签:** #心情

今天很开心

### ✅ Todo事项 (1条)

1. ⬜ 买牛奶
   **截止日期:** 2024-01-16

---
"""


@pytest.fixture
def iso_journal():
    """Hand-written document using ISO date headings."""
    return """## 2024-01-15

### 📝 笔记

#### 08:15 - 笔记 1

早起跑步

## 2024-01-16

### 📅 日程安排

1. **10:00** - 牙医
   **类型:** appointment
"""


@pytest.fixture
def journal_with_bad_heading():
    """Items under an unreadable heading, followed by a valid day."""
    return """## 某一天

### 📝 笔记 (1条)

#### 10:00 - 笔记 1

丢失的笔记

### ✅ Todo事项 (1条)

1. ⬜ 丢失的待办

## 2024年1月16日 星期二

### ✅ Todo事项 (1条)

1. ✅ 保留的待办
"""


# ----- Store Fixtures -----

@pytest.fixture
def store_path(tmp_path):
    """Location for a YAML store that does not exist yet."""
    return tmp_path / "data" / "daybook.yaml"


@pytest.fixture
def populated_store(store_path, sample_notes, sample_todos, sample_schedules, sample_tag_contents):
    """YAML store holding every sample record."""
    store = YamlStore(store_path, autosave=False)
    for note in sample_notes:
        store.create_note(note.content, note.tags, note.created_at)
    for todo in sample_todos:
        store.add_todo(todo.date_key, todo)
    for schedule in sample_schedules:
        store.add_schedule(schedule.date_key, schedule)
    for pinned in sample_tag_contents:
        store.set_tag_content(pinned.tag, pinned.content)
    store.save()
    return store
