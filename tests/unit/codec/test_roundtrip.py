"""
Round-trip tests for the journal codec.

Serializing records and parsing the document back must recover the
records, and serializing the recovered records must reproduce the same
document.
"""
import pytest
from datetime import date, datetime

from daybook.codec import parse, serialize
from daybook.dataclasses import Note, Schedule, ScheduleType, Todo


def _by_time(notes):
    return sorted(notes, key=lambda n: n.created_at)


class TestRoundTrip:
    """parse(serialize(x)) recovers x."""

    def test_sample_records_recovered(
        self, sample_notes, sample_todos, sample_schedules, sample_tag_contents
    ):
        """Every field of every sample record survives."""
        document = serialize(
            sample_notes, sample_todos, sample_schedules, tag_contents=sample_tag_contents
        )
        result = parse(document)

        assert _by_time(result.notes) == _by_time(sample_notes)
        assert result.todos == sample_todos
        assert result.schedules == sample_schedules
        assert result.tag_contents == sample_tag_contents
        assert result.dropped == 0

    def test_inline_tags_become_tag_line(self):
        """A note's inline tags come back as tags, not body text."""
        note = Note(
            content="去了 #公园 散步",
            created_at=datetime(2024, 3, 2, 16, 45),
            tags=["公园"],
        )
        (recovered,) = parse(serialize([note])).notes

        assert recovered.content == "去了 散步"
        assert recovered.tags == ["公园"]
        assert recovered.created_at == note.created_at

    def test_every_schedule_type(self):
        """Each schedule category survives."""
        schedules = [
            Schedule(date=date(2024, 5, 1), title=kind.value, time=f"{i + 8}:00", type=kind)
            for i, kind in enumerate(ScheduleType)
        ]
        assert parse(serialize(schedules=schedules)).schedules == schedules

    def test_bold_text_in_descriptions_and_bodies(self):
        """Leading bold text survives in schedule descriptions and note bodies."""
        schedule = Schedule(
            date=date(2024, 1, 15),
            title="组会",
            time="14:00",
            description="**重要** 带电脑\n第二行",
            type=ScheduleType.MEETING,
        )
        note = Note(content="**提醒** 交作业", created_at=datetime(2024, 1, 15, 8, 0))

        result = parse(serialize([note], schedules=[schedule]))

        assert result.schedules == [schedule]
        assert [n.content for n in result.notes] == ["**提醒** 交作业"]

    def test_many_days(self):
        """Records spread over many days keep their dates."""
        todos = [
            Todo(date=date(2023, 12, 31), content="跨年"),
            Todo(date=date(2024, 2, 29), content="闰日"),
            Todo(date=date(2024, 1, 1), content="元旦", completed=True),
        ]
        recovered = parse(serialize(todos=todos)).todos
        assert sorted(recovered, key=lambda t: t.date) == sorted(todos, key=lambda t: t.date)

    def test_empty_round_trip(self):
        """The header-only document parses to nothing."""
        assert parse(serialize()).is_empty


class TestIdempotence:
    """serialize(parse(serialize(x))) == serialize(x)."""

    def test_sample_document_stable(
        self, sample_notes, sample_todos, sample_schedules, sample_tag_contents
    ):
        """A second pass reproduces the first document exactly."""
        first = serialize(
            sample_notes, sample_todos, sample_schedules, tag_contents=sample_tag_contents
        )
        result = parse(first)
        second = serialize(
            result.notes, result.todos, result.schedules, tag_contents=result.tag_contents
        )
        assert second == first

    def test_hand_written_document_stabilises(self, iso_journal):
        """After one pass a hand-written document is in normal form."""
        once = parse(iso_journal)
        normal = serialize(once.notes, once.todos, once.schedules)
        twice = parse(normal)
        assert serialize(twice.notes, twice.todos, twice.schedules) == normal

    def test_paragraphs_stable(self):
        """Multi-paragraph notes keep their blank lines across passes."""
        note = Note(
            content="第一段\n\n第二段\n第三行",
            created_at=datetime(2024, 1, 15, 9, 0),
            tags=["长文"],
        )
        first = serialize([note])
        result = parse(first)
        assert result.notes[0].content == note.content
        assert serialize(result.notes) == first
