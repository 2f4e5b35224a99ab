"""
Tests for the journal export pipeline.
"""
import pytest
from datetime import date, datetime
from unittest.mock import MagicMock

from daybook.codec import parse
from daybook.core.exceptions import JournalExportError
from daybook.dataclasses import Note, Todo
from daybook.pipeline.md_export import build_export_filename, collect_records, export_journal
from daybook.store import YamlStore


EXPORTED_AT = datetime(2024, 1, 15, 9, 30, 0)


class TestBuildExportFilename:
    """Tests for build_export_filename."""

    def test_full_export(self):
        """Without a term the full-export name is used."""
        assert build_export_filename(EXPORTED_AT) == "土豆笔记本-完整导出-2024-01-15T09-30-00.md"

    def test_search_export(self):
        """The search term is embedded."""
        assert (
            build_export_filename(EXPORTED_AT, "工作")
            == "土豆笔记本-搜索结果-工作-2024-01-15T09-30-00.md"
        )

    def test_unsafe_characters_replaced(self):
        """Path separators and spaces do not reach the filename."""
        name = build_export_filename(EXPORTED_AT, " a/b c ")
        assert name == "土豆笔记本-搜索结果-a_b_c-2024-01-15T09-30-00.md"

    def test_blank_term_is_full_export(self):
        """A blank term counts as no term."""
        assert "完整导出" in build_export_filename(EXPORTED_AT, "   ")


class TestCollectRecords:
    """Tests for collect_records."""

    def test_search_filters_notes_only(self):
        """Todos are exported in full even when searching."""
        source = MagicMock()
        source.get_all_notes.return_value = [
            Note(content="开会", created_at=datetime(2024, 1, 15, 9, 0), tags=["工作"]),
            Note(content="散步", created_at=datetime(2024, 1, 15, 18, 0)),
        ]
        source.get_all_todos_by_date.return_value = {
            "2024-01-15": [Todo(date=date(2024, 1, 15), content="买菜")]
        }
        source.get_all_schedules_by_date.return_value = {}
        source.get_all_tag_contents.return_value = []

        notes, todos, schedules, tag_contents = collect_records(source, "工作")

        assert [n.content for n in notes] == ["开会"]
        assert [t.content for t in todos] == ["买菜"]
        assert schedules == []


class TestExportJournal:
    """Tests for export_journal."""

    def test_writes_document(self, populated_store, tmp_path):
        """The export is a parseable document in the output directory."""
        output_dir = tmp_path / "exports"

        stats = export_journal(populated_store, output_dir, exported_at=EXPORTED_AT)

        expected = output_dir / "土豆笔记本-完整导出-2024-01-15T09-30-00.md"
        assert stats.output_file == expected
        assert stats.notes_exported == 3
        assert stats.todos_exported == 2
        assert stats.schedules_exported == 2
        assert stats.date_groups == 3
        assert stats.files_processed == 1

        document = expected.read_text(encoding="utf-8")
        assert "导出时间: 2024-01-15 09:30:00" in document
        assert "# 📋 标签汇总" in document
        result = parse(document)
        assert len(result.notes) == 3
        assert len(result.tag_contents) == 1

    def test_search_export(self, populated_store, tmp_path):
        """A search term narrows notes and names the file."""
        stats = export_journal(
            populated_store, tmp_path, search_term="读书", exported_at=EXPORTED_AT
        )
        assert stats.notes_exported == 1
        assert stats.todos_exported == 2
        assert "搜索结果-读书" in stats.output_file.name

    def test_without_tag_summary(self, populated_store, tmp_path):
        """The tag summary can be left out."""
        stats = export_journal(
            populated_store, tmp_path, include_tag_summary=False, exported_at=EXPORTED_AT
        )
        assert "标签汇总" not in stats.output_file.read_text(encoding="utf-8")

    def test_empty_source_writes_header(self, store_path, tmp_path):
        """An empty store still produces a header-only document."""
        stats = export_journal(YamlStore(store_path), tmp_path, exported_at=EXPORTED_AT)

        assert stats.total_exported == 0
        assert stats.output_file.read_text(encoding="utf-8").startswith("# 土豆笔记本完整导出")

    def test_source_failure(self, tmp_path):
        """A failing source raises JournalExportError."""
        source = MagicMock()
        source.get_all_notes.side_effect = OSError("connection refused")

        with pytest.raises(JournalExportError, match="connection refused"):
            export_journal(source, tmp_path, exported_at=EXPORTED_AT)

    def test_unwritable_output(self, populated_store, tmp_path):
        """An output path that is a file raises JournalExportError."""
        blocker = tmp_path / "exports"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(JournalExportError):
            export_journal(populated_store, blocker, exported_at=EXPORTED_AT)
