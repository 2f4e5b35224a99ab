#!/usr/bin/env python3
"""
Integration tests for the journal CLI.

Runs export and import end to end against temporary stores and
directories, and checks that failures surface as one-line errors.
"""
import pytest
from click.testing import CliRunner

from daybook.pipeline.cli import cli
from daybook.store import YamlStore


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def log_args(tmp_path):
    """Group options keeping logs inside the test directory."""
    return ["--log-dir", str(tmp_path / "logs")]


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        """Test that CLI help message works."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Daybook journal export and import" in result.output

    def test_export_help(self, runner):
        """Test export command help."""
        result = runner.invoke(cli, ["export", "--help"])
        assert result.exit_code == 0
        assert "--search" in result.output
        assert "--no-tag-summary" in result.output

    def test_import_help(self, runner):
        """Test import command help."""
        result = runner.invoke(cli, ["import", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output


class TestExportCommand:
    """Test the export command."""

    def test_export_writes_file(self, runner, log_args, populated_store, store_path, tmp_path):
        """Export creates one journal document."""
        output = tmp_path / "out"

        result = runner.invoke(
            cli, [*log_args, "export", "--store", str(store_path), "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert "Export complete" in result.output
        files = list(output.glob("土豆笔记本-完整导出-*.md"))
        assert len(files) == 1
        assert "## 2024年1月15日 星期一" in files[0].read_text(encoding="utf-8")

    def test_export_with_search(self, runner, log_args, populated_store, store_path, tmp_path):
        """Search scopes the export and its filename."""
        output = tmp_path / "out"

        result = runner.invoke(cli, [
            *log_args, "export", "--store", str(store_path), "-o", str(output),
            "--search", "心情", "--no-tag-summary",
        ])

        assert result.exit_code == 0, result.output
        (exported,) = output.glob("土豆笔记本-搜索结果-心情-*.md")
        text = exported.read_text(encoding="utf-8")
        assert "- 笔记: 1 条" in text
        assert "标签汇总" not in text

    def test_export_bad_store(self, runner, log_args, tmp_path):
        """An unreadable store ends with a one-line error."""
        store = tmp_path / "broken.yaml"
        store.write_text("notes: [unclosed\n", encoding="utf-8")

        result = runner.invoke(
            cli, [*log_args, "export", "--store", str(store), "-o", str(tmp_path / "out")]
        )

        assert result.exit_code == 1
        assert "❌ StoreError" in result.output


class TestImportCommand:
    """Test the import command."""

    def test_import_into_store(self, runner, log_args, tmp_path, minimal_journal):
        """Import creates records in the store."""
        journal = tmp_path / "journal.md"
        journal.write_text(minimal_journal, encoding="utf-8")
        store = tmp_path / "store.yaml"

        result = runner.invoke(
            cli, [*log_args, "import", str(journal), "--store", str(store)]
        )

        assert result.exit_code == 0, result.output
        assert "Import complete" in result.output
        counts = YamlStore(store).counts()
        assert counts["notes"] == 1
        assert counts["todos"] == 1

    def test_dry_run_leaves_store_alone(self, runner, log_args, tmp_path, minimal_journal):
        """Dry run reports counts without writing."""
        journal = tmp_path / "journal.md"
        journal.write_text(minimal_journal, encoding="utf-8")
        store = tmp_path / "store.yaml"

        result = runner.invoke(
            cli, [*log_args, "import", str(journal), "--store", str(store), "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert "Notes: 1" in result.output
        assert not store.exists()

    def test_dry_run_lists_unreadable_headings(
        self, runner, log_args, tmp_path, journal_with_bad_heading
    ):
        """Dropped items and their headings are shown."""
        journal = tmp_path / "journal.md"
        journal.write_text(journal_with_bad_heading, encoding="utf-8")

        result = runner.invoke(cli, [*log_args, "import", str(journal), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dropped: 2" in result.output
        assert "某一天" in result.output

    def test_missing_file(self, runner, log_args, tmp_path):
        """A missing journal ends with a one-line error."""
        result = runner.invoke(
            cli,
            [*log_args, "import", str(tmp_path / "nope.md"), "--store", str(tmp_path / "s.yaml")],
        )

        assert result.exit_code == 1
        assert "❌ JournalImportError" in result.output

    def test_empty_document(self, runner, log_args, tmp_path):
        """A document with nothing to import fails."""
        journal = tmp_path / "journal.md"
        journal.write_text("# 土豆笔记本完整导出\n", encoding="utf-8")
        store = tmp_path / "store.yaml"

        result = runner.invoke(
            cli, [*log_args, "import", str(journal), "--store", str(store)]
        )

        assert result.exit_code == 1
        assert "❌ JournalParseError" in result.output
        assert not store.exists()


class TestExportImportCycle:
    """Export then import restores every record."""

    def test_round_trip_through_files(self, runner, log_args, populated_store, store_path, tmp_path):
        """A fresh store matches the original after export and import."""
        output = tmp_path / "out"
        restored = tmp_path / "restored.yaml"

        export_result = runner.invoke(
            cli, [*log_args, "export", "--store", str(store_path), "-o", str(output)]
        )
        assert export_result.exit_code == 0, export_result.output
        (exported,) = output.glob("*.md")

        import_result = runner.invoke(
            cli, [*log_args, "import", str(exported), "--store", str(restored)]
        )
        assert import_result.exit_code == 0, import_result.output

        restored_store = YamlStore(restored)
        assert restored_store.counts() == populated_store.counts()
        assert restored_store.get_all_todos_by_date() == populated_store.get_all_todos_by_date()
        assert (
            restored_store.get_all_schedules_by_date()
            == populated_store.get_all_schedules_by_date()
        )
        assert {n.created_at for n in restored_store.get_all_notes()} == {
            n.created_at for n in populated_store.get_all_notes()
        }
