"""
Tests for CLI statistics classes and logger setup.
"""
import pytest
from pathlib import Path

from daybook.core.cli import ExportStats, ImportStats, OperationStats, setup_logger
from daybook.core.logging_manager import DaybookLogger


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_creates_operations_dir(self, tmp_path):
        """Logs go to <log_dir>/operations."""
        logger = setup_logger(tmp_path, "journal")
        assert isinstance(logger, DaybookLogger)
        assert (tmp_path / "operations").is_dir()
        assert logger.log_dir == tmp_path / "operations"


class TestOperationStats:
    """Tests for OperationStats base class."""

    def test_negative_counts_rejected(self):
        """Counts cannot start negative."""
        with pytest.raises(ValueError):
            OperationStats(errors=-1)

    def test_duration_cached(self):
        """Duration is fixed after the first call."""
        stats = OperationStats()
        assert stats.duration() == stats.duration()

    def test_to_dict(self):
        """Base fields appear in dictionary form."""
        d = OperationStats(files_processed=1).to_dict()
        assert d["files_processed"] == 1
        assert d["errors"] == 0
        assert "duration" in d


class TestImportStats:
    """Tests for ImportStats."""

    def test_records_created_total(self):
        """All kinds count toward records_created."""
        stats = ImportStats(notes_created=2, todos_created=3, schedules_created=1,
                            tag_contents_created=1)
        assert stats.records_created == 7

    def test_summary_mentions_drops_and_errors(self):
        """Drops appear in the summary only when present."""
        assert "dropped" not in ImportStats().summary()
        summary = ImportStats(notes_created=1, items_dropped=2, errors=1).summary()
        assert "1 notes" in summary
        assert "2 dropped" in summary
        assert "1 errors" in summary

    def test_negative_rejected(self):
        """Per-kind counts cannot start negative."""
        with pytest.raises(ValueError):
            ImportStats(items_dropped=-1)


class TestExportStats:
    """Tests for ExportStats."""

    def test_total_and_summary(self):
        """Totals add up across kinds."""
        stats = ExportStats(notes_exported=3, todos_exported=2, schedules_exported=1,
                            date_groups=2)
        assert stats.total_exported == 6
        assert "6 records exported" in stats.summary()
        assert "in 2 days" in stats.summary()

    def test_to_dict_output_file(self, tmp_path):
        """Output path is serialised as a string."""
        stats = ExportStats(output_file=tmp_path / "a.md")
        assert stats.to_dict()["output_file"] == str(tmp_path / "a.md")
        assert ExportStats().to_dict()["output_file"] is None
