#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for daybook commands.

Functions:
    setup_logger: Initialize DaybookLogger for CLI operations

Classes:
    OperationStats: Base class for all statistics
    ImportStats: For journal imports (file → store)
    ExportStats: For journal exports (store → file)

Usage:
    from daybook.core.cli import setup_logger, ImportStats

    logger = setup_logger(log_dir, "import")
    stats = ImportStats()
    stats.notes_created += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Tuple

# --- Local imports ---
from daybook.core.logging_manager import DaybookLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> DaybookLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a DaybookLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'journal')

    Returns:
        Configured DaybookLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return DaybookLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Counters shared by every journal command.

    Subclasses list their own integer fields in ``COUNTERS``; those are
    checked for negatives on creation and included in ``to_dict``.

    Attributes:
        files_processed: Journal files read or written
        errors: Records or files that failed
        start_time: When the command started
    """
    COUNTERS: ClassVar[Tuple[str, ...]] = ("files_processed", "errors")

    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        for name in self.COUNTERS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def duration(self) -> float:
        """Seconds since start_time, frozen at the first call."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Counters plus duration, ready for JSON output."""
        d: Dict[str, Any] = {name: getattr(self, name) for name in self.COUNTERS}
        d["duration"] = self.duration()
        return d


@dataclass
class ImportStats(OperationStats):
    """
    Statistics for journal imports.

    One failing record only bumps ``errors``; the rest of the batch is
    still created.

    Attributes:
        notes_created: Notes handed to the sink successfully
        todos_created: Todos handed to the sink successfully
        schedules_created: Schedules handed to the sink successfully
        tag_contents_created: Pinned tag contents stored
        items_dropped: Items lost under unparseable date headings
    """
    COUNTERS: ClassVar[Tuple[str, ...]] = OperationStats.COUNTERS + (
        "notes_created",
        "todos_created",
        "schedules_created",
        "tag_contents_created",
        "items_dropped",
    )

    notes_created: int = 0
    todos_created: int = 0
    schedules_created: int = 0
    tag_contents_created: int = 0
    items_dropped: int = 0

    @property
    def records_created(self) -> int:
        return (
            self.notes_created
            + self.todos_created
            + self.schedules_created
            + self.tag_contents_created
        )

    def summary(self) -> str:
        """Per-kind counts; tag contents and drops only when non-zero."""
        parts = [
            f"{self.notes_created} notes",
            f"{self.todos_created} todos",
            f"{self.schedules_created} schedules",
        ]
        if self.tag_contents_created:
            parts.append(f"{self.tag_contents_created} tag contents")
        if self.items_dropped:
            parts.append(f"{self.items_dropped} dropped")
        parts.append(f"{self.errors} errors")
        parts.append(f"{self.duration():.2f}s")
        return ", ".join(parts)


@dataclass
class ExportStats(OperationStats):
    """
    Statistics for journal exports.

    Attributes:
        notes_exported: Number of notes written
        todos_exported: Number of todos written
        schedules_exported: Number of schedules written
        date_groups: Number of day sections in the document
        output_file: Path of the written document
    """
    COUNTERS: ClassVar[Tuple[str, ...]] = OperationStats.COUNTERS + (
        "notes_exported",
        "todos_exported",
        "schedules_exported",
        "date_groups",
    )

    notes_exported: int = 0
    todos_exported: int = 0
    schedules_exported: int = 0
    date_groups: int = 0
    output_file: Optional[Path] = None

    @property
    def total_exported(self) -> int:
        return self.notes_exported + self.todos_exported + self.schedules_exported

    def summary(self) -> str:
        return (
            f"{self.total_exported} records exported "
            f"({self.notes_exported} notes, {self.todos_exported} todos, "
            f"{self.schedules_exported} schedules) in {self.date_groups} days, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["output_file"] = str(self.output_file) if self.output_file else None
        return d
