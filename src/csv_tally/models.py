"""
Data models and structures for csv-tally.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


@dataclass
class FileTally:
    """Per-file summation result."""
    file_path: Optional[Path] = None
    column_index: Optional[int] = None
    data_rows: int = 0
    total: float = 0.0
    count: int = 0
    invalid_rows: int = 0  # Cells that did not yield a number
    short_rows: int = 0  # Rows with too few fields to reach the column
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def duration(self) -> float:
        """Get processing duration in seconds."""
        end = self.end_time or time.time()
        return end - self.start_time

    def as_pair(self) -> Tuple[float, int]:
        """Return the (sum, count) accumulator."""
        return self.total, self.count


@dataclass
class TallyTotals:
    """Running totals across all processed files."""
    total: float = 0.0
    count: int = 0
    files_processed: int = 0
    files_failed: int = 0

    def add(self, tally: FileTally) -> None:
        """Fold one file's result into the totals."""
        self.total += tally.total
        self.count += tally.count
        self.files_processed += 1

    def record_failure(self) -> None:
        """Count a file that was skipped."""
        self.files_failed += 1

    @property
    def average(self) -> Optional[float]:
        """Average of all counted values, or None when nothing was counted."""
        return self.total / self.count if self.count > 0 else None
