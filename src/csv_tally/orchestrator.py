"""
Orchestration logic for tallying a column across many files.

This module contains the batch processing loop, independent of CLI
concerns. A file that cannot be read is reported and skipped; the run
always continues with the remaining files.
"""

import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from csv_tally.config_models import TallyConfig
from csv_tally.models import FileTally, TallyTotals
from csv_tally.observability import EventType, get_observability_manager
from csv_tally.summation import tally_text

logger = logging.getLogger(__name__)


class FileProcessingError(Exception):
    """Exception raised when a file cannot be read."""
    pass


def tally_file(input_file: Path, config: TallyConfig) -> FileTally:
    """Read one file and sum the configured column.

    Emits a ``file_duration`` timer tagged with the file name, covering
    both the read and the summation.

    Raises:
        FileProcessingError: If the file is missing, unreadable or not decodable
    """
    manager = get_observability_manager()
    timer_key = str(input_file)
    start_time = time.time()
    manager.start_timer("file_duration", key=timer_key)

    try:
        try:
            text = input_file.read_text(encoding=config.encoding)
        except FileNotFoundError as e:
            raise FileProcessingError(f"Input file not found: {input_file}") from e
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise FileProcessingError(f"Cannot read {input_file}: {type(e).__name__}: {e}") from e

        tally = tally_text(text, config.column_id, config.decimal_symbol, file_path=input_file)
        tally.start_time = start_time
    finally:
        manager.end_timer("file_duration", tags={"file": input_file.name}, key=timer_key)

    logger.info(f"File: {input_file}: {tally.data_rows} data entries found")
    return tally


def report_file_result(tally: FileTally) -> None:
    """Emit per-file events and metrics for a completed file."""
    manager = get_observability_manager()
    tags = {"file": tally.file_path.name} if tally.file_path else {}

    if tally.invalid_rows:
        manager.emit_event(
            EventType.ROW_ERROR,
            file_path=tally.file_path,
            details={"invalid_rows": tally.invalid_rows}
        )
    manager.counter("values_counted", tally.count, tags)
    manager.counter("rows_invalid", tally.invalid_rows, tags)
    manager.emit_event(
        EventType.FILE_COMPLETE,
        file_path=tally.file_path,
        details={"sum": tally.total, "count": tally.count, "duration": f"{tally.duration:.3f}s"}
    )


def report_file_error(input_file: Path, error: Exception) -> None:
    """Emit the event for a skipped file."""
    manager = get_observability_manager()
    manager.emit_event(EventType.FILE_ERROR, file_path=input_file, details={"error": str(error)})
    manager.emit_error(error, {"file": str(input_file)})


def tally_files(
    input_files: List[Path],
    config: Optional[TallyConfig] = None
) -> Tuple[TallyTotals, List[FileTally], Dict[str, str]]:
    """Tally the configured column across files, in order.

    Args:
        input_files: Files to process
        config: Tally configuration (defaults when None)

    Returns:
        Tuple: (totals, per-file results, file_errors dict)
    """
    config = config or TallyConfig()
    manager = get_observability_manager()
    totals = TallyTotals()
    results: List[FileTally] = []
    file_errors: Dict[str, str] = {}

    logger.info(f"Column: '{config.column_id}', Files: {len(input_files)}")
    manager.start_timer("tally_run")

    for file_idx, input_file in enumerate(input_files, 1):
        input_file = Path(input_file)
        manager.emit_event(EventType.FILE_START, file_path=input_file)

        try:
            tally = tally_file(input_file, config)
        except FileProcessingError as e:
            logger.error(f"[{file_idx}/{len(input_files)}] {e}")
            file_errors[str(input_file)] = str(e)
            totals.record_failure()
            report_file_error(input_file, e)
            continue

        totals.add(tally)
        results.append(tally)
        report_file_result(tally)

    duration = manager.end_timer("tally_run")
    logger.info(f"Files: {totals.files_processed} succeeded, {totals.files_failed} failed in {duration:.2f}s")

    return totals, results, file_errors
