"""
Async orchestration for parallel file processing.

Files are read and tallied concurrently in the default executor, then
folded into the totals in input order so the result does not depend on
completion order.
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from csv_tally.config_models import TallyConfig
from csv_tally.models import FileTally, TallyTotals
from csv_tally.observability import EventType, get_observability_manager
from csv_tally.orchestrator import (
    FileProcessingError,
    report_file_error,
    report_file_result,
    tally_file,
)

logger = logging.getLogger(__name__)


async def tally_files_async(
    input_files: List[Path],
    config: Optional[TallyConfig] = None,
    max_concurrent: Optional[int] = None
) -> Tuple[TallyTotals, List[FileTally], Dict[str, str]]:
    """Tally files asynchronously with controlled concurrency.

    Args:
        input_files: Files to process
        config: Tally configuration (defaults when None)
        max_concurrent: Maximum files in flight (defaults to config.max_concurrent)

    Returns:
        Tuple: (totals, per-file results, file_errors dict)

    Example:
        >>> import asyncio
        >>> files = [Path(f"input/file{i}.csv") for i in range(10)]
        >>> totals, results, errors = asyncio.run(
        ...     tally_files_async(files, max_concurrent=4)
        ... )
    """
    config = config or TallyConfig()
    manager = get_observability_manager()
    semaphore = asyncio.Semaphore(max_concurrent or config.max_concurrent)

    async def process_one_file(file_path: Path) -> Union[FileTally, FileProcessingError]:
        """Process a single file with semaphore control."""
        async with semaphore:
            manager.emit_event(EventType.FILE_START, file_path=file_path)
            loop = asyncio.get_event_loop()
            try:
                return await loop.run_in_executor(None, tally_file, file_path, config)
            except FileProcessingError as e:
                return e

    paths = [Path(p) for p in input_files]
    outcomes = await asyncio.gather(*(process_one_file(p) for p in paths))

    totals = TallyTotals()
    results: List[FileTally] = []
    file_errors: Dict[str, str] = {}

    for file_path, outcome in zip(paths, outcomes):
        if isinstance(outcome, FileProcessingError):
            logger.error(str(outcome))
            file_errors[str(file_path)] = str(outcome)
            totals.record_failure()
            report_file_error(file_path, outcome)
            continue
        totals.add(outcome)
        results.append(outcome)
        report_file_result(outcome)

    logger.info(f"Files: {totals.files_processed} succeeded, {totals.files_failed} failed")
    return totals, results, file_errors


def run_async_tally(
    input_files: List[Path],
    config: Optional[TallyConfig] = None,
    max_concurrent: Optional[int] = None
) -> Tuple[TallyTotals, List[FileTally], Dict[str, str]]:
    """Synchronous wrapper for async tallying.

    Use this when calling from synchronous code.
    """
    return asyncio.run(tally_files_async(input_files, config, max_concurrent))
