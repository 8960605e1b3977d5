"""
Column summation engine.

Locates the target column in a file's header row and accumulates the
numbers found in that column across the data rows.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from csv_tally.casting import DEFAULT_DECIMAL_SYMBOL, FormatError, extract_number
from csv_tally.models import FileTally
from csv_tally.tokenizer import tokenize

logger = logging.getLogger(__name__)

Records = Sequence[Sequence[str]]


def locate_column(identifier: str, records: Records) -> Optional[int]:
    """Find the first header field containing ``identifier``.

    Returns:
        Zero-based column index, or None if no header field matches
    """
    if not records:
        return None
    for i, header in enumerate(records[0]):
        if identifier in header:
            return i
    return None


def _accumulate(index: Optional[int], records: Records, decimal_symbol: str, tally: FileTally) -> None:
    # Column 0 never takes part in summation, even when it matches.
    if index is None or index <= 0:
        return

    for row_num in range(1, len(records)):
        row = records[row_num]
        if len(row) < index + 1:
            tally.short_rows += 1
            continue
        try:
            tally.total += extract_number(row[index], decimal_symbol)
            tally.count += 1
        except FormatError as e:
            tally.invalid_rows += 1
            logger.warning(f"Omitting row {row_num} due to invalid data: {e}")


def sum_column(index: Optional[int], records: Records,
               decimal_symbol: str = DEFAULT_DECIMAL_SYMBOL) -> Tuple[float, int]:
    """Sum the numeric values of one column over all data rows.

    Args:
        index: Column index from locate_column (None = not found)
        records: Tokenized records, header first
        decimal_symbol: Character treated as the decimal point

    Returns:
        Tuple[float, int]: (sum, count of values that parsed)
    """
    tally = FileTally()
    _accumulate(index, records, decimal_symbol, tally)
    return tally.as_pair()


def tally_records(
    records: Records,
    column_id: str,
    decimal_symbol: str = DEFAULT_DECIMAL_SYMBOL,
    file_path: Optional[Path] = None
) -> FileTally:
    """Locate ``column_id`` and sum it, keeping per-row diagnostics."""
    tally = FileTally(file_path=file_path, data_rows=max(len(records) - 1, 0))
    tally.column_index = locate_column(column_id, records)

    if tally.column_index is None:
        if records:
            logger.info(f"Column '{column_id}' not found in header of {file_path or 'input'}")
    elif tally.column_index == 0:
        logger.info(f"Column '{column_id}' is the first column of {file_path or 'input'}; not summed")
    else:
        _accumulate(tally.column_index, records, decimal_symbol, tally)

    tally.end_time = time.time()
    return tally


def tally_text(
    text: str,
    column_id: str,
    decimal_symbol: str = DEFAULT_DECIMAL_SYMBOL,
    file_path: Optional[Path] = None
) -> FileTally:
    """Tokenize raw text and sum the matching column."""
    records: List[List[str]] = tokenize(text)
    return tally_records(records, column_id, decimal_symbol, file_path)
