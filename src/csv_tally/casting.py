"""
Tolerant numeric extraction for the csv-tally engine.

This module salvages a number from an arbitrarily dirty cell: currency
symbols, thousands separators, letters and other noise are dropped before
the remaining text is converted with a fixed, locale-independent
convention (decimal point '.', no grouping).
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_DECIMAL_SYMBOL = '.'


class FormatError(ValueError):
    """Raised when a cell does not contain a usable number."""

    def __init__(self, raw: str, cleaned: str):
        self.raw = raw
        self.cleaned = cleaned
        super().__init__(f"Cannot extract a number from '{raw}' (cleaned: '{cleaned}')")


def clean_numeric_text(cell: str, decimal_symbol: str = DEFAULT_DECIMAL_SYMBOL) -> str:
    """Reduce a cell to digits, '.' and at most one leading '-'.

    Args:
        cell: Raw cell text
        decimal_symbol: Character treated as the decimal point

    Returns:
        Cleaned text (may be empty)
    """
    cleaned = []
    for ch in cell:
        if ch == decimal_symbol:
            cleaned.append('.')
        elif '0' <= ch <= '9':
            cleaned.append(ch)
        elif ch == '-' and not cleaned:
            cleaned.append('-')
    return ''.join(cleaned)


def extract_number(cell: str, decimal_symbol: str = DEFAULT_DECIMAL_SYMBOL) -> float:
    """Extract a float from a messy cell value.

    Any '-' after the first cleaned character is dropped, so "12-3" yields
    123.0.

    Args:
        cell: Raw cell text
        decimal_symbol: Character treated as the decimal point

    Returns:
        Parsed value

    Raises:
        FormatError: When the cleaned text is empty or not a valid number
    """
    cleaned = clean_numeric_text(cell, decimal_symbol)
    try:
        return float(cleaned)
    except ValueError:
        logger.debug(f"Numeric extraction failed for '{cell}' (cleaned: '{cleaned}')")
        raise FormatError(cell, cleaned) from None
